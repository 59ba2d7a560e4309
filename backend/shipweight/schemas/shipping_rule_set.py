"""Shipping rule set and rate quote schemas."""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator


class WeightTierSchema(BaseModel):
    up_to_weight: Decimal = Field(ge=0)
    fixed_cost: Decimal = Field(default=Decimal("0"), ge=0)
    over_weight: bool = False
    over_weight_cost: Decimal = Field(default=Decimal("0"), ge=0)


class CountryRulesSchema(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    tiers: list[WeightTierSchema] = Field(default_factory=list)


class ShippingRuleSetUpsert(BaseModel):
    default_weight: Decimal = Field(
        default=Decimal("0"), ge=0, max_digits=12, decimal_places=4
    )
    default_cost: Decimal = Field(
        default=Decimal("0"), ge=0, max_digits=12, decimal_places=4
    )
    is_per_kg: bool = False
    countries: list[CountryRulesSchema] = Field(default_factory=list)

    @field_validator("countries")
    @classmethod
    def unique_country_names(cls, countries: list[CountryRulesSchema]) -> list[CountryRulesSchema]:
        names = [c.name for c in countries]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValueError(f"Duplicate country names: {', '.join(duplicates)}")
        return countries


class ShippingRuleSetResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    default_weight: Decimal
    default_cost: Decimal
    is_per_kg: bool
    countries: list[CountryRulesSchema]
    created_at: datetime
    updated_at: datetime


class QuoteLine(BaseModel):
    quantity: int = Field(ge=1)
    weight: Decimal | None = Field(default=None, ge=0)


class ShippingQuoteRequest(BaseModel):
    """Rate preview input: either order lines or an already known weight."""

    country: str
    lines: list[QuoteLine] | None = None
    total_weight: Decimal | None = Field(default=None, ge=0)


class ShippingQuoteResponse(BaseModel):
    country: str
    total_weight: Decimal
    cost: Decimal
    matched: bool
    used_overweight: bool
    found_country: bool
    had_tiers: bool
    diagnostics: list[str] = Field(default_factory=list)
