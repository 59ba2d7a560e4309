"""Order, order line and order property schemas."""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class OrderLineCreate(BaseModel):
    product_code: str = Field(max_length=255)
    quantity: int = Field(default=1, ge=1)
    product_weight: Decimal | None = Field(default=None, ge=0, max_digits=12, decimal_places=4)


class OrderLineUpdate(BaseModel):
    quantity: int | None = Field(default=None, ge=1)
    product_weight: Decimal | None = Field(default=None, ge=0, max_digits=12, decimal_places=4)


class OrderLineResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    product_code: str
    quantity: int
    product_weight: Decimal | None = None


class OrderPropertyResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    alias: str
    value: str


class OrderCreate(BaseModel):
    currency: str | None = Field(default=None, min_length=3, max_length=3)
    country: str | None = Field(default=None, max_length=255)
    shipping_method_id: UUID | None = None
    lines: list[OrderLineCreate] = Field(default_factory=list)


class OrderShippingMethodUpdate(BaseModel):
    shipping_method_id: UUID | None = None


class OrderCurrencyUpdate(BaseModel):
    currency: str = Field(min_length=3, max_length=3)


class OrderCountryUpdate(BaseModel):
    country: str = Field(min_length=1, max_length=255)


class OrderResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    currency: str
    country: str | None = None
    shipping_method_id: UUID | None = None
    shipping_fee_without_vat: Decimal
    lines: list[OrderLineResponse] = Field(default_factory=list)
    properties: list[OrderPropertyResponse] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime
