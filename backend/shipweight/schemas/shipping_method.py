from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class ShippingMethodCreate(BaseModel):
    code: str = Field(max_length=255)
    name: str = Field(max_length=255)
    base_fee_without_vat: Decimal = Field(
        default=Decimal("0"), ge=0, max_digits=12, decimal_places=4
    )


class ShippingMethodUpdate(BaseModel):
    name: str | None = Field(default=None, max_length=255)
    base_fee_without_vat: Decimal | None = Field(
        default=None, ge=0, max_digits=12, decimal_places=4
    )


class ShippingMethodResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    code: str
    name: str
    base_fee_without_vat: Decimal
    created_at: datetime
    updated_at: datetime
