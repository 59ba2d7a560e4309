"""Shipping method repository for data access."""

from uuid import UUID

from sqlalchemy.orm import Session

from shipweight.core.sorting import apply_order_by
from shipweight.models.shipping_method import ShippingMethod
from shipweight.schemas.shipping_method import ShippingMethodCreate, ShippingMethodUpdate


class ShippingMethodRepository:
    """Repository for ShippingMethod model."""

    def __init__(self, db: Session):
        self.db = db

    def get_all(
        self,
        organization_id: UUID,
        skip: int = 0,
        limit: int = 100,
        order_by: str | None = None,
    ) -> list[ShippingMethod]:
        query = self.db.query(ShippingMethod).filter(
            ShippingMethod.organization_id == organization_id
        )
        query = apply_order_by(query, ShippingMethod, order_by)
        return query.offset(skip).limit(limit).all()

    def count(self, organization_id: UUID) -> int:
        return (
            self.db.query(ShippingMethod)
            .filter(ShippingMethod.organization_id == organization_id)
            .count()
        )

    def get_by_id(self, method_id: UUID, organization_id: UUID | None = None) -> ShippingMethod | None:
        query = self.db.query(ShippingMethod).filter(ShippingMethod.id == method_id)
        if organization_id is not None:
            query = query.filter(ShippingMethod.organization_id == organization_id)
        return query.first()

    def get_by_code(self, code: str, organization_id: UUID) -> ShippingMethod | None:
        return (
            self.db.query(ShippingMethod)
            .filter(ShippingMethod.code == code, ShippingMethod.organization_id == organization_id)
            .first()
        )

    def create(self, data: ShippingMethodCreate, organization_id: UUID) -> ShippingMethod:
        method = ShippingMethod(
            code=data.code,
            name=data.name,
            base_fee_without_vat=data.base_fee_without_vat,
            organization_id=organization_id,
        )
        self.db.add(method)
        self.db.commit()
        self.db.refresh(method)
        return method

    def update(
        self, method_id: UUID, data: ShippingMethodUpdate, organization_id: UUID
    ) -> ShippingMethod | None:
        method = self.get_by_id(method_id, organization_id)
        if not method:
            return None

        for key, value in data.model_dump(exclude_unset=True).items():
            setattr(method, key, value)

        self.db.commit()
        self.db.refresh(method)
        return method

    def delete(self, method_id: UUID, organization_id: UUID) -> bool:
        method = self.get_by_id(method_id, organization_id)
        if not method:
            return False

        self.db.delete(method)
        self.db.commit()
        return True
