from sqlalchemy import Column, DateTime, ForeignKey, Numeric, String, UniqueConstraint, func

from shipweight.core.database import Base
from shipweight.models.shared import DEFAULT_ORGANIZATION_ID, UUIDType, generate_uuid


class ShippingMethod(Base):
    __tablename__ = "shipping_methods"
    __table_args__ = (UniqueConstraint("organization_id", "code", name="uq_shipping_method_code"),)

    id = Column(UUIDType, primary_key=True, default=generate_uuid)
    organization_id = Column(
        UUIDType,
        ForeignKey("organizations.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
        default=DEFAULT_ORGANIZATION_ID,
    )
    code = Column(String(255), nullable=False)
    name = Column(String(255), nullable=False)
    base_fee_without_vat = Column(Numeric(12, 4), nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
