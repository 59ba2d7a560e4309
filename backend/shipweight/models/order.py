"""Order, order line and order property models."""

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import relationship

from shipweight.core.database import Base
from shipweight.models.shared import DEFAULT_ORGANIZATION_ID, UUIDType, generate_uuid


class Order(Base):
    __tablename__ = "orders"

    id = Column(UUIDType, primary_key=True, default=generate_uuid)
    organization_id = Column(
        UUIDType,
        ForeignKey("organizations.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
        default=DEFAULT_ORGANIZATION_ID,
    )
    currency = Column(String(3), nullable=False)
    country = Column(String(255), nullable=True)
    shipping_method_id = Column(
        UUIDType,
        ForeignKey("shipping_methods.id", ondelete="SET NULL"),
        nullable=True,
    )
    shipping_fee_without_vat = Column(Numeric(12, 4), nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    lines = relationship(
        "OrderLine",
        order_by="OrderLine.created_at",
        cascade="all, delete-orphan",
        lazy="selectin",
    )
    properties = relationship(
        "OrderProperty",
        cascade="all, delete-orphan",
        lazy="selectin",
    )
    shipping_method = relationship("ShippingMethod", lazy="joined")


class OrderLine(Base):
    __tablename__ = "order_lines"

    id = Column(UUIDType, primary_key=True, default=generate_uuid)
    order_id = Column(
        UUIDType, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True
    )
    product_code = Column(String(255), nullable=False)
    quantity = Column(Integer, nullable=False, default=1)
    product_weight = Column(Numeric(12, 4), nullable=True)  # kg per unit

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())


class OrderProperty(Base):
    """String key-value property attached to an order."""

    __tablename__ = "order_properties"
    __table_args__ = (UniqueConstraint("order_id", "alias", name="uq_order_property_alias"),)

    id = Column(UUIDType, primary_key=True, default=generate_uuid)
    order_id = Column(
        UUIDType, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True
    )
    alias = Column(String(255), nullable=False)
    value = Column(Text, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
