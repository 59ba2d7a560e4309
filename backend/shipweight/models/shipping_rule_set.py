"""Shipping rule set model: the weight-tier configuration of an organization."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Numeric, func
from sqlalchemy.types import JSON

from shipweight.core.database import Base
from shipweight.models.shared import DEFAULT_ORGANIZATION_ID, UUIDType, generate_uuid


class ShippingRuleSet(Base):
    """Organization-wide shipping by weight configuration.

    ``countries`` holds the rule document: a list of
    ``{"name": ..., "tiers": [{"up_to_weight", "fixed_cost", "over_weight",
    "over_weight_cost"}, ...]}`` entries in configured order.
    """

    __tablename__ = "shipping_rule_sets"

    id = Column(UUIDType, primary_key=True, default=generate_uuid)
    organization_id = Column(
        UUIDType,
        ForeignKey("organizations.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
        index=True,
        default=DEFAULT_ORGANIZATION_ID,
    )
    default_weight = Column(Numeric(12, 4), nullable=False, default=0)
    default_cost = Column(Numeric(12, 4), nullable=False, default=0)
    is_per_kg = Column(Boolean, nullable=False, default=False)
    countries = Column(JSON, nullable=False, default=list)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
