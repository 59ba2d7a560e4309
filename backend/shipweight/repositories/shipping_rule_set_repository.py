"""Shipping rule set repository for data access."""

from uuid import UUID

from sqlalchemy.orm import Session

from shipweight.models.shipping_rule_set import ShippingRuleSet
from shipweight.schemas.shipping_rule_set import ShippingRuleSetUpsert


class ShippingRuleSetRepository:
    """Repository for ShippingRuleSet model."""

    def __init__(self, db: Session):
        self.db = db

    def get_for_organization(self, organization_id: UUID) -> ShippingRuleSet | None:
        """Get the rule set of an organization."""
        return (
            self.db.query(ShippingRuleSet)
            .filter(ShippingRuleSet.organization_id == organization_id)
            .first()
        )

    def upsert(self, data: ShippingRuleSetUpsert, organization_id: UUID) -> ShippingRuleSet:
        """Create or replace the rule set of an organization."""
        payload = data.model_dump(mode="json")
        rule_set = self.get_for_organization(organization_id)
        if rule_set is None:
            rule_set = ShippingRuleSet(organization_id=organization_id)
            self.db.add(rule_set)

        rule_set.default_weight = data.default_weight
        rule_set.default_cost = data.default_cost
        rule_set.is_per_kg = data.is_per_kg
        rule_set.countries = payload["countries"]

        self.db.commit()
        self.db.refresh(rule_set)
        return rule_set

    def delete(self, organization_id: UUID) -> bool:
        """Delete the rule set of an organization."""
        rule_set = self.get_for_organization(organization_id)
        if not rule_set:
            return False

        self.db.delete(rule_set)
        self.db.commit()
        return True
