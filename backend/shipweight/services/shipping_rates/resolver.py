from dataclasses import dataclass
from decimal import Decimal

from shipweight.services.shipping_rates.rule_set import RuleSet, WeightTier


@dataclass(frozen=True)
class RateResult:
    cost: Decimal
    total_weight: Decimal
    matched: bool = False
    used_overweight: bool = False
    found_country: bool = False
    had_tiers: bool = False
    matched_tier: WeightTier | None = None

    @property
    def is_default(self) -> bool:
        """True when no tier priced the order and the default cost applies."""
        return not (self.matched or self.used_overweight)


def resolve(total_weight: Decimal, country: str | None, rules: RuleSet) -> RateResult:
    """Price an order weight for a destination country.

    The first tier, in configured order, whose ``up_to_weight`` covers the
    weight wins. Beyond the last tier the overweight rule of that last tier
    applies if enabled; otherwise the cost stays at ``rules.default_cost``.
    Country names match exactly.
    """
    default = RateResult(cost=rules.default_cost, total_weight=total_weight)

    if not rules.countries or country is None:
        return default

    country_rules = rules.countries.get(country)
    if country_rules is None:
        return default

    if not country_rules.tiers:
        return RateResult(cost=rules.default_cost, total_weight=total_weight, found_country=True)

    for tier in country_rules.tiers:
        if tier.up_to_weight >= total_weight:
            return RateResult(
                cost=_tier_cost(tier, total_weight, rules.is_per_kg),
                total_weight=total_weight,
                matched=True,
                found_country=True,
                had_tiers=True,
                matched_tier=tier,
            )

    last = country_rules.tiers[-1]
    if not last.over_weight_enabled:
        return RateResult(
            cost=rules.default_cost,
            total_weight=total_weight,
            found_country=True,
            had_tiers=True,
        )

    if rules.is_per_kg:
        # The per-kg override ignores over_weight_cost_per_kg.
        cost = last.fixed_cost * total_weight
    else:
        cost = last.fixed_cost + last.over_weight_cost_per_kg * (total_weight - last.up_to_weight)

    return RateResult(
        cost=cost,
        total_weight=total_weight,
        used_overweight=True,
        found_country=True,
        had_tiers=True,
        matched_tier=last,
    )


def _tier_cost(tier: WeightTier, total_weight: Decimal, is_per_kg: bool) -> Decimal:
    if is_per_kg:
        return tier.fixed_cost * total_weight
    return tier.fixed_cost
