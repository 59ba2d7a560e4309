"""Typed shipping rule set, flattened from the stored rule document."""

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any


class ShippingConfigurationError(ValueError):
    """A stored shipping rule holds a value that cannot be used."""


@dataclass(frozen=True)
class WeightTier:
    up_to_weight: Decimal
    fixed_cost: Decimal
    # Only consulted on the last tier of a country.
    over_weight_enabled: bool = False
    over_weight_cost_per_kg: Decimal = Decimal(0)


@dataclass(frozen=True)
class CountryRules:
    name: str
    tiers: tuple[WeightTier, ...] = ()


@dataclass(frozen=True)
class RuleSet:
    default_weight: Decimal = Decimal(0)
    default_cost: Decimal = Decimal(0)
    is_per_kg: bool = False
    countries: dict[str, CountryRules] = field(default_factory=dict)


EMPTY_RULE_SET = RuleSet()


def parse_decimal(value: Any, label: str, default: Decimal | None = None) -> Decimal:
    """Parse a stored numeric value.

    ``None`` and blank strings yield ``default`` when one is given. Anything
    else that is not a finite decimal raises ShippingConfigurationError.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        if default is not None:
            return default
        raise ShippingConfigurationError(f"{label} is required")

    if isinstance(value, bool):
        raise ShippingConfigurationError(f"{label} is not a number: {value!r}")

    try:
        parsed = Decimal(str(value).strip())
    except InvalidOperation:
        raise ShippingConfigurationError(f"{label} is not a number: {value!r}") from None

    if not parsed.is_finite():
        raise ShippingConfigurationError(f"{label} is not a finite number: {value!r}")
    return parsed


def parse_flag(value: Any) -> bool:
    """Stored flags are booleans or the legacy "1"/"0" strings."""
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip() in ("1", "true", "True")


def _parse_tier(raw: dict[str, Any], label: str) -> WeightTier:
    return WeightTier(
        up_to_weight=parse_decimal(raw.get("up_to_weight"), f"{label} up_to_weight"),
        fixed_cost=parse_decimal(raw.get("fixed_cost"), f"{label} fixed_cost", Decimal(0)),
        over_weight_enabled=parse_flag(raw.get("over_weight")),
        over_weight_cost_per_kg=parse_decimal(
            raw.get("over_weight_cost"), f"{label} over_weight_cost", Decimal(0)
        ),
    )


def parse_rule_set(
    default_weight: Any,
    default_cost: Any,
    is_per_kg: Any,
    countries: list[dict[str, Any]] | None,
) -> RuleSet:
    """Build a RuleSet from stored values.

    Countries and tiers keep their configured order; tiers are never sorted.
    When a country name appears twice the first entry wins, since lookup by
    name stops at the first match.
    """
    parsed: dict[str, CountryRules] = {}
    for index, raw_country in enumerate(countries or []):
        name = raw_country.get("name")
        if not isinstance(name, str) or not name:
            raise ShippingConfigurationError(f"Country #{index + 1} has no name")
        if name in parsed:
            continue

        tiers = tuple(
            _parse_tier(raw_tier, f"{name} tier #{position + 1}")
            for position, raw_tier in enumerate(raw_country.get("tiers") or [])
        )
        parsed[name] = CountryRules(name=name, tiers=tiers)

    return RuleSet(
        default_weight=parse_decimal(default_weight, "default_weight", Decimal(0)),
        default_cost=parse_decimal(default_cost, "default_cost", Decimal(0)),
        is_per_kg=parse_flag(is_per_kg),
        countries=parsed,
    )
