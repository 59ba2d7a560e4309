"""Unit tests for weight aggregation, rule set parsing and rate resolution."""

from decimal import Decimal

import pytest

from shipweight.services.shipping_rates.resolver import resolve
from shipweight.services.shipping_rates.rule_set import (
    EMPTY_RULE_SET,
    CountryRules,
    RuleSet,
    ShippingConfigurationError,
    WeightTier,
    parse_decimal,
    parse_flag,
    parse_rule_set,
)
from shipweight.services.shipping_rates.weight import WeightedLine, total_weight


def _rules(
    tiers: list[WeightTier],
    country: str = "United Kingdom",
    is_per_kg: bool = False,
    default_cost: str = "0",
) -> RuleSet:
    return RuleSet(
        default_weight=Decimal("0"),
        default_cost=Decimal(default_cost),
        is_per_kg=is_per_kg,
        countries={country: CountryRules(name=country, tiers=tuple(tiers))},
    )


def _two_tiers(over_weight: bool = False, over_weight_cost: str = "0") -> list[WeightTier]:
    return [
        WeightTier(up_to_weight=Decimal("5"), fixed_cost=Decimal("10")),
        WeightTier(
            up_to_weight=Decimal("10"),
            fixed_cost=Decimal("18"),
            over_weight_enabled=over_weight,
            over_weight_cost_per_kg=Decimal(over_weight_cost),
        ),
    ]


class TestTotalWeight:
    def test_sums_weight_times_quantity(self):
        lines = [
            WeightedLine(quantity=2, weight=Decimal("1.5")),
            WeightedLine(quantity=1, weight=Decimal("2")),
        ]
        assert total_weight(lines, Decimal("0")) == Decimal("5")

    def test_missing_weight_uses_default(self):
        lines = [
            WeightedLine(quantity=3),
            WeightedLine(quantity=1, weight=Decimal("1")),
        ]
        assert total_weight(lines, Decimal("0.5")) == Decimal("3")

    def test_partial_kilogram_rounds_up(self):
        """3.01 kg is charged as 4 kg."""
        assert total_weight([WeightedLine(quantity=1, weight=Decimal("3.01"))], Decimal("0")) == 4

    def test_just_above_half_still_rounds_up_not_to_nearest(self):
        assert total_weight([WeightedLine(quantity=1, weight=Decimal("2.2"))], Decimal("0")) == 3

    def test_whole_kilograms_unchanged(self):
        assert total_weight([WeightedLine(quantity=4, weight=Decimal("1"))], Decimal("0")) == 4

    def test_rounding_applies_after_summing(self):
        """Three lines of 0.4 kg are 1.2 kg in total, charged as 2 kg, not 3."""
        lines = [WeightedLine(quantity=1, weight=Decimal("0.4")) for _ in range(3)]
        assert total_weight(lines, Decimal("0")) == Decimal("2")

    def test_no_lines_weigh_nothing(self):
        assert total_weight([], Decimal("1")) == Decimal("0")

    def test_zero_weight_lines(self):
        assert total_weight([WeightedLine(quantity=5, weight=Decimal("0"))], Decimal("1")) == 0

    def test_zero_quantity_rejected(self):
        with pytest.raises(ValueError, match="quantity"):
            total_weight([WeightedLine(quantity=0, weight=Decimal("1"))], Decimal("0"))

    def test_negative_weight_rejected(self):
        with pytest.raises(ValueError, match="weight"):
            total_weight([WeightedLine(quantity=1, weight=Decimal("-1"))], Decimal("0"))


class TestResolveFlatTiers:
    def test_weight_inside_first_tier(self):
        result = resolve(Decimal("4"), "United Kingdom", _rules(_two_tiers()))
        assert result.cost == Decimal("10")
        assert result.matched is True
        assert result.used_overweight is False
        assert result.found_country is True
        assert result.had_tiers is True

    def test_upper_bound_is_inclusive(self):
        result = resolve(Decimal("10"), "United Kingdom", _rules(_two_tiers()))
        assert result.cost == Decimal("18")
        assert result.matched is True

    def test_bound_of_first_tier_is_inclusive(self):
        result = resolve(Decimal("5"), "United Kingdom", _rules(_two_tiers()))
        assert result.cost == Decimal("10")

    def test_over_all_tiers_with_overweight_disabled_uses_default_cost(self):
        rules = _rules(_two_tiers(), default_cost="7.50")
        result = resolve(Decimal("11"), "United Kingdom", rules)
        assert result.cost == Decimal("7.50")
        assert result.matched is False
        assert result.used_overweight is False
        assert result.is_default is True

    def test_over_all_tiers_with_overweight_enabled(self):
        rules = _rules(_two_tiers(over_weight=True, over_weight_cost="2"))
        result = resolve(Decimal("11"), "United Kingdom", rules)
        assert result.cost == Decimal("20")
        assert result.matched is False
        assert result.used_overweight is True
        assert result.matched_tier == rules.countries["United Kingdom"].tiers[-1]

    def test_overweight_scales_with_excess(self):
        rules = _rules(_two_tiers(over_weight=True, over_weight_cost="2.25"))
        result = resolve(Decimal("14"), "United Kingdom", rules)
        assert result.cost == Decimal("27.00")

    def test_only_last_tier_overweight_flag_counts(self):
        tiers = [
            WeightTier(
                up_to_weight=Decimal("5"),
                fixed_cost=Decimal("10"),
                over_weight_enabled=True,
                over_weight_cost_per_kg=Decimal("100"),
            ),
            WeightTier(up_to_weight=Decimal("10"), fixed_cost=Decimal("18")),
        ]
        result = resolve(Decimal("11"), "United Kingdom", _rules(tiers, default_cost="3"))
        assert result.cost == Decimal("3")
        assert result.used_overweight is False

    def test_last_tier_is_by_position_not_weight(self):
        tiers = [
            WeightTier(up_to_weight=Decimal("10"), fixed_cost=Decimal("18")),
            WeightTier(
                up_to_weight=Decimal("5"),
                fixed_cost=Decimal("10"),
                over_weight_enabled=True,
                over_weight_cost_per_kg=Decimal("1"),
            ),
        ]
        result = resolve(Decimal("12"), "United Kingdom", _rules(tiers))
        # 10 + 1 * (12 - 5)
        assert result.cost == Decimal("17")
        assert result.used_overweight is True


class TestResolvePerKg:
    def test_fixed_cost_is_rate_per_kilogram(self):
        tiers = [WeightTier(up_to_weight=Decimal("5"), fixed_cost=Decimal("3"))]
        result = resolve(Decimal("4"), "United Kingdom", _rules(tiers, is_per_kg=True))
        assert result.cost == Decimal("12")
        assert result.matched is True

    def test_overweight_in_per_kg_mode_ignores_overweight_cost(self):
        tiers = [
            WeightTier(
                up_to_weight=Decimal("5"),
                fixed_cost=Decimal("3"),
                over_weight_enabled=True,
                over_weight_cost_per_kg=Decimal("50"),
            )
        ]
        result = resolve(Decimal("8"), "United Kingdom", _rules(tiers, is_per_kg=True))
        assert result.cost == Decimal("24")
        assert result.used_overweight is True

    def test_per_kg_without_overweight_uses_default_cost(self):
        tiers = [WeightTier(up_to_weight=Decimal("5"), fixed_cost=Decimal("3"))]
        rules = _rules(tiers, is_per_kg=True, default_cost="1")
        result = resolve(Decimal("8"), "United Kingdom", rules)
        assert result.cost == Decimal("1")


class TestResolveDegradedConfiguration:
    def test_no_countries_configured(self):
        rules = RuleSet(default_cost=Decimal("4.99"))
        result = resolve(Decimal("3"), "United Kingdom", rules)
        assert result.cost == Decimal("4.99")
        assert result.matched is False
        assert result.found_country is False

    def test_empty_rule_set(self):
        result = resolve(Decimal("3"), "United Kingdom", EMPTY_RULE_SET)
        assert result.cost == Decimal("0")
        assert result.total_weight == Decimal("3")

    def test_country_not_configured(self):
        rules = _rules(_two_tiers(), default_cost="2")
        result = resolve(Decimal("3"), "France", rules)
        assert result.cost == Decimal("2")
        assert result.found_country is False
        assert result.matched is False

    def test_order_without_country(self):
        result = resolve(Decimal("3"), None, _rules(_two_tiers(), default_cost="2"))
        assert result.cost == Decimal("2")
        assert result.found_country is False

    def test_country_without_tiers(self):
        rules = _rules([], default_cost="6")
        result = resolve(Decimal("3"), "United Kingdom", rules)
        assert result.cost == Decimal("6")
        assert result.found_country is True
        assert result.had_tiers is False
        assert result.matched is False


class TestResolveMatchingRules:
    def test_country_match_is_exact(self):
        """A rule for "UK" never prices an order shipped to "United Kingdom"."""
        rules = _rules(_two_tiers(), country="UK", default_cost="99")
        result = resolve(Decimal("3"), "United Kingdom", rules)
        assert result.found_country is False
        assert result.cost == Decimal("99")

    def test_country_match_is_case_sensitive(self):
        rules = _rules(_two_tiers(), country="United Kingdom", default_cost="99")
        result = resolve(Decimal("3"), "united kingdom", rules)
        assert result.found_country is False

    def test_first_matching_tier_wins_over_tighter_bound(self):
        tiers = [
            WeightTier(up_to_weight=Decimal("10"), fixed_cost=Decimal("18")),
            WeightTier(up_to_weight=Decimal("5"), fixed_cost=Decimal("10")),
        ]
        result = resolve(Decimal("4"), "United Kingdom", _rules(tiers))
        assert result.cost == Decimal("18")
        assert result.matched_tier == tiers[0]

    def test_zero_weight_matches_first_tier(self):
        result = resolve(Decimal("0"), "United Kingdom", _rules(_two_tiers()))
        assert result.cost == Decimal("10")

    def test_decimal_costs_keep_precision(self):
        tiers = [WeightTier(up_to_weight=Decimal("5"), fixed_cost=Decimal("0.1"))]
        result = resolve(Decimal("3"), "United Kingdom", _rules(tiers, is_per_kg=True))
        assert result.cost == Decimal("0.3")


class TestParseRuleSet:
    def test_parses_values_in_configured_order(self):
        rules = parse_rule_set(
            default_weight="0.5",
            default_cost=Decimal("1.25"),
            is_per_kg=False,
            countries=[
                {
                    "name": "United Kingdom",
                    "tiers": [
                        {"up_to_weight": "10", "fixed_cost": "18"},
                        {
                            "up_to_weight": 5,
                            "fixed_cost": "10.50",
                            "over_weight": True,
                            "over_weight_cost": "2",
                        },
                    ],
                },
                {"name": "France", "tiers": []},
            ],
        )
        assert rules.default_weight == Decimal("0.5")
        assert rules.default_cost == Decimal("1.25")
        assert list(rules.countries) == ["United Kingdom", "France"]
        uk = rules.countries["United Kingdom"]
        assert [t.up_to_weight for t in uk.tiers] == [Decimal("10"), Decimal("5")]
        assert uk.tiers[1].fixed_cost == Decimal("10.50")
        assert uk.tiers[1].over_weight_enabled is True
        assert uk.tiers[1].over_weight_cost_per_kg == Decimal("2")
        assert rules.countries["France"].tiers == ()

    def test_missing_defaults_become_zero(self):
        rules = parse_rule_set(None, None, None, None)
        assert rules.default_weight == Decimal("0")
        assert rules.default_cost == Decimal("0")
        assert rules.is_per_kg is False
        assert rules.countries == {}

    def test_legacy_flag_strings(self):
        rules = parse_rule_set(
            "0",
            "0",
            "1",
            [{"name": "UK", "tiers": [{"up_to_weight": "5", "over_weight": "1"}]}],
        )
        assert rules.is_per_kg is True
        assert rules.countries["UK"].tiers[0].over_weight_enabled is True
        assert rules.countries["UK"].tiers[0].fixed_cost == Decimal("0")

    def test_duplicate_country_keeps_first(self):
        rules = parse_rule_set(
            0,
            0,
            False,
            [
                {"name": "UK", "tiers": [{"up_to_weight": "5", "fixed_cost": "1"}]},
                {"name": "UK", "tiers": [{"up_to_weight": "5", "fixed_cost": "2"}]},
            ],
        )
        assert rules.countries["UK"].tiers[0].fixed_cost == Decimal("1")

    def test_malformed_cost_is_fatal(self):
        with pytest.raises(ShippingConfigurationError, match="fixed_cost"):
            parse_rule_set(
                0,
                0,
                False,
                [{"name": "UK", "tiers": [{"up_to_weight": "5", "fixed_cost": "ten"}]}],
            )

    def test_missing_up_to_weight_is_fatal(self):
        with pytest.raises(ShippingConfigurationError, match="up_to_weight"):
            parse_rule_set(0, 0, False, [{"name": "UK", "tiers": [{"fixed_cost": "1"}]}])

    def test_malformed_default_is_fatal(self):
        with pytest.raises(ShippingConfigurationError, match="default_cost"):
            parse_rule_set(0, "1,50", False, [])

    def test_country_without_name_is_fatal(self):
        with pytest.raises(ShippingConfigurationError, match="no name"):
            parse_rule_set(0, 0, False, [{"tiers": []}])

    def test_configuration_error_is_a_value_error(self):
        assert issubclass(ShippingConfigurationError, ValueError)


class TestParseHelpers:
    def test_parse_decimal_accepts_numbers_and_strings(self):
        assert parse_decimal(3, "x") == Decimal("3")
        assert parse_decimal(" 2.50 ", "x") == Decimal("2.50")
        assert parse_decimal(Decimal("1.1"), "x") == Decimal("1.1")

    def test_parse_decimal_blank_uses_default(self):
        assert parse_decimal("", "x", Decimal("0")) == Decimal("0")

    def test_parse_decimal_rejects_infinity(self):
        with pytest.raises(ShippingConfigurationError):
            parse_decimal("Infinity", "x")

    def test_parse_decimal_rejects_booleans(self):
        with pytest.raises(ShippingConfigurationError):
            parse_decimal(True, "x")

    def test_parse_flag(self):
        assert parse_flag(True) is True
        assert parse_flag("1") is True
        assert parse_flag("0") is False
        assert parse_flag(None) is False
        assert parse_flag("") is False
