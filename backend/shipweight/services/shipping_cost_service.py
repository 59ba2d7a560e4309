"""Shipping by weight: recompute an order's shipping cost after it changes."""

from collections.abc import Iterable
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from enum import Enum
from uuid import UUID

from sqlalchemy.orm import Session

from shipweight.core.config import settings
from shipweight.models.order import Order
from shipweight.repositories.order_property_repository import OrderPropertyRepository
from shipweight.repositories.order_repository import OrderRepository
from shipweight.repositories.shipping_rule_set_repository import ShippingRuleSetRepository
from shipweight.services.diagnostics import DiagnosticSink, LoggingDiagnosticSink, Severity
from shipweight.services.shipping_rates.resolver import RateResult, resolve
from shipweight.services.shipping_rates.rule_set import EMPTY_RULE_SET, RuleSet, parse_rule_set
from shipweight.services.shipping_rates.weight import WeightedLine, total_weight

SHIPPING_PRICE_PROPERTY_PREFIX = "shippingPriceWithoutVAT"
TOTAL_WEIGHT_PROPERTY = "totalWeightInKg"

NO_COUNTRIES_MESSAGE = (
    "No country could be found in the shipping rules, "
    "shipping by weight won't work without them"
)
NO_TIERS_MESSAGE = (
    "No rules could be found in the shipping rule countries, "
    "shipping by weight won't work without them"
)
NO_MATCH_MESSAGE = (
    "No rule match found and over weight is disabled, "
    "shipping is free unless a default cost is set"
)


class OrderNotFoundError(ValueError):
    """The order to recalculate does not exist."""


class OrderChangeReason(str, Enum):
    LINE_ADDED = "line_added"
    LINE_CHANGED = "line_changed"
    LINE_REMOVED = "line_removed"
    SHIPPING_METHOD_CHANGED = "shipping_method_changed"
    CURRENCY_CHANGED = "currency_changed"
    COUNTRY_CHANGED = "country_changed"
    MANUAL = "manual"


@dataclass(frozen=True)
class OrderChanged:
    """Request to recompute the shipping cost of one order."""

    order_id: UUID
    reason: OrderChangeReason = OrderChangeReason.MANUAL


@dataclass
class ShippingUpdateResult:
    rate: RateResult
    shipping_fee_without_vat: Decimal
    changed_properties: list[str] = field(default_factory=list)


def shipping_price_property(currency: str) -> str:
    """Alias of the per-currency shipping price property, e.g. shippingPriceWithoutVATGBP."""
    return f"{SHIPPING_PRICE_PROPERTY_PREFIX}{currency}"


class ShippingCostService:
    """Computes shipping by weight and writes it back onto orders."""

    def __init__(
        self,
        db: Session,
        sink: DiagnosticSink | None = None,
        debug: bool | None = None,
    ):
        self.db = db
        self.sink = sink or LoggingDiagnosticSink()
        self.debug = settings.SHIPPING_DEBUG if debug is None else debug
        self.order_repo = OrderRepository(db)
        self.property_repo = OrderPropertyRepository(db)
        self.rule_set_repo = ShippingRuleSetRepository(db)

    def handle(self, command: OrderChanged) -> ShippingUpdateResult:
        """Single entry point for every kind of order change."""
        return self.update(command.order_id, command.reason)

    def load_rule_set(self, organization_id: UUID) -> RuleSet:
        """Load and flatten the organization's rules.

        An organization without stored rules gets the empty rule set.
        Malformed numeric values raise ShippingConfigurationError.
        """
        stored = self.rule_set_repo.get_for_organization(organization_id)
        if stored is None:
            return EMPTY_RULE_SET

        return parse_rule_set(
            default_weight=stored.default_weight,
            default_cost=stored.default_cost,
            is_per_kg=stored.is_per_kg,
            countries=stored.countries,  # type: ignore[arg-type]
        )

    def calculate(
        self,
        lines: Iterable[WeightedLine],
        country: str | None,
        rules: RuleSet,
    ) -> RateResult:
        """Aggregate the weight and resolve the rate, reporting degraded outcomes."""
        lines = list(lines)
        if self.debug:
            self._debug(
                f"Default weight: {rules.default_weight} and default cost: {rules.default_cost}"
            )
            for line in lines:
                if line.weight is not None:
                    self._debug(f"Adding {line.weight} x {line.quantity} to total weight")

        weight = total_weight(lines, rules.default_weight)
        if self.debug:
            self._debug(f"Total weight in kg: {weight}")

        result = resolve(weight, country, rules)

        if not rules.countries:
            self.sink.log(Severity.ERROR, NO_COUNTRIES_MESSAGE)
        elif not result.found_country:
            self.sink.log(Severity.DEBUG, f"No shipping rules configured for country: {country}")
        elif not result.had_tiers:
            self.sink.log(Severity.ERROR, NO_TIERS_MESSAGE)

        if result.is_default:
            self.sink.log(Severity.ERROR, NO_MATCH_MESSAGE)
        elif self.debug and result.matched_tier is not None:
            mode = "over weight of last rule" if result.used_overweight else "rule"
            self._debug(f"Matched {mode}: up to {result.matched_tier.up_to_weight}")

        if self.debug:
            self._debug(f"Shipping cost is {result.cost}")
        return result

    def update(
        self,
        order_id: UUID,
        reason: OrderChangeReason = OrderChangeReason.MANUAL,
    ) -> ShippingUpdateResult:
        """Recompute shipping for an order and persist it.

        Writes the per-currency price and the total weight properties (only
        when their value changed), sets the order's shipping fee to the
        shipping method fee plus the computed cost, and commits. The order row
        stays locked until that commit, so updates of one order run one after
        another and each sees the lines committed before it.
        """
        order = self.order_repo.get_for_update(order_id)
        if not order:
            raise OrderNotFoundError(f"Order {order_id} not found")

        if reason == OrderChangeReason.COUNTRY_CHANGED:
            self._debug(f"changed country to: {order.country} for order {order.id}")
        elif self.debug:
            self._debug(f"Recalculating shipping for order {order.id} ({reason.value})")

        rules = self.load_rule_set(order.organization_id)  # type: ignore[arg-type]
        result = self.calculate(_weighted_lines(order), order.country, rules)  # type: ignore[arg-type]

        price_alias = shipping_price_property(order.currency)  # type: ignore[arg-type]
        values = {price_alias: result.cost, TOTAL_WEIGHT_PROPERTY: result.total_weight}
        changed = [
            alias
            for alias, value in values.items()
            if self._differs(order.id, alias, value)  # type: ignore[arg-type]
        ]
        for alias in changed:
            self.property_repo.set_value(order.id, alias, str(values[alias]))  # type: ignore[arg-type]

        base_fee = Decimal(0)
        if order.shipping_method is not None:
            base_fee = Decimal(str(order.shipping_method.base_fee_without_vat))
        fee = base_fee + result.cost
        if self.debug:
            self._debug(f"Shipping method cost is: {base_fee}, final value added to order: {fee}")

        order.shipping_fee_without_vat = fee  # type: ignore[assignment]
        self.db.commit()
        self.db.refresh(order)

        return ShippingUpdateResult(
            rate=result,
            shipping_fee_without_vat=fee,
            changed_properties=changed,
        )

    def quote(
        self,
        organization_id: UUID,
        country: str,
        lines: Iterable[WeightedLine] | None = None,
        weight: Decimal | None = None,
    ) -> RateResult:
        """Price a hypothetical order without touching any stored order.

        Takes either lines or an already known weight, not both.
        """
        lines = list(lines or [])
        if weight is not None:
            if lines:
                raise ValueError("Quote takes either lines or a weight, not both")
            lines = [WeightedLine(quantity=1, weight=weight)]
        rules = self.load_rule_set(organization_id)
        return self.calculate(lines, country, rules)

    def _differs(self, order_id: UUID, alias: str, value: Decimal) -> bool:
        stored = self.property_repo.get_value(order_id, alias)
        if stored is None:
            return True
        try:
            return Decimal(stored) != value
        except InvalidOperation:
            raise ValueError(
                f"Order property {alias} holds a non-numeric value: {stored!r}"
            ) from None

    def _debug(self, message: str) -> None:
        self.sink.log(Severity.DEBUG, message)


def _weighted_lines(order: Order) -> list[WeightedLine]:
    return [
        WeightedLine(
            quantity=line.quantity,  # type: ignore[arg-type]
            weight=None if line.product_weight is None else Decimal(str(line.product_weight)),
        )
        for line in order.lines
    ]
