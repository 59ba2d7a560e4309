from collections.abc import Iterable
from dataclasses import dataclass
from decimal import ROUND_CEILING, Decimal


@dataclass(frozen=True)
class WeightedLine:
    quantity: int
    weight: Decimal | None = None  # kg per unit, None falls back to the default weight


def total_weight(lines: Iterable[WeightedLine], default_weight: Decimal) -> Decimal:
    """Sum line weights and round the total up to a whole kilogram.

    Partial kilograms always round up: shipping never undercharges.
    """
    if default_weight < 0:
        raise ValueError("Default weight must not be negative")

    total = Decimal(0)
    for line in lines:
        if line.quantity < 1:
            raise ValueError(f"Order line quantity must be at least 1, got {line.quantity}")
        weight = default_weight if line.weight is None else line.weight
        if weight < 0:
            raise ValueError(f"Order line weight must not be negative, got {weight}")
        total += weight * line.quantity

    return total.to_integral_value(rounding=ROUND_CEILING)
