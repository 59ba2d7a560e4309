"""Ordering helper for list endpoints."""

from __future__ import annotations

from sqlalchemy import asc, desc
from sqlalchemy.orm import Query

from shipweight.core.database import Base


def apply_order_by(
    query: Query,  # type: ignore[type-arg]
    model: type[Base],
    order_by: str | None,
    default_field: str = "created_at",
    default_direction: str = "desc",
) -> Query:  # type: ignore[type-arg]
    """Order a query by a "field:direction" string such as "country:asc".

    Unknown columns fall back to ``default_field``; unknown directions fall
    back to ``default_direction``. A field given without a direction sorts
    ascending.
    """
    field, direction = default_field, default_direction

    if order_by:
        name, _, requested = order_by.partition(":")
        if hasattr(model, name):
            field = name
            requested = requested or "asc"
            direction = requested if requested in ("asc", "desc") else default_direction

    order_func = asc if direction == "asc" else desc
    return query.order_by(order_func(getattr(model, field)))
