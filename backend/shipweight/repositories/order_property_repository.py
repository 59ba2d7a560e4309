"""Order property repository: string key-value store attached to orders."""

from uuid import UUID

from sqlalchemy.orm import Session

from shipweight.models.order import OrderProperty


class OrderPropertyRepository:
    """Repository for OrderProperty model.

    Writes are staged on the session; the caller commits.
    """

    def __init__(self, db: Session):
        self.db = db

    def get(self, order_id: UUID, alias: str) -> OrderProperty | None:
        return (
            self.db.query(OrderProperty)
            .filter(OrderProperty.order_id == order_id, OrderProperty.alias == alias)
            .first()
        )

    def get_value(self, order_id: UUID, alias: str) -> str | None:
        prop = self.get(order_id, alias)
        return prop.value if prop else None  # type: ignore[return-value]

    def get_by_order(self, order_id: UUID) -> list[OrderProperty]:
        return (
            self.db.query(OrderProperty)
            .filter(OrderProperty.order_id == order_id)
            .order_by(OrderProperty.alias)
            .all()
        )

    def set_value(self, order_id: UUID, alias: str, value: str) -> OrderProperty:
        """Create the property or overwrite its value."""
        prop = self.get(order_id, alias)
        if prop is None:
            prop = OrderProperty(order_id=order_id, alias=alias, value=value)
            self.db.add(prop)
        else:
            prop.value = value  # type: ignore[assignment]
        self.db.flush()
        return prop
