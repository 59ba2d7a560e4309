"""Order and order line repository for data access."""

from uuid import UUID

from sqlalchemy.orm import Session

from shipweight.core.sorting import apply_order_by
from shipweight.models.order import Order, OrderLine
from shipweight.schemas.order import OrderCreate, OrderLineCreate, OrderLineUpdate


class OrderRepository:
    """Repository for Order and OrderLine models."""

    def __init__(self, db: Session):
        self.db = db

    def get_all(
        self,
        organization_id: UUID,
        skip: int = 0,
        limit: int = 100,
        order_by: str | None = None,
    ) -> list[Order]:
        query = self.db.query(Order).filter(Order.organization_id == organization_id)
        query = apply_order_by(query, Order, order_by)
        return query.offset(skip).limit(limit).all()

    def count(self, organization_id: UUID) -> int:
        return self.db.query(Order).filter(Order.organization_id == organization_id).count()

    def get_by_id(self, order_id: UUID, organization_id: UUID | None = None) -> Order | None:
        query = self.db.query(Order).filter(Order.id == order_id)
        if organization_id is not None:
            query = query.filter(Order.organization_id == organization_id)
        return query.first()

    def get_for_update(self, order_id: UUID) -> Order | None:
        """Load an order with its row locked and any cached state refreshed."""
        return (
            self.db.query(Order)
            .filter(Order.id == order_id)
            .with_for_update(of=Order)
            .populate_existing()
            .first()
        )

    def create(self, data: OrderCreate, organization_id: UUID, currency: str) -> Order:
        """Create an order with its initial lines."""
        order = Order(
            organization_id=organization_id,
            currency=(data.currency or currency).upper(),
            country=data.country,
            shipping_method_id=data.shipping_method_id,
        )
        for line in data.lines:
            order.lines.append(
                OrderLine(
                    product_code=line.product_code,
                    quantity=line.quantity,
                    product_weight=line.product_weight,
                )
            )
        self.db.add(order)
        self.db.commit()
        self.db.refresh(order)
        return order

    def update_fields(self, order: Order, **fields: object) -> Order:
        """Set plain order columns (currency, country, shipping method)."""
        for key, value in fields.items():
            setattr(order, key, value)
        self.db.commit()
        self.db.refresh(order)
        return order

    def get_line(self, order_id: UUID, line_id: UUID) -> OrderLine | None:
        return (
            self.db.query(OrderLine)
            .filter(OrderLine.order_id == order_id, OrderLine.id == line_id)
            .first()
        )

    def add_line(self, order: Order, data: OrderLineCreate) -> OrderLine:
        line = OrderLine(
            order_id=order.id,
            product_code=data.product_code,
            quantity=data.quantity,
            product_weight=data.product_weight,
        )
        self.db.add(line)
        self.db.commit()
        self.db.refresh(line)
        self.db.refresh(order)
        return line

    def update_line(self, line: OrderLine, data: OrderLineUpdate) -> OrderLine:
        for key, value in data.model_dump(exclude_unset=True).items():
            if key == "quantity" and value is None:
                continue
            setattr(line, key, value)
        self.db.commit()
        self.db.refresh(line)
        return line

    def delete_line(self, line: OrderLine) -> None:
        self.db.delete(line)
        self.db.commit()
