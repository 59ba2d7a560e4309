"""Order API endpoints.

Every mutation that can change the shipping cost dispatches an OrderChanged
command: inline by default, or through the arq worker when
SHIPPING_WORKER_ENABLED is set.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.orm import Session

from shipweight.core.auth import get_current_organization
from shipweight.core.config import settings
from shipweight.core.database import get_db
from shipweight.models.order import Order, OrderProperty
from shipweight.models.organization import Organization
from shipweight.repositories.order_property_repository import OrderPropertyRepository
from shipweight.repositories.order_repository import OrderRepository
from shipweight.repositories.shipping_method_repository import ShippingMethodRepository
from shipweight.schemas.order import (
    OrderCountryUpdate,
    OrderCreate,
    OrderCurrencyUpdate,
    OrderLineCreate,
    OrderLineUpdate,
    OrderPropertyResponse,
    OrderResponse,
    OrderShippingMethodUpdate,
)
from shipweight.services.shipping_cost_service import (
    OrderChanged,
    OrderChangeReason,
    ShippingCostService,
)
from shipweight.services.shipping_rates.rule_set import ShippingConfigurationError
from shipweight.tasks import enqueue_order_shipping_update

router = APIRouter()


async def _dispatch(db: Session, order: Order, reason: OrderChangeReason) -> Order:
    """Recompute shipping for an order after a change and return it fresh."""
    if settings.SHIPPING_WORKER_ENABLED:
        await enqueue_order_shipping_update(order.id, reason.value)  # type: ignore[arg-type]
        return order

    try:
        ShippingCostService(db).handle(OrderChanged(order.id, reason))  # type: ignore[arg-type]
    except ShippingConfigurationError as e:
        raise HTTPException(status_code=422, detail=f"Invalid shipping rules: {e}") from None
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from None

    db.refresh(order)
    return order


def _get_order_or_404(db: Session, order_id: UUID, organization_id: UUID) -> Order:
    order = OrderRepository(db).get_by_id(order_id, organization_id)
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    return order


def _check_shipping_method(db: Session, method_id: UUID | None, organization_id: UUID) -> None:
    if method_id is not None and not ShippingMethodRepository(db).get_by_id(
        method_id, organization_id
    ):
        raise HTTPException(status_code=404, detail="Shipping method not found")


@router.post(
    "/",
    response_model=OrderResponse,
    status_code=201,
    summary="Create order",
    responses={404: {"description": "Shipping method not found"}},
)
async def create_order(
    data: OrderCreate,
    db: Session = Depends(get_db),
    organization_id: UUID = Depends(get_current_organization),
) -> Order:
    """Create an order and compute its initial shipping cost."""
    _check_shipping_method(db, data.shipping_method_id, organization_id)

    organization = db.query(Organization).filter(Organization.id == organization_id).first()
    currency = organization.default_currency if organization else settings.DEFAULT_CURRENCY

    order = OrderRepository(db).create(data, organization_id, currency)  # type: ignore[arg-type]
    return await _dispatch(db, order, OrderChangeReason.LINE_ADDED)


@router.get("/", response_model=list[OrderResponse], summary="List orders")
async def list_orders(
    response: Response,
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=100, ge=1, le=1000),
    order_by: str | None = Query(default=None),
    db: Session = Depends(get_db),
    organization_id: UUID = Depends(get_current_organization),
) -> list[Order]:
    repo = OrderRepository(db)
    response.headers["X-Total-Count"] = str(repo.count(organization_id))
    return repo.get_all(organization_id, skip=skip, limit=limit, order_by=order_by)


@router.get(
    "/{order_id}",
    response_model=OrderResponse,
    summary="Get order",
    responses={404: {"description": "Order not found"}},
)
async def get_order(
    order_id: UUID,
    db: Session = Depends(get_db),
    organization_id: UUID = Depends(get_current_organization),
) -> Order:
    return _get_order_or_404(db, order_id, organization_id)


@router.get(
    "/{order_id}/properties",
    response_model=list[OrderPropertyResponse],
    summary="List order properties",
    responses={404: {"description": "Order not found"}},
)
async def list_order_properties(
    order_id: UUID,
    db: Session = Depends(get_db),
    organization_id: UUID = Depends(get_current_organization),
) -> list[OrderProperty]:
    order = _get_order_or_404(db, order_id, organization_id)
    return OrderPropertyRepository(db).get_by_order(order.id)  # type: ignore[arg-type]


@router.post(
    "/{order_id}/lines",
    response_model=OrderResponse,
    status_code=201,
    summary="Add order line",
    responses={404: {"description": "Order not found"}},
)
async def add_order_line(
    order_id: UUID,
    data: OrderLineCreate,
    db: Session = Depends(get_db),
    organization_id: UUID = Depends(get_current_organization),
) -> Order:
    order = _get_order_or_404(db, order_id, organization_id)
    OrderRepository(db).add_line(order, data)
    return await _dispatch(db, order, OrderChangeReason.LINE_ADDED)


@router.put(
    "/{order_id}/lines/{line_id}",
    response_model=OrderResponse,
    summary="Update order line",
    responses={404: {"description": "Order or order line not found"}},
)
async def update_order_line(
    order_id: UUID,
    line_id: UUID,
    data: OrderLineUpdate,
    db: Session = Depends(get_db),
    organization_id: UUID = Depends(get_current_organization),
) -> Order:
    order = _get_order_or_404(db, order_id, organization_id)
    repo = OrderRepository(db)
    line = repo.get_line(order.id, line_id)  # type: ignore[arg-type]
    if not line:
        raise HTTPException(status_code=404, detail="Order line not found")
    repo.update_line(line, data)
    return await _dispatch(db, order, OrderChangeReason.LINE_CHANGED)


@router.delete(
    "/{order_id}/lines/{line_id}",
    response_model=OrderResponse,
    summary="Remove order line",
    responses={404: {"description": "Order or order line not found"}},
)
async def remove_order_line(
    order_id: UUID,
    line_id: UUID,
    db: Session = Depends(get_db),
    organization_id: UUID = Depends(get_current_organization),
) -> Order:
    order = _get_order_or_404(db, order_id, organization_id)
    repo = OrderRepository(db)
    line = repo.get_line(order.id, line_id)  # type: ignore[arg-type]
    if not line:
        raise HTTPException(status_code=404, detail="Order line not found")
    repo.delete_line(line)
    return await _dispatch(db, order, OrderChangeReason.LINE_REMOVED)


@router.put(
    "/{order_id}/shipping_method",
    response_model=OrderResponse,
    summary="Change shipping method",
    responses={404: {"description": "Order or shipping method not found"}},
)
async def change_shipping_method(
    order_id: UUID,
    data: OrderShippingMethodUpdate,
    db: Session = Depends(get_db),
    organization_id: UUID = Depends(get_current_organization),
) -> Order:
    order = _get_order_or_404(db, order_id, organization_id)
    _check_shipping_method(db, data.shipping_method_id, organization_id)
    OrderRepository(db).update_fields(order, shipping_method_id=data.shipping_method_id)
    return await _dispatch(db, order, OrderChangeReason.SHIPPING_METHOD_CHANGED)


@router.put(
    "/{order_id}/currency",
    response_model=OrderResponse,
    summary="Change order currency",
    responses={404: {"description": "Order not found"}},
)
async def change_currency(
    order_id: UUID,
    data: OrderCurrencyUpdate,
    db: Session = Depends(get_db),
    organization_id: UUID = Depends(get_current_organization),
) -> Order:
    order = _get_order_or_404(db, order_id, organization_id)
    OrderRepository(db).update_fields(order, currency=data.currency.upper())
    return await _dispatch(db, order, OrderChangeReason.CURRENCY_CHANGED)


@router.put(
    "/{order_id}/country",
    response_model=OrderResponse,
    summary="Change destination country",
    responses={404: {"description": "Order not found"}},
)
async def change_country(
    order_id: UUID,
    data: OrderCountryUpdate,
    db: Session = Depends(get_db),
    organization_id: UUID = Depends(get_current_organization),
) -> Order:
    """Change the destination country.

    The name must match a configured country exactly to be priced by its tiers.
    """
    order = _get_order_or_404(db, order_id, organization_id)
    OrderRepository(db).update_fields(order, country=data.country)
    return await _dispatch(db, order, OrderChangeReason.COUNTRY_CHANGED)


@router.post(
    "/{order_id}/recalculate_shipping",
    response_model=OrderResponse,
    summary="Recalculate shipping",
    responses={404: {"description": "Order not found"}},
)
async def recalculate_shipping(
    order_id: UUID,
    db: Session = Depends(get_db),
    organization_id: UUID = Depends(get_current_organization),
) -> Order:
    """Recompute shipping, e.g. after the shipping rules changed."""
    order = _get_order_or_404(db, order_id, organization_id)
    return await _dispatch(db, order, OrderChangeReason.MANUAL)
