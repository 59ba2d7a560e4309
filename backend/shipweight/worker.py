import logging
from typing import Any
from uuid import UUID

from arq.worker import func

from shipweight.core.database import SessionLocal
from shipweight.services.shipping_cost_service import (
    OrderChanged,
    OrderChangeReason,
    OrderNotFoundError,
    ShippingCostService,
)
from shipweight.tasks import redis_settings

logger = logging.getLogger(__name__)


async def recalculate_order_shipping_task(
    ctx: dict[str, Any], order_id: str, reason: str = OrderChangeReason.MANUAL.value
) -> str | None:
    """Background task: recompute shipping by weight for one order.

    Returns the new shipping fee as a string, or None when the order no
    longer exists. Configuration errors propagate so arq records the failure.
    """
    db = SessionLocal()
    try:
        service = ShippingCostService(db)
        try:
            result = service.handle(OrderChanged(UUID(order_id), OrderChangeReason(reason)))
        except OrderNotFoundError:
            logger.warning("Order %s not found for shipping recalculation", order_id)
            return None

        logger.info(
            "Recalculated shipping for order %s (%s): %s",
            order_id,
            reason,
            result.shipping_fee_without_vat,
        )
        return str(result.shipping_fee_without_vat)
    finally:
        db.close()


class WorkerSettings:
    # No job results are kept in Redis.
    functions = [func(recalculate_order_shipping_task, keep_result=0)]
    redis_settings = redis_settings
