from typing import Any
from uuid import UUID

from arq import create_pool
from arq.connections import ArqRedis, RedisSettings
from arq.jobs import Job

from shipweight.core.config import settings

# Redis connection settings
redis_settings = RedisSettings.from_dsn(settings.REDIS_URL)


async def get_redis_pool() -> ArqRedis:
    """Get or create Redis pool for arq"""
    return await create_pool(redis_settings)


async def enqueue_task(task_name: str, *args: Any, **kwargs: Any) -> Job | None:
    """
    Enqueue a task to the arq worker.

    Args:
        task_name: Name of the task function
        *args: Positional arguments for the task
        **kwargs: Keyword arguments for the task, including arq's _job_id

    Returns:
        Job object from arq, or None when a job with the same _job_id
        already exists
    """
    pool = await get_redis_pool()
    try:
        return await pool.enqueue_job(task_name, *args, **kwargs)
    finally:
        await pool.close()


async def enqueue_order_shipping_update(order_id: UUID, reason: str) -> Job | None:
    """Queue a shipping recalculation for an order.

    Every change gets its own job. Jobs for the same order serialize on the
    order row lock in ShippingCostService.update, so the last one to run
    always reads the latest lines.
    """
    return await enqueue_task("recalculate_order_shipping_task", str(order_id), reason)
