"""Realtime Module - order event broadcasting.

Appends events to Upstash Redis Streams; the SSE router reads them back for
the customer's order pages, the shop dashboard and the admin dashboard.

Emitting is best effort: a failure is logged and never fails the request
that changed the order.
"""

import json
from typing import Any, Optional

from zyra.db import RedisKeys, get_redis
from zyra.logging import get_logger

logger = get_logger(__name__)


async def _xadd(stream_key: str, payload: dict[str, Any]) -> None:
    redis = get_redis()
    await redis.xadd(stream_key, "*", {"data": json.dumps(payload, default=str)})


async def emit_order_created(
    order_id: str,
    order_number: Optional[str],
    user_id: str,
    shop_id: Optional[str],
    total_amount: float,
) -> None:
    """Emit order.created to the customer, the shop and the admins."""
    payload = {
        "event": "order.created",
        "order_id": order_id,
        "order_number": order_number,
        "user_id": user_id,
        "shop_id": shop_id,
        "total_amount": total_amount,
    }
    try:
        await _xadd(RedisKeys.customer_orders(user_id), payload)
        if shop_id:
            await _xadd(RedisKeys.shop_orders(shop_id), payload)
        await _xadd(RedisKeys.STREAM_ADMIN_ORDERS, payload)
        logger.debug(f"Emitted order.created for order {order_id}")
    except Exception as e:
        logger.warning(f"Failed to emit order.created: {e}", exc_info=True)


async def emit_order_status_change(
    order_id: str,
    status: str,
    user_id: Optional[str] = None,
    shop_id: Optional[str] = None,
    updated_at: Optional[str] = None,
) -> None:
    """Emit order.status.changed so both the customer and shop views resync."""
    payload = {
        "event": "order.status.changed",
        "order_id": order_id,
        "status": status,
        "user_id": user_id,
        "shop_id": shop_id,
        "updated_at": updated_at,
    }
    try:
        if user_id:
            await _xadd(RedisKeys.customer_orders(user_id), payload)
        if shop_id:
            await _xadd(RedisKeys.shop_orders(shop_id), payload)
        await _xadd(RedisKeys.STREAM_ADMIN_ORDERS, payload)
        logger.debug(f"Emitted order.status.changed for order {order_id}: {status}")
    except Exception as e:
        logger.warning(f"Failed to emit order.status.changed: {e}", exc_info=True)


async def emit_shop_update(shop_id: str, is_active: bool) -> None:
    """Emit admin.shop.updated after approval/suspension."""
    payload = {"event": "admin.shop.updated", "shop_id": shop_id, "is_active": is_active}
    try:
        await _xadd(RedisKeys.STREAM_ADMIN_SHOPS, payload)
        await _xadd(RedisKeys.shop_orders(shop_id), payload)
        logger.debug(f"Emitted admin.shop.updated for shop {shop_id}")
    except Exception as e:
        logger.warning(f"Failed to emit admin.shop.updated: {e}", exc_info=True)
