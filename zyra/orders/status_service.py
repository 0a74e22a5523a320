"""
Order Status Management Service

Centralized service for order status transitions. Shop views, the
verification page and the admin dashboard all change status through here
so every change is validated and broadcast.
"""
from datetime import datetime, timezone
from typing import Optional

from zyra.errors import ERROR_ORDER_INVALID_STATUS, ERROR_ORDER_NOT_FOUND
from zyra.logging import get_logger
from zyra.realtime import emit_order_status_change
from zyra.services.models import Order, OrderStatus
from zyra.services.repositories import OrderRepository

logger = get_logger(__name__)

TRANSITIONS: dict[str, tuple[str, ...]] = {
    "pending": ("packed", "cancelled"),
    # Packed orders may be handed over at the counter (QR verification)
    "packed": ("shipped", "delivered", "cancelled"),
    "shipped": ("delivered",),
    "delivered": (),  # Final state
    "cancelled": (),  # Final state
}

VALID_STATUSES = frozenset(s.value for s in OrderStatus)

# Legacy labels still sent by older clients
STATUS_ALIASES = {"on-the-way": "shipped", "on_the_way": "shipped"}


def normalize_status(status: Optional[str]) -> str:
    status = (status or "").strip().lower()
    return STATUS_ALIASES.get(status, status)


def can_transition(current_status: str, target_status: str) -> tuple[bool, Optional[str]]:
    """
    Check a transition against the lifecycle table.

    Returns:
        (allowed, reason_if_not)
    """
    current = normalize_status(current_status)
    target = normalize_status(target_status)

    if target not in VALID_STATUSES:
        return False, f"Unknown status '{target_status}'"
    allowed = TRANSITIONS.get(current, ())
    if target not in allowed:
        return False, f"Cannot transition from '{current}' to '{target}'. Allowed: {list(allowed)}"
    return True, None


class OrderStatusService:
    """Validated status updates with realtime broadcast."""

    def __init__(self, orders: OrderRepository):
        self.orders = orders

    async def update_status(
        self,
        order_id: str,
        new_status: str,
        check_transition: bool = True,
    ) -> Order:
        """
        Move an order to `new_status`.

        Args:
            check_transition: False lets admins override the lifecycle table
                (unknown statuses are still rejected)

        Raises:
            LookupError: order does not exist
            ValueError: status unknown or transition not allowed
        """
        new_status = normalize_status(new_status)
        if new_status not in VALID_STATUSES:
            raise ValueError(ERROR_ORDER_INVALID_STATUS)

        order = await self.orders.get_by_id(order_id)
        if not order:
            raise LookupError(ERROR_ORDER_NOT_FOUND)

        if normalize_status(order.status) == new_status:
            return order

        if check_transition:
            allowed, reason = can_transition(order.status, new_status)
            if not allowed:
                logger.warning(f"Cannot update order {order_id} status: {reason}")
                raise ValueError(reason)

        updated_at = datetime.now(timezone.utc).isoformat()
        rows = await self.orders.update(order_id, {"status": new_status, "updated_at": updated_at})
        if not rows:
            logger.warning(f"No rows updated for order {order_id}")
            raise LookupError(ERROR_ORDER_NOT_FOUND)

        logger.info(f"Updated order {order_id} status '{order.status}' -> '{new_status}'")
        await emit_order_status_change(
            order_id,
            new_status,
            user_id=order.user_id,
            shop_id=order.shop_id,
            updated_at=updated_at,
        )
        return Order(**rows[0])

    async def verify_delivery(self, order_id: str) -> tuple[Order, bool]:
        """
        QR verification: mark the order delivered whatever its current
        status, without the transition check.

        Returns:
            (order, already_delivered)
        """
        order = await self.orders.get_by_id(order_id)
        if not order:
            raise LookupError(ERROR_ORDER_NOT_FOUND)
        if order.status == OrderStatus.DELIVERED.value:
            return order, True
        order = await self.update_status(order_id, OrderStatus.DELIVERED.value, check_transition=False)
        return order, False
