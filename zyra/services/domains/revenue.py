"""Revenue domain: shop earnings overview."""
from datetime import datetime, timezone
from typing import Optional

from zyra.services.models import Order, OrderStatus
from zyra.services.money import format_inr, sum_money, to_float
from zyra.services.repositories import OrderRepository


def summarize_revenue(orders: list[Order], now: Optional[datetime] = None) -> dict:
    """
    Revenue figures for a shop.

    Cancelled orders count towards the order total but never towards revenue.
    "This month" is the calendar month of `now` (UTC).
    """
    now = now or datetime.now(timezone.utc)
    earning = [o for o in orders if o.status != OrderStatus.CANCELLED.value]

    def in_current_month(order: Order) -> bool:
        if order.created_at is None:
            return False
        created = order.created_at
        if created.tzinfo is not None and now.tzinfo is not None:
            created = created.astimezone(now.tzinfo)
        return created.year == now.year and created.month == now.month

    total_revenue = sum_money(o.total_amount for o in earning)
    month_revenue = sum_money(o.total_amount for o in earning if in_current_month(o))

    return {
        "total_revenue": to_float(total_revenue),
        "month_revenue": to_float(month_revenue),
        "total_orders": len(orders),
        "stats": [
            {"title": "Total Revenue", "value": format_inr(total_revenue), "trend": "Lifetime"},
            {"title": "This Month", "value": format_inr(month_revenue), "trend": "Current"},
            {"title": "Total Orders", "value": str(len(orders)), "trend": "Lifetime"},
        ],
        "transactions": [
            {
                "id": o.id,
                "order_number": o.order_number,
                "created_at": o.created_at.isoformat() if o.created_at else None,
                "status": o.status,
                "total_amount": to_float(o.total_amount),
            }
            for o in orders
        ],
    }


class RevenueDomain:
    def __init__(self, orders: OrderRepository):
        self.orders = orders

    async def shop_revenue(self, shop_id: str, now: Optional[datetime] = None) -> dict:
        return summarize_revenue(await self.orders.list_by_shop(shop_id), now)
