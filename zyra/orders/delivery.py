"""Delivery ETA: every order is promised within a fixed window."""
from datetime import datetime, timedelta, timezone
from typing import Optional

from zyra.config import DELIVERY_WINDOW_HOURS

ARRIVING_SOON = "Arriving soon"


def _parse(value) -> Optional[datetime]:
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)


def estimated_delivery(created_at) -> Optional[datetime]:
    created = _parse(created_at)
    if created is None:
        return None
    return created + timedelta(hours=DELIVERY_WINDOW_HOURS)


def time_left(created_at, now: Optional[datetime] = None, precise: bool = True) -> Optional[str]:
    """
    Countdown to the promised delivery time.

    precise=True renders "5h 3m 20s" (product page timer), otherwise just
    the hours ("5h", order details). Past the deadline: "Arriving soon".
    """
    deadline = estimated_delivery(created_at)
    if deadline is None:
        return None
    now = now or datetime.now(timezone.utc)
    remaining = int((deadline - now).total_seconds())
    if remaining <= 0:
        return ARRIVING_SOON

    hours, rest = divmod(remaining, 3600)
    minutes, seconds = divmod(rest, 60)
    if not precise:
        return f"{hours}h"
    return f"{hours}h {minutes}m {seconds}s"


def delivery_eta(order: dict, now: Optional[datetime] = None, precise: bool = True) -> Optional[dict]:
    """ETA block for an order; None once delivered or cancelled."""
    if order.get("status") in ("delivered", "cancelled"):
        return None
    deadline = estimated_delivery(order.get("created_at"))
    if deadline is None:
        return None
    return {
        "estimated_delivery": deadline.isoformat(),
        "time_left": time_left(order.get("created_at"), now, precise=precise),
    }
