"""
Shared Dependencies for Routers

Error translation and ownership checks used by the webapp, shop and
admin routers.
"""

from typing import Optional

from fastapi import HTTPException

from zyra.errors import ERROR_ORDER_ACCESS_DENIED, ERROR_ORDER_NOT_FOUND
from zyra.logging import get_logger
from zyra.services.models import AuthUser, Shop

logger = get_logger(__name__)


def http_error(e: Exception, fallback: str, context: str = "") -> HTTPException:
    """
    Map a service exception to an HTTP error.

    ValueError -> 400, LookupError -> 404, anything else -> 500 with
    `fallback` as the detail (the original error is logged, not leaked).
    """
    if isinstance(e, HTTPException):
        return e
    if isinstance(e, ValueError):
        return HTTPException(status_code=400, detail=str(e))
    if isinstance(e, LookupError):
        return HTTPException(status_code=404, detail=str(e).strip("'\""))
    logger.error(f"{context or fallback}: {e}", exc_info=True)
    return HTTPException(status_code=500, detail=fallback)


def ensure_order_visible(order: Optional[dict], user: AuthUser, shop: Optional[Shop] = None) -> dict:
    """
    Customers see their own orders, shop owners their shop's, admins all.

    Raises:
        HTTPException: 404 when missing, 403 when the caller has no access
    """
    if not order:
        raise HTTPException(status_code=404, detail=ERROR_ORDER_NOT_FOUND)
    if user.is_admin or order.get("user_id") == user.id:
        return order
    if shop is not None and order.get("shop_id") == shop.id:
        return order
    raise HTTPException(status_code=403, detail=ERROR_ORDER_ACCESS_DENIED)
