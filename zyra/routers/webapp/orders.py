"""
WebApp Orders Router

Order history, order details (with delivery map and ETA) and the QR
verification page.
"""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from zyra.auth import verify_user
from zyra.errors import ERROR_ORDER_NOT_FOUND, ERROR_ORDER_STATUS_UPDATE_FAILED
from zyra.logging import get_logger
from zyra.orders import build_order_payload, delivery_eta, status_label
from zyra.services.database import Database, get_database
from zyra.services.geo import customer_map
from zyra.services.models import AppRole, AuthUser
from ..deps import ensure_order_visible, http_error

logger = get_logger(__name__)

router = APIRouter(tags=["webapp-orders"])


async def active_order_for_product(db: Database, user_id: str, product_id: str) -> Optional[dict]:
    """Latest undelivered order of this product for the caller, with its countdown."""
    order = await db.get_latest_order_for_product(user_id, product_id)
    if not order:
        return None
    eta = delivery_eta(order, precise=True)
    if eta is None:
        return None
    return {
        "order_id": order.get("id"),
        "status": order.get("status"),
        "status_label": status_label(order.get("status")),
        **eta,
    }


async def _visible_order(db: Database, order_id: str, user: AuthUser) -> dict:
    order = await db.get_order_detail(order_id)
    shop = None
    if order and user.role == AppRole.SHOP_OWNER:
        shop = await db.get_shop_by_owner(user.id)
    return ensure_order_visible(order, user, shop)


@router.get("/orders")
async def list_orders(limit: int = 50, offset: int = 0, user: AuthUser = Depends(verify_user)):
    """Caller's orders, newest first."""
    db = get_database()
    try:
        rows = await db.get_user_orders(user.id, limit=limit, offset=offset)
    except Exception as e:
        raise http_error(e, "Failed to load orders")

    orders = []
    for row in rows:
        payload = build_order_payload(row)
        payload["delivery"] = delivery_eta(row, precise=False)
        orders.append(payload)
    return {"orders": orders, "count": len(orders)}


@router.get("/orders/active")
async def get_active_order(product_id: str, user: AuthUser = Depends(verify_user)):
    db = get_database()
    return {"active_order": await active_order_for_product(db, user.id, product_id)}


@router.get("/orders/{order_id}")
async def get_order(order_id: str, user: AuthUser = Depends(verify_user)):
    """Order details: items, shop contact, delivery map and ETA."""
    db = get_database()
    order = await _visible_order(db, order_id, user)
    return {
        "order": build_order_payload(order),
        "map": customer_map(order),
        "delivery": delivery_eta(order, precise=False),
    }


@router.get("/verify-order/{order_id}")
async def get_order_for_verification(order_id: str, user: AuthUser = Depends(verify_user)):
    """Verification page opened from the order's QR code."""
    db = get_database()
    order = await db.get_order_detail(order_id)
    if not order:
        raise HTTPException(status_code=404, detail=ERROR_ORDER_NOT_FOUND)
    payload = build_order_payload(order)
    return {"order": payload, "is_delivered": payload["status"] == "delivered"}


@router.post("/verify-order/{order_id}")
async def verify_order(order_id: str, user: AuthUser = Depends(verify_user)):
    """Mark the order delivered; repeated scans report it as already delivered."""
    db = get_database()
    try:
        order, already_delivered = await db.verify_order(order_id)
    except Exception as e:
        raise http_error(e, ERROR_ORDER_STATUS_UPDATE_FAILED, f"Verification of order {order_id} failed")

    logger.info(f"Order {order.order_number} verified (already delivered: {already_delivered})")
    return {
        "success": True,
        "already_delivered": already_delivered,
        "order_id": order.id,
        "status": order.status,
    }
