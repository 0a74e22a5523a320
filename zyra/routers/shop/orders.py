"""
Shop Orders Router

Incoming orders for the caller's shop: list with QR codes, details with
the delivery map, and status updates.
"""
from fastapi import APIRouter, Depends, HTTPException

from zyra.auth import get_owned_shop
from zyra.errors import ERROR_ORDER_NOT_FOUND, ERROR_ORDER_STATUS_UPDATE_FAILED
from zyra.logging import get_logger
from zyra.orders import build_order_payload, group_items_by_order, qr_payload, verification_url
from zyra.orders.serializer import embedded
from zyra.services.database import Database, get_database
from zyra.services.geo import build_delivery_map
from zyra.services.models import Shop
from ..deps import http_error
from .models import OrderStatusRequest

logger = get_logger(__name__)

router = APIRouter(tags=["shop-orders"])


def belongs_to_shop(order: dict, shop_id: str) -> bool:
    """Orders carry their shop; older rows are matched through their items."""
    if order.get("shop_id"):
        return order["shop_id"] == shop_id
    return any(
        embedded(item.get("products")).get("shop_id") == shop_id
        for item in order.get("order_items") or []
    )


async def _shop_order(db: Database, order_id: str, shop: Shop) -> dict:
    order = await db.get_order_detail(order_id)
    if not order or not belongs_to_shop(order, shop.id):
        raise HTTPException(status_code=404, detail=ERROR_ORDER_NOT_FOUND)
    return order


@router.get("/orders")
async def list_orders(shop: Shop = Depends(get_owned_shop)):
    """Orders containing this shop's products, newest first."""
    db = get_database()
    try:
        rows = await db.get_shop_order_items(shop.id)
    except Exception as e:
        raise http_error(e, "Failed to load orders")

    orders = []
    for order in group_items_by_order(rows):
        payload = build_order_payload(order)
        payload["qr_payload"] = qr_payload(order)
        payload["verification_url"] = verification_url(order["id"])
        orders.append(payload)
    return {"orders": orders, "count": len(orders)}


@router.get("/orders/{order_id}")
async def get_order(order_id: str, shop: Shop = Depends(get_owned_shop)):
    """Order details with shop/customer markers and the distance between them."""
    db = get_database()
    order = await _shop_order(db, order_id, shop)
    return {
        "order": build_order_payload(order),
        "map": build_delivery_map(order),
        "verification_url": verification_url(order["id"]),
        "qr_payload": qr_payload(order),
    }


@router.patch("/orders/{order_id}/status")
async def update_order_status(
    order_id: str, request: OrderStatusRequest, shop: Shop = Depends(get_owned_shop)
):
    db = get_database()
    await _shop_order(db, order_id, shop)
    try:
        order = await db.update_order_status(order_id, request.status)
    except Exception as e:
        raise http_error(e, ERROR_ORDER_STATUS_UPDATE_FAILED, f"Status update of order {order_id} failed")
    logger.info(f"Shop {shop.id} moved order {order.order_number} to {order.status}")
    return {"success": True, "order_id": order.id, "status": order.status}
