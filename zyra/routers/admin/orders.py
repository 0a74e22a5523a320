"""Admin Orders Router - every order across shops."""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from zyra.auth import verify_admin
from zyra.errors import ERROR_ORDER_STATUS_UPDATE_FAILED
from zyra.orders import status_label
from zyra.orders.status_service import VALID_STATUSES
from zyra.services.database import get_database
from zyra.services.models import AuthUser
from zyra.services.money import to_float
from ..deps import http_error
from .models import AdminOrderStatusRequest

router = APIRouter(tags=["admin-orders"])


@router.get("/orders")
async def admin_get_orders(
    status: Optional[str] = None,
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    admin: AuthUser = Depends(verify_admin),
):
    """All orders, newest first, optionally filtered by status."""
    if status and status not in VALID_STATUSES:
        raise HTTPException(status_code=400, detail=f"Unknown status '{status}'")
    db = get_database()
    rows = await db.list_all_orders(status, limit, offset)

    orders = []
    for order in rows:
        shop = order.get("shops") or {}
        orders.append(
            {
                "id": order.get("id"),
                "order_number": order.get("order_number"),
                "shop_id": order.get("shop_id"),
                "shop_name": shop.get("name") if isinstance(shop, dict) else None,
                "customer_name": order.get("customer_name"),
                "total_amount": to_float(order.get("total_amount")),
                "status": order.get("status"),
                "status_label": status_label(order.get("status")),
                "payment_method": order.get("payment_method"),
                "created_at": order.get("created_at"),
            }
        )
    return {"orders": orders, "count": len(orders)}


@router.patch("/orders/{order_id}/status")
async def admin_update_order_status(
    order_id: str, request: AdminOrderStatusRequest, admin: AuthUser = Depends(verify_admin)
):
    db = get_database()
    try:
        order = await db.update_order_status(
            order_id, request.status, check_transition=request.check_transition
        )
    except Exception as e:
        raise http_error(e, ERROR_ORDER_STATUS_UPDATE_FAILED, f"Admin status update of order {order_id} failed")
    return {"success": True, "order_id": order.id, "status": order.status}
