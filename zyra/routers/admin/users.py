"""Admin Users Router - application roles and dashboard stats."""
import asyncio

from fastapi import APIRouter, Depends

from zyra.auth import verify_admin
from zyra.logging import get_logger, sanitize_id_for_logging
from zyra.services.database import get_database
from zyra.services.models import AuthUser, OrderStatus
from ..deps import http_error
from .models import SetRoleRequest

logger = get_logger(__name__)

router = APIRouter(tags=["admin-users"])


@router.get("/users")
async def admin_list_users(admin: AuthUser = Depends(verify_admin)):
    db = get_database()
    users = await db.list_user_roles()
    return {"users": users, "count": len(users)}


@router.put("/users/{user_id}/role")
async def admin_set_user_role(
    user_id: str, request: SetRoleRequest, admin: AuthUser = Depends(verify_admin)
):
    db = get_database()
    try:
        row = await db.set_user_role(user_id, request.role)
    except Exception as e:
        raise http_error(e, "Failed to update role", f"Role update for {sanitize_id_for_logging(user_id)} failed")
    logger.info(
        f"Admin {sanitize_id_for_logging(admin.id)} set role of "
        f"{sanitize_id_for_logging(user_id)} to {request.role.value}"
    )
    return {"success": True, "user_id": user_id, "role": request.role.value, "row": row}


@router.get("/stats")
async def admin_stats(admin: AuthUser = Depends(verify_admin)):
    """Shop counts and order counts per status."""
    db = get_database()
    statuses = [s.value for s in OrderStatus]
    total_shops, pending_shops, *order_counts = await asyncio.gather(
        db.count_shops(),
        db.count_shops(is_active=False),
        *[db.count_orders_by_status(s) for s in statuses],
    )
    orders_by_status = dict(zip(statuses, order_counts))
    return {
        "total_shops": total_shops,
        "pending_shops": pending_shops,
        "active_shops": total_shops - pending_shops,
        "orders_by_status": orders_by_status,
        "total_orders": sum(orders_by_status.values()),
    }
