"""
Admin Shops Router

Shop approval: new shops are created inactive and appear in the storefront
once an admin activates them.
"""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from zyra.auth import verify_admin
from zyra.errors import ERROR_SHOP_NOT_FOUND
from zyra.logging import get_logger, sanitize_id_for_logging
from zyra.realtime import emit_shop_update
from zyra.services.database import get_database
from zyra.services.models import AuthUser
from .models import ShopStatusRequest

logger = get_logger(__name__)

router = APIRouter(tags=["admin-shops"])

_STATUS_FILTERS = {"pending": False, "active": True}


@router.get("/shops")
async def admin_list_shops(status: Optional[str] = None, admin: AuthUser = Depends(verify_admin)):
    """All shops; `status` = pending | active narrows the list."""
    if status and status not in _STATUS_FILTERS:
        raise HTTPException(status_code=400, detail=f"Unknown shop status '{status}'")
    db = get_database()
    shops = await db.list_all_shops(is_active=_STATUS_FILTERS.get(status) if status else None)
    return {
        "shops": [
            {**shop.model_dump(mode="json"), "status": "active" if shop.is_active else "pending"}
            for shop in shops
        ],
        "count": len(shops),
    }


@router.patch("/shops/{shop_id}/status")
async def admin_set_shop_status(
    shop_id: str, request: ShopStatusRequest, admin: AuthUser = Depends(verify_admin)
):
    """Approve (is_active=true) or suspend a shop."""
    db = get_database()
    shop = await db.set_shop_active(shop_id, request.is_active)
    if not shop:
        raise HTTPException(status_code=404, detail=ERROR_SHOP_NOT_FOUND)

    logger.info(f"Admin {sanitize_id_for_logging(admin.id)} set shop {shop_id} active={request.is_active}")
    await emit_shop_update(shop_id, request.is_active)
    return {"success": True, "shop": shop.model_dump(mode="json")}
