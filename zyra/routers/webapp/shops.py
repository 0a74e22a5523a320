"""
WebApp Shops Router

Shop listing, shop pages, following and product pages.
"""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from zyra.auth import verify_user
from zyra.errors import ERROR_PRODUCT_NOT_FOUND, ERROR_SHOP_NOT_FOUND
from zyra.logging import get_logger, sanitize_string_for_logging
from zyra.services.database import get_database
from zyra.services.domains.catalog import product_card
from zyra.services.models import AuthUser
from ..deps import http_error
from .orders import active_order_for_product

logger = get_logger(__name__)

router = APIRouter(tags=["webapp-shops"])


def _can_view_shop(shop: dict, user: AuthUser) -> bool:
    """Shops awaiting approval are visible to their owner and admins only."""
    return bool(shop.get("is_active")) or user.is_admin or shop.get("owner_id") == user.id


@router.get("/shops")
async def list_shops(search: Optional[str] = None, user: AuthUser = Depends(verify_user)):
    """Active shops with product/follower counts; optional name search."""
    db = get_database()
    if search:
        logger.debug(f"Shop search: {sanitize_string_for_logging(search)}")
    try:
        shops = await db.list_shops(user.id, search)
    except Exception as e:
        raise http_error(e, "Failed to load shops")
    return {"shops": shops, "count": len(shops)}


@router.get("/shops/{shop_id}")
async def get_shop(shop_id: str, user: AuthUser = Depends(verify_user)):
    db = get_database()
    try:
        shop = await db.get_shop(shop_id, user.id)
    except Exception as e:
        raise http_error(e, "Failed to load shop")
    if not shop or not _can_view_shop(shop["shop"], user):
        raise HTTPException(status_code=404, detail=ERROR_SHOP_NOT_FOUND)
    return shop


@router.post("/shops/{shop_id}/follow")
async def follow_shop(shop_id: str, user: AuthUser = Depends(verify_user)):
    db = get_database()
    try:
        return await db.follow_shop(shop_id, user.id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        raise http_error(e, "Failed to follow shop")


@router.delete("/shops/{shop_id}/follow")
async def unfollow_shop(shop_id: str, user: AuthUser = Depends(verify_user)):
    db = get_database()
    try:
        return await db.unfollow_shop(shop_id, user.id)
    except Exception as e:
        raise http_error(e, "Failed to unfollow shop")


@router.get("/products/{product_id}")
async def get_product(product_id: str, user: AuthUser = Depends(verify_user)):
    """Product page, with the caller's active order for it (delivery timer)."""
    db = get_database()
    product = await db.get_product(product_id)
    if not product or not product.is_active:
        raise HTTPException(status_code=404, detail=ERROR_PRODUCT_NOT_FOUND)

    shop = await db.get_shop_by_id(product.shop_id)

    active_order = await active_order_for_product(db, user.id, product_id)
    return {
        "product": product_card(product, shop.name if shop else None),
        "active_order": active_order,
    }
