"""
Shop Profile Router

Shop setup (with its pinned map location) and profile edits.
"""
from fastapi import APIRouter, Depends

from zyra.auth import get_owned_shop, verify_shop_owner
from zyra.logging import get_logger, sanitize_id_for_logging
from zyra.services.database import get_database
from zyra.services.geo import DEFAULT_SHOP_CENTER, has_location
from zyra.services.models import AuthUser, Shop
from ..deps import http_error
from .models import ShopSetupRequest, ShopUpdateRequest

logger = get_logger(__name__)

router = APIRouter(tags=["shop-profile"])


def _shop_payload(shop: Shop) -> dict:
    located = has_location(shop.latitude, shop.longitude)
    return {
        "shop": shop.model_dump(mode="json"),
        "has_location": located,
        "map_center": [shop.latitude, shop.longitude] if located else list(DEFAULT_SHOP_CENTER),
        "pending_approval": not shop.is_active,
    }


@router.post("/setup", status_code=201)
async def setup_shop(request: ShopSetupRequest, user: AuthUser = Depends(verify_shop_owner)):
    """Create the caller's shop. It stays hidden until an admin approves it."""
    db = get_database()
    try:
        shop = await db.create_shop(user.id, request.model_dump())
    except Exception as e:
        raise http_error(e, "Failed to create shop")
    logger.info(f"Shop {shop.id} created by {sanitize_id_for_logging(user.id)}, awaiting approval")
    return _shop_payload(shop)


@router.get("/profile")
async def get_profile(shop: Shop = Depends(get_owned_shop)):
    return _shop_payload(shop)


@router.patch("/profile")
async def update_profile(request: ShopUpdateRequest, shop: Shop = Depends(get_owned_shop)):
    db = get_database()
    try:
        updated = await db.update_shop(shop.id, request.model_dump(exclude_unset=True))
    except Exception as e:
        raise http_error(e, "Failed to update shop")
    return _shop_payload(updated or shop)
