"""Shop Revenue Router."""
from fastapi import APIRouter, Depends

from zyra.auth import get_owned_shop
from zyra.services.database import get_database
from zyra.services.models import Shop
from ..deps import http_error

router = APIRouter(tags=["shop-revenue"])


@router.get("/revenue")
async def get_revenue(shop: Shop = Depends(get_owned_shop)):
    """Lifetime and this-month revenue (cancelled orders excluded) plus transactions."""
    db = get_database()
    try:
        return await db.get_shop_revenue(shop.id)
    except Exception as e:
        raise http_error(e, "Failed to load revenue")
