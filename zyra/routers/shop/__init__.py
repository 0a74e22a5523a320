"""Shop API Router.

Shop-owner endpoints, combined under the /api/shop prefix.
"""

from fastapi import APIRouter

from .orders import router as orders_router
from .products import router as products_router
from .profile import router as profile_router
from .realtime import router as realtime_router
from .revenue import router as revenue_router

router = APIRouter(prefix="/api/shop", tags=["shop"])

router.include_router(profile_router)
router.include_router(products_router)
router.include_router(orders_router)
router.include_router(revenue_router)
router.include_router(realtime_router)

__all__ = ["router"]
