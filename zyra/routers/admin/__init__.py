"""Admin API Router.

Admin dashboard endpoints, combined under the /api/admin prefix.
"""

from fastapi import APIRouter

from .orders import router as orders_router
from .realtime import router as realtime_router
from .shops import router as shops_router
from .users import router as users_router

router = APIRouter(prefix="/api/admin", tags=["admin"])

router.include_router(shops_router)
router.include_router(orders_router)
router.include_router(users_router)
router.include_router(realtime_router)

__all__ = ["router"]
