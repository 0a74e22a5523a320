"""WebApp API Router.

Customer-facing endpoints, combined under the /api/webapp prefix.
"""

from fastapi import APIRouter

from .addresses import router as addresses_router
from .cart import router as cart_router
from .checkout import router as checkout_router
from .orders import router as orders_router
from .realtime import router as realtime_router
from .shops import router as shops_router

router = APIRouter(prefix="/api/webapp", tags=["webapp"])

router.include_router(shops_router)
router.include_router(cart_router)
router.include_router(addresses_router)
router.include_router(checkout_router)
router.include_router(orders_router)
router.include_router(realtime_router)

__all__ = ["router"]
