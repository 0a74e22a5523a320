"""
FastAPI Routers Package

All routers are included in api/index.py.
"""

from zyra.routers.admin import router as admin_router
from zyra.routers.shop import router as shop_router
from zyra.routers.webapp import router as webapp_router

__all__ = [
    "admin_router",
    "shop_router",
    "webapp_router",
]
