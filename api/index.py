"""
ZYRA Storefront - Main FastAPI Application

Single entry point for the customer, shop-owner and admin APIs.
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from zyra.config import CORS_ORIGINS
from zyra.logging import get_logger
from zyra.routers import admin_router, shop_router, webapp_router
from zyra.services.database import close_database, init_database

logger = get_logger(__name__)


# ==================== FASTAPI APP ====================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler"""
    # Startup
    await init_database()
    logger.info("ZYRA API started")
    yield
    # Shutdown
    await close_database()
    logger.info("ZYRA API stopped")


app = FastAPI(
    title="ZYRA Storefront",
    description="Multi-shop storefront API for customers, shop owners and admins",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    # Credentials cannot be combined with a wildcard origin
    allow_credentials=CORS_ORIGINS != ["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers carry their own /api/... prefixes
app.include_router(webapp_router)
app.include_router(shop_router)
app.include_router(admin_router)


# ==================== HEALTH CHECK ====================

@app.get("/api/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "ok", "service": "zyra"}
