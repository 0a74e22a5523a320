"""
Supabase Database Service

Provides the Database class: repositories, domain services and the order
flows wired to a single async Supabase client.

Usage:
    from zyra.services.database import get_database

    # At FastAPI startup (lifespan):
    await init_database()

    # In a request:
    db = get_database()
    shops = await db.list_shops(user.id)
"""

import asyncio
from datetime import datetime
from typing import Any, Optional

from supabase._async.client import AsyncClient

from zyra.cart import Cart, CartManager
from zyra.db import get_supabase
from zyra.logging import get_logger
from zyra.orders.checkout import CheckoutService
from zyra.orders.status_service import OrderStatusService
from zyra.services.domains import AddressesDomain, CatalogDomain, RevenueDomain, UsersDomain
from zyra.services.models import Address, AppRole, AuthUser, Order, Product, Shop
from zyra.services.repositories import (
    AddressRepository,
    CartRepository,
    FollowerRepository,
    OrderRepository,
    ProductRepository,
    RoleRepository,
    ShopRepository,
)

logger = get_logger(__name__)


class Database:
    """
    Storefront data access over the async Supabase client.

    Routers use the flat methods below; the domains and services are also
    exposed for code that needs more than one call.

    Must be built with `Database.create()` or `init_database()`.
    """

    def __init__(self, client: AsyncClient):
        self.client = client

        # Repositories
        self._roles_repo = RoleRepository(client)
        self._shops_repo = ShopRepository(client)
        self._followers_repo = FollowerRepository(client)
        self._products_repo = ProductRepository(client)
        self._cart_repo = CartRepository(client)
        self._addresses_repo = AddressRepository(client)
        self._orders_repo = OrderRepository(client)

        # Domains
        self.users_domain = UsersDomain(self._roles_repo)
        self.catalog = CatalogDomain(self._shops_repo, self._followers_repo, self._products_repo)
        self.addresses = AddressesDomain(self._addresses_repo)
        self.revenue = RevenueDomain(self._orders_repo)

        # Order flows
        self.cart = CartManager(self._cart_repo, self._products_repo)
        self.status_service = OrderStatusService(self._orders_repo)
        self.checkout = CheckoutService(
            self.cart, self.addresses, self._products_repo, self._orders_repo
        )

    @classmethod
    async def create(cls) -> "Database":
        """Async factory: builds the Supabase client and all repositories."""
        return cls(await get_supabase())

    # ==================== USERS ====================

    async def get_user_role(self, user_id: str) -> AppRole:
        return await self.users_domain.get_role(user_id)

    async def set_user_role(self, user_id: str, role: AppRole) -> dict:
        return await self.users_domain.set_role(user_id, role)

    async def list_user_roles(self) -> list[dict]:
        return await self.users_domain.list_roles()

    # ==================== SHOPS ====================

    async def list_shops(self, user_id: Optional[str] = None, search: Optional[str] = None) -> list[dict]:
        return await self.catalog.list_shops(user_id, search)

    async def get_shop(self, shop_id: str, user_id: Optional[str] = None) -> Optional[dict]:
        return await self.catalog.get_shop(shop_id, user_id)

    async def get_shop_by_id(self, shop_id: str) -> Optional[Shop]:
        return await self._shops_repo.get_by_id(shop_id)

    async def get_shop_by_owner(self, owner_id: str) -> Optional[Shop]:
        return await self.catalog.get_owned_shop(owner_id)

    async def follow_shop(self, shop_id: str, user_id: str) -> dict:
        return await self.catalog.follow(shop_id, user_id)

    async def unfollow_shop(self, shop_id: str, user_id: str) -> dict:
        return await self.catalog.unfollow(shop_id, user_id)

    async def create_shop(self, owner_id: str, data: dict) -> Shop:
        return await self.catalog.create_shop(owner_id, data)

    async def update_shop(self, shop_id: str, data: dict) -> Optional[Shop]:
        return await self.catalog.update_shop(shop_id, data)

    async def set_shop_active(self, shop_id: str, active: bool) -> Optional[Shop]:
        return await self.catalog.set_shop_active(shop_id, active)

    async def list_all_shops(self, is_active: Optional[bool] = None) -> list[Shop]:
        return await self._shops_repo.list_all(is_active=is_active)

    async def count_shops(self, is_active: Optional[bool] = None) -> int:
        return await self._shops_repo.count(is_active=is_active)

    # ==================== PRODUCTS ====================

    async def get_product(self, product_id: str) -> Optional[Product]:
        return await self.catalog.get_product(product_id)

    async def list_shop_products(self, shop_id: str, include_inactive: bool = False) -> list[Product]:
        return await self.catalog.list_products(shop_id, include_inactive)

    async def create_product(self, shop_id: str, data: dict) -> Product:
        return await self.catalog.create_product(shop_id, data)

    async def update_product(self, shop_id: str, product_id: str, data: dict) -> Product:
        return await self.catalog.update_product(shop_id, product_id, data)

    async def delete_product(self, shop_id: str, product_id: str) -> None:
        await self.catalog.delete_product(shop_id, product_id)

    # ==================== CART ====================

    async def get_cart(self, user_id: str) -> Cart:
        return await self.cart.get_cart(user_id)

    # ==================== ADDRESSES ====================

    async def list_addresses(self, user_id: str) -> list[Address]:
        return await self.addresses.list(user_id)

    async def add_address(self, user_id: str, data: dict) -> Address:
        return await self.addresses.add(user_id, data)

    async def delete_address(self, user_id: str, address_id: str) -> None:
        await self.addresses.delete(user_id, address_id)

    async def set_default_address(self, user_id: str, address_id: str) -> None:
        await self.addresses.set_default(user_id, address_id)

    # ==================== ORDERS ====================

    async def place_order(
        self,
        user: AuthUser,
        payment_method: str,
        address_id: Optional[str] = None,
        upi_id: Optional[str] = None,
    ) -> list[Order]:
        return await self.checkout.place_order(user, payment_method, address_id, upi_id)

    async def get_order_detail(self, order_id: str) -> Optional[dict]:
        return await self._orders_repo.get_detail(order_id)

    async def get_user_orders(self, user_id: str, limit: int = 50, offset: int = 0) -> list[dict]:
        return await self._orders_repo.list_by_user(user_id, limit, offset)

    async def get_shop_order_items(self, shop_id: str) -> list[dict]:
        return await self._orders_repo.shop_order_items(shop_id)

    async def get_latest_order_for_product(self, user_id: str, product_id: str) -> Optional[dict]:
        return await self._orders_repo.latest_for_product(user_id, product_id)

    async def update_order_status(
        self, order_id: str, status: str, check_transition: bool = True
    ) -> Order:
        return await self.status_service.update_status(order_id, status, check_transition)

    async def verify_order(self, order_id: str) -> tuple[Order, bool]:
        return await self.status_service.verify_delivery(order_id)

    async def list_all_orders(
        self, status: Optional[str] = None, limit: int = 50, offset: int = 0
    ) -> list[dict]:
        return await self._orders_repo.list_all(status, limit, offset)

    async def count_orders_by_status(self, status: str) -> int:
        return await self._orders_repo.count_by_status(status)

    async def get_shop_revenue(self, shop_id: str, now: Optional[datetime] = None) -> dict[str, Any]:
        return await self.revenue.shop_revenue(shop_id, now)


# ==================== SINGLETON ====================

_db: Optional[Database] = None
_db_lock: Optional[asyncio.Lock] = None


def _get_lock() -> asyncio.Lock:
    global _db_lock
    if _db_lock is None:
        _db_lock = asyncio.Lock()
    return _db_lock


async def init_database() -> Database:
    """
    Initialize the database singleton.

    Called from the FastAPI lifespan.
    """
    global _db
    if _db is not None:
        return _db

    async with _get_lock():
        if _db is None:
            logger.info("Initializing async Supabase client...")
            _db = await Database.create()
            logger.info("Async Supabase client initialized")
    return _db


async def close_database() -> None:
    """Drop the singleton at shutdown."""
    global _db
    if _db is not None:
        try:
            await _db.client.auth.sign_out()
        except Exception as e:
            logger.warning(f"Error closing Supabase client: {e}")
        _db = None
        logger.info("Supabase client closed")


def get_database() -> Database:
    """
    Database instance (sync accessor).

    Raises:
        RuntimeError: init_database() has not run
    """
    if _db is None:
        raise RuntimeError(
            "Database not initialized. Call 'await init_database()' at startup."
        )
    return _db
