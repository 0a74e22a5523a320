"""Catalog domain: shops, followers and shop-owned products."""
from collections import Counter
from decimal import Decimal
from typing import Any, Optional

from postgrest.exceptions import APIError

from zyra.config import PLACEHOLDER_IMAGE
from zyra.errors import (
    ERROR_PRODUCT_NOT_FOUND,
    ERROR_SHOP_ALREADY_EXISTS,
    ERROR_SHOP_LOCATION_REQUIRED,
    ERROR_SHOP_NOT_FOUND,
    PG_UNIQUE_VIOLATION,
)
from zyra.logging import get_logger, sanitize_id_for_logging
from zyra.services.geo import validate_coordinates
from zyra.services.models import Product, Shop
from zyra.services.money import discount_percent, to_float
from zyra.services.repositories import FollowerRepository, ProductRepository, ShopRepository

logger = get_logger(__name__)

DEFAULT_SHOP_DESCRIPTION = "No description available"

# Columns a shop owner may set on their products
PRODUCT_FIELDS = (
    "name",
    "description",
    "price",
    "compare_at_price",
    "category",
    "image_url",
    "stock_quantity",
    "sizes",
    "colors",
    "is_active",
)

# Columns that cannot be cleared with an explicit null
REQUIRED_PRODUCT_FIELDS = {"name", "price", "sizes", "colors", "is_active"}


def shop_card(shop: Shop, followers: int, products: int, is_following: bool) -> dict[str, Any]:
    """Shop list entry as shown on the shops page."""
    return {
        "id": shop.id,
        "name": shop.name,
        "logo": shop.logo_url or PLACEHOLDER_IMAGE,
        "rating": shop.rating or 0,
        "followers": followers,
        "products": products,
        "description": shop.description or DEFAULT_SHOP_DESCRIPTION,
        "is_following": is_following,
    }


def product_card(product: Product, shop_name: Optional[str] = None) -> dict[str, Any]:
    return {
        "id": product.id,
        "shop_id": product.shop_id,
        "shop": shop_name,
        "name": product.name,
        "description": product.description,
        "image": product.image_url or PLACEHOLDER_IMAGE,
        "price": to_float(product.price),
        "original_price": to_float(product.compare_at_price) if product.compare_at_price else None,
        "discount": discount_percent(product.price, product.compare_at_price),
        "category": product.category,
        "stock_quantity": product.stock_quantity,
        "sizes": product.sizes,
        "colors": product.colors,
        "is_active": product.is_active,
    }


def _is_unique_violation(error: APIError) -> bool:
    return str(getattr(error, "code", "")) == PG_UNIQUE_VIOLATION


class CatalogDomain:
    """Shop browsing, following, shop setup and product management."""

    def __init__(
        self,
        shops: ShopRepository,
        followers: FollowerRepository,
        products: ProductRepository,
    ):
        self.shops = shops
        self.followers = followers
        self.products = products

    # ==================== SHOPS ====================

    async def list_shops(self, user_id: Optional[str] = None, search: Optional[str] = None) -> list[dict]:
        """Active shops with product/follower counts aggregated in memory."""
        shops = await self.shops.list_active(search=search.strip() if search else None)
        if not shops:
            return []

        shop_ids = [s.id for s in shops]
        product_counts = Counter(await self.products.shop_ids_for(shop_ids))
        follower_counts = Counter(await self.followers.shop_ids_for(shop_ids))
        following = await self.followers.followed_by(user_id, shop_ids) if user_id else set()

        return [
            shop_card(
                shop,
                followers=follower_counts.get(shop.id, 0),
                products=product_counts.get(shop.id, 0),
                is_following=shop.id in following,
            )
            for shop in shops
        ]

    async def get_shop(self, shop_id: str, user_id: Optional[str] = None) -> Optional[dict]:
        shop = await self.shops.get_by_id(shop_id)
        if not shop:
            return None

        follower_count = await self.followers.count_for_shop(shop_id)
        is_following = await self.followers.is_following(shop_id, user_id) if user_id else False
        products = await self.products.list_by_shop(shop_id)

        return {
            "shop": shop.model_dump(mode="json"),
            "follower_count": follower_count,
            "is_following": is_following,
            "products": [product_card(p, shop.name) for p in products],
        }

    async def follow(self, shop_id: str, user_id: str) -> dict:
        """Follow a shop. Already following is not an error."""
        if not await self.shops.get_by_id(shop_id):
            raise ValueError(ERROR_SHOP_NOT_FOUND)
        try:
            await self.followers.add(shop_id, user_id)
        except APIError as e:
            if not _is_unique_violation(e):
                raise
            logger.info(f"User {sanitize_id_for_logging(user_id)} already follows shop {shop_id}")
        return {
            "is_following": True,
            "follower_count": await self.followers.count_for_shop(shop_id),
        }

    async def unfollow(self, shop_id: str, user_id: str) -> dict:
        await self.followers.remove(shop_id, user_id)
        count = await self.followers.count_for_shop(shop_id)
        return {"is_following": False, "follower_count": max(0, count)}

    async def get_owned_shop(self, owner_id: str) -> Optional[Shop]:
        return await self.shops.get_by_owner(owner_id)

    async def create_shop(self, owner_id: str, data: dict) -> Shop:
        """
        Shop setup. The shop stays inactive until an admin approves it.

        Raises:
            ValueError: missing location, bad coordinates or owner already has a shop
        """
        if data.get("latitude") in (None, "") or data.get("longitude") in (None, ""):
            raise ValueError(ERROR_SHOP_LOCATION_REQUIRED)
        latitude, longitude = validate_coordinates(data["latitude"], data["longitude"])

        if await self.shops.get_by_owner(owner_id):
            raise ValueError(ERROR_SHOP_ALREADY_EXISTS)

        shop = await self.shops.create(
            {
                "owner_id": owner_id,
                "name": data["name"].strip(),
                "description": data.get("description"),
                "phone": data.get("phone"),
                "email": data.get("email"),
                "address": data.get("address"),
                "logo_url": data.get("logo_url"),
                "banner_url": data.get("banner_url"),
                "latitude": latitude,
                "longitude": longitude,
                "is_active": False,
            }
        )
        logger.info(f"Shop {shop.id} created by {sanitize_id_for_logging(owner_id)}, awaiting approval")
        return shop

    async def update_shop(self, shop_id: str, data: dict) -> Optional[Shop]:
        update = {k: v for k, v in data.items() if v is not None}
        if "latitude" in update or "longitude" in update:
            lat, lon = validate_coordinates(update.get("latitude"), update.get("longitude"))
            update["latitude"], update["longitude"] = lat, lon
        # Activation is an admin decision
        update.pop("is_active", None)
        update.pop("owner_id", None)
        if not update:
            return await self.shops.get_by_id(shop_id)
        return await self.shops.update(shop_id, update)

    async def set_shop_active(self, shop_id: str, active: bool) -> Optional[Shop]:
        return await self.shops.update(shop_id, {"is_active": active})

    # ==================== PRODUCTS ====================

    async def get_product(self, product_id: str) -> Optional[Product]:
        return await self.products.get_by_id(product_id)

    async def list_products(self, shop_id: str, include_inactive: bool = False) -> list[Product]:
        return await self.products.list_by_shop(shop_id, include_inactive=include_inactive)

    async def create_product(self, shop_id: str, data: dict) -> Product:
        row = {k: _jsonable(v) for k, v in data.items() if k in PRODUCT_FIELDS and v is not None}
        row["shop_id"] = shop_id
        return await self.products.create(row)

    async def _owned_product(self, shop_id: str, product_id: str) -> Product:
        product = await self.products.get_by_id(product_id)
        if not product or product.shop_id != shop_id:
            raise ValueError(ERROR_PRODUCT_NOT_FOUND)
        return product

    async def update_product(self, shop_id: str, product_id: str, data: dict) -> Product:
        product = await self._owned_product(shop_id, product_id)
        update = {
            k: _jsonable(v)
            for k, v in data.items()
            if k in PRODUCT_FIELDS and (v is not None or k not in REQUIRED_PRODUCT_FIELDS)
        }
        if not update:
            return product
        updated = await self.products.update(product_id, update)
        return updated or product

    async def delete_product(self, shop_id: str, product_id: str) -> None:
        await self._owned_product(shop_id, product_id)
        await self.products.delete(product_id)


def _jsonable(value: Any) -> Any:
    """Decimals go over the wire as floats."""
    if isinstance(value, Decimal):
        return float(value)
    return value
