"""Product Repository - products table."""
from typing import Optional

from zyra.services.models import Product
from .base import BaseRepository


class ProductRepository(BaseRepository):
    """Product catalogue operations."""

    table = "products"

    async def get_by_id(self, product_id: str) -> Optional[Product]:
        result = await self.query().select("*").eq("id", product_id).execute()
        return Product(**result.data[0]) if result.data else None

    async def get_many(self, product_ids: list[str]) -> dict[str, Product]:
        if not product_ids:
            return {}
        result = await self.query().select("*").in_("id", product_ids).execute()
        return {p["id"]: Product(**p) for p in result.data or []}

    async def list_by_shop(self, shop_id: str, include_inactive: bool = False) -> list[Product]:
        query = self.query().select("*").eq("shop_id", shop_id)
        if not include_inactive:
            query = query.eq("is_active", True)
        result = await query.order("created_at", desc=True).execute()
        return [Product(**p) for p in result.data or []]

    async def shop_ids_for(self, shop_ids: list[str]) -> list[str]:
        """shop_id of every product of the given shops (one per product)."""
        if not shop_ids:
            return []
        result = await self.query().select("shop_id").in_("shop_id", shop_ids).execute()
        return [row["shop_id"] for row in result.data or []]

    async def create(self, data: dict) -> Product:
        result = await self.query().insert(data).execute()
        return Product(**result.data[0])

    async def update(self, product_id: str, data: dict) -> Optional[Product]:
        result = await self.query().update(data).eq("id", product_id).execute()
        return Product(**result.data[0]) if result.data else None

    async def delete(self, product_id: str) -> None:
        await self.query().delete().eq("id", product_id).execute()

    async def set_stock(self, product_id: str, stock_quantity: int) -> None:
        await self.query().update({"stock_quantity": stock_quantity}).eq("id", product_id).execute()
