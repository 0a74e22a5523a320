"""Cart Repository - cart_items table."""
from typing import Optional

from .base import BaseRepository

CART_SELECT = (
    "id, product_id, quantity, size, color, "
    "products (name, price, image_url, category, shop_id, stock_quantity, is_active)"
)


class CartRepository(BaseRepository):
    """cart_items database operations."""

    table = "cart_items"

    async def list_for_user(self, user_id: str) -> list[dict]:
        result = await (
            self.query().select(CART_SELECT).eq("user_id", user_id).order("created_at").execute()
        )
        return result.data or []

    async def find_line(
        self,
        user_id: str,
        product_id: str,
        size: Optional[str],
        color: Optional[str],
    ) -> Optional[dict]:
        query = self.query().select("id, quantity").eq("user_id", user_id).eq("product_id", product_id)
        query = query.is_("size", "null") if size is None else query.eq("size", size)
        query = query.is_("color", "null") if color is None else query.eq("color", color)
        result = await query.limit(1).execute()
        return result.data[0] if result.data else None

    async def get_line(self, user_id: str, item_id: str) -> Optional[dict]:
        result = await self.query().select("*").eq("id", item_id).eq("user_id", user_id).execute()
        return result.data[0] if result.data else None

    async def insert(self, data: dict) -> dict:
        result = await self.query().insert(data).execute()
        return result.data[0]

    async def set_quantity(self, item_id: str, quantity: int) -> None:
        await self.query().update({"quantity": quantity}).eq("id", item_id).execute()

    async def delete_line(self, user_id: str, item_id: str) -> None:
        await self.query().delete().eq("id", item_id).eq("user_id", user_id).execute()

    async def clear(self, user_id: str) -> None:
        await self.query().delete().eq("user_id", user_id).execute()
