"""Order Repository - orders and order_items tables."""
from typing import Optional

from zyra.services.models import Order
from .base import BaseRepository

ORDER_DETAIL_SELECT = (
    "*, "
    "shops (name, phone, email, address, latitude, longitude), "
    "order_items (*, products (name, image_url, shop_id))"
)

SHOP_ITEMS_SELECT = "*, orders (*), products!inner (name, image_url, shop_id)"


class OrderRepository(BaseRepository):
    """Order database operations."""

    table = "orders"

    async def create(self, data: dict) -> Order:
        result = await self.query().insert(data).execute()
        return Order(**result.data[0])

    async def create_items(self, items: list[dict]) -> list[dict]:
        """Batch insert order_items."""
        if not items:
            return []
        result = await self.client.table("order_items").insert(items).execute()
        return result.data or []

    async def get_by_id(self, order_id: str) -> Optional[Order]:
        result = await self.query().select("*").eq("id", order_id).execute()
        return Order(**result.data[0]) if result.data else None

    async def get_detail(self, order_id: str) -> Optional[dict]:
        """Order row with shop contact and items joined to products."""
        result = await self.query().select(ORDER_DETAIL_SELECT).eq("id", order_id).execute()
        return result.data[0] if result.data else None

    async def list_by_user(self, user_id: str, limit: int = 50, offset: int = 0) -> list[dict]:
        result = await (
            self.query()
            .select("*, shops (name), order_items (*, products (name, image_url))")
            .eq("user_id", user_id)
            .order("created_at", desc=True)
            .range(offset, offset + limit - 1)
            .execute()
        )
        return result.data or []

    async def list_by_shop(self, shop_id: str) -> list[Order]:
        result = await (
            self.query().select("*").eq("shop_id", shop_id).order("created_at", desc=True).execute()
        )
        return [Order(**o) for o in result.data or []]

    async def shop_order_items(self, shop_id: str) -> list[dict]:
        """order_items of a shop's products, each with its parent order."""
        result = await (
            self.client.table("order_items")
            .select(SHOP_ITEMS_SELECT)
            .eq("products.shop_id", shop_id)
            .order("created_at", desc=True)
            .execute()
        )
        return result.data or []

    async def latest_for_product(self, user_id: str, product_id: str) -> Optional[dict]:
        """Most recent order of this user containing the product."""
        result = await (
            self.client.table("order_items")
            .select("created_at, orders!inner (id, status, created_at, user_id)")
            .eq("product_id", product_id)
            .eq("orders.user_id", user_id)
            .order("created_at", desc=True)
            .limit(1)
            .execute()
        )
        if not result.data:
            return None
        return result.data[0].get("orders")

    async def update(self, order_id: str, data: dict) -> list[dict]:
        result = await self.query().update(data).eq("id", order_id).execute()
        return result.data or []

    async def list_all(
        self, status: Optional[str] = None, limit: int = 50, offset: int = 0
    ) -> list[dict]:
        query = self.query().select(
            "id, order_number, status, total_amount, payment_method, customer_name, "
            "created_at, shop_id, shops (name)"
        )
        if status:
            query = query.eq("status", status)
        result = await query.order("created_at", desc=True).range(offset, offset + limit - 1).execute()
        return result.data or []

    async def count_by_status(self, status: str) -> int:
        result = await self.query().select("id", count="exact").eq("status", status).execute()
        return result.count or 0
