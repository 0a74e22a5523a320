"""Shop Repository - shops and shop_followers tables."""
from typing import Optional

from zyra.services.models import Shop
from .base import BaseRepository


class ShopRepository(BaseRepository):
    """Shop database operations."""

    table = "shops"

    async def get_by_id(self, shop_id: str) -> Optional[Shop]:
        result = await self.query().select("*").eq("id", shop_id).execute()
        return Shop(**result.data[0]) if result.data else None

    async def get_by_owner(self, owner_id: str) -> Optional[Shop]:
        result = await self.query().select("*").eq("owner_id", owner_id).limit(1).execute()
        return Shop(**result.data[0]) if result.data else None

    async def list_active(self, search: Optional[str] = None) -> list[Shop]:
        query = self.query().select("*").eq("is_active", True)
        if search:
            query = query.ilike("name", f"%{search}%")
        result = await query.order("name").execute()
        return [Shop(**s) for s in result.data or []]

    async def list_all(self, is_active: Optional[bool] = None) -> list[Shop]:
        query = self.query().select("*")
        if is_active is not None:
            query = query.eq("is_active", is_active)
        result = await query.order("created_at", desc=True).execute()
        return [Shop(**s) for s in result.data or []]

    async def create(self, data: dict) -> Shop:
        result = await self.query().insert(data).execute()
        return Shop(**result.data[0])

    async def update(self, shop_id: str, data: dict) -> Optional[Shop]:
        result = await self.query().update(data).eq("id", shop_id).execute()
        return Shop(**result.data[0]) if result.data else None

    async def count(self, is_active: Optional[bool] = None) -> int:
        query = self.query().select("id", count="exact")
        if is_active is not None:
            query = query.eq("is_active", is_active)
        result = await query.execute()
        return result.count or 0


class FollowerRepository(BaseRepository):
    """shop_followers database operations."""

    table = "shop_followers"

    async def count_for_shop(self, shop_id: str) -> int:
        result = await (
            self.query().select("*", count="exact", head=True).eq("shop_id", shop_id).execute()
        )
        return result.count or 0

    async def shop_ids_for(self, shop_ids: list[str]) -> list[str]:
        """shop_id of every follower row of the given shops (one per follower)."""
        if not shop_ids:
            return []
        result = await self.query().select("shop_id").in_("shop_id", shop_ids).execute()
        return [row["shop_id"] for row in result.data or []]

    async def followed_by(self, user_id: str, shop_ids: list[str]) -> set[str]:
        if not shop_ids:
            return set()
        result = await (
            self.query()
            .select("shop_id")
            .eq("user_id", user_id)
            .in_("shop_id", shop_ids)
            .execute()
        )
        return {row["shop_id"] for row in result.data or []}

    async def is_following(self, shop_id: str, user_id: str) -> bool:
        result = await (
            self.query().select("shop_id").eq("shop_id", shop_id).eq("user_id", user_id).execute()
        )
        return bool(result.data)

    async def add(self, shop_id: str, user_id: str) -> None:
        await self.query().insert({"shop_id": shop_id, "user_id": user_id}).execute()

    async def remove(self, shop_id: str, user_id: str) -> None:
        await self.query().delete().eq("shop_id", shop_id).eq("user_id", user_id).execute()
