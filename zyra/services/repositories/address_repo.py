"""Address Repository - addresses table."""
from typing import Optional

from zyra.services.models import Address
from .base import BaseRepository


class AddressRepository(BaseRepository):
    """Saved delivery addresses."""

    table = "addresses"

    async def list_for_user(self, user_id: str) -> list[Address]:
        result = await (
            self.query().select("*").eq("user_id", user_id).order("created_at").execute()
        )
        return [Address(**a) for a in result.data or []]

    async def get(self, user_id: str, address_id: str) -> Optional[Address]:
        result = await (
            self.query().select("*").eq("id", address_id).eq("user_id", user_id).execute()
        )
        return Address(**result.data[0]) if result.data else None

    async def create(self, data: dict) -> Address:
        result = await self.query().insert(data).execute()
        return Address(**result.data[0])

    async def delete(self, user_id: str, address_id: str) -> None:
        await self.query().delete().eq("id", address_id).eq("user_id", user_id).execute()

    async def clear_default(self, user_id: str) -> None:
        await self.query().update({"is_default": False}).eq("user_id", user_id).execute()

    async def mark_default(self, user_id: str, address_id: str) -> None:
        await (
            self.query()
            .update({"is_default": True})
            .eq("id", address_id)
            .eq("user_id", user_id)
            .execute()
        )
