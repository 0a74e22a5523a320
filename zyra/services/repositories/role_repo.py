"""Role Repository - user_roles table."""
from typing import Optional

from .base import BaseRepository


class RoleRepository(BaseRepository):
    """User role database operations."""

    table = "user_roles"

    async def get_role(self, user_id: str) -> Optional[str]:
        result = await self.query().select("role").eq("user_id", user_id).limit(1).execute()
        return result.data[0].get("role") if result.data else None

    async def set_role(self, user_id: str, role: str) -> dict:
        result = await (
            self.query()
            .upsert({"user_id": user_id, "role": role}, on_conflict="user_id")
            .execute()
        )
        return result.data[0] if result.data else {"user_id": user_id, "role": role}

    async def list_all(self) -> list[dict]:
        result = await self.query().select("user_id, role").execute()
        return result.data or []
