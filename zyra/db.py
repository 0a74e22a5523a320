"""
Database Module - Supabase and Redis Clients

Provides singleton instances of:
- Async Supabase client for PostgreSQL operations and Auth lookups
- Upstash Redis client for realtime event streams
"""

from typing import Optional

from supabase._async.client import AsyncClient, create_client as acreate_client
from upstash_redis.asyncio import Redis as AsyncRedis

from zyra.config import (
    SUPABASE_SERVICE_ROLE_KEY,
    SUPABASE_URL,
    UPSTASH_REDIS_REST_TOKEN,
    UPSTASH_REDIS_REST_URL,
)


_async_supabase_client: Optional[AsyncClient] = None
_redis_client: Optional[AsyncRedis] = None


async def get_supabase() -> AsyncClient:
    """
    Get async Supabase client (singleton).
    """
    global _async_supabase_client

    if _async_supabase_client is None:
        if not SUPABASE_URL or not SUPABASE_SERVICE_ROLE_KEY:
            raise ValueError("SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY must be set")
        _async_supabase_client = await acreate_client(SUPABASE_URL, SUPABASE_SERVICE_ROLE_KEY)

    return _async_supabase_client


def get_redis() -> AsyncRedis:
    """
    Get async Upstash Redis client (singleton).

    Uses standard Upstash env var names:
    - UPSTASH_REDIS_REST_URL
    - UPSTASH_REDIS_REST_TOKEN
    """
    global _redis_client

    if _redis_client is None:
        if not UPSTASH_REDIS_REST_URL or not UPSTASH_REDIS_REST_TOKEN:
            raise ValueError("UPSTASH_REDIS_REST_URL and UPSTASH_REDIS_REST_TOKEN must be set")
        _redis_client = AsyncRedis(url=UPSTASH_REDIS_REST_URL, token=UPSTASH_REDIS_REST_TOKEN)

    return _redis_client


class RedisKeys:
    """Redis stream keys for realtime events."""

    STREAM_ORDERS = "stream:realtime:orders:"  # stream:realtime:orders:{user_id}
    STREAM_SHOP = "stream:realtime:shop:"  # stream:realtime:shop:{shop_id}
    STREAM_ADMIN_ORDERS = "stream:realtime:admin:orders"
    STREAM_ADMIN_SHOPS = "stream:realtime:admin:shops"

    @staticmethod
    def customer_orders(user_id: str) -> str:
        return f"{RedisKeys.STREAM_ORDERS}{user_id}"

    @staticmethod
    def shop_orders(shop_id: str) -> str:
        return f"{RedisKeys.STREAM_SHOP}{shop_id}"
