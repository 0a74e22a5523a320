"""
ZYRA Storefront API

Packages:
- db: Supabase and Upstash Redis clients
- services: models, repositories, domains and the Database facade
- cart: cart manager over cart_items
- orders: checkout, status lifecycle, delivery ETA
- auth: Supabase Auth bearer tokens and role gates
- routers: FastAPI routers (webapp, shop, admin)

Imports are lazy to keep module loading cheap in serverless environments.
"""

__all__ = [
    "get_supabase",
    "get_redis",
    "get_database",
]


def __getattr__(name):
    """Lazy attribute access."""
    if name == "get_supabase":
        from zyra.db import get_supabase
        return get_supabase
    elif name == "get_redis":
        from zyra.db import get_redis
        return get_redis
    elif name == "get_database":
        from zyra.services.database import get_database
        return get_database
    raise AttributeError(f"module 'zyra' has no attribute '{name}'")
