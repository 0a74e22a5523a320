"""Authentication package."""
from .roles import get_owned_shop, require_role, verify_admin, verify_shop_owner
from .supabase import extract_bearer_token, verify_user

__all__ = [
    "extract_bearer_token",
    "get_owned_shop",
    "require_role",
    "verify_admin",
    "verify_shop_owner",
    "verify_user",
]
