"""Role gates for shop-owner and admin routes."""
from fastapi import Depends, HTTPException

from zyra.errors import ERROR_ADMIN_REQUIRED, ERROR_FORBIDDEN, ERROR_SHOP_NOT_SET_UP
from zyra.services.database import get_database
from zyra.services.models import AppRole, AuthUser, Shop
from .supabase import verify_user


def require_role(*roles: AppRole):
    """
    Dependency factory: only callers holding one of `roles` pass.
    Admins pass every gate.
    """

    async def dependency(user: AuthUser = Depends(verify_user)) -> AuthUser:
        if user.is_admin or user.role in roles:
            return user
        raise HTTPException(status_code=403, detail=ERROR_FORBIDDEN)

    return dependency


verify_shop_owner = require_role(AppRole.SHOP_OWNER)


async def verify_admin(user: AuthUser = Depends(verify_user)) -> AuthUser:
    if not user.is_admin:
        raise HTTPException(status_code=403, detail=ERROR_ADMIN_REQUIRED)
    return user


async def get_owned_shop(user: AuthUser = Depends(verify_shop_owner)) -> Shop:
    """The caller's shop; 404 until shop setup is done."""
    shop = await get_database().get_shop_by_owner(user.id)
    if not shop:
        raise HTTPException(status_code=404, detail=ERROR_SHOP_NOT_SET_UP)
    return shop
