"""
WebApp Cart Router

Cart lines live in the cart_items table; every mutation returns the
refreshed cart with its totals.
"""
from fastapi import APIRouter, Depends

from zyra.auth import verify_user
from zyra.services.database import get_database
from zyra.services.models import AuthUser
from ..deps import http_error
from .models import AddToCartRequest, UpdateCartItemRequest

router = APIRouter(tags=["webapp-cart"])


@router.get("/cart")
async def get_cart(user: AuthUser = Depends(verify_user)):
    db = get_database()
    try:
        cart = await db.cart.get_cart(user.id)
    except Exception as e:
        raise http_error(e, "Failed to retrieve cart")
    return cart.to_dict()


@router.post("/cart/items")
async def add_to_cart(request: AddToCartRequest, user: AuthUser = Depends(verify_user)):
    db = get_database()
    try:
        cart = await db.cart.add_item(
            user.id,
            request.product_id,
            quantity=request.quantity,
            size=request.size,
            color=request.color,
        )
    except Exception as e:
        raise http_error(e, "Failed to add to cart")
    return cart.to_dict()


@router.patch("/cart/items/{item_id}")
async def update_cart_item(
    item_id: str, request: UpdateCartItemRequest, user: AuthUser = Depends(verify_user)
):
    """Set a line's quantity (0 removes it)."""
    db = get_database()
    try:
        cart = await db.cart.update_item_quantity(user.id, item_id, request.quantity)
    except Exception as e:
        raise http_error(e, "Failed to update cart")
    return cart.to_dict()


@router.delete("/cart/items/{item_id}")
async def remove_cart_item(item_id: str, user: AuthUser = Depends(verify_user)):
    db = get_database()
    try:
        cart = await db.cart.remove_item(user.id, item_id)
    except Exception as e:
        raise http_error(e, "Failed to remove item")
    return cart.to_dict()


@router.delete("/cart")
async def clear_cart(user: AuthUser = Depends(verify_user)):
    db = get_database()
    try:
        await db.cart.clear_cart(user.id)
    except Exception as e:
        raise http_error(e, "Failed to clear cart")
    return {"success": True}
