"""
WebApp Checkout Router

Summary and order placement. One checkout can create several orders,
one per shop in the cart.
"""
from typing import Optional

from fastapi import APIRouter, Depends

from zyra.auth import verify_user
from zyra.errors import ERROR_PLACE_ORDER_FAILED
from zyra.logging import sanitize_id_for_logging
from zyra.services.database import get_database
from zyra.services.models import AuthUser
from zyra.services.money import sum_money, to_float
from ..deps import http_error
from .models import PlaceOrderRequest

router = APIRouter(tags=["webapp-checkout"])


@router.get("/checkout/summary")
async def checkout_summary(address_id: Optional[str] = None, user: AuthUser = Depends(verify_user)):
    db = get_database()
    try:
        return await db.checkout.summarize(user, address_id)
    except Exception as e:
        raise http_error(e, "Failed to load checkout summary")


@router.post("/checkout/place-order", status_code=201)
async def place_order(request: PlaceOrderRequest, user: AuthUser = Depends(verify_user)):
    db = get_database()
    try:
        orders = await db.place_order(
            user,
            request.payment_method,
            address_id=request.address_id,
            upi_id=request.upi_id,
        )
    except Exception as e:
        raise http_error(e, ERROR_PLACE_ORDER_FAILED, f"Checkout failed for {sanitize_id_for_logging(user.id)}")

    return {
        "success": True,
        "orders": [
            {
                "id": o.id,
                "order_number": o.order_number,
                "shop_id": o.shop_id,
                "total_amount": to_float(o.total_amount),
                "status": o.status,
            }
            for o in orders
        ],
        "total_amount": to_float(sum_money(o.total_amount for o in orders)),
    }
