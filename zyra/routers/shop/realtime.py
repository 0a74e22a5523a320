"""Shop realtime: new orders and status changes for the caller's shop."""
from fastapi import APIRouter, Depends, Request
from fastapi.responses import StreamingResponse

from zyra.auth import get_owned_shop
from zyra.db import RedisKeys
from zyra.services.models import Shop
from ..realtime import sse_response

router = APIRouter(tags=["shop-realtime"])


@router.get("/realtime")
async def realtime_stream(request: Request, shop: Shop = Depends(get_owned_shop)) -> StreamingResponse:
    return sse_response(request, [RedisKeys.shop_orders(shop.id)])
