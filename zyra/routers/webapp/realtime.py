"""WebApp realtime: the caller's order events over SSE."""
from fastapi import APIRouter, Depends, Request
from fastapi.responses import StreamingResponse

from zyra.auth import verify_user
from zyra.db import RedisKeys
from zyra.services.models import AuthUser
from ..realtime import sse_response

router = APIRouter(tags=["webapp-realtime"])


@router.get("/realtime")
async def realtime_stream(request: Request, user: AuthUser = Depends(verify_user)) -> StreamingResponse:
    return sse_response(request, [RedisKeys.customer_orders(user.id)])
