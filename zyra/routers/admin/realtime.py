"""Admin realtime: order and shop events across the platform."""
from fastapi import APIRouter, Depends, Request
from fastapi.responses import StreamingResponse

from zyra.auth import verify_admin
from zyra.db import RedisKeys
from zyra.services.models import AuthUser
from ..realtime import sse_response

router = APIRouter(tags=["admin-realtime"])


@router.get("/realtime")
async def realtime_stream(request: Request, admin: AuthUser = Depends(verify_admin)) -> StreamingResponse:
    return sse_response(request, [RedisKeys.STREAM_ADMIN_ORDERS, RedisKeys.STREAM_ADMIN_SHOPS])
