"""
Realtime SSE streaming over Redis Streams.

upstash-redis talks REST and cannot block on XREAD, so each connection
polls XRANGE after the last entry id it has sent.
"""

import asyncio
import json
from typing import Any, AsyncIterator

from fastapi import Request
from fastapi.responses import StreamingResponse

from zyra.db import get_redis
from zyra.logging import get_logger

logger = get_logger(__name__)

POLL_INTERVAL_SECS = 1.0

# Events read per stream per poll
MAX_EVENTS_PER_POLL = 10

# Backlog replayed when a client connects
MAX_INITIAL_EVENTS = 20

SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",  # Disable nginx buffering
}


def format_event(fields: dict[str, Any]) -> str | None:
    """SSE `data:` frame for a stream entry; None when the payload is not JSON."""
    data = fields.get("data", "{}")
    if isinstance(data, str):
        try:
            data = json.loads(data)
        except json.JSONDecodeError:
            logger.warning(f"Invalid JSON in stream entry: {data}")
            return None
    return f"data: {json.dumps(data)}\n\n"


async def _read_backlog(redis, stream_key: str, last_ids: dict[str, str]) -> list[str]:
    entries = await redis.xrange(stream_key, start="-", end="+", count=MAX_INITIAL_EVENTS * 2)
    events = []
    for entry_id, fields in (entries or [])[-MAX_INITIAL_EVENTS:]:
        last_ids[stream_key] = entry_id
        frame = format_event(fields)
        if frame:
            events.append(frame)
    return events


async def _read_new(redis, stream_key: str, last_ids: dict[str, str]) -> list[str]:
    last_id = last_ids.get(stream_key)
    start = f"({last_id}" if last_id else "-"
    entries = await redis.xrange(stream_key, start=start, end="+", count=MAX_EVENTS_PER_POLL)
    events = []
    for entry_id, fields in entries or []:
        last_ids[stream_key] = entry_id
        frame = format_event(fields)
        if frame:
            events.append(frame)
    return events


async def stream_events(stream_keys: list[str]) -> AsyncIterator[str]:
    """Yield SSE frames from `stream_keys`, with keep-alive comments when idle."""
    redis = get_redis()
    last_ids: dict[str, str] = {}

    for stream_key in stream_keys:
        try:
            for frame in await _read_backlog(redis, stream_key, last_ids):
                yield frame
        except Exception as e:
            logger.warning(f"Error reading initial events from {stream_key}: {e}")

    while True:
        try:
            await asyncio.sleep(POLL_INTERVAL_SECS)
            sent = False
            for stream_key in stream_keys:
                try:
                    for frame in await _read_new(redis, stream_key, last_ids):
                        sent = True
                        yield frame
                except Exception as e:
                    logger.warning(f"Error reading stream {stream_key}: {e}")
            if not sent:
                yield ": keep-alive\n\n"
        except asyncio.CancelledError:
            logger.debug("Realtime stream cancelled")
            raise


def sse_response(request: Request, stream_keys: list[str]) -> StreamingResponse:
    """StreamingResponse that stops when the client disconnects."""
    logger.debug(f"Realtime SSE connection: streams={stream_keys}")

    async def event_generator():
        async for event in stream_events(stream_keys):
            yield event
            if await request.is_disconnected():
                logger.debug("Client disconnected from realtime stream")
                break

    return StreamingResponse(event_generator(), media_type="text/event-stream", headers=SSE_HEADERS)
