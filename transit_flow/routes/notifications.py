from fastapi import APIRouter, Depends, Request
from sse_starlette.sse import EventSourceResponse
import asyncio
import json
import logging

from ..dependencies import get_change_feed
from ..events import ChangeFeed

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/notifications/stream")
async def change_stream(request: Request, feed: ChangeFeed = Depends(get_change_feed)):
    """
    Server-Sent Events stream of store changes

    Usage:
    const eventSource = new EventSource('http://localhost:8000/api/notifications/stream');
    eventSource.addEventListener('obstruction_added', (event) => {
        const obstruction = JSON.parse(event.data);
    });
    """

    async def event_generator():
        queue = feed.subscribe()
        try:
            while True:
                # Check if client is still connected
                if await request.is_disconnected():
                    break

                try:
                    message = await asyncio.wait_for(queue.get(), timeout=1.0)
                except asyncio.TimeoutError:
                    continue

                yield {
                    "event": message["event"],
                    "data": json.dumps(message["data"]),
                }
        except asyncio.CancelledError:
            logger.info("Client disconnected from change stream")
            raise
        finally:
            feed.unsubscribe(queue)

    return EventSourceResponse(event_generator())
