"""Fan-out of store mutations to live subscribers."""
from datetime import datetime, timezone
from typing import Any, Dict, Set
import asyncio
import logging

logger = logging.getLogger(__name__)

OBSTRUCTION_ADDED = "obstruction_added"
OBSTRUCTION_REMOVED = "obstruction_removed"
COMMENT_SUBMITTED = "comment_submitted"
ROUTE_STATUS_CHANGED = "route_status_changed"


class ChangeFeed:
    """Each subscriber gets its own queue of change events."""

    def __init__(self):
        self._subscribers: Set[asyncio.Queue] = set()

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def subscribe(self) -> asyncio.Queue:
        queue: asyncio.Queue = asyncio.Queue()
        self._subscribers.add(queue)
        logger.info(f"Change feed subscriber added ({len(self._subscribers)} active)")
        return queue

    def unsubscribe(self, queue: asyncio.Queue) -> None:
        self._subscribers.discard(queue)
        logger.info(f"Change feed subscriber removed ({len(self._subscribers)} active)")

    async def publish(self, event: str, data: Dict[str, Any]) -> None:
        """Send an event to every current subscriber."""
        message = {
            "event": event,
            "data": data,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        for queue in list(self._subscribers):
            await queue.put(message)
