"""Server actions: the data-access boundary called by views and HTTP routes."""
from datetime import datetime, timezone
from typing import List, Optional
import logging
import random
import string
import time

from .events import (
    ChangeFeed,
    COMMENT_SUBMITTED,
    OBSTRUCTION_ADDED,
    OBSTRUCTION_REMOVED,
    ROUTE_STATUS_CHANGED,
)
from .models import (
    AddObstructionData,
    Comment,
    CommentFormData,
    GeoCoordinates,
    Obstruction,
    RemoveResult,
    Route,
)
from .store import TransitRepository

logger = logging.getLogger(__name__)

PLACEHOLDER_IMAGE_URL = "https://placehold.co/300x200.png?text={name}"


def generate_id(prefix: str) -> str:
    """Timestamp plus a short base36 suffix, e.g. 'obs-1718000000000-k3x9qa'."""
    suffix = "".join(random.choices(string.ascii_lowercase + string.digits, k=6))
    return f"{prefix}-{int(time.time() * 1000)}-{suffix}"


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class TransitActions:
    """Async operations over the repository. Every result is an independent copy."""

    def __init__(self, repository: TransitRepository, change_feed: Optional[ChangeFeed] = None):
        self.repository = repository
        self.change_feed = change_feed

    async def _publish(self, event: str, data: dict) -> None:
        if self.change_feed is not None:
            await self.change_feed.publish(event, data)

    # ============= Obstructions =============

    async def get_obstructions(self) -> List[Obstruction]:
        return self.repository.list_obstructions()

    async def add_obstruction(self, data: AddObstructionData) -> Obstruction:
        """Create an obstruction with a fresh id and server-side timestamp."""
        obstruction = Obstruction(
            id=generate_id("obs"),
            coordinates=data.coordinates.model_copy(),
            end_coordinates=data.end_coordinates.model_copy() if data.end_coordinates else None,
            type=data.type,
            title=data.title,
            description=data.description,
            added_at=_now_iso(),
        )
        stored = self.repository.add_obstruction(obstruction)
        kind = "segment" if stored.is_segment else "point"
        logger.info(f"Obstruction added: id={stored.id}, type={stored.type.value}, kind={kind}")
        await self._publish(OBSTRUCTION_ADDED, stored.model_dump(mode="json", by_alias=True, exclude_none=True))
        return stored

    async def remove_obstruction(self, obstruction_id: str) -> RemoveResult:
        """Remove by id. An unknown id is reported as success=False, not raised."""
        removed = self.repository.remove_obstruction(obstruction_id)
        if removed:
            logger.info(f"Obstruction removed: id={obstruction_id}")
            await self._publish(OBSTRUCTION_REMOVED, {"id": obstruction_id})
        else:
            logger.warning(f"Obstruction not found for removal: id={obstruction_id}")
        return RemoveResult(success=removed)

    # ============= Comments =============

    async def get_comments(self) -> List[Comment]:
        """All comments, unsorted; callers order them by submittedAt."""
        return self.repository.list_comments()

    async def submit_comment(self, form: CommentFormData) -> Comment:
        """Store a new comment at the head of the list. Attached images are not kept."""
        image_url = None
        if form.image is not None:
            image_url = PLACEHOLDER_IMAGE_URL.format(name=form.image.filename[:10])

        coordinates = None
        if form.latitude is not None and form.longitude is not None:
            coordinates = GeoCoordinates(lat=form.latitude, lng=form.longitude)

        comment = Comment(
            id=generate_id("comment"),
            text=form.text,
            image_url=image_url,
            submitted_at=_now_iso(),
            coordinates=coordinates,
        )
        stored = self.repository.prepend_comment(comment)
        logger.info(f"Comment submitted: id={stored.id}, with_image={image_url is not None}")
        await self._publish(COMMENT_SUBMITTED, stored.model_dump(mode="json", by_alias=True, exclude_none=True))
        return stored

    # ============= Routes =============

    async def get_routes(self) -> List[Route]:
        return self.repository.list_routes()

    async def toggle_route_status(self, route_id: str) -> Optional[Route]:
        """
        Flip a route between open and blocked.

        Returns:
            The updated route, or None if no route has this id

        Raises:
            UnsupportedStatusTransition: the route is congested
        """
        route = self.repository.get_route(route_id)
        if route is None:
            logger.warning(f"Route not found for toggle: id={route_id}")
            return None

        new_status = route.toggled_status()
        updated = self.repository.update_route_status(route_id, new_status)
        if updated is None:
            return None

        logger.info(f"Route {route_id} status: {route.status.value} -> {updated.status.value}")
        await self._publish(ROUTE_STATUS_CHANGED, {"id": updated.id, "status": updated.status.value})
        return updated
