"""Repository for obstructions, comments and routes."""
from abc import ABC, abstractmethod
from typing import List, Optional
import logging
import threading

from .models import Comment, Obstruction, Route, RouteStatus
from . import seed_data

logger = logging.getLogger(__name__)


class TransitRepository(ABC):
    """Storage boundary used by the server actions. Reads and writes return copies."""

    @abstractmethod
    def list_obstructions(self) -> List[Obstruction]: ...

    @abstractmethod
    def add_obstruction(self, obstruction: Obstruction) -> Obstruction: ...

    @abstractmethod
    def remove_obstruction(self, obstruction_id: str) -> bool: ...

    @abstractmethod
    def list_comments(self) -> List[Comment]: ...

    @abstractmethod
    def prepend_comment(self, comment: Comment) -> Comment: ...

    @abstractmethod
    def list_routes(self) -> List[Route]: ...

    @abstractmethod
    def get_route(self, route_id: str) -> Optional[Route]: ...

    @abstractmethod
    def update_route_status(self, route_id: str, status: RouteStatus) -> Optional[Route]: ...

    @abstractmethod
    def reset(self) -> None: ...


class InMemoryTransitRepository(TransitRepository):
    """
    Process-local store seeded with the Tacna sample data.

    Nothing survives a restart. A lock serialises access so concurrent requests
    never observe a half-applied write; conflicting writes are last-write-wins.
    """

    def __init__(self, seed: bool = True):
        self._lock = threading.Lock()
        self._seed = seed
        self._obstructions: List[Obstruction] = []
        self._comments: List[Comment] = []
        self._routes: List[Route] = []
        self.reset()

    def reset(self) -> None:
        """Drop everything and reload the seed data."""
        with self._lock:
            if self._seed:
                self._obstructions = seed_data.initial_obstructions()
                self._comments = seed_data.initial_comments()
                self._routes = seed_data.initial_routes()
            else:
                self._obstructions, self._comments, self._routes = [], [], []
        logger.info(
            f"Store loaded: {len(self._obstructions)} obstructions, "
            f"{len(self._comments)} comments, {len(self._routes)} routes"
        )

    def list_obstructions(self) -> List[Obstruction]:
        with self._lock:
            return [o.model_copy(deep=True) for o in self._obstructions]

    def add_obstruction(self, obstruction: Obstruction) -> Obstruction:
        with self._lock:
            self._obstructions.append(obstruction.model_copy(deep=True))
        return obstruction.model_copy(deep=True)

    def remove_obstruction(self, obstruction_id: str) -> bool:
        with self._lock:
            initial_length = len(self._obstructions)
            self._obstructions = [o for o in self._obstructions if o.id != obstruction_id]
            return len(self._obstructions) < initial_length

    def list_comments(self) -> List[Comment]:
        with self._lock:
            return [c.model_copy(deep=True) for c in self._comments]

    def prepend_comment(self, comment: Comment) -> Comment:
        with self._lock:
            self._comments.insert(0, comment.model_copy(deep=True))
        return comment.model_copy(deep=True)

    def list_routes(self) -> List[Route]:
        with self._lock:
            return [r.model_copy(deep=True) for r in self._routes]

    def get_route(self, route_id: str) -> Optional[Route]:
        with self._lock:
            for route in self._routes:
                if route.id == route_id:
                    return route.model_copy(deep=True)
        return None

    def update_route_status(self, route_id: str, status: RouteStatus) -> Optional[Route]:
        with self._lock:
            for route in self._routes:
                if route.id == route_id:
                    route.status = status
                    return route.model_copy(deep=True)
        return None
