"""Admin table of routes with open/blocked toggling."""
from typing import List, Optional
import logging

from ..actions import TransitActions
from ..errors import UnsupportedStatusTransition
from ..models import Route, RouteStatus
from ..notifier import Notifier
from ..optimistic import run_optimistic

logger = logging.getLogger(__name__)

STATUS_LABELS = {
    RouteStatus.OPEN: "open",
    RouteStatus.BLOCKED: "blocked",
    RouteStatus.CONGESTED: "congested",
}


class RouteManagementTable:
    def __init__(self, actions: TransitActions, notifier: Optional[Notifier] = None):
        self.actions = actions
        self.notifier = notifier or Notifier()
        self.routes: List[Route] = []
        self.is_loading = False
        self.is_updating = False

    def find(self, route_id: str) -> Optional[Route]:
        return next((r for r in self.routes if r.id == route_id), None)

    async def load(self) -> None:
        """Fetch routes sorted by id."""
        self.is_loading = True
        try:
            routes = await self.actions.get_routes()
            self.routes = sorted(routes, key=lambda r: r.id)
        except Exception as e:
            logger.error(f"Failed to load routes: {e}")
            self.notifier.error("Error loading routes", "Could not fetch the routes. Please try again.")
        finally:
            self.is_loading = False

    async def toggle(self, route_id: str) -> bool:
        """
        Flip a route's status immediately, then confirm with the store.

        The local list is restored if the store does not know the route or fails.
        """
        route = self.find(route_id)
        if route is None:
            return False

        try:
            new_status = route.toggled_status()
        except UnsupportedStatusTransition as e:
            self.notifier.error("Update not supported", str(e))
            return False

        def apply():
            self.routes = [
                r.model_copy(update={"status": new_status}) if r.id == route_id else r
                for r in self.routes
            ]

        def restore(saved: List[Route]):
            self.routes = saved

        self.is_updating = True
        try:
            updated = await run_optimistic(
                apply,
                lambda: self.actions.toggle_route_status(route_id),
                snapshot=lambda: list(self.routes),
                restore=restore,
                acknowledged=lambda result: result is not None,
            )
        except Exception as e:
            logger.error(f"Failed to toggle route status: {e}")
            self.notifier.error("Update failed", f'Could not change the status of route "{route.name}".')
            return False
        finally:
            self.is_updating = False

        self.routes = [updated if r.id == updated.id else r for r in self.routes]
        self.notifier.info(
            "Route status updated",
            f'Route "{updated.name}" is now {STATUS_LABELS[updated.status]}.',
        )
        return True
