"""Public route planner backed by the directions provider."""
from typing import Any, Dict, Optional
import logging

from ..errors import ProviderError
from ..models import GeoCoordinates
from ..notifier import Notifier
from ..providers import DirectionsProvider

logger = logging.getLogger(__name__)


class RoutePlanner:
    def __init__(self, directions: Optional[DirectionsProvider], notifier: Optional[Notifier] = None):
        self.directions = directions
        self.notifier = notifier or Notifier()
        self.origin = ""
        self.destination = ""
        self.route: Optional[Dict[str, Any]] = None
        self.picking: Optional[str] = None  # "origin" or "destination"
        self.is_loading = False

    def pick_location(self, target: str) -> None:
        """Next map click fills the given field."""
        if target not in ("origin", "destination"):
            raise ValueError(f"Unknown field: {target}")
        self.picking = target

    def handle_map_click(self, coords: GeoCoordinates) -> bool:
        if self.picking is None:
            return False
        value = f"{coords.lat:.6f},{coords.lng:.6f}"
        if self.picking == "origin":
            self.origin = value
        else:
            self.destination = value
        self.picking = None
        return True

    async def plan(self) -> Optional[Dict[str, Any]]:
        """Request directions between the two fields; the result replaces the current route."""
        if self.directions is None:
            self.notifier.error("Map not ready", "Please wait for the map to load.")
            return None
        if not self.origin.strip() or not self.destination.strip():
            self.notifier.error("Missing fields", "Please enter both origin and destination.")
            return None

        self.is_loading = True
        self.route = None
        try:
            self.route = await self.directions.directions(self.origin.strip(), self.destination.strip())
        except ProviderError as e:
            logger.error(f"Directions request failed: {e}")
            self.notifier.error("Route calculation failed", str(e))
            return None
        finally:
            self.is_loading = False

        self.notifier.info("Route calculated", "Showing the best route considering traffic.")
        return self.route
