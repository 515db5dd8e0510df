"""Projection of obstructions and route results onto map overlays."""
from typing import Any, Dict, List, Optional, Tuple
import logging

from .config import Settings
from .errors import ConfigurationError
from .models import (
    GeoCoordinates,
    MapView,
    MarkerOverlay,
    Obstruction,
    ObstructionType,
    PinStyle,
    PolylineOverlay,
)

logger = logging.getLogger(__name__)

CONFIGURATION_ERROR_MESSAGE = (
    "Google Maps API Key is missing. Please set GOOGLE_MAPS_API_KEY in your environment variables."
)

OBSTRUCTION_ICONS: Dict[ObstructionType, str] = {
    ObstructionType.CONSTRUCTION: "construction",
    ObstructionType.CLOSURE: "traffic-cone",
    ObstructionType.EVENT: "calendar-x",
    ObstructionType.ACCIDENT: "alert-triangle",
    ObstructionType.OTHER: "map-pin",
}

OBSTRUCTION_PIN_COLORS: Dict[ObstructionType, PinStyle] = {
    ObstructionType.CONSTRUCTION: PinStyle(background="#FBBF24", glyph_color="#000000", border_color="#D97706"),
    ObstructionType.CLOSURE: PinStyle(background="#EF4444", glyph_color="#FFFFFF", border_color="#B91C1C"),
    ObstructionType.EVENT: PinStyle(background="#3B82F6", glyph_color="#FFFFFF", border_color="#1D4ED8"),
    ObstructionType.ACCIDENT: PinStyle(background="#F97316", glyph_color="#FFFFFF", border_color="#C2410C"),
    ObstructionType.OTHER: PinStyle(background="#6B7280", glyph_color="#FFFFFF", border_color="#4B5563"),
}

SEGMENT_END_PIN = PinStyle(background="#B91C1C", glyph_color="#FFFFFF", border_color="#7F1D1D")
SEGMENT_STROKE_COLOR = "#EF4444"
SEGMENT_STROKE_OPACITY = 0.8
SEGMENT_STROKE_WEIGHT = 6


class MapLayer:
    """Turns domain data into overlays and raw map clicks into coordinates. Holds no state."""

    def __init__(self, settings: Settings):
        self.settings = settings

    @property
    def configuration_error(self) -> Optional[str]:
        return None if self.settings.maps_configured else CONFIGURATION_ERROR_MESSAGE

    def ensure_configured(self) -> None:
        if self.configuration_error:
            raise ConfigurationError(self.configuration_error)

    def render_obstruction(self, obstruction: Obstruction) -> Tuple[List[MarkerOverlay], List[PolylineOverlay]]:
        """One pin for a point; two end pins plus a line for a segment."""
        if obstruction.end_coordinates is not None:
            markers = [
                MarkerOverlay(
                    obstruction_id=obstruction.id,
                    position=obstruction.coordinates,
                    title=f"{obstruction.title} (Inicio)",
                    icon="minus",
                    pin=SEGMENT_END_PIN,
                    scale=0.6,
                ),
                MarkerOverlay(
                    obstruction_id=obstruction.id,
                    position=obstruction.end_coordinates,
                    title=f"{obstruction.title} (Fin)",
                    icon="minus",
                    pin=SEGMENT_END_PIN,
                    scale=0.6,
                ),
            ]
            line = PolylineOverlay(
                obstruction_id=obstruction.id,
                path=[obstruction.coordinates, obstruction.end_coordinates],
                stroke_color=SEGMENT_STROKE_COLOR,
                stroke_opacity=SEGMENT_STROKE_OPACITY,
                stroke_weight=SEGMENT_STROKE_WEIGHT,
            )
            return markers, [line]

        marker = MarkerOverlay(
            obstruction_id=obstruction.id,
            position=obstruction.coordinates,
            title=obstruction.title,
            icon=OBSTRUCTION_ICONS[obstruction.type],
            pin=OBSTRUCTION_PIN_COLORS[obstruction.type],
        )
        return [marker], []

    def render_obstructions(self, obstructions: List[Obstruction]) -> Tuple[List[MarkerOverlay], List[PolylineOverlay]]:
        markers: List[MarkerOverlay] = []
        polylines: List[PolylineOverlay] = []
        for obstruction in obstructions:
            m, p = self.render_obstruction(obstruction)
            markers.extend(m)
            polylines.extend(p)
        return markers, polylines

    @staticmethod
    def info_window_position(obstruction: Obstruction) -> GeoCoordinates:
        """Segments show their info window halfway along the line."""
        if obstruction.end_coordinates is not None:
            return obstruction.coordinates.midpoint(obstruction.end_coordinates)
        return obstruction.coordinates

    @staticmethod
    def render_route(route: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
        # Directions results are drawn by the SDK as they are
        return route

    @staticmethod
    def translate_click(event: Dict[str, Any], interactive: bool = True) -> Optional[GeoCoordinates]:
        """
        Convert a raw click event into coordinates.

        Accepts {"latLng": {"lat": .., "lng": ..}} or a bare {"lat": .., "lng": ..}.
        Returns None for non-interactive maps and events without a usable position.
        """
        if not interactive or not event:
            return None
        position = event.get("latLng", event)
        if not isinstance(position, dict) or position.get("lat") is None or position.get("lng") is None:
            return None
        try:
            return GeoCoordinates(lat=float(position["lat"]), lng=float(position["lng"]))
        except (TypeError, ValueError):
            logger.warning(f"Ignoring click with malformed position: {position}")
            return None

    def build_view(
        self,
        obstructions: List[Obstruction],
        route: Optional[Dict[str, Any]] = None,
        interactive: bool = True,
    ) -> MapView:
        """
        Assemble the full map state.

        Raises:
            ConfigurationError: no API key is configured
        """
        self.ensure_configured()
        markers, polylines = self.render_obstructions(obstructions)
        return MapView(
            center=self.settings.map_center(),
            zoom=self.settings.map_zoom,
            map_id=self.settings.google_map_id,
            traffic_layer=self.settings.enable_traffic_layer,
            interactive=interactive,
            markers=markers,
            polylines=polylines,
            route=self.render_route(route),
        )
