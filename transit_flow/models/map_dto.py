from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Optional

from .geo_dto import GeoCoordinates


class PinStyle(BaseModel):
    """Colors of a map pin"""
    model_config = ConfigDict(populate_by_name=True)

    background: str
    glyph_color: str = Field(..., alias="glyphColor")
    border_color: str = Field(..., alias="borderColor")


class MarkerOverlay(BaseModel):
    """A single marker drawn for an obstruction (or one end of a segment)"""
    model_config = ConfigDict(populate_by_name=True)

    obstruction_id: str = Field(..., alias="obstructionId")
    position: GeoCoordinates
    title: str
    icon: str
    pin: PinStyle
    scale: float = 1.0


class PolylineOverlay(BaseModel):
    """Line connecting the two endpoints of a segment obstruction"""
    model_config = ConfigDict(populate_by_name=True)

    obstruction_id: str = Field(..., alias="obstructionId")
    path: List[GeoCoordinates]
    stroke_color: str = Field(..., alias="strokeColor")
    stroke_opacity: float = Field(..., alias="strokeOpacity")
    stroke_weight: int = Field(..., alias="strokeWeight")


class MapView(BaseModel):
    """Everything the map SDK needs to draw one screen"""
    model_config = ConfigDict(populate_by_name=True)

    center: GeoCoordinates
    zoom: int
    map_id: str = Field(..., alias="mapId")
    traffic_layer: bool = Field(False, alias="trafficLayer")
    interactive: bool = True
    markers: List[MarkerOverlay] = Field(default_factory=list)
    polylines: List[PolylineOverlay] = Field(default_factory=list)
    route: Optional[Dict[str, Any]] = None  # Directions result, passed through unmodified
