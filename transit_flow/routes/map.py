from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from typing import Any, Dict, Optional
import logging

from ..actions import TransitActions
from ..config import Settings, get_settings
from ..dependencies import get_actions, get_map_layer, get_maps_client
from ..errors import ConfigurationError, ProviderError
from ..map_layer import MapLayer
from ..models import GeoCoordinates, MapView
from ..providers import GoogleMapsClient

logger = logging.getLogger(__name__)

router = APIRouter()


class DirectionsRequest(BaseModel):
    origin: str = Field(..., min_length=1)
    destination: str = Field(..., min_length=1)


class GeocodeRequest(BaseModel):
    address: str = Field(..., min_length=1)


def _require_client(client: Optional[GoogleMapsClient], map_layer: MapLayer) -> GoogleMapsClient:
    if client is None:
        raise HTTPException(status_code=503, detail=map_layer.configuration_error)
    return client


@router.get("/map/config")
async def get_map_config(
    settings: Settings = Depends(get_settings),
    map_layer: MapLayer = Depends(get_map_layer),
):
    """
    Map settings for the frontend.

    Answers 503 with a configuration error message when no API key is set,
    so the client shows that message instead of a broken map.
    """
    if map_layer.configuration_error:
        raise HTTPException(status_code=503, detail=map_layer.configuration_error)

    center = settings.map_center()
    return {
        "apiKey": settings.google_maps_api_key,
        "mapId": settings.google_map_id,
        "center": {"lat": center.lat, "lng": center.lng},
        "zoom": settings.map_zoom,
        "trafficLayer": settings.enable_traffic_layer,
    }


@router.get("/map/overlays", response_model=MapView, response_model_exclude_none=True)
async def get_map_overlays(
    actions: TransitActions = Depends(get_actions),
    map_layer: MapLayer = Depends(get_map_layer),
):
    """Markers and lines for every obstruction."""
    try:
        return map_layer.build_view(await actions.get_obstructions())
    except ConfigurationError as e:
        raise HTTPException(status_code=503, detail=str(e))


@router.post("/map/directions")
async def get_directions(
    request: DirectionsRequest,
    client: Optional[GoogleMapsClient] = Depends(get_maps_client),
    map_layer: MapLayer = Depends(get_map_layer),
) -> Dict[str, Any]:
    """Directions result from the provider, unmodified."""
    client = _require_client(client, map_layer)
    try:
        return map_layer.render_route(await client.directions(request.origin, request.destination))
    except ProviderError as e:
        raise HTTPException(status_code=502, detail=str(e))


@router.post("/map/geocode", response_model=GeoCoordinates)
async def geocode_address(
    request: GeocodeRequest,
    settings: Settings = Depends(get_settings),
    client: Optional[GoogleMapsClient] = Depends(get_maps_client),
    map_layer: MapLayer = Depends(get_map_layer),
):
    """Resolve an address inside the configured region."""
    client = _require_client(client, map_layer)
    try:
        coords = await client.geocode(request.address, settings.region_bias())
    except ProviderError as e:
        raise HTTPException(status_code=502, detail=str(e))

    if coords is None:
        raise HTTPException(status_code=404, detail=f"Address not found: {request.address}")
    return coords
