"""Google Maps Geocoding and Directions client."""
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Protocol
import asyncio
import logging

import requests

from ..errors import ConfigurationError, ProviderError
from ..models import GeoCoordinates, RegionBias

logger = logging.getLogger(__name__)


class Geocoder(Protocol):
    async def geocode(self, address: str, region: Optional[RegionBias] = None) -> Optional[GeoCoordinates]:
        ...


class DirectionsProvider(Protocol):
    async def directions(self, origin: str, destination: str) -> Dict[str, Any]:
        ...


class GoogleMapsClient:
    """Thin wrapper over the Geocoding and Directions web services."""

    def __init__(self, api_key: Optional[str], base_url: str = "https://maps.googleapis.com/maps/api", timeout: float = 10.0):
        if not api_key:
            raise ConfigurationError(
                "Google Maps API Key is missing. Please set GOOGLE_MAPS_API_KEY in your environment variables."
            )
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = requests.Session()

    def _get(self, endpoint: str, params: Dict[str, Any]) -> Dict[str, Any]:
        url = f"{self.base_url}/{endpoint}/json"
        try:
            response = self.session.get(url, params={**params, "key": self.api_key}, timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        except requests.RequestException as e:
            logger.error(f"Google Maps {endpoint} request failed: {e}")
            raise ProviderError(f"Map provider unavailable: {e}") from e

    def geocode_sync(self, address: str, region: Optional[RegionBias] = None) -> Optional[GeoCoordinates]:
        """
        Resolve an address to coordinates.

        Args:
            address: Free-text address
            region: Optional bias; results outside its bounds count as not found

        Returns:
            Coordinates of the first result, or None if the address could not be resolved
        """
        params: Dict[str, Any] = {"address": address}
        if region is not None:
            components = [f"country:{region.country}"]
            if region.locality:
                components.append(f"locality:{region.locality}")
            params["components"] = "|".join(components)
            params["bounds"] = region.bounds_param()
            params["region"] = region.country.lower()

        data = self._get("geocode", params)
        status = data.get("status")

        if status == "ZERO_RESULTS" or (status == "OK" and not data.get("results")):
            logger.warning(f"Could not find coordinates for '{address}'")
            return None
        if status != "OK":
            raise ProviderError(f"Geocoding failed with status {status}: {data.get('error_message', '')}".strip())

        location = data["results"][0]["geometry"]["location"]
        coords = GeoCoordinates(lat=location["lat"], lng=location["lng"])

        if region is not None and not region.contains(coords):
            logger.warning(f"Result for '{address}' is outside {region.locality or region.country}: {coords.lat}, {coords.lng}")
            return None

        return coords

    def directions_sync(self, origin: str, destination: str) -> Dict[str, Any]:
        """Driving directions with alternatives, using current traffic."""
        params = {
            "origin": origin,
            "destination": destination,
            "mode": "driving",
            "alternatives": "true",
            "departure_time": int(datetime.now(timezone.utc).timestamp()),
            "traffic_model": "best_guess",
        }
        data = self._get("directions", params)
        status = data.get("status")
        if status != "OK":
            raise ProviderError(f"Could not find a route. Status: {status}")
        return data

    async def geocode(self, address: str, region: Optional[RegionBias] = None) -> Optional[GeoCoordinates]:
        return await asyncio.to_thread(self.geocode_sync, address, region)

    async def directions(self, origin: str, destination: str) -> Dict[str, Any]:
        return await asyncio.to_thread(self.directions_sync, origin, destination)
