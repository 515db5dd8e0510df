from pydantic import BaseModel, Field
from typing import Optional


class GeoCoordinates(BaseModel):
    """A point on the map in WGS84 degrees"""
    lat: float = Field(..., ge=-90.0, le=90.0)
    lng: float = Field(..., ge=-180.0, le=180.0)

    def midpoint(self, other: "GeoCoordinates") -> "GeoCoordinates":
        return GeoCoordinates(lat=(self.lat + other.lat) / 2, lng=(self.lng + other.lng) / 2)


class RegionBias(BaseModel):
    """Region that geocoding results are biased towards and constrained to"""
    country: str                      # ISO 3166-1 alpha-2, e.g. "PE"
    locality: Optional[str] = None    # City name, e.g. "Tacna"
    south_west: GeoCoordinates
    north_east: GeoCoordinates

    def contains(self, point: GeoCoordinates) -> bool:
        return (
            self.south_west.lat <= point.lat <= self.north_east.lat
            and self.south_west.lng <= point.lng <= self.north_east.lng
        )

    def bounds_param(self) -> str:
        """Bounds in the 'sw_lat,sw_lng|ne_lat,ne_lng' form the Geocoding API expects"""
        return (
            f"{self.south_west.lat},{self.south_west.lng}|"
            f"{self.north_east.lat},{self.north_east.lng}"
        )
