"""Configuration management for the transit service."""
from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import Optional

from .models.geo_dto import GeoCoordinates, RegionBias


class Settings(BaseSettings):
    """Application settings."""

    # Google Maps Configuration
    google_maps_api_key: Optional[str] = None
    google_map_id: str = "TACNA_TRANSIT_FLOW_MAP_ID"
    google_maps_base_url: str = "https://maps.googleapis.com/maps/api"
    request_timeout_seconds: float = 10.0

    # Map Configuration
    map_center_lat: float = -18.0146
    map_center_lng: float = -70.2534
    map_zoom: int = 14
    enable_traffic_layer: bool = True

    # Admin consoles
    admin_session_ttl_minutes: int = 60
    admin_session_cleanup_interval_seconds: int = 300

    # Region bias for geocoding (Tacna, Peru)
    region_country: str = "PE"
    region_locality: str = "Tacna"
    region_south_west_lat: float = -18.08
    region_south_west_lng: float = -70.30
    region_north_east_lat: float = -17.95
    region_north_east_lng: float = -70.15

    # API Configuration
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    debug: bool = False
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        case_sensitive = False

    @property
    def maps_configured(self) -> bool:
        return bool(self.google_maps_api_key)

    def map_center(self) -> GeoCoordinates:
        return GeoCoordinates(lat=self.map_center_lat, lng=self.map_center_lng)

    def region_bias(self) -> RegionBias:
        """Build the region bias passed to every geocoding request."""
        return RegionBias(
            country=self.region_country,
            locality=self.region_locality,
            south_west=GeoCoordinates(lat=self.region_south_west_lat, lng=self.region_south_west_lng),
            north_east=GeoCoordinates(lat=self.region_north_east_lat, lng=self.region_north_east_lng),
        )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
