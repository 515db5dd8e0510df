"""Shared service instances for the HTTP layer."""
from functools import lru_cache
from typing import Optional
import logging

from .actions import TransitActions
from .admin.sessions import AdminSessions
from .config import get_settings
from .events import ChangeFeed
from .map_layer import MapLayer
from .providers import GoogleMapsClient
from .store import InMemoryTransitRepository, TransitRepository

logger = logging.getLogger(__name__)


@lru_cache()
def get_change_feed() -> ChangeFeed:
    return ChangeFeed()


@lru_cache()
def get_repository() -> TransitRepository:
    return InMemoryTransitRepository()


@lru_cache()
def get_actions() -> TransitActions:
    return TransitActions(get_repository(), get_change_feed())


@lru_cache()
def get_map_layer() -> MapLayer:
    return MapLayer(get_settings())


@lru_cache()
def get_maps_client() -> Optional[GoogleMapsClient]:
    """Google Maps client, or None when no API key is configured."""
    settings = get_settings()
    if not settings.maps_configured:
        logger.warning("Google Maps API key not set; geocoding and directions are disabled")
        return None
    return GoogleMapsClient(
        settings.google_maps_api_key,
        base_url=settings.google_maps_base_url,
        timeout=settings.request_timeout_seconds,
    )


@lru_cache()
def get_admin_sessions() -> AdminSessions:
    settings = get_settings()
    return AdminSessions(
        ttl_minutes=settings.admin_session_ttl_minutes,
        cleanup_interval_seconds=settings.admin_session_cleanup_interval_seconds,
    )
