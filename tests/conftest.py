"""Shared fixtures."""
import pytest
from httpx import ASGITransport, AsyncClient
from typing import Dict, Optional

from transit_flow.actions import TransitActions
from transit_flow.admin.sessions import AdminSessions
from transit_flow.config import Settings, get_settings
from transit_flow.dependencies import (
    get_actions,
    get_admin_sessions,
    get_change_feed,
    get_map_layer,
    get_maps_client,
    get_repository,
)
from transit_flow.errors import ProviderError
from transit_flow.events import ChangeFeed
from transit_flow.main import app
from transit_flow.map_layer import MapLayer
from transit_flow.models import GeoCoordinates, RegionBias
from transit_flow.store import InMemoryTransitRepository


class FakeMaps:
    """Stands in for GoogleMapsClient with canned answers."""

    def __init__(self, places: Optional[Dict[str, GeoCoordinates]] = None, route: Optional[dict] = None):
        self.places = places or {}
        self.route = route
        self.geocode_calls = []

    async def geocode(self, address: str, region: Optional[RegionBias] = None) -> Optional[GeoCoordinates]:
        self.geocode_calls.append((address, region))
        return self.places.get(address)

    async def directions(self, origin: str, destination: str) -> dict:
        if self.route is None:
            raise ProviderError("Could not find a route. Status: ZERO_RESULTS")
        return self.route


PLAZA = GeoCoordinates(lat=-18.0146, lng=-70.2534)
MERCADO = GeoCoordinates(lat=-18.006, lng=-70.248)


@pytest.fixture
def settings():
    return Settings(google_maps_api_key="test-key", _env_file=None)


@pytest.fixture
def repository():
    return InMemoryTransitRepository()


@pytest.fixture
def change_feed():
    return ChangeFeed()


@pytest.fixture
def actions(repository, change_feed):
    return TransitActions(repository, change_feed)


@pytest.fixture
def fake_maps():
    return FakeMaps(
        places={"Plaza de Armas": PLAZA, "Mercado Central": MERCADO},
        route={"status": "OK", "routes": [{"summary": "Av. Bolognesi"}]},
    )


@pytest.fixture
async def client(settings, repository, change_feed, actions, fake_maps):
    """Test client with a fresh store and fake map provider."""
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_repository] = lambda: repository
    app.dependency_overrides[get_change_feed] = lambda: change_feed
    app.dependency_overrides[get_actions] = lambda: actions
    app.dependency_overrides[get_map_layer] = lambda: MapLayer(settings)
    app.dependency_overrides[get_maps_client] = lambda: fake_maps
    sessions = AdminSessions()
    app.dependency_overrides[get_admin_sessions] = lambda: sessions

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
