"""Tests for the Google Maps client."""
import pytest
import requests
from unittest.mock import MagicMock

from transit_flow.errors import ConfigurationError, ProviderError
from transit_flow.models import GeoCoordinates

from transit_flow.providers import GoogleMapsClient


def make_client(payload=None, error=None):
    client = GoogleMapsClient("test-key")
    response = MagicMock()
    response.json.return_value = payload
    response.raise_for_status.return_value = None
    client.session = MagicMock()
    if error is not None:
        client.session.get.side_effect = error
    else:
        client.session.get.return_value = response
    return client


def geocode_payload(lat, lng):
    return {"status": "OK", "results": [{"geometry": {"location": {"lat": lat, "lng": lng}}}]}


def test_requires_api_key():
    """Test the client refuses to start without an API key."""
    with pytest.raises(ConfigurationError):
        GoogleMapsClient(None)


def test_geocode_sends_region_bias(settings):
    """Test geocode sends region bias."""
    client = make_client(geocode_payload(-18.0146, -70.2534))

    coords = client.geocode_sync("Plaza de Armas", settings.region_bias())

    assert coords == GeoCoordinates(lat=-18.0146, lng=-70.2534)
    url = client.session.get.call_args.args[0]
    params = client.session.get.call_args.kwargs["params"]
    assert url == "https://maps.googleapis.com/maps/api/geocode/json"
    assert params["address"] == "Plaza de Armas"
    assert params["components"] == "country:PE|locality:Tacna"
    assert params["bounds"] == "-18.08,-70.3|-17.95,-70.15"
    assert params["key"] == "test-key"


def test_geocode_result_outside_region_is_not_found(settings):
    """Test geocode result outside region is not found."""
    # Plaza de Armas, Lima
    client = make_client(geocode_payload(-12.0464, -77.0428))

    assert client.geocode_sync("Plaza de Armas", settings.region_bias()) is None


def test_geocode_zero_results():
    """Test geocode zero results."""
    client = make_client({"status": "ZERO_RESULTS", "results": []})

    assert client.geocode_sync("Nowhere") is None


def test_geocode_denied_raises():
    """Test geocode denied raises."""
    client = make_client({"status": "REQUEST_DENIED", "error_message": "Invalid key"})

    with pytest.raises(ProviderError):
        client.geocode_sync("Plaza de Armas")


def test_transport_error_raises():
    """Test transport error raises."""
    client = make_client(error=requests.ConnectionError("offline"))

    with pytest.raises(ProviderError):
        client.geocode_sync("Plaza de Armas")


@pytest.mark.asyncio
async def test_directions_passes_result_through():
    """Test directions passes result through."""
    payload = {"status": "OK", "routes": [{"summary": "Av. Bolognesi"}]}
    client = make_client(payload)

    result = await client.directions("Plaza de Armas", "Mercado Central")

    assert result == payload
    params = client.session.get.call_args.kwargs["params"]
    assert params["mode"] == "driving"
    assert params["traffic_model"] == "best_guess"


@pytest.mark.asyncio
async def test_directions_not_found_raises():
    """Test directions not found raises."""
    client = make_client({"status": "ZERO_RESULTS", "routes": []})

    with pytest.raises(ProviderError):
        await client.directions("Plaza de Armas", "Arica")
