"""Tests for API endpoints."""
import pytest

from transit_flow.config import Settings, get_settings
from transit_flow.dependencies import get_map_layer, get_maps_client
from transit_flow.main import app
from transit_flow.map_layer import MapLayer


@pytest.mark.asyncio
async def test_health_check(client):
    """Test health check endpoint."""
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


@pytest.mark.asyncio
async def test_root_endpoint(client):
    """Test root endpoint."""
    response = await client.get("/")

    assert response.status_code == 200
    assert "endpoints" in response.json()


@pytest.mark.asyncio
async def test_list_obstructions_uses_wire_names(client):
    """Test list obstructions uses wire names."""
    response = await client.get("/api/obstructions")

    assert response.status_code == 200
    data = response.json()
    assert len(data) == 3
    segment = next(o for o in data if o["id"] == "obs2")
    point = next(o for o in data if o["id"] == "obs1")
    assert segment["endCoordinates"] == {"lat": -18.0135, "lng": -70.252}
    assert "endCoordinates" not in point
    assert "addedAt" in point


@pytest.mark.asyncio
async def test_add_and_remove_obstruction(client):
    """Test add and remove obstruction."""
    response = await client.post(
        "/api/obstructions",
        json={
            "coordinates": {"lat": -18.01, "lng": -70.25},
            "endCoordinates": {"lat": -18.02, "lng": -70.26},
            "type": "closure",
            "title": "Parade on Av. San Martin",
            "description": "Closed between the two points until 18:00.",
        },
    )
    assert response.status_code == 201
    created = response.json()
    assert created["endCoordinates"] == {"lat": -18.02, "lng": -70.26}

    first = await client.delete(f"/api/obstructions/{created['id']}")
    second = await client.delete(f"/api/obstructions/{created['id']}")

    assert first.json() == {"success": True}
    assert second.json() == {"success": False}


@pytest.mark.asyncio
async def test_add_obstruction_rejects_bad_input(client):
    """Test add obstruction rejects bad input."""
    response = await client.post(
        "/api/obstructions",
        json={
            "coordinates": {"lat": -95.0, "lng": -70.25},
            "type": "construction",
            "title": "Hole",
            "description": "Short",
        },
    )

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_comments_round(client):
    """Test a submitted comment is listed first."""
    response = await client.post(
        "/api/comments",
        json={
            "text": "Traffic light out at Ovalo Callao.",
            "image": {"filename": "light.jpg", "contentType": "image/jpeg", "size": 4000},
        },
    )
    assert response.status_code == 201
    assert response.json()["imageUrl"] == "https://placehold.co/300x200.png?text=light.jpg"

    listing = await client.get("/api/comments")
    assert listing.json()[0]["id"] == response.json()["id"]


@pytest.mark.asyncio
async def test_comment_validation(client):
    """Test comment validation."""
    response = await client.post("/api/comments", json={"text": "Too short"})

    assert response.status_code == 422
    assert response.json()["detail"][0]["field"] == "text"


@pytest.mark.asyncio
async def test_comment_rejects_out_of_range_location(client):
    """Test an impossible geolocation reading is a 422, not a server error."""
    response = await client.post(
        "/api/comments",
        json={"text": "Heavy traffic near the market", "latitude": 123.0, "longitude": -70.25},
    )

    assert response.status_code == 422
    assert len((await client.get("/api/comments")).json()) == 2


@pytest.mark.asyncio
async def test_toggle_route(client):
    """Test toggling an open route blocks it."""
    response = await client.post("/api/routes/R001/toggle")

    assert response.status_code == 200
    assert response.json()["status"] == "blocked"
    assert response.json()["pathDescription"]


@pytest.mark.asyncio
async def test_toggle_route_errors(client):
    """Test toggle route errors."""
    missing = await client.post("/api/routes/R999/toggle")
    congested = await client.post("/api/routes/R002/toggle")

    assert missing.status_code == 404
    assert congested.status_code == 409


@pytest.mark.asyncio
async def test_map_config_and_overlays(client):
    """Test map config and overlays."""
    config = await client.get("/api/map/config")
    overlays = await client.get("/api/map/overlays")

    assert config.status_code == 200
    assert config.json()["mapId"] == "TACNA_TRANSIT_FLOW_MAP_ID"
    assert overlays.status_code == 200
    assert len(overlays.json()["polylines"]) == 1


@pytest.mark.asyncio
async def test_map_without_api_key_reports_configuration_error(client):
    """Test map without API key reports configuration error."""
    unconfigured = Settings(google_maps_api_key=None, _env_file=None)
    app.dependency_overrides[get_settings] = lambda: unconfigured
    app.dependency_overrides[get_map_layer] = lambda: MapLayer(unconfigured)
    app.dependency_overrides[get_maps_client] = lambda: None

    config = await client.get("/api/map/config")
    overlays = await client.get("/api/map/overlays")
    directions = await client.post("/api/map/directions", json={"origin": "a", "destination": "b"})

    for response in (config, overlays, directions):
        assert response.status_code == 503
        assert "API Key is missing" in response.json()["detail"]

    # The rest of the application keeps working
    assert (await client.get("/api/routes")).status_code == 200


@pytest.mark.asyncio
async def test_directions_and_geocode(client):
    """Test directions and geocode."""
    directions = await client.post(
        "/api/map/directions", json={"origin": "Plaza de Armas", "destination": "Mercado Central"}
    )
    found = await client.post("/api/map/geocode", json={"address": "Plaza de Armas"})
    missing = await client.post("/api/map/geocode", json={"address": "Atlantis"})

    assert directions.json()["routes"][0]["summary"] == "Av. Bolognesi"
    assert found.json() == {"lat": -18.0146, "lng": -70.2534}
    assert missing.status_code == 404


# ============= Admin sessions =============

@pytest.fixture
async def session_id(client):
    response = await client.post("/api/admin/sessions")
    assert response.status_code == 201
    return response.json()["sessionId"]


@pytest.mark.asyncio
async def test_admin_segment_flow(client, session_id):
    """Test admin segment flow."""
    base = f"/api/admin/sessions/{session_id}"

    started = await client.post(f"{base}/segment/start")
    assert started.json()["editor"]["mode"] == "pickingStart"

    await client.post(f"{base}/map-click", json={"latLng": {"lat": -18.012, "lng": -70.251}})
    done = await client.post(f"{base}/map-click", json={"latLng": {"lat": -18.013, "lng": -70.249}})
    editor = done.json()["editor"]
    assert editor["mode"] == "idle"
    assert editor["dialogOpen"] is True
    assert editor["defaultType"] == "closure"

    submitted = await client.post(
        f"{base}/obstructions",
        json={
            "title": "Closure on Calle Zela",
            "description": "Street closed for a procession this afternoon.",
            "type": "closure",
        },
    )
    assert submitted.status_code == 200
    body = submitted.json()
    assert body["editor"]["dialogOpen"] is False
    assert len(body["obstructions"]) == 4
    assert body["notices"][-1]["title"] == "Segment added"

    # Visible to the public map as well
    assert len((await client.get("/api/obstructions")).json()) == 4


@pytest.mark.asyncio
async def test_admin_cancel_mid_segment(client, session_id):
    """Test admin cancel mid segment."""
    base = f"/api/admin/sessions/{session_id}"
    await client.post(f"{base}/segment/start")
    await client.post(f"{base}/map-click", json={"latLng": {"lat": -18.012, "lng": -70.251}})

    response = await client.post(f"{base}/cancel")

    editor = response.json()["editor"]
    assert editor["mode"] == "idle"
    assert "startCoord" not in editor
    assert editor["dialogOpen"] is False


@pytest.mark.asyncio
async def test_admin_address_failure(client, session_id):
    """Test admin address failure."""
    response = await client.post(
        f"/api/admin/sessions/{session_id}/segment/addresses",
        json={"startAddress": "Plaza de Armas", "endAddress": "Atlantis"},
    )

    assert response.status_code == 422
    detail = response.json()["detail"]
    assert "end address" in detail["notices"][-1]["description"]
    assert detail["editor"]["startCoord"] is None


@pytest.mark.asyncio
async def test_admin_coordinates_segment(client, session_id):
    """Test admin coordinates segment."""
    response = await client.post(
        f"/api/admin/sessions/{session_id}/segment/coordinates",
        json={"startLat": "-18.012", "startLng": "-70.251", "endLat": "-18.013", "endLng": "-70.249"},
    )

    assert response.status_code == 200
    assert response.json()["editor"]["dialogKind"] == "segment"


@pytest.mark.asyncio
async def test_admin_route_toggle_and_remove(client, session_id):
    """Test admin route toggle and remove."""
    base = f"/api/admin/sessions/{session_id}"

    toggled = await client.post(f"{base}/routes/R003/toggle")
    removed = await client.delete(f"{base}/obstructions/obs1")
    missing = await client.delete(f"{base}/obstructions/obs1")

    routes = {r["id"]: r for r in toggled.json()["routes"]}
    assert routes["R003"]["status"] == "open"
    assert [o["id"] for o in removed.json()["obstructions"]] == ["obs2", "obs3"]
    assert missing.json()["notices"][-1]["title"] == "Obstruction not found"


@pytest.mark.asyncio
async def test_unknown_admin_session(client):
    """Test unknown admin session."""
    response = await client.get("/api/admin/sessions/nope")

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_admin_map_click_with_malformed_position(client, session_id):
    """Test a click whose coordinates are not numbers is a 422."""
    base = f"/api/admin/sessions/{session_id}"
    await client.post(f"{base}/segment/start")

    response = await client.post(f"{base}/map-click", json={"latLng": {"lat": [1], "lng": 2}})

    assert response.status_code == 422
    editor = (await client.get(base)).json()["editor"]
    assert editor["mode"] == "pickingStart"


@pytest.mark.asyncio
async def test_admin_submit_while_picking_start(client, session_id):
    """Test submitting details before the start point is picked is a conflict."""
    base = f"/api/admin/sessions/{session_id}"
    await client.post(f"{base}/segment/start")

    response = await client.post(
        f"{base}/obstructions",
        json={
            "title": "Closure on Calle Zela",
            "description": "Street closed for a procession this afternoon.",
            "type": "closure",
        },
    )

    assert response.status_code == 409
    detail = response.json()["detail"]
    assert detail["editor"]["mode"] == "pickingStart"
    assert "start point" in detail["notices"][-1]["description"]
    assert len((await client.get("/api/obstructions")).json()) == 3
