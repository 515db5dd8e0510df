"""Admin panel endpoints. Each session owns its own segment editor state."""
from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Optional
import logging

from ..actions import TransitActions
from ..admin import EditorState
from ..admin.sessions import AdminSessions
from ..config import Settings, get_settings
from ..dependencies import get_actions, get_admin_sessions, get_map_layer, get_maps_client
from ..errors import InvalidTransition
from ..map_layer import MapLayer
from ..models import Comment, Obstruction, Route
from ..notifier import Notice
from ..providers import GoogleMapsClient
from ..views import AdminConsole

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin")


# ============= Request/Response Models =============

class AdminSnapshot(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    session_id: str = Field(..., alias="sessionId")
    editor: EditorState
    obstructions: List[Obstruction]
    routes: List[Route]
    comments: List[Comment]
    notices: List[Notice]


class AddressSegmentRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    start_address: str = Field(..., alias="startAddress")
    end_address: str = Field(..., alias="endAddress")


class CoordinateSegmentRequest(BaseModel):
    """Raw text of the four coordinate inputs"""
    model_config = ConfigDict(populate_by_name=True)

    start_lat: Optional[str] = Field(None, alias="startLat")
    start_lng: Optional[str] = Field(None, alias="startLng")
    end_lat: Optional[str] = Field(None, alias="endLat")
    end_lng: Optional[str] = Field(None, alias="endLng")


class ObstructionDetailsRequest(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    type: Optional[str] = None


def _snapshot(session_id: str, console: AdminConsole) -> AdminSnapshot:
    return AdminSnapshot(
        session_id=session_id,
        editor=console.obstructions.editor.state(),
        obstructions=console.obstructions.obstructions,
        routes=console.routes.routes,
        comments=console.comments.comments,
        notices=console.notifier.drain(),
    )


def _console(session_id: str, sessions: AdminSessions) -> AdminConsole:
    console = sessions.get(session_id)
    if console is None:
        raise HTTPException(status_code=404, detail="Admin session not found")
    return console


def _rejected(session_id: str, console: AdminConsole, status_code: int = 422) -> HTTPException:
    """Error carrying the notices that explain the rejection."""
    snapshot = _snapshot(session_id, console)
    return HTTPException(
        status_code=status_code,
        detail={
            "editor": snapshot.editor.model_dump(mode="json", by_alias=True),
            "notices": [n.model_dump() for n in snapshot.notices],
        },
    )


# ============= Endpoints =============

@router.post("/sessions", response_model=AdminSnapshot, response_model_exclude_none=True, status_code=status.HTTP_201_CREATED)
async def open_session(
    actions: TransitActions = Depends(get_actions),
    sessions: AdminSessions = Depends(get_admin_sessions),
    client: Optional[GoogleMapsClient] = Depends(get_maps_client),
    settings: Settings = Depends(get_settings),
):
    session_id = await sessions.open(actions, client, settings.region_bias())
    return _snapshot(session_id, sessions.get(session_id))


@router.get("/sessions/{session_id}", response_model=AdminSnapshot, response_model_exclude_none=True)
async def get_session(session_id: str, sessions: AdminSessions = Depends(get_admin_sessions)):
    return _snapshot(session_id, _console(session_id, sessions))


@router.delete("/sessions/{session_id}")
async def close_session(session_id: str, sessions: AdminSessions = Depends(get_admin_sessions)):
    if not sessions.close(session_id):
        raise HTTPException(status_code=404, detail="Admin session not found")
    return {"message": "Session closed"}


@router.post("/sessions/{session_id}/segment/start", response_model=AdminSnapshot, response_model_exclude_none=True)
async def start_segment(session_id: str, sessions: AdminSessions = Depends(get_admin_sessions)):
    """Next two map clicks choose the start and end of a segment."""
    console = _console(session_id, sessions)
    console.obstructions.start_segment()
    return _snapshot(session_id, console)


@router.post("/sessions/{session_id}/map-click", response_model=AdminSnapshot, response_model_exclude_none=True)
async def map_click(
    session_id: str,
    event: Dict[str, Any],
    sessions: AdminSessions = Depends(get_admin_sessions),
    map_layer: MapLayer = Depends(get_map_layer),
):
    """Forward a raw map click ({"latLng": {"lat", "lng"}}) to the editor."""
    console = _console(session_id, sessions)
    coords = map_layer.translate_click(event)
    if coords is None:
        raise HTTPException(status_code=422, detail="Click event has no usable position")

    console.obstructions.handle_map_click(coords)
    return _snapshot(session_id, console)


@router.post("/sessions/{session_id}/segment/addresses", response_model=AdminSnapshot, response_model_exclude_none=True)
async def segment_from_addresses(
    session_id: str,
    request: AddressSegmentRequest,
    sessions: AdminSessions = Depends(get_admin_sessions),
):
    console = _console(session_id, sessions)
    if not await console.obstructions.define_segment_by_addresses(request.start_address, request.end_address):
        raise _rejected(session_id, console)
    return _snapshot(session_id, console)


@router.post("/sessions/{session_id}/segment/coordinates", response_model=AdminSnapshot, response_model_exclude_none=True)
async def segment_from_coordinates(
    session_id: str,
    request: CoordinateSegmentRequest,
    sessions: AdminSessions = Depends(get_admin_sessions),
):
    console = _console(session_id, sessions)
    ok = console.obstructions.define_segment_by_coordinates(
        request.start_lat, request.start_lng, request.end_lat, request.end_lng
    )
    if not ok:
        raise _rejected(session_id, console)
    return _snapshot(session_id, console)


@router.post("/sessions/{session_id}/cancel", response_model=AdminSnapshot, response_model_exclude_none=True)
async def cancel_creation(session_id: str, sessions: AdminSessions = Depends(get_admin_sessions)):
    console = _console(session_id, sessions)
    console.obstructions.cancel()
    return _snapshot(session_id, console)


@router.post("/sessions/{session_id}/dialog/close", response_model=AdminSnapshot, response_model_exclude_none=True)
async def close_dialog(session_id: str, sessions: AdminSessions = Depends(get_admin_sessions)):
    console = _console(session_id, sessions)
    console.obstructions.close_dialog()
    return _snapshot(session_id, console)


@router.post("/sessions/{session_id}/obstructions", response_model=AdminSnapshot, response_model_exclude_none=True)
async def submit_obstruction(
    session_id: str,
    request: ObstructionDetailsRequest,
    sessions: AdminSessions = Depends(get_admin_sessions),
):
    """Store the obstruction for the current selection with the dialog's details."""
    console = _console(session_id, sessions)
    try:
        created = await console.obstructions.submit_details(request.model_dump())
    except InvalidTransition:
        raise _rejected(session_id, console, status_code=status.HTTP_409_CONFLICT)
    if created is None:
        if console.obstructions.validation is not None:
            raise _rejected(session_id, console)
        raise HTTPException(status_code=500, detail="Failed to add obstruction")
    return _snapshot(session_id, console)


@router.delete("/sessions/{session_id}/obstructions/{obstruction_id}", response_model=AdminSnapshot, response_model_exclude_none=True)
async def remove_obstruction(
    session_id: str,
    obstruction_id: str,
    sessions: AdminSessions = Depends(get_admin_sessions),
):
    """Remove an obstruction. A missing id yields a notice, not an error status."""
    console = _console(session_id, sessions)
    await console.obstructions.remove(obstruction_id)
    return _snapshot(session_id, console)


@router.post("/sessions/{session_id}/routes/{route_id}/toggle", response_model=AdminSnapshot, response_model_exclude_none=True)
async def toggle_route(
    session_id: str,
    route_id: str,
    sessions: AdminSessions = Depends(get_admin_sessions),
):
    console = _console(session_id, sessions)
    if console.routes.find(route_id) is None:
        raise HTTPException(status_code=404, detail=f"Route {route_id} not found")
    await console.routes.toggle(route_id)
    return _snapshot(session_id, console)
