from fastapi import APIRouter, Depends, HTTPException
from typing import List
import logging

from ..actions import TransitActions
from ..dependencies import get_actions
from ..errors import UnsupportedStatusTransition
from ..models import Route

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/routes", response_model=List[Route])
async def list_routes(actions: TransitActions = Depends(get_actions)):
    try:
        return await actions.get_routes()
    except Exception as e:
        logger.error(f"Error listing routes: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/routes/{route_id}/toggle", response_model=Route)
async def toggle_route_status(route_id: str, actions: TransitActions = Depends(get_actions)):
    """Flip a route between open and blocked. Congested routes cannot be toggled."""
    try:
        route = await actions.toggle_route_status(route_id)
    except UnsupportedStatusTransition as e:
        raise HTTPException(status_code=409, detail=str(e))
    except Exception as e:
        logger.error(f"Error toggling route {route_id}: {e}")
        raise HTTPException(status_code=500, detail=str(e))

    if route is None:
        raise HTTPException(status_code=404, detail=f"Route {route_id} not found")
    return route
