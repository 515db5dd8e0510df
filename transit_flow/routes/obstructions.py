from fastapi import APIRouter, Depends, HTTPException, status
from typing import List
import logging

from ..actions import TransitActions
from ..dependencies import get_actions
from ..models import AddObstructionData, Obstruction, RemoveResult

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/obstructions", response_model=List[Obstruction], response_model_exclude_none=True)
async def list_obstructions(actions: TransitActions = Depends(get_actions)):
    """All current obstructions, points and segments."""
    try:
        return await actions.get_obstructions()
    except Exception as e:
        logger.error(f"Error listing obstructions: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.post(
    "/obstructions",
    response_model=Obstruction,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
async def add_obstruction(data: AddObstructionData, actions: TransitActions = Depends(get_actions)):
    """Create a point obstruction, or a segment when endCoordinates is given."""
    try:
        return await actions.add_obstruction(data)
    except Exception as e:
        logger.error(f"Error adding obstruction: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.delete("/obstructions/{obstruction_id}", response_model=RemoveResult)
async def remove_obstruction(obstruction_id: str, actions: TransitActions = Depends(get_actions)):
    """
    Remove an obstruction.

    An unknown id is not an error: the response is {"success": false}.
    """
    try:
        return await actions.remove_obstruction(obstruction_id)
    except Exception as e:
        logger.error(f"Error removing obstruction {obstruction_id}: {e}")
        raise HTTPException(status_code=500, detail=str(e))
