from fastapi import APIRouter, Depends, HTTPException, status
from typing import List
import logging

from ..actions import TransitActions
from ..dependencies import get_actions
from ..models import Comment, CommentFormData
from ..validation import validate_comment_form
from ..views.comments import newest_first

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/comments", response_model=List[Comment], response_model_exclude_none=True)
async def list_comments(actions: TransitActions = Depends(get_actions)):
    """User comments, newest first."""
    try:
        return newest_first(await actions.get_comments())
    except Exception as e:
        logger.error(f"Error listing comments: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.post(
    "/comments",
    response_model=Comment,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
async def submit_comment(form: CommentFormData, actions: TransitActions = Depends(get_actions)):
    """Submit a traffic report. Only the image file name is used, for a placeholder URL."""
    result = validate_comment_form(form.text, form.image)
    if not result.valid:
        raise HTTPException(status_code=422, detail=result.model_dump()["errors"])

    try:
        return await actions.submit_comment(form)
    except Exception as e:
        logger.error(f"Error submitting comment: {e}")
        raise HTTPException(status_code=500, detail=str(e))
