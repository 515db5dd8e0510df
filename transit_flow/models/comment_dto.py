from pydantic import BaseModel, ConfigDict, Field
from typing import Optional

from .geo_dto import GeoCoordinates


class Comment(BaseModel):
    """User-submitted traffic report"""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    text: str
    image_url: Optional[str] = Field(None, alias="imageUrl")  # Placeholder only, images are not stored
    submitted_at: str = Field(..., alias="submittedAt")        # ISO format datetime string
    coordinates: Optional[GeoCoordinates] = None


class ImageAttachment(BaseModel):
    """Metadata of an image attached to a comment; the file content is discarded"""
    model_config = ConfigDict(populate_by_name=True)

    filename: str
    content_type: str = Field("image/jpeg", alias="contentType")
    size: int = Field(0, ge=0)  # Bytes


class CommentFormData(BaseModel):
    """DTO for submitting a new comment"""
    text: str
    image: Optional[ImageAttachment] = None
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)
