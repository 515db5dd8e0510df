from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from enum import Enum

from .geo_dto import GeoCoordinates


class ObstructionType(str, Enum):
    CONSTRUCTION = "construction"
    CLOSURE = "closure"
    EVENT = "event"
    ACCIDENT = "accident"
    OTHER = "other"


class Obstruction(BaseModel):
    """A reported road hazard or closure, either a single point or a line segment"""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    coordinates: GeoCoordinates  # Start point of a segment, or the point itself
    end_coordinates: Optional[GeoCoordinates] = Field(None, alias="endCoordinates")
    type: ObstructionType
    title: str
    description: str
    added_at: str = Field(..., alias="addedAt")  # ISO format datetime string

    @property
    def is_segment(self) -> bool:
        return self.end_coordinates is not None


class AddObstructionData(BaseModel):
    """DTO for creating a new obstruction"""
    model_config = ConfigDict(populate_by_name=True)

    coordinates: GeoCoordinates
    end_coordinates: Optional[GeoCoordinates] = Field(None, alias="endCoordinates")
    type: ObstructionType
    title: str = Field(..., min_length=5, max_length=100)
    description: str = Field(..., min_length=10, max_length=500)


class RemoveResult(BaseModel):
    """Outcome of a remove call; False means the id was not found"""
    success: bool
