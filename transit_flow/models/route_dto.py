from pydantic import BaseModel, ConfigDict, Field
from enum import Enum

from ..errors import UnsupportedStatusTransition


class RouteStatus(str, Enum):
    OPEN = "open"
    BLOCKED = "blocked"
    CONGESTED = "congested"  # Informational only, cannot be toggled


class Route(BaseModel):
    """A transit line and its operational status"""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    path_description: str = Field(..., alias="pathDescription")  # e.g. "Plaza de Armas - Mercado Central"
    status: RouteStatus

    def toggled_status(self) -> RouteStatus:
        """Status after a toggle; only open and blocked can be flipped."""
        if self.status == RouteStatus.OPEN:
            return RouteStatus.BLOCKED
        if self.status == RouteStatus.BLOCKED:
            return RouteStatus.OPEN
        raise UnsupportedStatusTransition(self.id, self.status.value)
