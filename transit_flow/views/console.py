"""State of one administrator's panel."""
from typing import Optional
import asyncio

from ..actions import TransitActions
from ..models import RegionBias
from ..notifier import Notifier
from ..providers import Geocoder
from .comments import CommentFeed
from .obstruction_panel import ObstructionPanel
from .route_table import RouteManagementTable


class AdminConsole:
    """Obstruction panel, route table and comment viewer sharing one notice surface."""

    def __init__(
        self,
        actions: TransitActions,
        geocoder: Optional[Geocoder] = None,
        region: Optional[RegionBias] = None,
    ):
        self.notifier = Notifier()
        self.obstructions = ObstructionPanel(actions, self.notifier, geocoder, region)
        self.routes = RouteManagementTable(actions, self.notifier)
        self.comments = CommentFeed(actions, self.notifier)

    async def load(self) -> None:
        await asyncio.gather(self.obstructions.load(), self.routes.load(), self.comments.load())
