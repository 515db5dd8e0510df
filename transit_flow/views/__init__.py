from .route_table import RouteManagementTable
from .comments import CommentFeed, CommentSubmissionForm
from .obstruction_panel import ObstructionPanel
from .route_planner import RoutePlanner
from .console import AdminConsole

__all__ = [
    "RouteManagementTable",
    "CommentFeed",
    "CommentSubmissionForm",
    "ObstructionPanel",
    "RoutePlanner",
    "AdminConsole",
]
