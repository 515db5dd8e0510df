from .geo_dto import GeoCoordinates, RegionBias
from .obstruction_dto import ObstructionType, Obstruction, AddObstructionData, RemoveResult
from .comment_dto import Comment, CommentFormData, ImageAttachment
from .route_dto import RouteStatus, Route
from .map_dto import PinStyle, MarkerOverlay, PolylineOverlay, MapView

__all__ = [
    "GeoCoordinates",
    "RegionBias",
    "ObstructionType",
    "Obstruction",
    "AddObstructionData",
    "RemoveResult",
    "Comment",
    "CommentFormData",
    "ImageAttachment",
    "RouteStatus",
    "Route",
    "PinStyle",
    "MarkerOverlay",
    "PolylineOverlay",
    "MapView",
]
