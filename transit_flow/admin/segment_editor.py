"""
Segment-creation state machine of the admin obstruction editor.

An administrator defines a new obstruction either as a single point (one map
click while idle) or as a segment: two map clicks after starting segment
creation, two geocoded addresses, or four typed coordinates. Once the
selection is complete the detail dialog opens; submitting or closing it
resets the editor.

    idle --start_segment_by_map--> pickingStart --click--> pickingEnd --click--> idle
    idle --click--> idle (point selected)
    any  --cancel/close/complete--> idle (selection cleared)
"""
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
import asyncio
import logging

from ..errors import GeocodingError, InvalidTransition, ValidationFailed
from ..models import AddObstructionData, GeoCoordinates, ObstructionType, RegionBias
from ..providers import Geocoder
from ..validation import FieldError, ValidationResult, validate_coordinate_fields, validate_obstruction_form

logger = logging.getLogger(__name__)

MESSAGE_PICK_START = "Click on the map to select the start point of the segment."
MESSAGE_PICK_END = "Start point selected. Click on the map to select the end point."


class SegmentMode(str, Enum):
    IDLE = "idle"
    PICKING_START = "pickingStart"
    PICKING_END = "pickingEnd"


class EditorState(BaseModel):
    """Serializable view of the editor"""
    model_config = ConfigDict(populate_by_name=True)

    mode: SegmentMode
    start_coord: Optional[GeoCoordinates] = Field(None, alias="startCoord")
    end_coord: Optional[GeoCoordinates] = Field(None, alias="endCoord")
    message: Optional[str] = None
    dialog_open: bool = Field(..., alias="dialogOpen")
    dialog_kind: Optional[str] = Field(None, alias="dialogKind")
    default_type: Optional[ObstructionType] = Field(None, alias="defaultType")
    can_cancel: bool = Field(..., alias="canCancel")


def _invalid(field: str, message: str) -> ValidationFailed:
    return ValidationFailed(ValidationResult(valid=False, errors=[FieldError(field=field, message=message)]))


class SegmentEditor:
    """Holds the in-progress point or segment selection for one admin session."""

    def __init__(self):
        self.mode = SegmentMode.IDLE
        self.start_coord: Optional[GeoCoordinates] = None
        self.end_coord: Optional[GeoCoordinates] = None
        self.message: Optional[str] = None
        self._point_flow = False

    # ============= Derived state =============

    @property
    def dialog_open(self) -> bool:
        """Detail dialog is open once a point, or both ends of a segment, are chosen."""
        if self.start_coord is None:
            return False
        if self.end_coord is not None:
            return True
        return self._point_flow

    @property
    def dialog_kind(self) -> Optional[str]:
        if not self.dialog_open:
            return None
        return "segment" if self.end_coord is not None else "point"

    @property
    def default_type(self) -> Optional[ObstructionType]:
        # Segments are usually closures; point obstructions leave the choice to the user
        return ObstructionType.CLOSURE if self.dialog_kind == "segment" else None

    @property
    def can_cancel(self) -> bool:
        return self.mode != SegmentMode.IDLE or (self.start_coord is not None and self.end_coord is not None)

    def state(self) -> EditorState:
        return EditorState(
            mode=self.mode,
            start_coord=self.start_coord,
            end_coord=self.end_coord,
            message=self.message,
            dialog_open=self.dialog_open,
            dialog_kind=self.dialog_kind,
            default_type=self.default_type,
            can_cancel=self.can_cancel,
        )

    # ============= Transitions =============

    def reset(self) -> None:
        self.mode = SegmentMode.IDLE
        self.start_coord = None
        self.end_coord = None
        self.message = None
        self._point_flow = False

    def start_segment_by_map(self) -> None:
        """Begin picking a segment on the map. Restarts any selection in progress."""
        self.reset()
        self.mode = SegmentMode.PICKING_START
        self.message = MESSAGE_PICK_START
        logger.debug("Segment creation started")

    def handle_map_click(self, coords: GeoCoordinates) -> None:
        if self.mode == SegmentMode.PICKING_START:
            self.start_coord = coords
            self.end_coord = None
            self.mode = SegmentMode.PICKING_END
            self.message = MESSAGE_PICK_END
        elif self.mode == SegmentMode.PICKING_END:
            self.end_coord = coords
            self.mode = SegmentMode.IDLE
            self.message = None
        else:
            # Not mid-segment: a click selects a point obstruction
            self.start_coord = coords
            self.end_coord = None
            self._point_flow = True
            self.message = None

    def _set_segment(self, start: GeoCoordinates, end: GeoCoordinates) -> None:
        self.start_coord = start
        self.end_coord = end
        self.mode = SegmentMode.IDLE
        self.message = None
        self._point_flow = False

    def define_segment_by_coordinates(self, start_lat, start_lng, end_lat, end_lng) -> None:
        """Set both ends from typed values. Nothing changes if any value is invalid."""
        result = validate_coordinate_fields(start_lat, start_lng, end_lat, end_lng)
        if not result.valid:
            raise ValidationFailed(result)
        self._set_segment(
            GeoCoordinates(lat=float(start_lat), lng=float(start_lng)),
            GeoCoordinates(lat=float(end_lat), lng=float(end_lng)),
        )

    async def define_segment_by_addresses(
        self,
        start_address: str,
        end_address: str,
        geocoder: Geocoder,
        region: Optional[RegionBias] = None,
    ) -> None:
        """
        Geocode both addresses and set them as the segment ends.

        Raises:
            ValidationFailed: an address is blank
            GeocodingError: lists every address that could not be resolved;
                the current selection is left untouched
        """
        errors = []
        if not (start_address or "").strip():
            errors.append(FieldError(field="start_address", message="Please enter a start address."))
        if not (end_address or "").strip():
            errors.append(FieldError(field="end_address", message="Please enter an end address."))
        if errors:
            raise ValidationFailed(ValidationResult(valid=False, errors=errors))

        start, end = await asyncio.gather(
            geocoder.geocode(start_address.strip(), region),
            geocoder.geocode(end_address.strip(), region),
        )

        failed = []
        if start is None:
            failed.append("start")
        if end is None:
            failed.append("end")
        if failed:
            logger.warning(f"Segment geocoding failed for: {', '.join(failed)}")
            raise GeocodingError(failed)

        self._set_segment(start, end)

    def cancel(self) -> None:
        self.reset()

    def close_dialog(self) -> None:
        self.reset()

    def complete(self) -> None:
        """Called after the obstruction was stored."""
        self.reset()

    # ============= Submission =============

    def build_submission(self, form: dict) -> AddObstructionData:
        """
        Validate the dialog values against the current selection.

        Raises:
            InvalidTransition: the start point is still being picked on the map
            ValidationFailed: bad form values, no start point, or a closure
                segment without its end point
        """
        if self.mode == SegmentMode.PICKING_START:
            raise InvalidTransition("Select the start point on the map before entering the details.")
        if self.start_coord is None:
            raise _invalid("coordinates", "No start coordinates selected on the map.")

        result = validate_obstruction_form(form)
        if not result.valid:
            raise ValidationFailed(result)

        obstruction_type = ObstructionType(form["type"])
        if obstruction_type == ObstructionType.CLOSURE and not self._point_flow and self.end_coord is None:
            raise _invalid("end_coordinates", "For a 'closure' segment, please select an end point on the map.")

        return AddObstructionData(
            coordinates=self.start_coord,
            end_coordinates=self.end_coord,
            type=obstruction_type,
            title=form["title"],
            description=form["description"],
        )
