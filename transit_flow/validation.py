"""Standalone form validation returning structured results."""
from pydantic import BaseModel, Field, ValidationError
from typing import List, Optional

from .models import ObstructionType, ImageAttachment

MAX_IMAGE_BYTES = 5 * 1024 * 1024
ACCEPTED_IMAGE_TYPES = ("image/jpeg", "image/png", "image/webp")


class FieldError(BaseModel):
    field: str
    message: str


class ValidationResult(BaseModel):
    valid: bool
    errors: List[FieldError] = Field(default_factory=list)

    def error_for(self, field: str) -> Optional[str]:
        for error in self.errors:
            if error.field == field:
                return error.message
        return None


class ObstructionForm(BaseModel):
    """Values entered in the obstruction detail dialog"""
    title: str = Field(..., min_length=5, max_length=100)
    description: str = Field(..., min_length=10, max_length=500)
    type: ObstructionType


class CommentForm(BaseModel):
    text: str = Field(..., min_length=10, max_length=500)
    image: Optional[ImageAttachment] = None


# Messages shown next to the offending field
_MESSAGES = {
    ("title", "string_too_short"): "Title must be at least 5 characters.",
    ("title", "string_too_long"): "Title must be at most 100 characters.",
    ("description", "string_too_short"): "Description must be at least 10 characters.",
    ("description", "string_too_long"): "Description must be at most 500 characters.",
    ("type", "missing"): "Please select an obstruction type.",
    ("type", "enum"): "Please select an obstruction type.",
    ("text", "string_too_short"): "Comment must be at least 10 characters long.",
    ("text", "string_too_long"): "Comment must be at most 500 characters long.",
}


def _from_pydantic(exc: ValidationError) -> ValidationResult:
    errors = []
    for err in exc.errors():
        field = str(err["loc"][0]) if err["loc"] else "__root__"
        message = _MESSAGES.get((field, err["type"]), err["msg"])
        errors.append(FieldError(field=field, message=message))
    return ValidationResult(valid=False, errors=errors)


def validate_obstruction_form(data: dict) -> ValidationResult:
    """Check title, description and type of a new obstruction."""
    values = {k: v for k, v in data.items() if v is not None}
    try:
        ObstructionForm(**values)
    except ValidationError as e:
        return _from_pydantic(e)
    return ValidationResult(valid=True)


def validate_comment_form(text: Optional[str], image: Optional[ImageAttachment] = None) -> ValidationResult:
    """Check comment text length and the attached image's size and type."""
    try:
        CommentForm(text=text or "", image=image)
    except ValidationError as e:
        return _from_pydantic(e)

    errors = []
    if image is not None:
        if image.size > MAX_IMAGE_BYTES:
            errors.append(FieldError(field="image", message="Max file size is 5MB."))
        if image.content_type not in ACCEPTED_IMAGE_TYPES:
            errors.append(FieldError(field="image", message=".jpg, .png, and .webp files are accepted."))
    return ValidationResult(valid=not errors, errors=errors)


def _parse_number(raw) -> Optional[float]:
    if raw is None:
        return None
    try:
        return float(str(raw).strip())
    except ValueError:
        return None


def validate_coordinate_fields(start_lat, start_lng, end_lat, end_lng) -> ValidationResult:
    """Check four free-text coordinate fields are numeric and within lat/lng ranges."""
    fields = {
        "start_lat": (start_lat, 90.0),
        "start_lng": (start_lng, 180.0),
        "end_lat": (end_lat, 90.0),
        "end_lng": (end_lng, 180.0),
    }
    errors = []
    for name, (raw, limit) in fields.items():
        value = _parse_number(raw)
        if value is None or value != value:  # NaN
            errors.append(FieldError(field=name, message="Must be a number."))
        elif not -limit <= value <= limit:
            kind = "Latitude" if name.endswith("lat") else "Longitude"
            errors.append(FieldError(field=name, message=f"{kind} must be between {-limit:g} and {limit:g}."))
    return ValidationResult(valid=not errors, errors=errors)
