"""Tests for form validation."""
from transit_flow.models import ImageAttachment
from transit_flow.validation import (
    validate_comment_form,
    validate_coordinate_fields,
    validate_obstruction_form,
)


def test_valid_obstruction_form():
    """Test valid obstruction form."""
    result = validate_obstruction_form({
        "title": "Roadworks on Av. Bolognesi",
        "description": "Major road construction near the central market.",
        "type": "construction",
    })

    assert result.valid
    assert result.errors == []


def test_obstruction_form_collects_every_error():
    """Test obstruction form collects every error."""
    result = validate_obstruction_form({"title": "Hole", "description": "Short", "type": None})

    assert not result.valid
    assert result.error_for("title") == "Title must be at least 5 characters."
    assert result.error_for("description") == "Description must be at least 10 characters."
    assert result.error_for("type") == "Please select an obstruction type."


def test_obstruction_form_rejects_unknown_type():
    """Test obstruction form rejects unknown type."""
    result = validate_obstruction_form({
        "title": "Flooded underpass",
        "description": "Water over the road after the storm.",
        "type": "flood",
    })

    assert result.error_for("type") == "Please select an obstruction type."


def test_comment_text_length():
    """Test comment text length."""
    assert not validate_comment_form("Too short").valid
    assert not validate_comment_form("x" * 501).valid
    assert validate_comment_form("Traffic jam near the terminal.").valid


def test_comment_image_limits():
    """Test comment image limits."""
    too_big = ImageAttachment(filename="photo.jpg", content_type="image/jpeg", size=6 * 1024 * 1024)
    wrong_type = ImageAttachment(filename="clip.gif", content_type="image/gif", size=100)

    big_result = validate_comment_form("Traffic jam near the terminal.", too_big)
    type_result = validate_comment_form("Traffic jam near the terminal.", wrong_type)

    assert big_result.error_for("image") == "Max file size is 5MB."
    assert type_result.error_for("image") == ".jpg, .png, and .webp files are accepted."


def test_coordinate_fields():
    """Test coordinate fields."""
    assert validate_coordinate_fields("-18.0", "-70.2", -17.9, -70.1).valid

    result = validate_coordinate_fields("north", "-70.2", "-91", "180.5")
    fields = [e.field for e in result.errors]
    assert fields == ["start_lat", "end_lat", "end_lng"]
