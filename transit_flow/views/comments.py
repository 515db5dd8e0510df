"""Comment viewers and the public submission form."""
from datetime import datetime
from typing import Callable, List, Optional
import logging

from pydantic import ValidationError

from ..actions import TransitActions
from ..models import Comment, CommentFormData, GeoCoordinates, ImageAttachment
from ..notifier import Notifier
from ..validation import ValidationResult, validate_comment_form

logger = logging.getLogger(__name__)


def newest_first(comments: List[Comment]) -> List[Comment]:
    return sorted(comments, key=lambda c: datetime.fromisoformat(c.submitted_at), reverse=True)


class CommentFeed:
    """Comment list shown on the public page and in the admin panel."""

    def __init__(self, actions: TransitActions, notifier: Optional[Notifier] = None):
        self.actions = actions
        self.notifier = notifier or Notifier()
        self.comments: List[Comment] = []
        self.is_loading = False

    async def load(self) -> None:
        self.is_loading = True
        try:
            self.comments = newest_first(await self.actions.get_comments())
        except Exception as e:
            logger.error(f"Failed to load comments: {e}")
            self.notifier.error("Error", "Could not load user comments.")
        finally:
            self.is_loading = False

    def prepend(self, comment: Comment) -> None:
        self.comments.insert(0, comment)


class CommentSubmissionForm:
    """Report form: text, optional photo, optional current location."""

    def __init__(
        self,
        actions: TransitActions,
        notifier: Optional[Notifier] = None,
        on_submitted: Optional[Callable[[Comment], None]] = None,
    ):
        self.actions = actions
        self.notifier = notifier or Notifier()
        self.on_submitted = on_submitted
        self.is_submitting = False
        self.validation: Optional[ValidationResult] = None
        self.reset()

    def reset(self) -> None:
        self.text = ""
        self.image: Optional[ImageAttachment] = None
        self.location: Optional[GeoCoordinates] = None
        self.validation = None

    def attach_image(self, image: Optional[ImageAttachment]) -> None:
        self.image = image

    def capture_location(self, latitude: Optional[float], longitude: Optional[float]) -> bool:
        """Store a geolocation reading; None values mean the browser could not provide one."""
        if latitude is None or longitude is None:
            self.notifier.error("Location Error", "Could not get your location. Please ensure location services are enabled.")
            return False
        try:
            self.location = GeoCoordinates(lat=latitude, lng=longitude)
        except ValidationError:
            self.notifier.error("Location Error", "The reported location is not a valid coordinate.")
            return False
        self.notifier.info("Location captured", "Your current location has been attached to the comment.")
        return True

    async def submit(self) -> Optional[Comment]:
        self.validation = validate_comment_form(self.text, self.image)
        if not self.validation.valid:
            return None

        self.is_submitting = True
        try:
            comment = await self.actions.submit_comment(
                CommentFormData(
                    text=self.text,
                    image=self.image,
                    latitude=self.location.lat if self.location else None,
                    longitude=self.location.lng if self.location else None,
                )
            )
        except Exception as e:
            logger.error(f"Failed to submit comment: {e}")
            self.notifier.error("Submission Failed", "There was an error submitting your comment. Please try again.")
            return None
        finally:
            self.is_submitting = False

        self.notifier.info("Comment Submitted!", "Thank you for your feedback. The municipality will review your comment.")
        self.reset()
        if self.on_submitted:
            self.on_submitted(comment)
        return comment
