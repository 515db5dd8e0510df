"""User-facing notices (the toast surface)."""
from pydantic import BaseModel
from typing import List, Literal
import logging

logger = logging.getLogger(__name__)


class Notice(BaseModel):
    title: str
    description: str
    variant: Literal["default", "destructive"] = "default"


class Notifier:
    """Collects notices in the order they were raised."""

    def __init__(self):
        self.notices: List[Notice] = []

    def info(self, title: str, description: str) -> Notice:
        notice = Notice(title=title, description=description)
        self.notices.append(notice)
        logger.info(f"{title}: {description}")
        return notice

    def error(self, title: str, description: str) -> Notice:
        notice = Notice(title=title, description=description, variant="destructive")
        self.notices.append(notice)
        logger.warning(f"{title}: {description}")
        return notice

    def drain(self) -> List[Notice]:
        """Return pending notices and forget them."""
        notices, self.notices = self.notices, []
        return notices
