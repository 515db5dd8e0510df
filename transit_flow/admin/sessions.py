"""Registry of open admin consoles."""
from datetime import datetime, timedelta
from typing import Dict, Optional
import asyncio
import logging
import uuid

from ..actions import TransitActions
from ..models import RegionBias
from ..providers import Geocoder
from ..views import AdminConsole

logger = logging.getLogger(__name__)


class AdminSessions:
    """Keeps admin consoles alive between requests and expires idle ones."""

    def __init__(self, ttl_minutes: int = 60, cleanup_interval_seconds: int = 300):
        """
        Initialize the session registry.

        Args:
            ttl_minutes: Minutes a console may sit unused before it is dropped
            cleanup_interval_seconds: Pause between expiry sweeps
        """
        self.ttl_minutes = ttl_minutes
        self.cleanup_interval_seconds = cleanup_interval_seconds
        self._consoles: Dict[str, AdminConsole] = {}
        self._last_used: Dict[str, datetime] = {}
        self._cleanup_task = None

    def __len__(self) -> int:
        return len(self._consoles)

    async def start_cleanup_task(self):
        """Start background task to drop expired sessions."""
        if self._cleanup_task is None:
            self._cleanup_task = asyncio.create_task(self._cleanup_loop())

    async def stop_cleanup_task(self):
        """Stop background cleanup task."""
        if self._cleanup_task:
            self._cleanup_task.cancel()
            try:
                await self._cleanup_task
            except asyncio.CancelledError:
                pass
            self._cleanup_task = None

    async def _cleanup_loop(self):
        """Background task to drop expired sessions."""
        while True:
            try:
                await asyncio.sleep(self.cleanup_interval_seconds)
                self.cleanup_expired()
            except asyncio.CancelledError:
                break
            except Exception as e:
                logger.error(f"Error in session cleanup loop: {e}")

    def _is_expired(self, session_id: str, now: datetime) -> bool:
        last_used = self._last_used.get(session_id)
        return last_used is None or now - last_used > timedelta(minutes=self.ttl_minutes)

    def cleanup_expired(self, now: Optional[datetime] = None) -> int:
        """Drop sessions idle for longer than the TTL; returns how many were dropped."""
        now = now or datetime.now()
        expired = [sid for sid in self._consoles if self._is_expired(sid, now)]
        for session_id in expired:
            self._consoles.pop(session_id, None)
            self._last_used.pop(session_id, None)
        if expired:
            logger.info(f"Expired {len(expired)} idle admin sessions")
        return len(expired)

    async def open(
        self,
        actions: TransitActions,
        geocoder: Optional[Geocoder] = None,
        region: Optional[RegionBias] = None,
    ) -> str:
        """Create and load a console; returns its session id."""
        session_id = str(uuid.uuid4())
        console = AdminConsole(actions, geocoder, region)
        await console.load()
        self._consoles[session_id] = console
        self._last_used[session_id] = datetime.now()
        logger.info(f"Admin session opened: {session_id}")
        return session_id

    def get(self, session_id: str) -> Optional[AdminConsole]:
        """Return the console and mark it used; expired sessions count as missing."""
        if session_id not in self._consoles:
            return None
        now = datetime.now()
        if self._is_expired(session_id, now):
            self.close(session_id)
            return None
        self._last_used[session_id] = now
        return self._consoles[session_id]

    def close(self, session_id: str) -> bool:
        self._last_used.pop(session_id, None)
        removed = self._consoles.pop(session_id, None) is not None
        if removed:
            logger.info(f"Admin session closed: {session_id}")
        return removed
