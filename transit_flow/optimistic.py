"""Apply a change locally, confirm it remotely, roll back on failure."""
from typing import Any, Awaitable, Callable, TypeVar
import logging

from .errors import TransitFlowError

logger = logging.getLogger(__name__)

T = TypeVar("T")
S = TypeVar("S")


class OptimisticUpdateRejected(TransitFlowError):
    """The remote side answered, but did not acknowledge the change."""

    def __init__(self, result: Any):
        self.result = result
        super().__init__("Update was not acknowledged")


async def run_optimistic(
    apply: Callable[[], None],
    commit: Callable[[], Awaitable[T]],
    snapshot: Callable[[], S],
    restore: Callable[[S], None],
    acknowledged: Callable[[T], bool] = bool,
) -> T:
    """
    Run a mutation optimistically.

    Args:
        apply: Local state change, applied before the commit starts
        commit: Remote call confirming the change
        snapshot: Captures local state before apply
        restore: Puts a snapshot back
        acknowledged: Decides whether the commit result confirms the change

    Returns:
        The commit result

    Raises:
        OptimisticUpdateRejected: commit returned an unacknowledged result (state restored)
        Exception: whatever commit raised (state restored)
    """
    saved = snapshot()
    apply()
    try:
        result = await commit()
    except Exception:
        logger.warning("Commit failed, restoring previous state")
        restore(saved)
        raise

    if not acknowledged(result):
        logger.warning("Commit not acknowledged, restoring previous state")
        restore(saved)
        raise OptimisticUpdateRejected(result)

    return result
