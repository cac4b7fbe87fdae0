"""
Fire-and-forget execution of side jobs.

A dispatched job has no result channel: the caller never learns whether it
ran or failed. Failures are logged once and dropped, with no retry.
"""

import asyncio
from typing import Awaitable, Callable, Optional, Protocol, Set

from user_service.logging_config import get_logger

logger = get_logger(__name__)

Job = Callable[[], Awaitable[None]]


class TaskDispatcher(Protocol):
    def dispatch(self, name: str, job: Job) -> None:
        ...


class BackgroundDispatcher:
    """Run jobs as detached asyncio tasks on the current event loop."""

    def __init__(self) -> None:
        # Strong references so pending tasks are not garbage collected
        self._tasks: Set[asyncio.Task] = set()

    def dispatch(self, name: str, job: Job) -> None:
        task = asyncio.get_running_loop().create_task(self._run(name, job), name=name)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    @staticmethod
    async def _run(name: str, job: Job) -> None:
        try:
            await job()
        except Exception:
            logger.exception("Background job failed", extra={"job": name})

    @property
    def pending(self) -> int:
        return len(self._tasks)

    async def drain(self, timeout: Optional[float] = None) -> None:
        """Wait for outstanding jobs, e.g. at shutdown."""
        if not self._tasks:
            return
        done, pending = await asyncio.wait(set(self._tasks), timeout=timeout)
        if pending:
            logger.warning("Abandoning background jobs", extra={"count": len(pending)})
