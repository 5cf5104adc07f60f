"""
Debouncing for rapid, superseding triggers.

A Debouncer coalesces bursts of triggers into a single delayed call: every
new schedule cancels the previous one, whether it is still sleeping or
already running. At most one task is live at a time.
"""

import asyncio
import inspect
from typing import Any, Awaitable, Callable

from autoselect.logger import get_logger

logger = get_logger("debounce")

DebouncedCall = Callable[[], Any] | Callable[[], Awaitable[Any]]


class Debouncer:
    """Cancellable scheduled-task holder for one logical trigger stream."""

    def __init__(self, delay: float = 0.25, name: str = "debouncer") -> None:
        """
        Args:
            delay: Default delay in seconds used when ``schedule`` gets none
            name: Human-readable name for logging
        """
        self.delay = delay
        self._name = name
        self._task: asyncio.Task | None = None

    @property
    def pending(self) -> bool:
        """True while a scheduled call has not completed."""
        return self._task is not None and not self._task.done()

    def schedule(self, delay: float | None, fn: DebouncedCall) -> asyncio.Task:
        """
        Cancel any pending call, then arm ``fn`` to fire after ``delay`` seconds.

        ``fn`` may be a plain callable or return an awaitable, which is awaited
        inside the task. The returned task resolves to ``fn``'s result or raises
        its exception, and is cancelled if superseded.

        Must be called from within a running event loop.
        """
        self.cancel_pending()
        if delay is None:
            delay = self.delay
        task = asyncio.create_task(self._fire(delay, fn))
        self._task = task
        task.add_done_callback(self._forget)
        logger.debug(f"{self._name}: scheduled call in {delay:.3f}s")
        return task

    def cancel_pending(self) -> bool:
        """Cancel the pending call, if any. Returns True when something was cancelled."""
        task = self._task
        self._task = None
        if task is None or task.done():
            return False
        task.cancel()
        logger.debug(f"{self._name}: cancelled pending call")
        return True

    async def _fire(self, delay: float, fn: DebouncedCall) -> Any:
        if delay > 0:
            await asyncio.sleep(delay)
        result = fn()
        if inspect.isawaitable(result):
            result = await result
        return result

    def _forget(self, task: asyncio.Task) -> None:
        if self._task is task:
            self._task = None
