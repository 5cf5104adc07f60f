"""Change notification for selection updates.

Two independent observers are told about every selection change:

1. "item selected" listeners, which receive the selection projection
   (an item, a list of items, or ``None``)
2. an optional form binding, which receives the raw selected id value

Listener Contract:
    Listeners and the form binding MUST be synchronous. This is enforced at
    registration time. A listener that needs async work should schedule it
    with asyncio.create_task() rather than awaiting it.
"""

import asyncio
from typing import Any, Callable

from autoselect.domain.protocols import FormBinding, SelectionListener
from autoselect.domain.types import SelectedId
from autoselect.logger import get_logger

logger = get_logger("notifier")


def _require_sync(fn: Callable[..., Any]) -> None:
    if asyncio.iscoroutinefunction(fn):
        raise TypeError(
            f"Selection callbacks must be synchronous functions. "
            f"{getattr(fn, '__name__', fn)!r} is an async function. "
            f"To perform async work, schedule it using asyncio.create_task() instead."
        )


class ChangeNotifier:
    """Fans a selection change out to listeners and the form binding.

    Example:
        ```python
        notifier = ChangeNotifier()
        notifier.subscribe(lambda items: print("selected", items))
        notifier.register_on_change(form_control.set_value)

        notifier.notify([{"id": 1, "name": "Ann"}], [1])
        ```

    Thread safety:
        Not thread-safe. All calls are expected on the event loop thread.
    """

    def __init__(self) -> None:
        self._listeners: list[SelectionListener] = []
        self._on_change: FormBinding | None = None
        self._on_touched: Callable[[], None] | None = None

    def subscribe(self, listener: SelectionListener) -> None:
        """
        Register an "item selected" listener.

        Raises:
            TypeError: If the listener is an async function
        """
        _require_sync(listener)
        if listener in self._listeners:
            logger.debug("Listener already subscribed, skipping")
            return
        self._listeners.append(listener)
        logger.debug(f"Subscribed selection listener ({len(self._listeners)} total)")

    def unsubscribe(self, listener: SelectionListener) -> None:
        """Remove a listener. Unknown listeners are ignored."""
        try:
            self._listeners.remove(listener)
            logger.debug("Unsubscribed selection listener")
        except ValueError:
            logger.debug("Listener not found in subscriptions")

    def register_on_change(self, fn: FormBinding | None) -> None:
        """Register (or, with ``None``, unregister) the form binding callback."""
        if fn is not None:
            _require_sync(fn)
        self._on_change = fn

    def register_on_touched(self, fn: Callable[[], None] | None) -> None:
        """Register (or, with ``None``, unregister) the form "touched" callback."""
        if fn is not None:
            _require_sync(fn)
        self._on_touched = fn

    @property
    def has_form_binding(self) -> bool:
        return self._on_change is not None

    def notify(self, selection: Any, selected_id: SelectedId) -> None:
        """
        Publish a selection change.

        Listeners are called in subscription order with ``selection``, then the
        form binding (if registered) with ``selected_id``. A failing callback is
        logged and does not prevent the others from being called.
        """
        logger.debug(f"Notifying {len(self._listeners)} listener(s) of selection {selected_id!r}")
        for listener in list(self._listeners):
            try:
                listener(selection)
            except Exception as e:
                logger.opt(exception=True).error(f"Error in selection listener: {e}")

        if self._on_change is not None:
            try:
                self._on_change(selected_id)
            except Exception as e:
                logger.opt(exception=True).error(f"Error in form binding callback: {e}")

    def touch(self) -> None:
        """Tell the form binding the control was interacted with."""
        if self._on_touched is not None:
            self._on_touched()

    def clear(self) -> None:
        """Drop every listener and callback."""
        self._listeners.clear()
        self._on_change = None
        self._on_touched = None
