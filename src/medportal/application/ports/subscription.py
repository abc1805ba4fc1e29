"""Subscription handle for row-change listeners.

The identity package has its own handle; records code does not import it.
"""

from collections.abc import Callable


class Subscription:
    """Cancels a listener exactly once."""

    def __init__(self, cancel: Callable[[], None]) -> None:
        self._cancel: Callable[[], None] | None = cancel

    @property
    def active(self) -> bool:
        return self._cancel is not None

    def unsubscribe(self) -> None:
        if self._cancel is None:
            return
        cancel, self._cancel = self._cancel, None
        cancel()
