"""A command that relays its work to callbacks."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

CanExecuteChangedHandler = Callable[["RelayCommand", None], Any]


class RelayCommand:
    """A command whose behaviour comes entirely from two callbacks.

    Call :meth:`raise_can_execute_changed` whenever :meth:`can_execute`
    is expected to return a different value.
    """

    def __init__(
        self,
        can_execute_callback: Callable[[Any], bool],
        execute_callback: Callable[[Any], Any],
    ) -> None:
        self._can_execute_callback = can_execute_callback
        self._execute_callback = execute_callback
        self._handlers: list[CanExecuteChangedHandler] = []

    def can_execute(self, parameter: Any = None) -> bool:
        """Return whether the command can run with ``parameter``."""
        return bool(self._can_execute_callback(parameter))

    def execute(self, parameter: Any = None) -> None:
        """Run the command with ``parameter``."""
        self._execute_callback(parameter)

    def connect(self, handler: CanExecuteChangedHandler) -> None:
        """Subscribe ``handler`` to the can-execute-changed event."""
        self._handlers.append(handler)

    def disconnect(self, handler: CanExecuteChangedHandler) -> None:
        """Unsubscribe ``handler``; raises ValueError if it was not subscribed."""
        self._handlers.remove(handler)

    def raise_can_execute_changed(self) -> None:
        """Notify subscribers that :meth:`can_execute` may now answer differently."""
        for handler in list(self._handlers):
            handler(self, None)