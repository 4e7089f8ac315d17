"""A navigation frame whose history can be captured and restored as text."""

from __future__ import annotations

from collections.abc import MutableMapping
from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass(eq=False)
class Frame:
    """A host for page navigation whose history is held as an opaque string.

    Besides its navigation state a frame carries the values a session
    manager attaches to it: the key its state is stored under in the global
    session state, the optional base key naming the kind of session, and
    the mapping currently used as its session state. Frames compare by
    identity and may be referenced weakly.
    """

    _navigation_state: str = field(default="", repr=False)
    session_state_key: Optional[str] = None
    session_base_key: Optional[str] = None
    session_state: Optional[MutableMapping[str, Any]] = field(
        default=None, repr=False
    )

    def __post_init__(self) -> None:
        if not isinstance(self._navigation_state, str):
            raise TypeError("Navigation state must be a string")

    def get_navigation_state(self) -> str:
        """Return the serialized navigation history of this frame."""
        return self._navigation_state

    def set_navigation_state(self, state: str) -> None:
        """Replace the navigation history with a previously captured one."""
        if not isinstance(state, str):
            raise TypeError("Navigation state must be a string")
        self._navigation_state = state