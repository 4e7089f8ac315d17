"""Event data passed to handlers when a page loads or saves its state."""

from __future__ import annotations

from collections.abc import Callable, MutableMapping
from dataclasses import dataclass, field
from typing import Any, Optional

PageState = MutableMapping[str, Any]


@dataclass(frozen=True)
class LoadStateEventArgs:
    """Data for a handler restoring a page's state.

    ``navigation_parameter`` is the value passed when the page was first
    requested. ``page_state`` holds the state the page preserved during an
    earlier session, or ``None`` the first time the page is visited.
    """

    navigation_parameter: Any = None
    page_state: Optional[PageState] = None


@dataclass(frozen=True)
class SaveStateEventArgs:
    """Data for a handler preserving a page's state.

    ``page_state`` starts empty and is to be filled with serializable state.
    """

    page_state: PageState = field(default_factory=dict)


LoadStateEventHandler = Callable[[Any, LoadStateEventArgs], Any]
SaveStateEventHandler = Callable[[Any, SaveStateEventArgs], Any]