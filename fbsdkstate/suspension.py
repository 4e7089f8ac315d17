"""Session state that survives the process being suspended or closed.

A :class:`SuspensionManager` keeps a global, string-keyed session state and
the navigation history of the frames registered with it. :meth:`save` writes
it all to a file in the manager's directory and :meth:`restore` reads it back.
Session state holds only values that :mod:`fbsdkstate.serialization` can
write. It should be small, and it is dropped whenever the file is missing or
unreadable.
"""

from __future__ import annotations

import os
import weakref
from collections.abc import Mapping, MutableMapping
from pathlib import Path
from typing import Any, Optional, Union

from .frames import Frame
from .serialization import dumps, loads

SESSION_STATE_FILENAME = "_sessionState.dat"
NAVIGATION_KEY = "Navigation"

_MAX_STATE_SIZE = 2**32


class SuspensionError(RuntimeError):
    """Raised when frames are misused or saved state cannot be restored."""


class SuspensionManager:
    """Captures session state and the navigation history of registered frames."""

    def __init__(self, directory: Union[str, os.PathLike[str]]) -> None:
        self._directory = Path(directory)
        self._session_state: dict[str, Any] = {}
        self._registered_frames: list[weakref.ref[Frame]] = []

    @property
    def path(self) -> Path:
        """The file that :meth:`save` writes and :meth:`restore` reads."""
        return self._directory / SESSION_STATE_FILENAME

    def session_state(self) -> dict[str, Any]:
        """Return the global session state for the current session."""
        return self._session_state

    def _live_frames(self) -> list[Frame]:
        frames = (ref() for ref in self._registered_frames)
        return [frame for frame in frames if frame is not None]

    def register_frame(
        self,
        frame: Frame,
        session_state_key: str,
        session_base_key: Optional[str] = None,
    ) -> None:
        """Manage ``frame``'s navigation history under ``session_state_key``.

        If state was already restored for that key, the frame's navigation
        history is restored at once. ``session_base_key`` names the kind of
        session and prefixes the key as ``"<base>_<key>"``.
        """
        if frame.session_state_key is not None:
            raise SuspensionError(
                "Frames can only be registered to one session state key"
            )
        if frame.session_state is not None:
            raise SuspensionError(
                "Frames must be either be registered before accessing frame "
                "session state, or not registered at all"
            )
        if session_base_key is not None:
            frame.session_base_key = session_base_key
            session_state_key = f"{session_base_key}_{session_state_key}"

        frame.session_state_key = session_state_key
        self._registered_frames.insert(0, weakref.ref(frame))
        self._restore_frame_navigation_state(frame)

    def unregister_frame(self, frame: Frame) -> None:
        """Stop managing ``frame`` and drop any state captured for it."""
        key = frame.session_state_key
        if key is not None:
            self._session_state.pop(key, None)
        self._registered_frames = [
            ref
            for ref in self._registered_frames
            if (alive := ref()) is not None and alive is not frame
        ]

    def session_state_for_frame(self, frame: Frame) -> MutableMapping[str, Any]:
        """Return the state mapping associated with ``frame``.

        A registered frame's state lives inside the global session state and
        is saved with it; an unregistered frame gets transient state.
        """
        frame_state = frame.session_state
        if frame_state is None:
            key = frame.session_state_key
            if key is not None:
                frame_state = self._session_state.setdefault(key, {})
                if not isinstance(frame_state, MutableMapping):
                    raise SuspensionError(
                        f"Session state under {key!r} is not a mapping"
                    )
            else:
                frame_state = {}
            frame.session_state = frame_state
        return frame_state

    def _restore_frame_navigation_state(self, frame: Frame) -> None:
        frame_state = self.session_state_for_frame(frame)
        if NAVIGATION_KEY in frame_state:
            frame.set_navigation_state(frame_state[NAVIGATION_KEY])

    def _save_frame_navigation_state(self, frame: Frame) -> None:
        frame_state = self.session_state_for_frame(frame)
        frame_state[NAVIGATION_KEY] = frame.get_navigation_state()

    def save(self) -> None:
        """Capture every registered frame's history and write the session state."""
        for frame in self._live_frames():
            self._save_frame_navigation_state(frame)

        data = dumps(self._session_state)
        self._directory.mkdir(parents=True, exist_ok=True)
        self.path.write_bytes(data)

    def restore(self, session_base_key: Optional[str] = None) -> None:
        """Read saved session state and restore matching registered frames.

        Only frames registered with ``session_base_key`` have their history
        restored. The session state is emptied before the file is read, so
        it stays empty when reading fails.
        """
        self._session_state.clear()

        path = self.path
        if path.stat().st_size >= _MAX_STATE_SIZE:
            raise SuspensionError("Session state larger than 4GB")
        content = loads(path.read_bytes())
        if not isinstance(content, Mapping):
            raise SuspensionError("Saved session state is not a map")
        self._session_state = dict(content)

        for frame in self._live_frames():
            if frame.session_base_key == session_base_key:
                frame.session_state = None
                self._restore_frame_navigation_state(frame)