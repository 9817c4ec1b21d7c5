"""Action values and the channel that carries them to the dispatch loop.

Actions are frozen dataclasses compared structurally. The channel is an
unbounded multi-producer/single-consumer queue; only the runtime loop reads.
"""

from __future__ import annotations

import queue
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from .repository import Entry


class Mode(Enum):
    """Which screen is currently interactive."""

    FILE_CHOOSER = "file_chooser"
    SCRIPT_RUNNER = "script_runner"


class ActionKind(Enum):
    QUIT = "quit"
    TICK = "tick"
    RENDER = "render"
    RESIZE = "resize"
    SWITCH_MODE = "switch_mode"
    SUSPEND = "suspend"
    RESUME = "resume"
    CURSOR_UP = "cursor_up"
    CURSOR_DOWN = "cursor_down"
    CURSOR_TO_TOP = "cursor_to_top"
    CURSOR_TO_BOTTOM = "cursor_to_bottom"
    SELECT_CURRENT = "select_current"
    SELECT_ALL_AFTER = "select_all_after"
    SELECT_ALL_IN_DIRECTORY = "select_all_in_directory"
    DIRECTORY_OPEN_SELECTED = "directory_open_selected"
    DIRECTORY_LEAVE = "directory_leave"
    SCRIPT_RUN = "script_run"
    REMOVE_SELECTED_SCRIPT = "remove_selected_script"
    REMOVE_ALL_SELECTED_SCRIPTS = "remove_all_selected_scripts"
    SELECT_SCRIPTS = "select_scripts"
    APPEND_SCRIPTS = "append_scripts"
    REMOVE_SCRIPT = "remove_script"
    PREVIEW_SCRIPT = "preview_script"
    ERROR = "error"


@dataclass(frozen=True)
class Action:
    """One command flowing through the dispatch queue.

    Only the payload fields relevant to ``kind`` are populated; use the
    classmethod constructors for payload-carrying kinds.
    """

    kind: ActionKind
    width: int = 0
    height: int = 0
    mode: Mode | None = None
    entries: tuple[Entry, ...] = ()
    entry: Entry | None = None
    message: str = ""

    @classmethod
    def resize(cls, width: int, height: int) -> Action:
        return cls(ActionKind.RESIZE, width=width, height=height)

    @classmethod
    def switch_mode(cls, mode: Mode) -> Action:
        return cls(ActionKind.SWITCH_MODE, mode=mode)

    @classmethod
    def select_scripts(cls, entries: Iterable[Entry]) -> Action:
        return cls(ActionKind.SELECT_SCRIPTS, entries=tuple(entries))

    @classmethod
    def append_scripts(cls, entries: Iterable[Entry]) -> Action:
        return cls(ActionKind.APPEND_SCRIPTS, entries=tuple(entries))

    @classmethod
    def remove_script(cls, entry: Entry) -> Action:
        return cls(ActionKind.REMOVE_SCRIPT, entry=entry)

    @classmethod
    def preview_script(cls, entry: Entry | None) -> Action:
        return cls(ActionKind.PREVIEW_SCRIPT, entry=entry)

    @classmethod
    def error(cls, message: str) -> Action:
        return cls(ActionKind.ERROR, message=message)

    def is_periodic(self) -> bool:
        """Return whether this is a Tick or Render heartbeat."""
        return self.kind in {ActionKind.TICK, ActionKind.RENDER}


QUIT = Action(ActionKind.QUIT)
TICK = Action(ActionKind.TICK)
RENDER = Action(ActionKind.RENDER)
SUSPEND = Action(ActionKind.SUSPEND)
RESUME = Action(ActionKind.RESUME)
CURSOR_UP = Action(ActionKind.CURSOR_UP)
CURSOR_DOWN = Action(ActionKind.CURSOR_DOWN)
CURSOR_TO_TOP = Action(ActionKind.CURSOR_TO_TOP)
CURSOR_TO_BOTTOM = Action(ActionKind.CURSOR_TO_BOTTOM)
SELECT_CURRENT = Action(ActionKind.SELECT_CURRENT)
SELECT_ALL_AFTER = Action(ActionKind.SELECT_ALL_AFTER)
SELECT_ALL_IN_DIRECTORY = Action(ActionKind.SELECT_ALL_IN_DIRECTORY)
DIRECTORY_OPEN_SELECTED = Action(ActionKind.DIRECTORY_OPEN_SELECTED)
DIRECTORY_LEAVE = Action(ActionKind.DIRECTORY_LEAVE)
SCRIPT_RUN = Action(ActionKind.SCRIPT_RUN)
REMOVE_SELECTED_SCRIPT = Action(ActionKind.REMOVE_SELECTED_SCRIPT)
REMOVE_ALL_SELECTED_SCRIPTS = Action(ActionKind.REMOVE_ALL_SELECTED_SCRIPTS)


class ChannelClosed(Exception):
    """Raised when sending on a channel whose receiver has gone away."""


class ActionSender:
    """Producer handle onto an :class:`ActionChannel`."""

    def __init__(self, channel: ActionChannel) -> None:
        self._channel = channel

    def send(self, action: Action) -> None:
        self._channel.put(action)


class ActionChannel:
    """Unbounded MPSC action queue with an explicit close.

    Producers never block. Once closed, every send raises ``ChannelClosed``.
    """

    def __init__(self) -> None:
        self._queue: queue.SimpleQueue[Action] = queue.SimpleQueue()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def sender(self) -> ActionSender:
        return ActionSender(self)

    def put(self, action: Action) -> None:
        if self._closed:
            raise ChannelClosed(f"action channel closed; dropped {action.kind.value}")
        self._queue.put(action)

    def try_recv(self) -> Action | None:
        """Return the next queued action without blocking, or ``None``."""
        try:
            return self._queue.get_nowait()
        except queue.Empty:
            return None

    def close(self) -> None:
        self._closed = True


__all__ = [
    "Action",
    "ActionChannel",
    "ActionKind",
    "ActionSender",
    "ChannelClosed",
    "Mode",
    "QUIT",
    "TICK",
    "RENDER",
    "SUSPEND",
    "RESUME",
    "CURSOR_UP",
    "CURSOR_DOWN",
    "CURSOR_TO_TOP",
    "CURSOR_TO_BOTTOM",
    "SELECT_CURRENT",
    "SELECT_ALL_AFTER",
    "SELECT_ALL_IN_DIRECTORY",
    "DIRECTORY_OPEN_SELECTED",
    "DIRECTORY_LEAVE",
    "SCRIPT_RUN",
    "REMOVE_SELECTED_SCRIPT",
    "REMOVE_ALL_SELECTED_SCRIPTS",
]
