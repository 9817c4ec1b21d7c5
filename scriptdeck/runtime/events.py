"""Raw terminal events produced by the session's background producers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ..actions import Mode


class EventKind(Enum):
    QUIT = "quit"
    TICK = "tick"
    RENDER = "render"
    RESIZE = "resize"
    SWITCH_MODE = "switch_mode"
    KEY = "key"


@dataclass(frozen=True)
class Event:
    """One item from the terminal event source.

    ``key`` holds a normalized key token from :func:`scriptdeck.input.read_key`
    for ``KEY`` events.
    """

    kind: EventKind
    key: str = ""
    width: int = 0
    height: int = 0
    mode: Mode | None = None

    @classmethod
    def key_press(cls, key: str) -> Event:
        return cls(EventKind.KEY, key=key)

    @classmethod
    def resize(cls, width: int, height: int) -> Event:
        return cls(EventKind.RESIZE, width=width, height=height)

    @classmethod
    def switch_mode(cls, mode: Mode) -> Event:
        return cls(EventKind.SWITCH_MODE, mode=mode)


QUIT_EVENT = Event(EventKind.QUIT)
TICK_EVENT = Event(EventKind.TICK)
RENDER_EVENT = Event(EventKind.RENDER)


__all__ = ["Event", "EventKind", "QUIT_EVENT", "RENDER_EVENT", "TICK_EVENT"]
