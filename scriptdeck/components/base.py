"""Lifecycle/update/draw contract shared by every UI unit.

The runtime loop drives each component through the same sequence:
``register_action_handler`` and ``register_config_handler`` once, ``init``
once with the viewport, then per drained action ``update`` (only while the
owning screen is active) and ``update_background`` (always).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping

from ..actions import Action, ActionSender
from ..runtime.events import Event
from ..runtime.frame import Frame, Rect


class Component(ABC):
    """Base class for stateful UI units.

    Subclasses override the hooks they need; the defaults do nothing and emit
    no follow-up action. ``dock`` and ``weight`` tell the owning screen where to
    place the component: ``"bottom"`` components take one row each at the
    bottom, ``"fill"`` components share the remaining width by ``weight``.
    """

    dock = "fill"
    weight = 1

    def __init__(self) -> None:
        self.command_tx: ActionSender | None = None
        self.config: Mapping[str, str] = {}

    def register_action_handler(self, tx: ActionSender) -> None:
        self.command_tx = tx

    def register_config_handler(self, config: Mapping[str, str]) -> None:
        self.config = config

    def init(self, area: Rect) -> None:
        """One-time setup with the initial viewport; raise to abort startup."""

    def handle_events(self, event: Event | None) -> Action | None:
        """Translate a raw event into an action without touching domain state."""
        return None

    def update(self, action: Action) -> Action | None:
        """Apply ``action`` while this component's screen is interactive."""
        return None

    def update_background(self, action: Action) -> Action | None:
        """Apply ``action`` every cycle regardless of the active mode.

        Runs for every component of every screen, so implementations must stay
        cheap and must tolerate being called while off-screen.
        """
        return None

    @abstractmethod
    def draw(self, frame: Frame, area: Rect) -> None:
        """Render current state into ``area``; must not mutate domain state."""


__all__ = ["Component"]
