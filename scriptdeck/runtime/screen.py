"""Screens: mode-tagged groups of components and their layout."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from ..actions import Mode
from ..components.base import Component
from .frame import Rect


@dataclass
class Screen:
    """Ordered components that are interactive while ``mode`` is active."""

    mode: Mode
    components: list[Component] = field(default_factory=list)

    def layout(self, area: Rect) -> list[tuple[Component, Rect]]:
        """Assign each component a rectangle inside ``area``.

        Bottom-docked components take one row each, stacked in order beneath
        the fill components, which split the remaining width by weight.
        """
        bottom = [component for component in self.components if component.dock == "bottom"]
        fill = [component for component in self.components if component.dock != "bottom"]
        body, footer = area.split_bottom(len(bottom))

        placed: dict[int, Rect] = {}
        for offset, component in enumerate(bottom):
            placed[id(component)] = Rect(footer.x, footer.y + offset, footer.width, 1)
        for component, rect in zip(fill, body.split_columns([c.weight for c in fill])):
            placed[id(component)] = rect
        return [(component, placed[id(component)]) for component in self.components]


def find_screen(screens: Iterable[Screen], mode: Mode) -> Screen | None:
    """Return the first screen registered for ``mode``."""
    return next((screen for screen in screens if screen.mode == mode), None)


def iter_components(screens: Iterable[Screen]) -> Iterator[Component]:
    """Yield every component of every screen in registration order."""
    for screen in screens:
        yield from screen.components


__all__ = ["Screen", "find_screen", "iter_components"]
