"""Draw surface handed to components during a render pass.

A ``Frame`` collects positioned, pre-clipped row segments. The terminal session
flushes them as one ANSI write, so components never touch stdout directly.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..ansi import clip_ansi_line, display_width, fit_ansi_line

BORDER_SINGLE = ("┌", "┐", "└", "┘", "─", "│")
BORDER_DOUBLE = ("╔", "╗", "╚", "╝", "═", "║")


@dataclass(frozen=True)
class Rect:
    """Cell rectangle with a zero-based origin."""

    x: int
    y: int
    width: int
    height: int

    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    def inner(self, margin: int = 1) -> Rect:
        """Return the rectangle shrunk by ``margin`` cells on every side."""
        return Rect(
            self.x + margin,
            self.y + margin,
            max(0, self.width - 2 * margin),
            max(0, self.height - 2 * margin),
        )

    def split_bottom(self, rows: int) -> tuple[Rect, Rect]:
        """Split off ``rows`` rows at the bottom; returns ``(top, bottom)``."""
        rows = max(0, min(rows, self.height))
        top = Rect(self.x, self.y, self.width, self.height - rows)
        bottom = Rect(self.x, self.y + self.height - rows, self.width, rows)
        return top, bottom

    def split_columns(self, weights: list[int]) -> list[Rect]:
        """Split horizontally in proportion to ``weights``; the last column takes the remainder."""
        if not weights:
            return []
        total = sum(max(1, weight) for weight in weights)
        columns: list[Rect] = []
        x = self.x
        for index, weight in enumerate(weights):
            if index == len(weights) - 1:
                width = self.x + self.width - x
            else:
                width = (self.width * max(1, weight)) // total
            columns.append(Rect(x, self.y, max(0, width), self.height))
            x += width
        return columns


class Frame:
    """Write-only render target for one draw pass."""

    def __init__(self, area: Rect) -> None:
        self._area = area
        self._segments: list[tuple[int, int, str]] = []

    def size(self) -> Rect:
        return self._area

    @property
    def segments(self) -> list[tuple[int, int, str]]:
        return list(self._segments)

    def write_line(self, area: Rect, row: int, text: str) -> None:
        """Place ``text`` on ``row`` of ``area``, clipped and padded to its width."""
        if area.is_empty() or not 0 <= row < area.height:
            return
        self._segments.append((area.x, area.y + row, fit_ansi_line(text, area.width)))

    def render_block(self, area: Rect, title: str = "", *, double: bool = False, style: str = "") -> Rect:
        """Draw a bordered box around ``area`` and return its interior."""
        if area.width < 2 or area.height < 2:
            return Rect(area.x, area.y, 0, 0)
        top_left, top_right, bottom_left, bottom_right, horizontal, vertical = (
            BORDER_DOUBLE if double else BORDER_SINGLE
        )
        reset = "\033[0m" if style else ""
        span = area.width - 2
        label = clip_ansi_line(f" {title} ", span) if title else ""
        fill = horizontal * (span - display_width(label))
        top = f"{style}{top_left}{label}{fill}{top_right}{reset}"
        self._segments.append((area.x, area.y, top))
        for row in range(1, area.height - 1):
            self._segments.append((area.x, area.y + row, f"{style}{vertical}{reset}"))
            self._segments.append((area.x + area.width - 1, area.y + row, f"{style}{vertical}{reset}"))
        bottom = f"{style}{bottom_left}{horizontal * span}{bottom_right}{reset}"
        self._segments.append((area.x, area.y + area.height - 1, bottom))
        return area.inner()

    def to_ansi(self) -> str:
        """Serialize segments as cursor-addressed ANSI output."""
        return "".join(f"\033[{y + 1};{x + 1}H{text}" for x, y, text in self._segments)


__all__ = ["BORDER_DOUBLE", "BORDER_SINGLE", "Frame", "Rect"]
