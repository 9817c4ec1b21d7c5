"""Ordered, cursor-addressed list of scripts queued for execution."""

from __future__ import annotations

from collections.abc import Callable, Sequence

from ..actions import Action, ActionKind
from ..ansi import reverse_with_ansi
from ..log import get_logger
from ..repository import Entry
from ..runtime.frame import Frame, Rect
from ..ui_theme import theme_from_config
from .base import Component

HIGHLIGHT_SYMBOL = ">> "
EMPTY_HINT = "No scripts queued. Select some in the file chooser."

ScriptRunner = Callable[[Sequence[Entry]], None]

logger = get_logger("script_list")


def log_run_request(entries: Sequence[Entry]) -> None:
    """Default runner: record the requested execution order."""
    logger.info("run requested for %d script(s): %s", len(entries), ", ".join(e.relative_path for e in entries))


class ScriptList(Component):
    """Sorted, duplicate-free selection with a single cursor.

    ``cursor`` is ``None`` exactly when ``entries`` is empty. Selection changes
    arrive through ``update_background`` so the list stays current while the
    runner screen is hidden; cursor movement only happens while it is shown.
    """

    def __init__(self, runner: ScriptRunner | None = None, title: str = "Scripts") -> None:
        super().__init__()
        self.entries: list[Entry] = []
        self.cursor: int | None = None
        self.title = title
        self._runner = runner if runner is not None else log_run_request

    def _clamp_cursor(self) -> None:
        if not self.entries:
            self.cursor = None
        elif self.cursor is None:
            self.cursor = 0
        else:
            self.cursor = max(0, min(self.cursor, len(self.entries) - 1))

    def cursor_up(self) -> None:
        if self.cursor is not None and self.cursor > 0:
            self.cursor -= 1

    def cursor_down(self) -> None:
        if self.cursor is not None and self.cursor < len(self.entries) - 1:
            self.cursor += 1

    def go_to_top(self) -> None:
        if self.entries:
            self.cursor = 0

    def go_to_bottom(self) -> None:
        if self.entries:
            self.cursor = len(self.entries) - 1

    def current(self) -> Entry | None:
        if self.cursor is None:
            return None
        return self.entries[self.cursor]

    def select_scripts(self, scripts: Sequence[Entry]) -> None:
        self.entries = sorted(scripts)
        self._clamp_cursor()

    def append_scripts(self, scripts: Sequence[Entry]) -> None:
        for script in scripts:
            if script not in self.entries:
                self.entries.append(script)
        self.entries.sort()
        self._clamp_cursor()

    def remove_script(self, entry: Entry) -> None:
        try:
            self.entries.remove(entry)
        except ValueError:
            return
        self._clamp_cursor()

    def clear(self) -> None:
        self.entries.clear()
        self._clamp_cursor()

    def update(self, action: Action) -> Action | None:
        kind = action.kind
        if kind is ActionKind.CURSOR_UP:
            self.cursor_up()
        elif kind is ActionKind.CURSOR_DOWN:
            self.cursor_down()
        elif kind is ActionKind.CURSOR_TO_TOP:
            self.go_to_top()
        elif kind is ActionKind.CURSOR_TO_BOTTOM:
            self.go_to_bottom()
        elif kind is ActionKind.REMOVE_SELECTED_SCRIPT:
            entry = self.current()
            if entry is not None:
                return Action.remove_script(entry)
        elif kind is ActionKind.SCRIPT_RUN:
            if not self.entries:
                logger.info("run requested with no scripts selected")
                return None
            self._runner(tuple(self.entries))
        return None

    def update_background(self, action: Action) -> Action | None:
        kind = action.kind
        if kind is ActionKind.SELECT_SCRIPTS:
            self.select_scripts(action.entries)
        elif kind is ActionKind.APPEND_SCRIPTS:
            self.append_scripts(action.entries)
        elif kind is ActionKind.REMOVE_SCRIPT and action.entry is not None:
            self.remove_script(action.entry)
        elif kind is ActionKind.REMOVE_ALL_SELECTED_SCRIPTS:
            self.clear()
        return None

    def draw(self, frame: Frame, area: Rect) -> None:
        theme = theme_from_config(self.config)
        title = f"{self.title} ({len(self.entries)})"
        inner = frame.render_block(area, title, double=True, style=theme.border_active)
        if inner.is_empty():
            return
        start = 0
        if self.cursor is not None and self.cursor >= inner.height:
            start = self.cursor - inner.height + 1
        blank = " " * len(HIGHLIGHT_SYMBOL)
        for row in range(inner.height):
            index = start + row
            if index >= len(self.entries):
                hint = EMPTY_HINT if not self.entries and row == 0 else ""
                frame.write_line(inner, row, f"{theme.dim}{hint}{theme.reset}" if hint else "")
                continue
            path = self.entries[index].display_path()
            if index == self.cursor:
                # Reverse video spans the whole row, marker included.
                frame.write_line(inner, row, reverse_with_ansi(f"{HIGHLIGHT_SYMBOL}{path}".ljust(inner.width)))
            else:
                frame.write_line(inner, row, f"{blank}{theme.script}{path}{theme.reset}")


__all__ = ["EMPTY_HINT", "HIGHLIGHT_SYMBOL", "ScriptList", "ScriptRunner", "log_run_request"]
