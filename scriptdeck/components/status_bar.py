"""One-row status line: active mode, key hints, and the latest error."""

from __future__ import annotations

from ..actions import Action, ActionKind, Mode
from ..ansi import display_width
from ..runtime.frame import Frame, Rect
from ..ui_theme import theme_from_config
from .base import Component

ERROR_VISIBLE_TICKS = 5

MODE_LABELS = {
    Mode.FILE_CHOOSER: "FILES",
    Mode.SCRIPT_RUNNER: "RUN",
}

MODE_HINTS = {
    Mode.FILE_CHOOSER: "␣ select  s after  S all  ⏎ open  ⌫ up  ⇥ runner  q quit",
    Mode.SCRIPT_RUNNER: "r run  x remove  X clear  ⇥ files  q quit",
}


class StatusBar(Component):
    """Bottom status line.

    Errors stay visible for ``ERROR_VISIBLE_TICKS`` logic ticks.
    """

    dock = "bottom"

    def __init__(self, mode: Mode) -> None:
        super().__init__()
        self.mode = mode
        self.error_message = ""
        self._error_ticks_left = 0

    def update_background(self, action: Action) -> Action | None:
        kind = action.kind
        if kind is ActionKind.SWITCH_MODE and action.mode is not None:
            self.mode = action.mode
        elif kind is ActionKind.ERROR:
            self.error_message = action.message
            self._error_ticks_left = ERROR_VISIBLE_TICKS
        elif kind is ActionKind.TICK and self._error_ticks_left:
            self._error_ticks_left -= 1
            if not self._error_ticks_left:
                self.error_message = ""
        return None

    def draw(self, frame: Frame, area: Rect) -> None:
        theme = theme_from_config(self.config)
        label = f" {MODE_LABELS[self.mode]} "
        if self.error_message:
            right = f"{theme.status_error}{self.error_message}{theme.reset}"
        else:
            right = f"{theme.status}{MODE_HINTS[self.mode]}{theme.reset}"
        gap = " " * max(1, area.width - len(label) - display_width(right) - 1)
        frame.write_line(area, 0, f"{theme.status_mode}\033[7m{label}{theme.reset}\033[0m{gap}{right}")


__all__ = ["ERROR_VISIBLE_TICKS", "MODE_HINTS", "MODE_LABELS", "StatusBar"]
