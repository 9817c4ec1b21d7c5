"""Directory browser that turns selection keys into script-list actions."""

from __future__ import annotations

from dataclasses import replace

from ..actions import Action, ActionKind
from ..ansi import reverse_with_ansi
from ..log import get_logger
from ..repository import Entry, Repository
from ..runtime.frame import Frame, Rect
from ..ui_theme import theme_from_config
from .base import Component

SELECTED_MARK = "● "
UNSELECTED_MARK = "  "

logger = get_logger("file_chooser")


class FileChooser(Component):
    """Listing of the repository's current directory with its own cursor.

    Selection state is mirrored from the selection actions seen in
    ``update_background`` so rows can be marked without asking the script list.
    """

    weight = 1

    def __init__(self, repository: Repository, title: str = "Files") -> None:
        super().__init__()
        self.repository = repository
        self.title = title
        self.entries: list[Entry] = []
        self.cursor: int | None = None
        self.selected_paths: set[str] = set()

    def init(self, area: Rect) -> None:
        self.reload()
        if self.command_tx is not None:
            self.command_tx.send(self._preview_action())

    def current(self) -> Entry | None:
        if self.cursor is None:
            return None
        return self.entries[self.cursor]

    def reload(self, focus_name: str | None = None) -> bool:
        """Re-read the current directory, keeping the cursor on the same entry.

        ``focus_name`` moves the cursor to the entry with that name instead.
        Returns whether the entry under the cursor changed.
        """
        previous = self.current()
        listing = self.repository.read_entries_in_current_directory()
        self.entries = [
            replace(entry, selected=entry.relative_path in self.selected_paths) for entry in listing
        ]

        target = focus_name if focus_name is not None else (previous.name if previous else None)
        index = next((i for i, entry in enumerate(self.entries) if entry.name == target), None)
        if index is not None:
            self.cursor = index
        elif not self.entries:
            self.cursor = None
        else:
            self.cursor = max(0, min(self.cursor or 0, len(self.entries) - 1))
        return self.current() != previous

    def _refresh_marks(self) -> None:
        self.entries = [
            replace(entry, selected=entry.relative_path in self.selected_paths) for entry in self.entries
        ]

    def _preview_action(self) -> Action:
        entry = self.current()
        if entry is None or entry.is_directory:
            return Action.preview_script(None)
        return Action.preview_script(replace(entry, selected=False))

    def _move_cursor(self, kind: ActionKind) -> Action | None:
        if self.cursor is None:
            return None
        previous = self.cursor
        last = len(self.entries) - 1
        if kind is ActionKind.CURSOR_UP:
            self.cursor = max(0, self.cursor - 1)
        elif kind is ActionKind.CURSOR_DOWN:
            self.cursor = min(last, self.cursor + 1)
        elif kind is ActionKind.CURSOR_TO_TOP:
            self.cursor = 0
        else:
            self.cursor = last
        if self.cursor == previous:
            return None
        return self._preview_action()

    def _select_current(self) -> Action | None:
        entry = self.current()
        if entry is None:
            return None
        if entry.is_directory:
            scripts = self.repository.get_children(entry.relative_path)
            return Action.append_scripts(scripts) if scripts else None
        plain = replace(entry, selected=False)
        if entry.relative_path in self.selected_paths:
            return Action.remove_script(plain)
        return Action.append_scripts([plain])

    def _select_all_after(self) -> Action | None:
        entry = self.current()
        if entry is None or entry.is_directory:
            return None
        following = self.repository.read_files_after_in_directory(entry.name)
        return Action.append_scripts([replace(entry, selected=False), *following])

    def update(self, action: Action) -> Action | None:
        kind = action.kind
        if kind in {
            ActionKind.CURSOR_UP,
            ActionKind.CURSOR_DOWN,
            ActionKind.CURSOR_TO_TOP,
            ActionKind.CURSOR_TO_BOTTOM,
        }:
            return self._move_cursor(kind)
        if kind is ActionKind.DIRECTORY_OPEN_SELECTED:
            entry = self.current()
            if entry is None or not entry.is_directory:
                return None
            self.repository.open_directory(entry.name)
            self.cursor = None
            self.reload()
            logger.debug("opened %s", self.repository.current_relative_as_str())
            return self._preview_action()
        if kind is ActionKind.DIRECTORY_LEAVE:
            left = self.repository.leave_directory()
            if left is None:
                return None
            self.cursor = None
            self.reload(focus_name=left)
            return self._preview_action()
        if kind is ActionKind.SELECT_CURRENT:
            return self._select_current()
        if kind is ActionKind.SELECT_ALL_AFTER:
            return self._select_all_after()
        if kind is ActionKind.SELECT_ALL_IN_DIRECTORY:
            scripts = self.repository.read_files_in_directory()
            return Action.append_scripts(scripts) if scripts else None
        return None

    def update_background(self, action: Action) -> Action | None:
        kind = action.kind
        if kind is ActionKind.SELECT_SCRIPTS:
            self.selected_paths = {entry.relative_path for entry in action.entries}
        elif kind is ActionKind.APPEND_SCRIPTS:
            self.selected_paths.update(entry.relative_path for entry in action.entries)
        elif kind is ActionKind.REMOVE_SCRIPT and action.entry is not None:
            self.selected_paths.discard(action.entry.relative_path)
        elif kind is ActionKind.REMOVE_ALL_SELECTED_SCRIPTS:
            self.selected_paths.clear()
        elif kind is ActionKind.TICK:
            if self.reload():
                return self._preview_action()
            return None
        else:
            return None
        self._refresh_marks()
        return None

    def draw(self, frame: Frame, area: Rect) -> None:
        theme = theme_from_config(self.config)
        location = self.repository.current_relative_as_str() or "/"
        inner = frame.render_block(area, f"{self.title} {location}", style=theme.border_active)
        if inner.is_empty():
            return
        start = 0
        if self.cursor is not None and self.cursor >= inner.height:
            start = self.cursor - inner.height + 1
        for row in range(inner.height):
            index = start + row
            if index >= len(self.entries):
                frame.write_line(inner, row, "")
                continue
            entry = self.entries[index]
            mark = SELECTED_MARK if entry.selected else UNSELECTED_MARK
            label = f"{entry.name}/" if entry.is_directory else entry.name
            if index == self.cursor:
                frame.write_line(inner, row, reverse_with_ansi((mark + label).ljust(inner.width)))
                continue
            color = theme.directory if entry.is_directory else theme.script
            frame.write_line(
                inner,
                row,
                f"{theme.selected_marker}{mark}{theme.reset}{color}{label}{theme.reset}",
            )


__all__ = ["FileChooser", "SELECTED_MARK", "UNSELECTED_MARK"]
