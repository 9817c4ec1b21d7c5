"""Syntax-highlighted preview of the script under the file chooser cursor."""

from __future__ import annotations

from pathlib import Path

from pygments import highlight
from pygments.formatters import TerminalFormatter
from pygments.lexers import TextLexer, get_lexer_for_filename
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

from ..actions import Action, ActionKind
from ..log import get_logger
from ..repository import Entry
from ..runtime.frame import Frame, Rect
from ..ui_theme import theme_from_config
from .base import Component

DEFAULT_STYLE = "monokai"
PREVIEW_MAX_BYTES = 64 * 1024

logger = get_logger("preview")


def read_text(path: Path, max_bytes: int = PREVIEW_MAX_BYTES) -> str:
    """Read at most ``max_bytes`` of ``path`` as text, trying common encodings."""
    with path.open("rb") as handle:
        data = handle.read(max_bytes)
    for encoding in ("utf-8", "utf-8-sig", "latin-1"):
        try:
            return data.decode(encoding)
        except UnicodeDecodeError:
            continue
    return data.decode("utf-8", errors="replace")


def normalize_style(style: str | None) -> str:
    """Return ``style`` when Pygments knows it, otherwise the default style."""
    if not style:
        return DEFAULT_STYLE
    try:
        get_style_by_name(style)
    except ClassNotFound:
        return DEFAULT_STYLE
    return style


def highlight_source(source: str, path: Path, style: str = DEFAULT_STYLE) -> str:
    """Return ANSI-highlighted ``source``, lexed by ``path``'s file name."""
    try:
        lexer = get_lexer_for_filename(path.name, source)
    except ClassNotFound:
        lexer = TextLexer()
    return highlight(source, lexer, TerminalFormatter(style=normalize_style(style)))


class ScriptPreview(Component):
    """Shows the first screenful of the file chooser's current script."""

    weight = 2

    def __init__(self, root: Path, title: str = "Preview") -> None:
        super().__init__()
        self.root = root
        self.title = title
        self.entry: Entry | None = None
        self.lines: list[str] = []

    def load(self, entry: Entry | None) -> None:
        self.entry = entry
        if entry is None:
            self.lines = []
            return
        path = self.root / entry.relative_path
        try:
            source = read_text(path)
        except OSError as exc:
            logger.warning("Failed to read %s for preview: %s", path, exc)
            self.lines = [f"<unreadable: {exc.strerror or exc}>"]
            return
        rendered = highlight_source(source, path, self.config.get("style", DEFAULT_STYLE))
        self.lines = rendered.splitlines()

    def update_background(self, action: Action) -> Action | None:
        if action.kind is ActionKind.PREVIEW_SCRIPT and action.entry != self.entry:
            self.load(action.entry)
        return None

    def draw(self, frame: Frame, area: Rect) -> None:
        theme = theme_from_config(self.config)
        title = self.entry.name if self.entry is not None else self.title
        inner = frame.render_block(area, title, style=theme.border)
        for row in range(inner.height):
            line = self.lines[row] if row < len(self.lines) else ""
            frame.write_line(inner, row, line)


__all__ = ["DEFAULT_STYLE", "ScriptPreview", "highlight_source", "normalize_style", "read_text"]
