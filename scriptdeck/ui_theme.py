"""UI theme definitions and selection helpers.

Themes are UI-only ANSI palettes for list chrome. Syntax highlighting style for
script previews remains a separate setting.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by components."""

    name: str
    border: str
    border_active: str
    reset: str
    directory: str
    script: str
    selected_marker: str
    status: str
    status_mode: str
    status_error: str
    dim: str


DEFAULT_THEME = UITheme(
    name="default",
    border="\033[2m",
    border_active="\033[38;5;44m",
    reset="\033[0m",
    directory="\033[1;34m",
    script="\033[38;5;252m",
    selected_marker="\033[38;5;42m",
    status="\033[38;5;250m",
    status_mode="\033[1;38;5;81m",
    status_error="\033[1;38;5;203m",
    dim="\033[2;38;5;250m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    border="\033[2;38;5;31m",
    border_active="\033[38;5;39m",
    reset="\033[0m",
    directory="\033[1;38;5;45m",
    script="\033[38;5;153m",
    selected_marker="\033[38;5;84m",
    status="\033[38;5;110m",
    status_mode="\033[1;38;5;45m",
    status_error="\033[1;38;5;209m",
    dim="\033[2;38;5;110m",
)

PLAIN_THEME = UITheme(
    name="plain",
    border="",
    border_active="",
    reset="",
    directory="",
    script="",
    selected_marker="",
    status="",
    status_mode="",
    status_error="",
    dim="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
    PLAIN_THEME.name: PLAIN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    return tuple(sorted(_THEMES.keys()))


def resolve_theme(name: str | None) -> UITheme:
    """Return concrete theme for requested name, falling back to default."""
    if not name:
        return DEFAULT_THEME
    return _THEMES.get(str(name).strip().lower(), DEFAULT_THEME)


def theme_from_config(config: Mapping[str, str]) -> UITheme:
    return resolve_theme(config.get("theme"))


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "resolve_theme",
    "theme_from_config",
]
