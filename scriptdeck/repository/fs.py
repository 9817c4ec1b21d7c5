"""Confined filesystem navigation over a script repository root."""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path

from ..log import get_logger
from .types import Entry

SCRIPT_EXTENSION = "sql"

logger = get_logger("repository")


class RepositoryError(Exception):
    """Base class for failures constructing a :class:`Repository`."""


class DoesNotExist(RepositoryError):
    """Raised when the repository root is not present on disk."""


class NotUTF8(RepositoryError):
    """Raised when the repository root cannot be represented as UTF-8 text."""


class RepositoryIOError(RepositoryError):
    """Raised when the root's existence cannot be determined."""


def is_listed_name(name: str) -> bool:
    """Return whether ``name`` is visible; dot and underscore names never are."""
    return not (name.startswith(".") or name.startswith("_"))


def is_script_name(name: str) -> bool:
    """Return whether ``name`` carries the recognized script extension."""
    stem, dot, extension = name.rpartition(".")
    return bool(dot) and bool(stem) and extension == SCRIPT_EXTENSION


class Repository:
    """Directory subtree with a stack of opened directory names.

    The current directory is always the root joined with every stacked segment.
    Pushed segments are not validated; listing a directory that does not exist
    yields an empty result.
    """

    def __init__(self, root: Path | str | bytes) -> None:
        if isinstance(root, bytes):
            root = os.fsdecode(root)
        root = Path(root)
        try:
            root_str = str(root)
            root_str.encode("utf-8")
        except UnicodeEncodeError as exc:
            raise NotUTF8(repr(root)) from exc

        try:
            exists = root.exists()
        except OSError as exc:
            raise RepositoryIOError(str(exc)) from exc
        if not exists:
            raise DoesNotExist(root_str)

        self._root = root
        self._root_str = root_str
        self._path: list[str] = []

    def base_as_str(self) -> str:
        return self._root_str

    def base_as_path(self) -> Path:
        return self._root

    def current_as_path(self) -> Path:
        current = self._root
        for segment in self._path:
            current = current / segment
        return current

    def current_relative_as_str(self) -> str:
        """Return the current directory relative to root, e.g. ``/dir2``."""
        return "".join(f"/{segment}" for segment in self._path)

    def open_directory(self, directory_name: str) -> None:
        self._path.append(directory_name)

    def leave_directory(self) -> str | None:
        """Pop the last opened segment; returns ``None`` when already at root."""
        if not self._path:
            return None
        return self._path.pop()

    def _relative(self, path: Path) -> str:
        return path.relative_to(self._root).as_posix()

    def _scan(self, directory: Path) -> Iterator[tuple[str, Path, bool]]:
        """Yield visible ``(name, path, is_dir)`` children; raises ``OSError``."""
        with os.scandir(directory) as entries:
            for child in entries:
                if not is_listed_name(child.name):
                    continue
                try:
                    is_dir = child.is_dir()
                except OSError:
                    is_dir = False
                yield child.name, Path(child.path), is_dir

    def _script_entries(self, directory: Path) -> list[Entry]:
        scripts = [
            Entry(is_directory=False, relative_path=self._relative(path), name=name)
            for name, path, is_dir in self._scan(directory)
            if not is_dir and is_script_name(name)
        ]
        scripts.sort()
        return scripts

    def read_entries_in_current_directory(self) -> list[Entry]:
        """List subdirectories and scripts of the current directory, sorted.

        Read failures are logged and produce an empty list.
        """
        current = self.current_as_path()
        entries: list[Entry] = []
        try:
            for name, path, is_dir in self._scan(current):
                if is_dir:
                    entries.append(Entry(is_directory=True, relative_path=self._relative(path), name=name))
                elif is_script_name(name):
                    entries.append(Entry(is_directory=False, relative_path=self._relative(path), name=name))
        except OSError as exc:
            logger.warning("Failed to read directory %s: %s", current, exc)
            return []

        entries.sort()
        return entries

    def read_files_in_directory(self) -> list[Entry]:
        """List scripts directly inside the current directory."""
        current = self.current_as_path()
        try:
            return self._script_entries(current)
        except OSError as exc:
            logger.warning("Failed to read scripts in %s: %s", current, exc)
            return []

    def read_files_after_in_directory(self, marker: str) -> list[Entry]:
        """List scripts that sort after the script named ``marker``.

        Returns an empty list when no script in the current directory is named
        ``marker``.
        """
        scripts = self.read_files_in_directory()
        for index, entry in enumerate(scripts):
            if entry.name == marker:
                return scripts[index + 1 :]
        return []

    def get_children(self, relative_path: str) -> list[Entry]:
        """List scripts inside ``relative_path`` without touching the navigation stack."""
        directory = self._root / relative_path
        if not directory.is_dir():
            return []
        try:
            return self._script_entries(directory)
        except OSError as exc:
            logger.warning("Failed to read scripts in %s: %s", directory, exc)
            return []


__all__ = [
    "SCRIPT_EXTENSION",
    "DoesNotExist",
    "NotUTF8",
    "Repository",
    "RepositoryError",
    "RepositoryIOError",
    "is_listed_name",
    "is_script_name",
]
