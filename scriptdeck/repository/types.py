"""Domain datatype for one listed filesystem child."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, order=True)
class Entry:
    """File or directory below the repository root.

    Ordering is ``(is_directory, relative_path, name)``, so scripts sort ahead
    of directories. ``selected`` is display metadata only and is ignored by
    equality, hashing, and ordering.
    """

    is_directory: bool
    relative_path: str
    name: str
    selected: bool = field(default=False, compare=False)

    def display_path(self) -> str:
        """Return the root-relative path shown in lists."""
        if self.is_directory:
            return f"{self.relative_path}/"
        return self.relative_path


__all__ = ["Entry"]
