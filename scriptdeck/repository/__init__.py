"""Repository model: confined directory navigation and script listings.

This package contains non-UI primitives:
- the immutable ``Entry`` value shown in lists
- ``Repository`` with its navigation stack and filtered listings
"""

from __future__ import annotations

from .fs import (
    SCRIPT_EXTENSION,
    DoesNotExist,
    NotUTF8,
    Repository,
    RepositoryError,
    RepositoryIOError,
    is_listed_name,
    is_script_name,
)
from .types import Entry

__all__ = [
    "SCRIPT_EXTENSION",
    "DoesNotExist",
    "Entry",
    "NotUTF8",
    "Repository",
    "RepositoryError",
    "RepositoryIOError",
    "is_listed_name",
    "is_script_name",
]
