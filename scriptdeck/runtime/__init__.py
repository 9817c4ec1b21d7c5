"""Public runtime orchestration entry points.

This package groups the app bootstrap (`run_app`) and the lower-level loop,
session, and screen contracts used by tests and composition code.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .app import ActionBudgetExceeded, App


def run_app(*args, **kwargs):
    """Lazily import the bootstrap to avoid package-import cycles."""
    from .bootstrap import run_app as _run_app

    return _run_app(*args, **kwargs)


def __getattr__(name: str):
    if name in {"App", "ActionBudgetExceeded"}:
        from . import app as _app

        return getattr(_app, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "ActionBudgetExceeded",
    "App",
    "run_app",
]
