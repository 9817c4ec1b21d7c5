"""UI units driven by the runtime loop.

Every unit implements the ``Component`` contract; screens hold them in order.
"""

from __future__ import annotations

from .base import Component
from .file_chooser import FileChooser
from .preview import ScriptPreview
from .script_list import ScriptList, ScriptRunner, log_run_request
from .status_bar import StatusBar

__all__ = [
    "Component",
    "FileChooser",
    "ScriptList",
    "ScriptPreview",
    "ScriptRunner",
    "StatusBar",
    "log_run_request",
]
