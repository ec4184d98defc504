"""Interactive directory explorer.

Lists one directory level at a time (a fresh walk per navigation step),
previews files with syntax highlighting and runs in raw terminal mode.
"""

from __future__ import annotations

from .app import make_directory_lister, run_explorer
from .preview import build_preview_lines, highlight_source
from .state import ExplorerState, PreviewState, describe_entry, render_screen

__all__ = [
    "make_directory_lister",
    "run_explorer",
    "build_preview_lines",
    "highlight_source",
    "ExplorerState",
    "PreviewState",
    "describe_entry",
    "render_screen",
]
