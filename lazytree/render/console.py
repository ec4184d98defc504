"""Console rendering of walk results and scan metrics.

Rows come from ``iter_tree_rows`` so the console shows exactly the connector
topology the exporters draw; this module only adds icons, ANSI color, size
labels and terminal-width truncation.
"""

from __future__ import annotations

import shutil
import sys
from collections.abc import Sequence
from typing import TextIO

from ..runtime.templates import DEFAULT_TEMPLATE, Template
from ..tree_model import (
    UNICODE_GLYPHS,
    Entry,
    GlyphSet,
    Metrics,
    TreeRow,
    format_duration,
    format_size,
    iter_tree_rows,
)
from ..ui_theme import PLAIN_THEME, UITheme

DEFAULT_WIDTH = 80
# Room kept for the icon, spacing and the size label.
NAME_WIDTH_RESERVE = 10
EMPTY_TREE_MESSAGE = "No files or directories found"
SHORT_SCAN_PERFORMANCE = "N/A (unstable, short duration)"


def should_use_color(mode: str, stream: TextIO | None = None) -> bool:
    """Resolve ``auto|always|never`` against whether ``stream`` is a TTY."""
    normalized = (mode or "auto").strip().lower()
    if normalized == "never":
        return False
    if normalized == "always":
        return True
    target = stream if stream is not None else sys.stdout
    try:
        return bool(target.isatty())
    except (AttributeError, ValueError):
        return False


def terminal_width(stream: TextIO | None = None) -> int:
    target = stream if stream is not None else sys.stdout
    try:
        if target.isatty():
            return max(1, shutil.get_terminal_size((DEFAULT_WIDTH, 24)).columns)
    except (AttributeError, ValueError):
        pass
    return DEFAULT_WIDTH


def fit_name(name: str, width: int, prefix: str) -> str:
    """Truncate ``name`` with ``...`` when it would overflow the terminal."""
    budget = width - len(prefix) - NAME_WIDTH_RESERVE
    if len(name) > budget and budget > 10:
        return name[: budget - 3] + "..."
    return name


def format_row(
    row: TreeRow,
    theme: UITheme = PLAIN_THEME,
    template: Template = DEFAULT_TEMPLATE,
    width: int = DEFAULT_WIDTH,
    show_icons: bool = True,
) -> str:
    entry = row.entry
    reset = theme.reset
    name = fit_name(entry.name, width, row.prefix)
    icon = ""
    if show_icons:
        icon = (template.dir_icon if entry.is_dir else template.file_icon) + " "
    branch = f"{theme.tree_branch}{row.prefix}{reset}" if row.prefix else ""
    if entry.is_dir:
        return f"{branch}{icon}{theme.tree_dir}{name}{reset}"
    size_label = f" {theme.tree_size}({format_size(entry.size)}){reset}"
    return f"{branch}{icon}{theme.tree_file}{name}{reset}{size_label}"


def render_tree_lines(
    entries: Sequence[Entry],
    *,
    theme: UITheme = PLAIN_THEME,
    glyphs: GlyphSet = UNICODE_GLYPHS,
    template: Template = DEFAULT_TEMPLATE,
    width: int = DEFAULT_WIDTH,
    show_icons: bool = True,
) -> list[str]:
    """Return printable console lines, one per entry."""
    if not entries:
        return [f"{theme.tree_empty}{EMPTY_TREE_MESSAGE}{theme.reset}"]
    return [
        format_row(row, theme=theme, template=template, width=width, show_icons=show_icons)
        for row in iter_tree_rows(entries, glyphs)
    ]


def print_tree(
    entries: Sequence[Entry],
    stream: TextIO | None = None,
    *,
    theme: UITheme = PLAIN_THEME,
    glyphs: GlyphSet = UNICODE_GLYPHS,
    template: Template = DEFAULT_TEMPLATE,
    width: int | None = None,
    show_icons: bool = True,
) -> None:
    out = stream if stream is not None else sys.stdout
    lines = render_tree_lines(
        entries,
        theme=theme,
        glyphs=glyphs,
        template=template,
        width=width if width is not None else terminal_width(out),
        show_icons=show_icons,
    )
    for line in lines:
        out.write(line + "\n")


def render_metrics_lines(metrics: Metrics, theme: UITheme = PLAIN_THEME) -> list[str]:
    reset = theme.reset
    lines = [
        "",
        f"{theme.metrics_heading}📊 Scan Metrics{reset}",
        f"   Files:       {theme.metrics_files}{metrics.total_files}{reset}",
        f"   Directories: {theme.metrics_dirs}{metrics.total_dirs}{reset}",
        f"   Total Size:  {theme.metrics_size}{format_size(metrics.total_size)}{reset}",
        f"   Max Depth:   {theme.metrics_depth}{metrics.max_depth}{reset}",
        f"   Duration:    {theme.metrics_duration}{format_duration(metrics.scan_duration)}{reset}",
    ]
    if metrics.files_per_second is None:
        lines.append(f"   Performance: {theme.metrics_rate}{SHORT_SCAN_PERFORMANCE}{reset}")
    elif metrics.files_per_second > 0:
        lines.append(f"   Performance: {theme.metrics_rate}{metrics.files_per_second:.1f} files/sec{reset}")
    return lines


def print_metrics(metrics: Metrics, stream: TextIO | None = None, theme: UITheme = PLAIN_THEME) -> None:
    out = stream if stream is not None else sys.stdout
    for line in render_metrics_lines(metrics, theme):
        out.write(line + "\n")


__all__ = [
    "EMPTY_TREE_MESSAGE",
    "SHORT_SCAN_PERFORMANCE",
    "should_use_color",
    "terminal_width",
    "fit_name",
    "format_row",
    "render_tree_lines",
    "print_tree",
    "render_metrics_lines",
    "print_metrics",
]
