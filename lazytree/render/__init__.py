"""Console output for tree rows and scan metrics."""

from __future__ import annotations

from .console import (
    EMPTY_TREE_MESSAGE,
    SHORT_SCAN_PERFORMANCE,
    fit_name,
    format_row,
    print_metrics,
    print_tree,
    render_metrics_lines,
    render_tree_lines,
    should_use_color,
    terminal_width,
)

__all__ = [
    "EMPTY_TREE_MESSAGE",
    "SHORT_SCAN_PERFORMANCE",
    "fit_name",
    "format_row",
    "print_metrics",
    "print_tree",
    "render_metrics_lines",
    "render_tree_lines",
    "should_use_color",
    "terminal_width",
]
