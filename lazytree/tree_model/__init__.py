"""Traversal-and-topology core for directory trees.

This package contains the non-UI primitives every output shares:
- entry/metrics/walk-result datatypes
- the cancellable single-pass directory walk with hidden/depth/ignore filters
- glob ignore-pattern compilation
- connector-prefix derivation from the flat depth-annotated entry list
- metrics reduction and size/duration formatting
"""

from __future__ import annotations

from .cancel import CancellationToken, cancel_on_interrupt
from .errors import (
    InvalidPatternError,
    RootNotDirectoryError,
    RootNotFoundError,
    WalkCancelled,
    WalkError,
    WalkIOError,
    WalkPermissionError,
)
from .metrics import MetricsCollector, files_per_second, format_duration, format_size
from .patterns import CompiledGlob, IgnoreMatcher, compile_glob, compile_ignore_patterns
from .topology import (
    ASCII_GLYPHS,
    UNICODE_GLYPHS,
    GlyphSet,
    PrefixDeriver,
    TreeRow,
    derive_prefix,
    is_last_sibling,
    iter_tree_rows,
)
from .types import Entry, EntryMetadata, Metrics, ScanOptions, WalkMode, WalkResult
from .walker import walk, walk_entries

__all__ = [
    "Entry",
    "EntryMetadata",
    "Metrics",
    "ScanOptions",
    "WalkMode",
    "WalkResult",
    "CancellationToken",
    "cancel_on_interrupt",
    "WalkError",
    "RootNotFoundError",
    "RootNotDirectoryError",
    "WalkPermissionError",
    "WalkIOError",
    "WalkCancelled",
    "InvalidPatternError",
    "CompiledGlob",
    "IgnoreMatcher",
    "compile_glob",
    "compile_ignore_patterns",
    "GlyphSet",
    "UNICODE_GLYPHS",
    "ASCII_GLYPHS",
    "TreeRow",
    "is_last_sibling",
    "PrefixDeriver",
    "derive_prefix",
    "iter_tree_rows",
    "MetricsCollector",
    "files_per_second",
    "format_size",
    "format_duration",
    "walk",
    "walk_entries",
]
