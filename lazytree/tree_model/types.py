"""Domain datatypes produced by a directory walk."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from pathlib import Path


class WalkMode(enum.Enum):
    """Policy for per-node filesystem errors met below the scan root."""

    LENIENT = "lenient"
    STRICT = "strict"

    @classmethod
    def parse(cls, value: str | WalkMode) -> WalkMode:
        if isinstance(value, WalkMode):
            return value
        return cls(str(value).strip().lower())


@dataclass(frozen=True)
class EntryMetadata:
    """Stat snapshot captured once when the node is visited."""

    size: int
    is_dir: bool
    mtime_ns: int | None = None


@dataclass(frozen=True)
class Entry:
    """One visited filesystem node.

    ``path`` is the forward-slash path relative to the scan root, except for the
    root entry itself which carries the root's base name. ``depth`` counts path
    components below the root (root is ``0``).
    """

    path: str
    metadata: EntryMetadata
    depth: int
    absolute_path: Path | None = None

    @property
    def name(self) -> str:
        if self.depth == 0:
            return self.path
        return self.path.rsplit("/", 1)[-1]

    @property
    def is_dir(self) -> bool:
        return self.metadata.is_dir

    @property
    def size(self) -> int:
        return self.metadata.size


@dataclass(frozen=True)
class Metrics:
    """Aggregate counters observed during one walk."""

    total_files: int = 0
    total_dirs: int = 0
    total_size: int = 0
    max_depth: int = 0
    scan_duration: float = 0.0
    files_per_second: float | None = None


@dataclass(frozen=True)
class ScanOptions:
    """Filters applied while walking; ``max_depth <= 0`` means unlimited."""

    show_hidden: bool = False
    max_depth: int = 0
    ignore_patterns: tuple[str, ...] = ()
    mode: WalkMode = WalkMode.LENIENT


@dataclass(frozen=True)
class WalkResult:
    """Ordered pre-order entries plus the metrics snapshot of the same pass."""

    root: Path
    entries: tuple[Entry, ...] = ()
    metrics: Metrics = field(default_factory=Metrics)


__all__ = [
    "WalkMode",
    "EntryMetadata",
    "Entry",
    "Metrics",
    "ScanOptions",
    "WalkResult",
]
