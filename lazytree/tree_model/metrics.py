"""Metrics reduction fed by the walk loop, plus size/duration formatting."""

from __future__ import annotations

import time

from .types import Entry, Metrics

# Below this the elapsed time is too noisy for a meaningful files/second figure.
MIN_RATE_DURATION_SECONDS = 0.010


class MetricsCollector:
    """Accumulates counters for the entries a single walk emits.

    The root entry is added like any other entry but is not counted as a
    found file or directory.
    """

    def __init__(self, started_at: float | None = None) -> None:
        self.started_at = time.perf_counter() if started_at is None else started_at
        self.total_files = 0
        self.total_dirs = 0
        self.total_size = 0
        self.max_depth = 0

    def add(self, entry: Entry) -> None:
        if entry.depth > self.max_depth:
            self.max_depth = entry.depth
        if entry.depth == 0:
            return
        if entry.is_dir:
            self.total_dirs += 1
        else:
            self.total_files += 1
            self.total_size += entry.size

    def finish(self, finished_at: float | None = None) -> Metrics:
        end = time.perf_counter() if finished_at is None else finished_at
        duration = max(0.0, end - self.started_at)
        return Metrics(
            total_files=self.total_files,
            total_dirs=self.total_dirs,
            total_size=self.total_size,
            max_depth=self.max_depth,
            scan_duration=duration,
            files_per_second=files_per_second(self.total_files, duration),
        )


def files_per_second(file_count: int, duration: float) -> float | None:
    """Return the scan rate, or ``None`` when the scan was too short to measure."""
    if duration < MIN_RATE_DURATION_SECONDS:
        return None
    return file_count / duration


def format_size(size_bytes: int) -> str:
    kb = 1024
    mb = kb * 1024
    gb = mb * 1024
    if size_bytes >= gb:
        return f"{size_bytes / gb:.1f} GB"
    if size_bytes >= mb:
        return f"{size_bytes / mb:.1f} MB"
    if size_bytes >= kb:
        return f"{size_bytes / kb:.1f} KB"
    return f"{size_bytes} B"


def format_duration(seconds: float) -> str:
    """Human duration: microseconds below 1 ms, otherwise truncated milliseconds."""
    if seconds < 0.001:
        return f"{seconds * 1_000_000:.0f}µs"
    if seconds < 1.0:
        return f"{int(seconds * 1000)}ms"
    whole_ms = int(seconds * 1000)
    return f"{whole_ms / 1000:.3f}s"


__all__ = [
    "MIN_RATE_DURATION_SECONDS",
    "MetricsCollector",
    "files_per_second",
    "format_size",
    "format_duration",
]
