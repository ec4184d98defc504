"""Single-pass, cancellable pre-order directory walk.

The walk enumerates children with ``os.scandir`` in name order, filters each
node (hidden, depth, ignore patterns) before descending, and emits a flat
depth-annotated entry list. Subtrees of filtered directories are never read.

Two error policies exist for nodes below the root:

- ``WalkMode.LENIENT`` (default): unreadable nodes are logged and omitted, an
  unreadable directory is emitted without its contents.
- ``WalkMode.STRICT``: the first unreadable node aborts the walk with
  ``WalkPermissionError`` or ``WalkIOError``.

Root failures always abort regardless of mode.
"""

from __future__ import annotations

import logging
import os
import stat as stat_module
import time
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from pathlib import Path

from .cancel import CancellationToken
from .errors import (
    RootNotDirectoryError,
    RootNotFoundError,
    WalkCancelled,
    WalkError,
    WalkIOError,
    WalkPermissionError,
)
from .metrics import MetricsCollector
from .patterns import compile_ignore_patterns
from .types import Entry, EntryMetadata, ScanOptions, WalkMode, WalkResult

_LOGGER = logging.getLogger(__name__)


@dataclass
class _Frame:
    """Pending children of one directory plus the values shared by all of them."""

    children: Iterator[os.DirEntry[str]]
    rel_prefix: str
    depth: int


def _node_error(path: Path | str, exc: OSError) -> WalkError:
    if isinstance(exc, PermissionError):
        return WalkPermissionError(path, exc)
    return WalkIOError(path, exc)


def _stat_root(root: Path) -> os.stat_result:
    try:
        return os.stat(root)
    except FileNotFoundError as exc:
        raise RootNotFoundError(root) from exc
    except PermissionError as exc:
        raise WalkPermissionError(root, exc) from exc
    except OSError as exc:
        raise WalkIOError(root, exc) from exc


def _scan_sorted(directory: Path | str) -> list[os.DirEntry[str]]:
    with os.scandir(directory) as entries:
        return sorted(entries, key=lambda item: item.name)


def _read_metadata(child: os.DirEntry[str]) -> EntryMetadata:
    info = child.stat(follow_symlinks=False)
    is_dir = stat_module.S_ISDIR(info.st_mode)
    return EntryMetadata(
        size=0 if is_dir else int(info.st_size),
        is_dir=is_dir,
        mtime_ns=int(info.st_mtime_ns),
    )


def walk(
    root: Path | str,
    options: ScanOptions | None = None,
    token: CancellationToken | None = None,
    *,
    on_entry: Callable[[Entry], None] | None = None,
    logger: logging.Logger | None = None,
    match_prefix: str = "",
) -> WalkResult:
    """Walk ``root`` and return its entries and metrics.

    ``on_entry`` is called for each emitted non-root entry (progress
    side-channel). ``match_prefix`` is prepended to each relative path before
    ignore matching, so a walk of a sub-directory can honor patterns written
    against an outer root. Raises ``WalkCancelled`` when ``token`` is cancelled before
    the walk finishes; no partial result is returned.
    """
    log = logger or _LOGGER
    options = options or ScanOptions()
    strict = options.mode is WalkMode.STRICT
    started_at = time.perf_counter()
    collector = MetricsCollector(started_at)

    root_path = Path(root).expanduser().resolve()
    log.debug(
        "Starting directory walk of %s (mode=%s, max_depth=%d, show_hidden=%s)",
        root_path,
        options.mode.value,
        options.max_depth,
        options.show_hidden,
    )
    root_stat = _stat_root(root_path)
    if not stat_module.S_ISDIR(root_stat.st_mode):
        raise RootNotDirectoryError(root_path)

    matcher = compile_ignore_patterns(options.ignore_patterns)
    for problem in matcher.invalid:
        log.warning("%s (pattern skipped)", problem)

    root_entry = Entry(
        path=root_path.name or str(root_path),
        metadata=EntryMetadata(size=0, is_dir=True, mtime_ns=int(root_stat.st_mtime_ns)),
        depth=0,
        absolute_path=root_path,
    )
    entries: list[Entry] = [root_entry]
    collector.add(root_entry)

    try:
        root_children = _scan_sorted(root_path)
    except OSError as exc:
        raise _node_error(root_path, exc) from exc

    max_depth = options.max_depth
    stack: list[_Frame] = [_Frame(children=iter(root_children), rel_prefix="", depth=1)]
    try:
        while stack:
            frame = stack[-1]
            child = next(frame.children, None)
            if child is None:
                stack.pop()
                continue

            if token is not None:
                token.raise_if_cancelled()

            name = child.name
            depth = frame.depth
            if not options.show_hidden and name.startswith("."):
                continue
            if max_depth > 0 and depth > max_depth:
                continue

            rel_path = frame.rel_prefix + name
            if matcher:
                pattern = matcher.first_match(match_prefix + rel_path)
                if pattern is not None:
                    log.debug("Ignoring %s (matched %r)", rel_path, pattern)
                    continue

            try:
                metadata = _read_metadata(child)
            except OSError as exc:
                if strict:
                    raise _node_error(child.path, exc) from exc
                log.debug("Skipping unreadable entry %s: %s", child.path, exc)
                continue

            entry = Entry(
                path=rel_path,
                metadata=metadata,
                depth=depth,
                absolute_path=Path(child.path),
            )
            entries.append(entry)
            collector.add(entry)
            if on_entry is not None:
                on_entry(entry)

            if not metadata.is_dir or (max_depth > 0 and depth >= max_depth):
                continue
            try:
                grandchildren = _scan_sorted(child.path)
            except OSError as exc:
                if strict:
                    raise _node_error(child.path, exc) from exc
                log.debug("Cannot list directory %s: %s", child.path, exc)
                continue
            stack.append(_Frame(children=iter(grandchildren), rel_prefix=rel_path + "/", depth=depth + 1))
    except WalkCancelled:
        log.warning("Directory walk cancelled by user")
        raise
    except WalkError as exc:
        log.error("Directory walk failed: %s", exc)
        raise

    metrics = collector.finish()
    log.info("Found %d entries in %s", len(entries) - 1, root_path)
    return WalkResult(root=root_path, entries=tuple(entries), metrics=metrics)


def walk_entries(root: Path | str, options: ScanOptions | None = None) -> tuple[Entry, ...]:
    """Walk without cancellation support and return only the entries."""
    return walk(root, options).entries


__all__ = ["walk", "walk_entries"]
