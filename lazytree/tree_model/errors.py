"""Exception taxonomy for walk failures and non-fatal pattern problems."""

from __future__ import annotations

from pathlib import Path


class WalkError(Exception):
    """Base class for every failure a walk can report."""


class RootNotFoundError(WalkError):
    def __init__(self, root: Path | str) -> None:
        super().__init__(f"Path not found: {root}")
        self.root = Path(root)


class RootNotDirectoryError(WalkError):
    def __init__(self, root: Path | str) -> None:
        super().__init__(f"Not a directory: {root}")
        self.root = Path(root)


class WalkPermissionError(WalkError):
    """Root (always) or a sub-node (strict mode only) could not be read."""

    def __init__(self, path: Path | str, cause: OSError | None = None) -> None:
        super().__init__(f"Permission denied: {path}")
        self.path = Path(path)
        self.cause = cause


class WalkIOError(WalkError):
    """Non-permission filesystem failure on a sub-node in strict mode."""

    def __init__(self, path: Path | str, cause: OSError) -> None:
        super().__init__(f"Cannot read {path}: {cause}")
        self.path = Path(path)
        self.cause = cause


class WalkCancelled(WalkError):
    """Cancellation was observed before the walk completed.

    This is a user-initiated outcome rather than a failure; callers should
    treat it as a clean exit.
    """

    def __init__(self, message: str = "Directory walk cancelled") -> None:
        super().__init__(message)


class InvalidPatternError(WalkError):
    """An ignore pattern could not be compiled; the pattern is skipped."""

    def __init__(self, pattern: str, reason: str) -> None:
        super().__init__(f"Invalid ignore pattern {pattern!r}: {reason}")
        self.pattern = pattern
        self.reason = reason


__all__ = [
    "WalkError",
    "RootNotFoundError",
    "RootNotDirectoryError",
    "WalkPermissionError",
    "WalkIOError",
    "WalkCancelled",
    "InvalidPatternError",
]
