"""Background spinner reporting walk progress on stderr.

The walk only bumps a counter through ``advance``; a daemon thread redraws the
status line on its own schedule and stops on ``stop`` or cancellation.
"""

from __future__ import annotations

import threading
from typing import TextIO

from ..tree_model import CancellationToken, Entry

SPINNER_FRAMES = "⠋⠙⠹⠸⠼⠴⠦⠧⠇⠏"
REFRESH_SECONDS = 0.1


class ScanProgress:
    """Indeterminate progress indicator; observes the walk, never blocks it."""

    def __init__(
        self,
        stream: TextIO,
        token: CancellationToken | None = None,
        description: str = "Scanning files",
        refresh_seconds: float = REFRESH_SECONDS,
    ) -> None:
        self.stream = stream
        self.token = token
        self.description = description
        self.refresh_seconds = refresh_seconds
        self.count = 0
        self._frame = 0
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    def advance(self, _entry: Entry | None = None) -> None:
        self.count += 1

    def status_line(self) -> str:
        frame = SPINNER_FRAMES[self._frame % len(SPINNER_FRAMES)]
        return f"{self.description} {frame} {self.count} entries"

    def _draw(self, text: str) -> None:
        try:
            self.stream.write("\r\033[2K" + text)
            self.stream.flush()
        except (OSError, ValueError):
            self._stop.set()

    def _run(self) -> None:
        while not self._stop.wait(self.refresh_seconds):
            if self.token is not None and self.token.cancelled:
                break
            self._frame += 1
            self._draw(self.status_line())

    def start(self) -> ScanProgress:
        if self._thread is not None:
            return self
        self._draw(self.status_line())
        self._thread = threading.Thread(target=self._run, name="lazytree-scan-progress", daemon=True)
        self._thread.start()
        return self

    def stop(self) -> None:
        """Stop redrawing and clear the status line."""
        self._stop.set()
        thread = self._thread
        if thread is not None:
            thread.join(timeout=1.0)
            self._thread = None
            self._draw("")

    def __enter__(self) -> ScanProgress:
        return self.start()

    def __exit__(self, *_exc_info: object) -> None:
        self.stop()


__all__ = ["ScanProgress", "SPINNER_FRAMES"]
