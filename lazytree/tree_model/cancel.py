"""Cooperative cancellation handle polled by the walk before every node."""

from __future__ import annotations

import contextlib
import signal
import threading
from collections.abc import Iterator

from .errors import WalkCancelled


class CancellationToken:
    """Thread-safe one-shot cancellation flag.

    Signal handlers, UI threads or tests call ``cancel``; the walk polls
    ``raise_if_cancelled`` and never gets interrupted mid-node.
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise WalkCancelled()


@contextlib.contextmanager
def cancel_on_interrupt(
    token: CancellationToken,
    signals: tuple[signal.Signals, ...] = (signal.SIGINT, signal.SIGTERM),
) -> Iterator[CancellationToken]:
    """Route interrupt signals to ``token`` for the duration of the block.

    Only the main thread may install handlers; elsewhere the block runs with
    the existing handlers untouched.
    """
    if threading.current_thread() is not threading.main_thread():
        yield token
        return

    def _handler(_signum: int, _frame: object) -> None:
        token.cancel()

    previous: list[tuple[signal.Signals, object]] = []
    try:
        for signum in signals:
            previous.append((signum, signal.getsignal(signum)))
            signal.signal(signum, _handler)
        yield token
    finally:
        for signum, handler in reversed(previous):
            signal.signal(signum, handler)


__all__ = ["CancellationToken", "cancel_on_interrupt"]
