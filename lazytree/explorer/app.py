"""Explorer event loop: redraw, read one key, update state."""

from __future__ import annotations

import sys
from dataclasses import replace
from functools import partial
from pathlib import Path

from ..runtime.context import RunContext
from ..tree_model import Entry
from .input import read_key
from .preview import DEFAULT_STYLE, build_preview_lines
from .state import ExplorerState, render_screen
from .terminal import TerminalController

KEY_POLL_MS = 200


def make_directory_lister(context: RunContext, start: Path):
    """Return a lister that walks one directory level with the run's filters.

    Ignore patterns keep matching paths relative to ``start``, so a pattern such
    as ``b/*`` still hides the contents of ``b`` after the user opens it.
    """
    base = start.expanduser().resolve()

    def list_directory(directory: Path, show_hidden: bool) -> tuple[Entry, ...]:
        options = replace(context.scan_options(), show_hidden=show_hidden, max_depth=1)
        try:
            relative = directory.expanduser().resolve().relative_to(base)
        except ValueError:
            relative = Path()
        prefix = "" if relative == Path() else relative.as_posix() + "/"
        return context.walk(directory, options=options, match_prefix=prefix).entries

    return list_directory


def run_explorer(
    context: RunContext,
    path: Path,
    style: str = DEFAULT_STYLE,
    no_color: bool = False,
    stdin_fd: int | None = None,
    stdout_fd: int | None = None,
) -> None:
    """Run the interactive explorer until the user quits or the run is cancelled.

    The first listing happens before raw mode is entered so root errors
    propagate to the caller as ordinary walk errors.
    """
    list_directory = make_directory_lister(context, path)
    state = ExplorerState(
        path,
        list_directory,
        build_preview=partial(build_preview_lines, style=style, no_color=no_color),
        show_hidden=context.config.show_hidden_files,
    )
    state.entries = tuple(list_directory(state.root, state.show_hidden))

    in_fd = sys.stdin.fileno() if stdin_fd is None else stdin_fd
    out_fd = sys.stdout.fileno() if stdout_fd is None else stdout_fd
    terminal = TerminalController(in_fd, out_fd)
    context.logger.info("Starting interactive mode for %s", state.root)
    with terminal.raw_mode():
        while state.running and not context.token.cancelled:
            width, height = terminal.size()
            terminal.draw(render_screen(state, width, height, context.theme, context.template))
            key = read_key(in_fd, timeout_ms=KEY_POLL_MS)
            if not key:
                continue
            state.handle_key(key, page_size=max(1, height - 2))
    context.logger.info("Interactive mode finished")


__all__ = ["make_directory_lister", "run_explorer"]
