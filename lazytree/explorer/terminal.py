"""Terminal control helpers for the explorer session.

Owns raw-mode lifecycle, alternate-screen switching and full-screen redraws.
"""

from __future__ import annotations

import contextlib
import os
import shutil
import termios
import tty


class TerminalController:
    """Manage terminal mode transitions for the full-screen explorer."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        """Capture tty state and bind stdin/stdout file descriptors."""
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self._saved_tty_state = termios.tcgetattr(stdin_fd)

    def enable_tui_mode(self) -> None:
        """Enter raw alternate-screen mode with the cursor hidden."""
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        # Alternate screen, hidden cursor, no autowrap.
        os.write(self.stdout_fd, b"\x1b[?1049h\x1b[?25l\x1b[?7l")

    def disable_tui_mode(self) -> None:
        """Show the cursor and restore the main screen buffer and tty state."""
        os.write(self.stdout_fd, b"\x1b[?7h\x1b[?25h\x1b[?1049l")
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)

    def size(self) -> tuple[int, int]:
        """Return ``(columns, rows)`` with a conservative fallback."""
        size = shutil.get_terminal_size((80, 24))
        return max(20, size.columns), max(5, size.lines)

    def draw(self, lines: list[str]) -> None:
        """Repaint the whole screen from the top-left corner."""
        payload = "\x1b[H" + "".join(f"{line}\x1b[0m\x1b[K\r\n" for line in lines[:-1])
        if lines:
            payload += lines[-1] + "\x1b[0m\x1b[K"
        payload += "\x1b[J"
        os.write(self.stdout_fd, payload.encode("utf-8", errors="replace"))

    @contextlib.contextmanager
    def raw_mode(self):
        """Context manager that brackets code with TUI enter/exit calls."""
        try:
            self.enable_tui_mode()
            yield
        finally:
            self.disable_tui_mode()


__all__ = ["TerminalController"]
