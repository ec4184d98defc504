"""Tests for explorer screen painting."""

from __future__ import annotations

import os
import unittest
from unittest import mock

from lazytree.explorer.terminal import TerminalController


class TerminalDrawTests(unittest.TestCase):
    def test_draw_repaints_from_home_and_clears_tail(self) -> None:
        read_fd, write_fd = os.pipe()
        try:
            with mock.patch("lazytree.explorer.terminal.termios.tcgetattr", return_value=[]):
                terminal = TerminalController(0, write_fd)
            terminal.draw(["header", "row", "status"])
            payload = os.read(read_fd, 4096).decode("utf-8")
        finally:
            os.close(read_fd)
            os.close(write_fd)

        self.assertTrue(payload.startswith("\x1b[Hheader\x1b[0m\x1b[K\r\n"))
        self.assertIn("row\x1b[0m\x1b[K\r\n", payload)
        self.assertTrue(payload.endswith("status\x1b[0m\x1b[K\x1b[J"))

    def test_raw_mode_restores_terminal_on_error(self) -> None:
        with mock.patch("lazytree.explorer.terminal.termios.tcgetattr", return_value=["saved"]):
            terminal = TerminalController(0, 1)
        with mock.patch.object(terminal, "enable_tui_mode") as enable, mock.patch.object(
            terminal, "disable_tui_mode"
        ) as disable:
            with self.assertRaises(RuntimeError):
                with terminal.raw_mode():
                    raise RuntimeError("boom")

        enable.assert_called_once()
        disable.assert_called_once()


if __name__ == "__main__":
    unittest.main()
