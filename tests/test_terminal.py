"""Tests for terminal mode transitions."""

from __future__ import annotations

import unittest
from unittest import mock

from ssmssh.terminal import TerminalController


class TerminalControllerTests(unittest.TestCase):
    def _controller(self, termios_mock) -> TerminalController:
        termios_mock.tcgetattr.return_value = ["saved"]
        return TerminalController(stdin_fd=5, stdout_fd=6)

    def test_enable_tui_mode_enters_raw_alt_screen(self) -> None:
        with mock.patch("ssmssh.terminal.termios") as termios_mock, mock.patch(
            "ssmssh.terminal.tty.setraw"
        ) as setraw_mock, mock.patch("ssmssh.terminal.os.write") as write_mock:
            controller = self._controller(termios_mock)
            controller.enable_tui_mode()

        setraw_mock.assert_called_once_with(5, termios_mock.TCSAFLUSH)
        write_mock.assert_called_once_with(6, b"\x1b[?1049h\x1b[?25l")

    def test_disable_tui_mode_restores_saved_state(self) -> None:
        with mock.patch("ssmssh.terminal.termios") as termios_mock, mock.patch(
            "ssmssh.terminal.os.write"
        ) as write_mock:
            controller = self._controller(termios_mock)
            controller.disable_tui_mode()

        write_mock.assert_called_once_with(6, b"\x1b[?25h\x1b[?1049l")
        termios_mock.tcsetattr.assert_called_once_with(5, termios_mock.TCSAFLUSH, ["saved"])

    def test_raw_mode_restores_terminal_when_body_raises(self) -> None:
        with mock.patch("ssmssh.terminal.termios") as termios_mock, mock.patch(
            "ssmssh.terminal.tty.setraw"
        ), mock.patch("ssmssh.terminal.os.write") as write_mock:
            controller = self._controller(termios_mock)
            with self.assertRaises(RuntimeError):
                with controller.raw_mode():
                    raise RuntimeError("boom")

        self.assertEqual(
            [call.args[1] for call in write_mock.call_args_list],
            [b"\x1b[?1049h\x1b[?25l", b"\x1b[?25h\x1b[?1049l"],
        )
        termios_mock.tcsetattr.assert_called_once()


if __name__ == "__main__":
    unittest.main()
