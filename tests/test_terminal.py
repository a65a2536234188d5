"""Tests for terminal mode and inline-viewport control sequences.

Verifies raw-mode lifecycle safety and the escape payloads used to paint
and clear the viewport in place.
"""

from __future__ import annotations

import termios
import unittest
from unittest import mock

from lazypick.render import Frame
from lazypick.terminal import TerminalController


def _written(write_mock: mock.Mock) -> str:
    return b"".join(call.args[1] for call in write_mock.call_args_list).decode("utf-8")


def _capture_write(fd: int, data: bytes) -> int:
    return len(data)


class TerminalBehaviorTests(unittest.TestCase):
    def test_enable_and_disable_reserve_and_clear_inline_viewport(self) -> None:
        saved_state = [1, 2, 3]

        with mock.patch("lazypick.terminal.termios.tcgetattr", return_value=saved_state), mock.patch(
            "lazypick.terminal.tty.setraw"
        ) as setraw_mock, mock.patch(
            "lazypick.terminal.os.write", side_effect=_capture_write
        ) as write_mock, mock.patch("lazypick.terminal.termios.tcsetattr") as setattr_mock:
            controller = TerminalController(stdin_fd=3, stdout_fd=3, viewport_rows=4)
            controller.enable_tui_mode()
            controller.disable_tui_mode()

        setraw_mock.assert_called_once_with(3, termios.TCSAFLUSH)
        self.assertEqual(write_mock.call_args_list[0].args, (3, b"\x1b[?25l\r\n\r\n\r\n\x1b[3A\r"))
        self.assertEqual(write_mock.call_args_list[1].args, (3, b"\r\x1b[J\x1b[?25h"))
        setattr_mock.assert_called_once_with(3, termios.TCSAFLUSH, saved_state)

    def test_raw_mode_restores_terminal_after_exception(self) -> None:
        with mock.patch("lazypick.terminal.termios.tcgetattr", return_value=[0]):
            controller = TerminalController(stdin_fd=0, stdout_fd=1, viewport_rows=12)

        with mock.patch.object(controller, "enable_tui_mode") as enable_mock, mock.patch.object(
            controller, "disable_tui_mode"
        ) as disable_mock:
            with self.assertRaises(RuntimeError):
                with controller.raw_mode():
                    raise RuntimeError("boom")

        enable_mock.assert_called_once()
        disable_mock.assert_called_once()

    def test_draw_paints_rows_in_place_and_places_cursor(self) -> None:
        with mock.patch("lazypick.terminal.termios.tcgetattr", return_value=[0]), mock.patch(
            "lazypick.terminal.os.write", side_effect=_capture_write
        ) as write_mock:
            controller = TerminalController(stdin_fd=0, stdout_fd=1, viewport_rows=3)
            controller.draw(Frame(rows=["a", "b", "c"], cursor=(1, 4)))
            controller.draw(Frame(rows=["d", "e", "f"], cursor=None))

        first, second = (call.args[1].decode("utf-8") for call in write_mock.call_args_list)
        self.assertEqual(
            first,
            "\x1b[?25l\r\x1b[2Ka\r\n\x1b[2Kb\r\n\x1b[2Kc\x1b[1A\r\x1b[4C\x1b[?25h",
        )
        # The cursor was left on row 1, so the next frame first climbs one row.
        self.assertEqual(second, "\x1b[?25l\r\x1b[1A\x1b[2Kd\r\n\x1b[2Ke\r\n\x1b[2Kf")

    def test_draw_truncates_frames_taller_than_viewport(self) -> None:
        with mock.patch("lazypick.terminal.termios.tcgetattr", return_value=[0]), mock.patch(
            "lazypick.terminal.os.write", side_effect=_capture_write
        ) as write_mock:
            controller = TerminalController(stdin_fd=0, stdout_fd=1, viewport_rows=2)
            controller.draw(Frame(rows=["a", "b", "c"], cursor=None))

        self.assertNotIn("c", _written(write_mock))

    def test_size_falls_back_when_fd_is_not_a_terminal(self) -> None:
        with mock.patch("lazypick.terminal.termios.tcgetattr", return_value=[0]):
            controller = TerminalController(stdin_fd=0, stdout_fd=1, viewport_rows=12)

        with mock.patch("lazypick.terminal.os.get_terminal_size", side_effect=OSError("not a tty")):
            self.assertEqual(controller.size(), (80, 24))


if __name__ == "__main__":
    unittest.main()
