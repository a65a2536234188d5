"""Terminal control helpers for the picker session.

Owns raw-mode lifecycle and the inline viewport: a fixed block of rows
reserved below the shell prompt that is repainted in place and cleared on
exit, leaving the rest of the scrollback untouched.
"""

from __future__ import annotations

import contextlib
import os
import termios
import tty

from .render import Frame

TTY_PATH = "/dev/tty"
DEFAULT_SIZE = (80, 24)


def open_tty(path: str = TTY_PATH) -> int:
    """Open the controlling terminal for reading keys and painting frames."""
    return os.open(path, os.O_RDWR | os.O_NOCTTY)


class TerminalController:
    """Manage raw mode and in-place painting of an inline viewport."""

    def __init__(self, stdin_fd: int, stdout_fd: int, viewport_rows: int) -> None:
        """Capture tty state and bind input/output file descriptors."""
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self.viewport_rows = max(1, viewport_rows)
        self._saved_tty_state = termios.tcgetattr(stdin_fd)
        self._cursor_row = 0

    def size(self) -> tuple[int, int]:
        """Return ``(columns, lines)`` of the terminal, with a fallback."""
        try:
            size = os.get_terminal_size(self.stdout_fd)
        except OSError:
            return DEFAULT_SIZE
        return size.columns, size.lines

    def _write(self, payload: str) -> None:
        data = payload.encode("utf-8")
        while data:
            written = os.write(self.stdout_fd, data)
            data = data[written:]

    def _move_to_viewport_top(self) -> str:
        up = f"\x1b[{self._cursor_row}A" if self._cursor_row > 0 else ""
        self._cursor_row = 0
        return f"\r{up}"

    def enable_tui_mode(self) -> None:
        """Enter raw mode and reserve the inline viewport below the cursor."""
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        # Scroll enough blank lines into view, then return to the first of them.
        reserve = self.viewport_rows - 1
        self._write("\x1b[?25l" + "\r\n" * reserve + (f"\x1b[{reserve}A" if reserve else "") + "\r")
        self._cursor_row = 0

    def disable_tui_mode(self) -> None:
        """Clear the viewport, show the cursor, and restore saved tty state."""
        self._write(self._move_to_viewport_top() + "\x1b[J\x1b[?25h")
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)

    def draw(self, frame: Frame) -> None:
        """Repaint the viewport with ``frame`` and place the text cursor."""
        rows = frame.rows[: self.viewport_rows]
        out: list[str] = ["\x1b[?25l", self._move_to_viewport_top()]
        for idx, row in enumerate(rows):
            out.append("\x1b[2K")
            out.append(row)
            if idx < len(rows) - 1:
                out.append("\r\n")
        self._cursor_row = max(0, len(rows) - 1)
        if frame.cursor is not None:
            row, col = frame.cursor
            row = max(0, min(row, self._cursor_row))
            if self._cursor_row > row:
                out.append(f"\x1b[{self._cursor_row - row}A")
            out.append("\r")
            if col > 0:
                out.append(f"\x1b[{col}C")
            out.append("\x1b[?25h")
            self._cursor_row = row
        self._write("".join(out))

    @contextlib.contextmanager
    def raw_mode(self):
        """Context manager that brackets code with TUI enter/exit calls."""
        try:
            self.enable_tui_mode()
            yield
        finally:
            self.disable_tui_mode()
