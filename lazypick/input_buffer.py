"""Query text buffer with a character-unit cursor.

The cursor counts code points, never encoded bytes, so multi-byte
characters are inserted and deleted as whole units.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class InputBuffer:
    """Editable query string plus cursor offset in ``[0, len(text)]``."""

    text: str = ""
    cursor: int = 0

    def _clamp_cursor(self, position: int) -> int:
        return max(0, min(position, len(self.text)))

    def insert(self, char: str) -> None:
        """Insert ``char`` at the cursor and advance past it."""
        cursor = self._clamp_cursor(self.cursor)
        self.text = self.text[:cursor] + char + self.text[cursor:]
        self.cursor = self._clamp_cursor(cursor + len(char))

    def delete_before_cursor(self) -> bool:
        """Remove the character left of the cursor; return whether text changed."""
        cursor = self._clamp_cursor(self.cursor)
        if cursor == 0:
            return False
        self.text = self.text[: cursor - 1] + self.text[cursor:]
        self.cursor = cursor - 1
        return True

    def move_left(self) -> None:
        self.cursor = self._clamp_cursor(self.cursor - 1)

    def move_right(self) -> None:
        self.cursor = self._clamp_cursor(self.cursor + 1)
