"""Selection cursor over the filtered candidate list."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass


@dataclass
class SelectionModel:
    """Optional index into the filtered list plus its scroll window start.

    ``selected`` is ``None`` only while the filtered list is empty. Navigation
    saturates at both ends and never wraps.
    """

    selected: int | None = None
    length: int = 0
    list_start: int = 0

    def reset(self, length: int) -> None:
        """Point at the first row after the filtered list was rebuilt."""
        self.length = max(0, length)
        self.selected = 0 if self.length > 0 else None
        self.list_start = 0

    def select_next(self) -> bool:
        if self.selected is None:
            return False
        previous = self.selected
        self.selected = min(self.selected + 1, self.length - 1)
        return self.selected != previous

    def select_previous(self) -> bool:
        if self.selected is None:
            return False
        previous = self.selected
        self.selected = max(self.selected - 1, 0)
        return self.selected != previous

    def confirm(self, items: Sequence[str]) -> str | None:
        """Return the selected candidate, or ``None`` when nothing is selected."""
        if self.selected is None or not (0 <= self.selected < len(items)):
            return None
        return items[self.selected]

    def scroll_into_view(self, visible_rows: int) -> None:
        """Shift ``list_start`` so the selected row sits inside the window."""
        rows = max(1, visible_rows)
        if self.selected is None:
            self.list_start = 0
            return
        if self.selected < self.list_start:
            self.list_start = self.selected
        elif self.selected >= self.list_start + rows:
            self.list_start = self.selected - rows + 1
        self.list_start = max(0, min(self.list_start, max(0, self.length - rows)))
