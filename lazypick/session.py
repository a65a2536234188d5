"""Interactive picker session: state machine and event loop.

``PickerSession`` owns the query buffer, the filter pipeline, and the
selection model and maps key tokens onto them. ``run_session`` wires a session
to a terminal: refresh, render, block for a key, dispatch, until the user
confirms a candidate or cancels.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from .filter_pipeline import FilterPipeline
from .input_buffer import InputBuffer
from .keys import is_printable_key, read_key
from .matcher import Matcher, match_items
from .render import RenderContext, list_view_rows, render_frame
from .selection import SelectionModel
from .terminal import TerminalController
from .ui_theme import DEFAULT_THEME, UITheme

logger = logging.getLogger(__name__)

RUNNING = "running"
CONFIRMED = "confirmed"
CANCELLED = "cancelled"

CANCEL_KEYS = frozenset({"ESC", "CTRL_C"})


@dataclass
class PickerSession:
    """Single always-editing picker session over a frozen candidate set."""

    candidates: Sequence[str]
    matcher: Matcher = match_items
    buffer: InputBuffer = field(default_factory=InputBuffer)
    selection: SelectionModel = field(default_factory=SelectionModel)
    status: str = RUNNING
    result: str | None = None
    pipeline: FilterPipeline = field(init=False)

    def __post_init__(self) -> None:
        self.candidates = tuple(self.candidates)
        self.pipeline = FilterPipeline(self.candidates, self.matcher)
        self.refresh()

    @property
    def items(self) -> list[str]:
        return self.pipeline.items

    @property
    def running(self) -> bool:
        return self.status == RUNNING

    def refresh(self) -> bool:
        """Re-filter when the query changed; a rebuilt list resets the selection."""
        if not self.pipeline.refresh(self.buffer.text):
            return False
        self.selection.reset(len(self.pipeline.items))
        return True

    def _query_edited(self) -> None:
        self.pipeline.mark_dirty()
        self.refresh()

    def confirm(self) -> bool:
        """Finish with the selected candidate; no-op while nothing is selected."""
        choice = self.selection.confirm(self.pipeline.items)
        if choice is None:
            logger.debug("confirm ignored: no candidate selected")
            return False
        self.status = CONFIRMED
        self.result = choice
        return True

    def cancel(self) -> None:
        self.status = CANCELLED
        self.result = None

    def handle_key(self, key: str) -> bool:
        """Apply one key token; return whether the frame needs repainting."""
        if not self.running:
            return False

        if key in CANCEL_KEYS:
            self.cancel()
            return True
        if key == "ENTER":
            return self.confirm()
        if key == "BACKSPACE":
            self.buffer.delete_before_cursor()
            self._query_edited()
            return True
        if key == "LEFT":
            self.buffer.move_left()
            return True
        if key == "RIGHT":
            self.buffer.move_right()
            return True
        if key == "UP":
            return self.selection.select_previous()
        if key == "DOWN":
            return self.selection.select_next()
        if is_printable_key(key):
            self.buffer.insert(key)
            self._query_edited()
            return True
        return False

    def render_context(self, width: int, height: int, theme: UITheme = DEFAULT_THEME) -> RenderContext:
        """Snapshot state for the renderer after scrolling the selection into view."""
        self.selection.scroll_into_view(list_view_rows(height))
        return RenderContext(
            query=self.buffer.text,
            cursor=self.buffer.cursor,
            items=self.pipeline.items,
            selected=self.selection.selected,
            list_start=self.selection.list_start,
            total=len(self.candidates),
            width=width,
            height=height,
            editing=True,
            theme=theme,
        )


def run_session(
    session: PickerSession,
    terminal: TerminalController,
    key_fd: int,
    theme: UITheme = DEFAULT_THEME,
    *,
    read: Callable[[int], str] = read_key,
) -> str | None:
    """Drive ``session`` on ``terminal`` until it stops; return the choice.

    The terminal is restored before this returns or raises. EOF on the key
    source cancels the session.
    """
    with terminal.raw_mode():
        while session.running:
            session.refresh()
            columns, _lines = terminal.size()
            context = session.render_context(columns, terminal.viewport_rows, theme)
            terminal.draw(render_frame(context))
            key = read(key_fd)
            if key == "":
                logger.debug("key source closed; cancelling")
                session.cancel()
                break
            session.handle_key(key)
    logger.debug("session finished: %s", session.status)
    return session.result
