"""Frame composition for the inline picker viewport.

Turns session state into three stacked panes: a help line, a bordered query
box with the cursor position, and a bordered, scrollable candidate list.
Everything here is side-effect free; the terminal layer paints the result.
"""

from __future__ import annotations

import unicodedata
from dataclasses import dataclass, field

from .ansi import display_width, pad_ansi_line
from .matcher import match_positions
from .ui_theme import DEFAULT_THEME, UITheme

VIEWPORT_ROWS = 12
LIST_BOX_MIN_ROWS = 3
HELP_ROWS = 1
INPUT_BOX_ROWS = 3
HIGHLIGHT_SYMBOL = ">> "

HELP_SEGMENTS: tuple[tuple[str, bool], ...] = (
    ("Press ", False),
    ("Esc", True),
    (" to cancel, use ", False),
    ("Up/Down", True),
    (" to move, ", False),
    ("Enter", True),
    (" to confirm selection.", False),
)


@dataclass
class RenderContext:
    query: str
    cursor: int
    items: list[str]
    selected: int | None
    list_start: int = 0
    total: int = 0
    width: int = 80
    height: int = VIEWPORT_ROWS
    editing: bool = True
    theme: UITheme = DEFAULT_THEME


@dataclass
class Frame:
    """Rendered viewport rows and the zero-based ``(row, col)`` of the cursor."""

    rows: list[str] = field(default_factory=list)
    cursor: tuple[int, int] | None = None


@dataclass(frozen=True)
class Layout:
    """Which panes fit in a viewport and how many candidate rows remain.

    Short viewports drop the help line first, then the list borders, then
    the query box borders, so candidate rows stay visible for as long as
    possible.
    """

    help: bool
    query_box: bool
    list_box: bool
    list_rows: int


def layout_for(height: int) -> Layout:
    height = max(1, height)
    if height >= HELP_ROWS + INPUT_BOX_ROWS + LIST_BOX_MIN_ROWS:
        return Layout(True, True, True, height - HELP_ROWS - INPUT_BOX_ROWS - 2)
    if height >= INPUT_BOX_ROWS + LIST_BOX_MIN_ROWS:
        return Layout(False, True, True, height - INPUT_BOX_ROWS - 2)
    if height > INPUT_BOX_ROWS:
        return Layout(False, True, False, height - INPUT_BOX_ROWS)
    return Layout(False, False, False, height - 1)


def list_view_rows(height: int) -> int:
    """Return how many candidate rows fit in a viewport of ``height`` rows."""
    return layout_for(height).list_rows


def sanitize_text(text: str) -> str:
    """Replace control characters (except tabs) one-for-one so offsets survive."""
    return "".join(
        "\N{REPLACEMENT CHARACTER}" if ch != "\t" and unicodedata.category(ch) == "Cc" else ch
        for ch in text
    )


def help_line(theme: UITheme, editing: bool) -> str:
    if not editing:
        return ""
    parts: list[str] = []
    for text, is_key in HELP_SEGMENTS:
        style = theme.help_key if is_key else theme.help_text
        parts.append(f"{style}{text}{theme.reset}")
    return "".join(parts)


def _box_top(title: str, inner: int, theme: UITheme) -> str:
    title = title[:inner]
    fill = "─" * max(0, inner - display_width(title))
    return (
        f"{theme.border}┌{theme.reset}{theme.title}{title}{theme.reset}"
        f"{theme.border}{fill}┐{theme.reset}"
    )


def _box_bottom(inner: int, theme: UITheme) -> str:
    return f"{theme.border}└{'─' * inner}┘{theme.reset}"


def _box_row(content: str, inner: int, theme: UITheme) -> str:
    return f"{theme.border}│{theme.reset}{pad_ansi_line(content, inner)}{theme.border}│{theme.reset}"


def query_window(query: str, cursor: int, inner: int) -> tuple[int, int]:
    """Return ``(first_char, cursor_col)`` so the cursor stays inside the box.

    The cursor is a character offset; its column is the display width of the
    visible text before it.
    """
    cursor = max(0, min(cursor, len(query)))
    limit = max(0, inner - 1)
    first = 0
    while first < cursor and display_width(query[first:cursor]) > limit:
        first += 1
    return first, display_width(query[first:cursor])


def _highlight(text: str, positions: list[int], base: str, match: str, reset: str) -> str:
    if not positions or not match:
        return f"{base}{text}"
    marked = set(positions)
    out: list[str] = [base]
    for idx, ch in enumerate(text):
        if idx in marked:
            out.append(f"{match}{ch}{reset}{base}")
        else:
            out.append(ch)
    return "".join(out)


def format_item_row(
    index: int,
    item: str,
    *,
    selected: bool,
    query: str,
    inner: int,
    theme: UITheme,
) -> str:
    """Format one list row as ``"{index}: {item}"`` with selection and match styling."""
    label = sanitize_text(item)
    positions = match_positions(query, label)
    if selected:
        base = theme.selected_row
        body = _highlight(label, positions, base, theme.item_match, theme.reset)
        row = f"{base}{HIGHLIGHT_SYMBOL}{index}: {body}"
        return pad_ansi_line(row, inner) + theme.reset
    body = _highlight(label, positions, theme.item_text, theme.item_match, theme.reset)
    prefix = " " * len(HIGHLIGHT_SYMBOL)
    return f"{prefix}{theme.item_index}{index}:{theme.reset} {body}{theme.reset}"


def render_frame(context: RenderContext) -> Frame:
    """Compose the full viewport for ``context`` without touching the terminal."""
    theme = context.theme
    width = max(4, context.width)
    inner = width - 2
    layout = layout_for(context.height)

    rows: list[str] = []
    if layout.help:
        rows.append(pad_ansi_line(help_line(theme, context.editing), width))

    query_inner = inner if layout.query_box else width
    first, cursor_col = query_window(context.query, context.cursor, query_inner)
    query_row = f"{theme.query_text}{sanitize_text(context.query[first:])}{theme.reset}"
    cursor_col = min(cursor_col, max(0, query_inner - 1))
    if layout.query_box:
        rows.append(_box_top("query", inner, theme))
        cursor = (len(rows), 1 + cursor_col)
        rows.append(_box_row(query_row, inner, theme))
        rows.append(_box_bottom(inner, theme))
    else:
        cursor = (len(rows), cursor_col)
        rows.append(pad_ansi_line(query_row, width))
    if not context.editing:
        cursor = None

    item_inner = inner if layout.list_box else width
    start = max(0, context.list_start)
    visible = context.items[start : start + layout.list_rows]
    list_rows: list[str] = []
    for offset, item in enumerate(visible):
        index = start + offset
        list_rows.append(
            format_item_row(
                index,
                item,
                selected=index == context.selected,
                query=context.query,
                inner=item_inner,
                theme=theme,
            )
        )
    list_rows.extend("" for _ in range(layout.list_rows - len(visible)))

    if layout.list_box:
        rows.append(_box_top(f"items {len(context.items)}/{context.total}", inner, theme))
        rows.extend(_box_row(row, inner, theme) for row in list_rows)
        rows.append(_box_bottom(inner, theme))
    else:
        rows.extend(pad_ansi_line(row, width) for row in list_rows)

    return Frame(rows=rows, cursor=cursor)
