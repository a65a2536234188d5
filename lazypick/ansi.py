"""ANSI-aware text measurement and clipping for picker rows.

Measures terminal display width of plain and styled text, and trims styled
rows to a column budget without breaking escape sequences or wide chars.
"""

from __future__ import annotations

import re
import unicodedata

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
TAB_STOP = 8


def char_display_width(ch: str, col: int) -> int:
    """Return terminal column width for one character at visual column ``col``.

    Tabs expand to the next 8-column stop, combining marks consume no columns,
    and East Asian wide/fullwidth characters consume two.
    """
    if ch == "\t":
        return TAB_STOP - (col % TAB_STOP)
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def display_width(text: str) -> int:
    """Return the column width of plain ``text`` starting at column zero."""
    col = 0
    for ch in text:
        col += char_display_width(ch, col)
    return col


def ansi_display_width(text: str) -> int:
    return display_width(ANSI_ESCAPE_RE.sub("", text))


def clip_ansi_line(text: str, max_cols: int) -> str:
    """Trim a styled line to at most ``max_cols`` display columns.

    ANSI escape sequences are preserved verbatim and do not count toward width.
    Tabs are expanded into spaces so clipping aligns with rendered terminal cells.
    """
    if max_cols <= 0 or not text:
        return ""

    out: list[str] = []
    col = 0
    i = 0
    n = len(text)
    while i < n:
        if text[i] == "\x1b":
            match = ANSI_ESCAPE_RE.match(text, i)
            if match:
                out.append(match.group(0))
                i = match.end()
                continue
        if col >= max_cols:
            i += 1
            continue
        ch = text[i]
        w = char_display_width(ch, col)
        if ch == "\t":
            w = min(w, max_cols - col)
            out.append(" " * w)
            col += w
            i += 1
            continue
        if col + w > max_cols:
            col = max_cols
            i += 1
            continue
        out.append(ch)
        col += w
        i += 1

    return "".join(out)


def pad_ansi_line(text: str, width: int) -> str:
    """Clip ``text`` to ``width`` columns and right-pad it with spaces."""
    clipped = clip_ansi_line(text, width)
    return clipped + " " * max(0, width - ansi_display_width(clipped))
