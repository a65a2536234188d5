"""UI theme definitions and selection helpers.

Themes are ANSI palettes for the help line, query box, and candidate list.
The plain theme is used whenever color output is disabled.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by the renderer."""

    name: str
    reset: str
    help_text: str
    help_key: str
    border: str
    title: str
    query_text: str
    item_index: str
    item_text: str
    item_match: str
    selected_row: str


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    help_text="\033[2;38;5;250m",
    help_key="\033[1;38;5;229m",
    border="\033[38;5;240m",
    title="\033[1;38;5;81m",
    query_text="\033[33m",
    item_index="\033[38;5;244m",
    item_text="\033[38;5;252m",
    item_match="\033[1;38;5;214m",
    selected_row="\033[44;97m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    reset="\033[0m",
    help_text="\033[2;38;5;110m",
    help_key="\033[1;38;5;153m",
    border="\033[2;38;5;31m",
    title="\033[1;38;5;45m",
    query_text="\033[38;5;117m",
    item_index="\033[38;5;73m",
    item_text="\033[38;5;252m",
    item_match="\033[1;38;5;215m",
    selected_row="\033[48;5;24;97m",
)

PLAIN_THEME = UITheme(
    name="plain",
    reset="",
    help_text="",
    help_key="",
    border="",
    title="",
    query_text="",
    item_index="",
    item_text="",
    item_match="",
    selected_row="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]
