"""UI theme definitions and selection helpers.

Themes are ANSI palettes for tree rows, the header, and status messages.
``--no-color`` maps to the plain theme, which emits no escapes at all.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    reset: str
    reverse: str
    heading: str
    dim: str
    tree_marker: str
    tree_dir: str
    tree_file: str
    tree_cursor: str
    tree_selected: str
    tree_check: str
    query: str
    query_hint: str
    help_key: str
    message_ok: str
    message_error: str


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    reverse="\033[7m",
    heading="\033[1m",
    dim="\033[2;38;5;250m",
    tree_marker="\033[38;5;44m",
    tree_dir="\033[1;34m",
    tree_file="\033[38;5;252m",
    tree_cursor="\033[1;32m",
    tree_selected="\033[36m",
    tree_check="\033[38;5;81m",
    query="\033[1;38;5;81m",
    query_hint="\033[2;3;38;5;250m",
    help_key="\033[32m",
    message_ok="\033[38;5;252m",
    message_error="\033[1;31m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    reset="\033[0m",
    reverse="\033[7m",
    heading="\033[1;38;5;45m",
    dim="\033[2;38;5;110m",
    tree_marker="\033[38;5;39m",
    tree_dir="\033[1;38;5;45m",
    tree_file="\033[38;5;252m",
    tree_cursor="\033[1;38;5;84m",
    tree_selected="\033[38;5;117m",
    tree_check="\033[38;5;45m",
    query="\033[1;38;5;45m",
    query_hint="\033[2;3;38;5;110m",
    help_key="\033[38;5;153m",
    message_ok="\033[38;5;153m",
    message_error="\033[1;38;5;203m",
)

MONO_THEME = UITheme(
    name="mono",
    reset="\033[0m",
    reverse="\033[7m",
    heading="\033[1m",
    dim="\033[2m",
    tree_marker="",
    tree_dir="\033[1m",
    tree_file="",
    tree_cursor="\033[7m",
    tree_selected="\033[4m",
    tree_check="\033[1m",
    query="\033[1m",
    query_hint="\033[2m",
    help_key="\033[1m",
    message_ok="",
    message_error="\033[1m",
)

PLAIN_THEME = UITheme(
    name="plain",
    reset="",
    reverse="",
    heading="",
    dim="",
    tree_marker="",
    tree_dir="",
    tree_file="",
    tree_cursor="",
    tree_selected="",
    tree_check="",
    query="",
    query_hint="",
    help_key="",
    message_ok="",
    message_error="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
    MONO_THEME.name: MONO_THEME,
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


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "MONO_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
]
