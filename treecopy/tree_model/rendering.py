"""Formatting helpers for tree rows."""

from __future__ import annotations

from ..ui_theme import DEFAULT_THEME, UITheme
from .selection import Selection, is_selected
from .types import Node


def highlight_substring(text: str, query: str, theme: UITheme | None = None) -> str:
    """Highlight first case-insensitive substring match in ``text``."""
    if not query:
        return text
    active_theme = theme or DEFAULT_THEME
    if not active_theme.reverse:
        return text
    lowered = query.lower()
    size = len(query)
    idx = next((i for i in range(len(text) - size + 1) if text[i : i + size].lower() == lowered), -1)
    if idx < 0:
        return text
    end = idx + size
    return text[:idx] + active_theme.reverse + text[idx:end] + "\033[27m" + text[end:]


def format_tree_row(
    node: Node,
    *,
    is_current: bool,
    selection: Selection,
    search_query: str = "",
    theme: UITheme | None = None,
) -> str:
    """Render one tree row as ANSI-styled display text.

    Rows carry a ``[X]``/``[ ]`` check box, an expansion marker for
    directories, and indentation from ``node.level``.
    """
    active_theme = theme or DEFAULT_THEME
    reset = active_theme.reset
    indent = "  " * node.level
    checked = is_selected(node, selection)
    check = "[X]" if checked else "[ ]"

    if node.is_dir:
        marker = "▾ " if node.is_expanded else "▸ "
        name = f"{node.name}/"
        name_color = active_theme.tree_dir
    else:
        marker = "  "
        name = highlight_substring(node.name, search_query, active_theme)
        name_color = active_theme.tree_file

    if is_current:
        name_color = active_theme.tree_cursor
    elif checked:
        name_color = active_theme.tree_selected

    return (
        f"{indent}{active_theme.tree_check}{check}{reset} "
        f"{active_theme.tree_marker}{marker}{reset}"
        f"{name_color}{name}{reset}"
    )


__all__ = ["format_tree_row", "highlight_substring"]
