"""Frame composition for the browser screen.

``compose_frame`` is pure apart from scroll bookkeeping on ``AppState`` and
returns the rows to draw; ``write_frame`` sends them to the terminal.
"""

from __future__ import annotations

import os

from ..ansi import clip_ansi_line
from ..tree_model import Node, count_matches, flatten_visible, format_tree_row, selected_file_count
from ..ui_theme import DEFAULT_THEME, UITheme
from .actions import visible_tree
from .state import AppState

HEADER_ROWS = 4
FOOTER_ROWS = 4


def tree_view_rows(height: int) -> int:
    """Rows available for tree entries inside a terminal of ``height`` rows."""
    return max(1, height - HEADER_ROWS - FOOTER_ROWS)


def scroll_to_cursor(state: AppState, rows: list[Node], view_rows: int) -> None:
    """Adjust ``state.tree_start`` so the cursor row stays on screen."""
    cursor_idx = next((idx for idx, node in enumerate(rows) if node.id == state.current_id), None)
    max_start = max(0, len(rows) - view_rows)
    if cursor_idx is not None:
        if cursor_idx < state.tree_start:
            state.tree_start = cursor_idx
        elif cursor_idx >= state.tree_start + view_rows:
            state.tree_start = cursor_idx - view_rows + 1
    state.tree_start = max(0, min(state.tree_start, max_start))


def help_lines(theme: UITheme) -> list[str]:
    key = theme.help_key
    reset = theme.reset
    return [
        f"Use {key}Up{reset} / {key}Down{reset} to navigate, "
        f"and {key}Left{reset} / {key}Right{reset} to select",
        f"Use {key}Tab{reset} to expand/collapse, {key}Ctrl+A{reset} to select all, "
        f"and {key}Enter{reset} to copy selected files.",
    ]


def compose_frame(state: AppState, width: int, height: int, theme: UITheme | None = None) -> list[str]:
    """Build clipped screen rows for the current state."""
    active_theme = theme or DEFAULT_THEME
    reset = active_theme.reset
    tree = visible_tree(state)
    rows = flatten_visible(tree)
    view_rows = tree_view_rows(height)
    scroll_to_cursor(state, rows, view_rows)

    if state.query:
        matches = count_matches(tree)
        suffix = "match" if matches == 1 else "matches"
        query_text = f"{active_theme.query}{state.query}{reset} {active_theme.dim}({matches} {suffix}){reset}"
    else:
        query_text = f"{active_theme.query_hint}None{reset}"
    selected = selected_file_count(state.selection, state.index)

    lines: list[str] = [
        f"{active_theme.heading}Select files and folders to include.{reset}",
        f"Selected files: {active_theme.tree_selected}{selected}{reset}",
        f"Search query: {query_text}",
        "",
    ]

    window = rows[state.tree_start : state.tree_start + view_rows]
    for node in window:
        lines.append(
            format_tree_row(
                node,
                is_current=node.id == state.current_id,
                selection=state.selection,
                search_query=state.query,
                theme=active_theme,
            )
        )
    if not rows:
        lines.append(f"{active_theme.query_hint}No items found{reset}")
    lines.extend([""] * (HEADER_ROWS + view_rows - len(lines)))

    lines.append("")
    lines.extend(help_lines(active_theme))
    if state.message:
        color = active_theme.message_error if state.message_is_error else active_theme.message_ok
        lines.append(f"{color}{state.message}{reset}")

    return [clip_ansi_line(line, width) for line in lines[:height]]


def write_frame(lines: list[str], stdout_fd: int, theme: UITheme | None = None) -> None:
    """Clear the screen and draw ``lines`` from the top-left corner."""
    reset = (theme or DEFAULT_THEME).reset
    out = ["\033[H\033[J"]
    for idx, line in enumerate(lines):
        if idx:
            out.append("\r\n")
        out.append(line)
        if "\033" in line:
            out.append(reset)
    os.write(stdout_fd, "".join(out).encode("utf-8", errors="replace"))


__all__ = ["compose_frame", "help_lines", "scroll_to_cursor", "tree_view_rows", "write_frame"]
