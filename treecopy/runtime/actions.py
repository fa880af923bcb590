"""State transitions applied by the event loop.

Every mutation of ``AppState`` goes through these functions, which are only
ever called from the single event-handling thread. Derived views (filtered
tree, visible rows) are recomputed from the live tree on every call.
"""

from __future__ import annotations

from collections.abc import Callable

from ..errors import TreeCopyError
from ..logging import get_logger
from ..output import serialize_selection
from ..tree_model import (
    Node,
    cursor_for_query,
    expanded_view,
    filter_tree,
    flatten_visible,
    next_id,
    previous_id,
    selected_nodes,
    toggle_all,
    toggle_expansion,
    toggle_selection,
)
from .state import AppState

Deliver = Callable[[str], None]

logger = get_logger(__name__)


def visible_tree(state: AppState) -> list[Node]:
    """Return the tree currently on screen: filtered, then ancestor-expanded."""
    return expanded_view(filter_tree(state.tree, state.query))


def visible_rows(state: AppState) -> list[Node]:
    return flatten_visible(visible_tree(state))


def set_query(state: AppState, query: str) -> None:
    """Replace the search query and recompute the cursor from scratch."""
    if query == state.query:
        return
    state.query = query
    state.current_id = cursor_for_query(visible_tree(state), query)
    state.tree_start = 0
    state.dirty = True
    logger.debug("query=%r cursor=%s", query, state.current_id)


def append_query(state: AppState, text: str) -> None:
    set_query(state, state.query + text)


def delete_query_char(state: AppState) -> None:
    if state.query:
        set_query(state, state.query[:-1])


def clear_query(state: AppState) -> None:
    set_query(state, "")


def move_next(state: AppState) -> None:
    state.current_id = next_id(state.current_id, visible_tree(state))
    state.dirty = True


def move_previous(state: AppState) -> None:
    state.current_id = previous_id(state.current_id, visible_tree(state))
    state.dirty = True


def toggle_current_expansion(state: AppState) -> None:
    if toggle_expansion(state.current_id, state.index):
        state.dirty = True


def toggle_current_selection(state: AppState) -> None:
    state.selection = toggle_selection(state.current_id, state.index, state.selection)
    state.dirty = True


def toggle_all_visible(state: AppState) -> None:
    state.selection = toggle_all(visible_rows(state), state.selection)
    state.dirty = True


def copy_selection(state: AppState, deliver: Deliver) -> None:
    """Serialize the selection and hand the document to ``deliver``.

    On success the state is marked for exit. Any ``TreeCopyError`` leaves the
    session running with a single error line and no partial output.
    """
    state.dirty = True
    nodes = selected_nodes(state.selection, state.index)
    if not nodes:
        state.message = "Nothing selected"
        state.message_is_error = True
        return
    try:
        result = serialize_selection(nodes, include_tree=state.include_ascii_tree)
        deliver(result.content)
    except TreeCopyError as exc:
        logger.error("copy failed: %s", exc)
        state.message = f"Copy failed: {exc}"
        state.message_is_error = True
        return

    plural = "" if result.file_count == 1 else "s"
    target = "clipboard" if state.destination == "clipboard" else "output"
    state.result = result
    state.message = f"Copied {result.file_count} file{plural} to {target}"
    state.message_is_error = False
    state.should_exit = True
    logger.info("copied %d files (%d chars)", result.file_count, len(result.content))


def quit_without_copy(state: AppState) -> None:
    state.should_exit = True
    state.dirty = True


__all__ = [
    "Deliver",
    "append_query",
    "clear_query",
    "copy_selection",
    "delete_query_char",
    "move_next",
    "move_previous",
    "quit_without_copy",
    "set_query",
    "toggle_all_visible",
    "toggle_current_expansion",
    "toggle_current_selection",
    "visible_rows",
    "visible_tree",
]
