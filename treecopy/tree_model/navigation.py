"""Cursor movement over the visible tree.

Every function takes the tree currently on screen and returns the new
current id. Ids that no longer resolve fall back to the first visible row.
"""

from __future__ import annotations

from ..logging import get_logger
from .types import Node, iter_nodes
from .visibility import find_node, flatten_visible

logger = get_logger(__name__)


def first_id(visible: list[Node]) -> str | None:
    """Return the id of the first visible node, or ``None`` when empty."""
    if not visible:
        return None
    return visible[0].id


def _index_of(node_id: str, flattened: list[Node]) -> int | None:
    for idx, node in enumerate(flattened):
        if node.id == node_id:
            return idx
    return None


def next_id(current_id: str | None, tree: list[Node]) -> str | None:
    """Move down one row, drilling into an expanded directory and wrapping at the end."""
    flattened = flatten_visible(tree)
    if current_id is None:
        return first_id(flattened)
    current = find_node(current_id, tree, visible_only=True)
    if current is None:
        logger.debug("cursor %s not visible; jumping to first row", current_id)
        return first_id(flattened)
    if current.is_dir and current.is_expanded and current.children:
        return current.children[0].id
    idx = _index_of(current_id, flattened)
    if idx is None:
        return first_id(flattened)
    return flattened[(idx + 1) % len(flattened)].id


def previous_id(current_id: str | None, tree: list[Node]) -> str | None:
    """Move up one row, wrapping to the bottom from the first row."""
    if current_id is None:
        return None
    flattened = flatten_visible(tree)
    idx = _index_of(current_id, flattened)
    if idx is None:
        logger.debug("cursor %s not visible; jumping to first row", current_id)
        return first_id(flattened)
    return flattened[(idx - 1 + len(flattened)) % len(flattened)].id


def cursor_for_query(tree: list[Node], query: str) -> str | None:
    """Pick the cursor after the search query changed.

    While searching, a leading directory is skipped in favor of the first
    file beneath it so typing jumps straight to a match.
    """
    flattened = flatten_visible(tree)
    if not flattened:
        return None
    first = flattened[0]
    if not first.is_dir or not query:
        return first.id
    for node in iter_nodes(first.children):
        if not node.is_dir:
            return node.id
    return None


__all__ = ["cursor_for_query", "first_id", "next_id", "previous_id"]
