"""Visible-row projection and expansion state of the tree."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path

from .types import Node, TreeIndex, iter_nodes


def flatten_visible(nodes: list[Node]) -> list[Node]:
    """Flatten ``nodes`` in pre-order, descending only into expanded directories."""
    flattened: list[Node] = []

    def walk(items: list[Node]) -> None:
        for item in items:
            flattened.append(item)
            if item.is_dir and item.is_expanded:
                walk(item.children)

    walk(nodes)
    return flattened


def _expanded_dir_paths(nodes: list[Node]) -> list[Path]:
    return [node.path for node in iter_nodes(nodes) if node.is_dir and node.is_expanded]


def _is_proper_ancestor(candidate: Path, expanded_paths: list[Path]) -> bool:
    return any(path != candidate and path.is_relative_to(candidate) for path in expanded_paths)


def expanded_view(nodes: list[Node]) -> list[Node]:
    """Force every ancestor of an expanded directory open in a derived copy.

    The input is never mutated; directories that need forcing are cloned and
    everything else is shared. Applying the view to its own output returns an
    equal tree, and each node appears exactly once.
    """
    expanded_paths = _expanded_dir_paths(nodes)
    if not expanded_paths:
        return nodes

    def walk(items: list[Node]) -> list[Node]:
        result: list[Node] = []
        for item in items:
            if not item.is_dir:
                result.append(item)
                continue
            children = walk(item.children)
            force_open = not item.is_expanded and _is_proper_ancestor(item.path, expanded_paths)
            if force_open or any(new is not old for new, old in zip(children, item.children)):
                item = replace(item, is_expanded=item.is_expanded or force_open, children=children)
            result.append(item)
        return result

    return walk(nodes)


def find_node(node_id: str | None, nodes: list[Node], *, visible_only: bool = False) -> Node | None:
    """Find ``node_id`` in ``nodes`` by pre-order search.

    With ``visible_only`` the search only descends into expanded directories.
    """
    if node_id is None:
        return None
    for node in nodes:
        if node.id == node_id:
            return node
        if node.is_dir and (node.is_expanded or not visible_only):
            found = find_node(node_id, node.children, visible_only=visible_only)
            if found is not None:
                return found
    return None


def toggle_expansion(current_id: str | None, index: TreeIndex) -> bool:
    """Flip expansion of the live directory ``current_id`` in place.

    Collapsing also collapses every expanded descendant so the collapsed
    directory stays closed in ``expanded_view``. Returns ``False`` for files
    and unknown ids.
    """
    node = index.get(current_id)
    if node is None or not node.is_dir:
        return False
    if node.is_expanded:
        for descendant in iter_nodes([node]):
            if descendant.is_dir:
                descendant.is_expanded = False
    else:
        node.is_expanded = True
    return True


__all__ = ["expanded_view", "find_node", "flatten_visible", "toggle_expansion"]
