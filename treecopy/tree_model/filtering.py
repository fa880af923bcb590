"""Search-query projection of the tree onto matching files."""

from __future__ import annotations

from dataclasses import replace

from .types import Node, iter_nodes


def name_matches(name: str, query: str) -> bool:
    """Return whether ``query`` is a case-insensitive substring of ``name``."""
    return query.lower() in name.lower()


def filter_tree(nodes: list[Node], query: str) -> list[Node]:
    """Return the filtered tree for ``query``.

    An empty query returns ``nodes`` itself. Otherwise files are kept when
    their name matches, and directories are kept only when something beneath
    them matches; kept directories are fresh clones that are expanded and
    hold only the matching children. Input nodes are never mutated.
    """
    if not query:
        return nodes

    def walk(items: list[Node]) -> list[Node]:
        result: list[Node] = []
        for item in items:
            if item.is_dir:
                matching_children = walk(item.children)
                if matching_children:
                    result.append(replace(item, is_expanded=True, children=matching_children))
            elif name_matches(item.name, query):
                result.append(item)
        return result

    return walk(nodes)


def count_matches(nodes: list[Node]) -> int:
    """Count file nodes in a (filtered) tree."""
    return sum(1 for node in iter_nodes(nodes) if not node.is_dir)


__all__ = ["count_matches", "filter_tree", "name_matches"]
