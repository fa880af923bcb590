"""Tree node datatypes and the id-addressed node index."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from pathlib import Path

from ..errors import NotFoundError


@dataclass
class Node:
    """One file or directory in the browsed tree.

    ``id`` is the absolute path string and is the only identity used for
    selection, dedup, and navigation lookups. ``is_expanded`` is the only field
    mutated after build, and only on nodes of the live tree.
    """

    id: str
    name: str
    path: Path
    is_dir: bool
    children: list[Node] = field(default_factory=list)
    is_expanded: bool = False
    level: int = 0


def iter_nodes(nodes: Iterable[Node]) -> Iterator[Node]:
    """Yield every node of ``nodes`` in pre-order, ignoring expansion state."""
    for node in nodes:
        yield node
        if node.is_dir:
            yield from iter_nodes(node.children)


class TreeIndex:
    """Arena view over the live tree mapping node ids to nodes."""

    def __init__(self, nodes: list[Node]) -> None:
        self.roots = nodes
        self._by_id: dict[str, Node] = {node.id: node for node in iter_nodes(nodes)}

    def get(self, node_id: str | None) -> Node | None:
        if node_id is None:
            return None
        return self._by_id.get(node_id)

    def require(self, node_id: str) -> Node:
        """Return node for ``node_id`` or raise ``NotFoundError``."""
        node = self._by_id.get(node_id)
        if node is None:
            raise NotFoundError(message="No such node", path=Path(node_id))
        return node


__all__ = ["Node", "TreeIndex", "iter_nodes"]
