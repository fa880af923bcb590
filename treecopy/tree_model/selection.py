"""Selection-set operations keyed by node id.

Selections are immutable ``frozenset`` values of node ids. Folders are only
ever selected or deselected together with everything they contain.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import replace

from ..errors import NotFoundError
from ..logging import get_logger
from .types import Node, TreeIndex, iter_nodes

Selection = frozenset[str]

EMPTY_SELECTION: Selection = frozenset()

logger = get_logger(__name__)


def folder_contents(folder: Node) -> list[Node]:
    """Return every descendant of ``folder`` in pre-order, excluding the folder."""
    return list(iter_nodes(folder.children))


def _bulk_toggle(bulk_ids: set[str], selection: Selection) -> Selection:
    if bulk_ids <= selection:
        return selection - bulk_ids
    return selection | bulk_ids


def toggle_selection(current_id: str | None, index: TreeIndex, selection: Selection) -> Selection:
    """Toggle the node under the cursor.

    A file flips its own membership. A directory is resolved in the live tree
    and, together with all its contents, is removed when everything is
    already selected and added otherwise.
    """
    if current_id is None:
        return selection
    try:
        node = index.require(current_id)
    except NotFoundError:
        logger.debug("toggle on stale id %s ignored", current_id)
        return selection
    if not node.is_dir:
        return selection ^ {node.id}
    bulk_ids = {node.id} | {child.id for child in folder_contents(node)}
    return _bulk_toggle(bulk_ids, selection)


def toggle_all(visible: Iterable[Node], selection: Selection) -> Selection:
    """Select every visible node, or deselect them all when already selected.

    Directories bring the contents of the node as given, so a filtered
    directory contributes only its matches.
    """
    bulk_ids: set[str] = set()
    for node in visible:
        bulk_ids.add(node.id)
        if node.is_dir:
            bulk_ids.update(child.id for child in folder_contents(node))
    if not bulk_ids:
        return selection
    return _bulk_toggle(bulk_ids, selection)


def is_selected(node: Node, selection: Selection) -> bool:
    return node.id in selection


def selected_file_count(selection: Selection, index: TreeIndex) -> int:
    """Count selected ids that resolve to files in the live tree."""
    count = 0
    for node_id in selection:
        node = index.get(node_id)
        if node is not None and not node.is_dir:
            count += 1
    return count


def selected_nodes(selection: Selection, index: TreeIndex) -> list[Node]:
    """Resolve ``selection`` into detached subtrees ready for serialization.

    Only top-most selected nodes are returned, in tree order; each directory
    copy keeps just the children that are themselves selected.
    """

    def pruned(node: Node) -> Node:
        if not node.is_dir:
            return node
        kept = [pruned(child) for child in node.children if child.id in selection]
        return replace(node, children=kept)

    roots: list[Node] = []
    for node in iter_nodes(index.roots):
        if node.id not in selection:
            continue
        if str(node.path.parent) in selection:
            continue
        roots.append(pruned(node))
    return roots


__all__ = [
    "EMPTY_SELECTION",
    "Selection",
    "folder_contents",
    "is_selected",
    "selected_file_count",
    "selected_nodes",
    "toggle_all",
    "toggle_selection",
]
