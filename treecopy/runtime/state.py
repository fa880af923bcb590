from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ..output import SerializedSelection
from ..tree_model import EMPTY_SELECTION, Node, Selection, TreeIndex


@dataclass
class AppState:
    root: Path
    tree: list[Node]
    index: TreeIndex
    current_id: str | None = None
    query: str = ""
    selection: Selection = EMPTY_SELECTION
    include_ascii_tree: bool = True
    destination: str = "clipboard"
    tree_start: int = 0
    message: str = ""
    message_is_error: bool = False
    result: SerializedSelection | None = None
    should_exit: bool = False
    dirty: bool = True


def build_state(
    root: Path,
    tree: list[Node],
    *,
    include_ascii_tree: bool = True,
    destination: str = "clipboard",
) -> AppState:
    """Create initial ``AppState`` with the cursor on the first row."""
    state = AppState(
        root=root,
        tree=tree,
        index=TreeIndex(tree),
        include_ascii_tree=include_ascii_tree,
        destination=destination,
    )
    state.current_id = tree[0].id if tree else None
    return state
