"""Tree state machine: build, filter, flatten, navigate, select.

Defines ``Node`` and ``TreeIndex`` plus the pure operations the runtime
applies on every key event. Row formatting for the tree pane lives here too.
"""

from __future__ import annotations

from .build import (
    EXCLUDED_NAMES,
    DirectoryChild,
    build_tree,
    child_sort_key,
    ignore_predicate_for,
    list_directory_children,
)
from .filtering import count_matches, filter_tree, name_matches
from .navigation import cursor_for_query, first_id, next_id, previous_id
from .rendering import format_tree_row, highlight_substring
from .selection import (
    EMPTY_SELECTION,
    Selection,
    folder_contents,
    is_selected,
    selected_file_count,
    selected_nodes,
    toggle_all,
    toggle_selection,
)
from .types import Node, TreeIndex, iter_nodes
from .visibility import expanded_view, find_node, flatten_visible, toggle_expansion

__all__ = [
    "Node",
    "TreeIndex",
    "iter_nodes",
    "EXCLUDED_NAMES",
    "DirectoryChild",
    "build_tree",
    "child_sort_key",
    "ignore_predicate_for",
    "list_directory_children",
    "filter_tree",
    "count_matches",
    "name_matches",
    "flatten_visible",
    "expanded_view",
    "find_node",
    "toggle_expansion",
    "first_id",
    "next_id",
    "previous_id",
    "cursor_for_query",
    "EMPTY_SELECTION",
    "Selection",
    "folder_contents",
    "is_selected",
    "selected_file_count",
    "selected_nodes",
    "toggle_all",
    "toggle_selection",
    "format_tree_row",
    "highlight_substring",
]
