"""Serialization of a selection into the clipboard document.

The document is a sequence of ``<folder>``/``<file>`` blocks followed by a
fenced file list and an optional fenced ascii tree. Paths inside the
document are relative to the selection roots and always ``/``-separated.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field, replace
from pathlib import Path

from .errors import FileReadError, wrap_os_error
from .logging import get_logger
from .tree_model.build import child_sort_key
from .tree_model.types import Node

TextReader = Callable[[Path], str]

logger = get_logger(__name__)


def read_text(path: Path) -> str:
    """Read ``path`` as text, trying UTF-8 variants before Latin-1.

    Raises ``FileReadError`` when the file cannot be opened or read.
    """
    try:
        data = path.read_bytes()
    except OSError as exc:
        raise wrap_os_error(exc, message="Cannot read file", path=path, cls=FileReadError) from exc
    for encoding in ("utf-8", "utf-8-sig"):
        try:
            return data.decode(encoding)
        except UnicodeDecodeError:
            continue
    return data.decode("latin-1")


@dataclass(frozen=True)
class SerializedSelection:
    """Serialized document plus the file list it was built from."""

    content: str
    file_count: int
    file_paths: list[str] = field(default_factory=list)


def tree_order_key(node: Node) -> tuple[tuple[bool, str, str], ...]:
    """Build a sort key matching tree ordering for nodes at any depth.

    Intermediate path components are directories, so ancestors sort before
    their descendants and directories before sibling files.
    """
    parts = node.path.parts
    key = [child_sort_key(part, True) for part in parts[:-1]]
    key.append(child_sort_key(parts[-1] if parts else node.name, node.is_dir))
    return tuple(key)


def _is_dangling_link(path: Path) -> bool:
    return path.is_symlink() and not path.exists()


def dedupe_selection(nodes: Iterable[Node]) -> list[Node]:
    """Drop repeated ids across the whole selection using one shared seen-set.

    Nodes are visited in tree order, so a file reachable both directly and
    through a selected folder is kept once, inside the folder. Symlinks whose
    target is gone carry no content and are dropped. Returned directories are
    copies holding only their surviving children.
    """
    seen: set[str] = set()

    def walk(node: Node) -> Node | None:
        if node.id in seen:
            return None
        seen.add(node.id)
        if not node.is_dir:
            if _is_dangling_link(node.path):
                logger.debug("skipping dangling symlink %s", node.path)
                return None
            return node
        kept = [child for child in (walk(item) for item in node.children) if child is not None]
        return replace(node, children=kept)

    result: list[Node] = []
    for node in sorted(nodes, key=tree_order_key):
        cleaned = walk(node)
        if cleaned is not None:
            result.append(cleaned)
    return result


def count_files(nodes: Iterable[Node]) -> int:
    total = 0
    for node in nodes:
        if node.is_dir:
            total += count_files(node.children)
        else:
            total += 1
    return total


def render_ascii_tree(nodes: list[Node]) -> str:
    """Render ``nodes`` with box-drawing connectors, roots flush left."""
    lines: list[str] = []

    def label(node: Node) -> str:
        return f"{node.name}/" if node.is_dir else node.name

    def walk(children: list[Node], prefix: str) -> None:
        total = len(children)
        for idx, child in enumerate(children):
            is_last = idx == total - 1
            connector = "└── " if is_last else "├── "
            lines.append(f"{prefix}{connector}{label(child)}")
            if child.is_dir:
                walk(child.children, prefix + ("    " if is_last else "│   "))

    for root in nodes:
        lines.append(label(root))
        if root.is_dir:
            walk(root.children, "")
    return "\n".join(lines)


def serialize_selection(
    nodes: Iterable[Node],
    *,
    include_tree: bool = True,
    reader: TextReader = read_text,
) -> SerializedSelection:
    """Serialize selected nodes into the clipboard document.

    File contents are read while rendering; the first unreadable file raises
    ``FileReadError`` and nothing is returned.
    """
    cleaned = dedupe_selection(nodes)
    file_paths: list[str] = []

    def render(node: Node, parent_path: str = "") -> str:
        current_path = f"{parent_path}/{node.name}" if parent_path else node.name
        if node.is_dir:
            child_blocks = "\n".join(render(child, current_path) for child in node.children)
            return f'<folder name="{current_path}">\n{child_blocks}\n</folder>'
        text = reader(node.path)
        file_paths.append(f"./{current_path}")
        return f'<file name="{current_path}">\n{text}\n</file>'

    content = "\n\n".join(render(node) for node in cleaned)
    content += "\n\n```files.txt\n" + "\n".join(file_paths) + "\n```"
    if include_tree:
        content += "\n\n```tree.txt\n" + render_ascii_tree(cleaned) + "\n```"

    return SerializedSelection(
        content=content,
        file_count=count_files(cleaned),
        file_paths=file_paths,
    )


__all__ = [
    "SerializedSelection",
    "count_files",
    "dedupe_selection",
    "read_text",
    "render_ascii_tree",
    "serialize_selection",
    "tree_order_key",
]
