"""Canonical tree construction from the filesystem."""

from __future__ import annotations

import os
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from pathlib import Path

from ..errors import FilesystemError, wrap_os_error
from ..gitignore import get_gitignore_matcher
from ..logging import get_logger
from .types import Node, iter_nodes

EXCLUDED_NAMES: frozenset[str] = frozenset({".git", ".hg", ".svn", "node_modules"})

IgnorePredicate = Callable[[Path], bool]

logger = get_logger(__name__)


def _never_ignore(_path: Path) -> bool:
    return False


def ignore_predicate_for(root: Path, use_gitignore: bool) -> IgnorePredicate:
    """Return the ignore predicate used while building the tree at ``root``.

    Falls back to a predicate that ignores nothing when gitignore support is
    disabled or ``root`` is not inside a git work tree.
    """
    if not use_gitignore:
        return _never_ignore
    matcher = get_gitignore_matcher(root)
    if matcher is None:
        logger.debug("no gitignore matcher for %s", root)
        return _never_ignore
    return matcher.is_ignored


@dataclass(frozen=True)
class DirectoryChild:
    """One directory listing record before it becomes a ``Node``."""

    name: str
    path: Path
    is_dir: bool
    is_symlink: bool = False


def child_sort_key(name: str, is_dir: bool) -> tuple[bool, str, str]:
    """Sort directories before files, then case-insensitively with a raw-name tie-break."""
    return (not is_dir, name.casefold(), name)


def list_directory_children(
    directory: Path,
    should_ignore: IgnorePredicate,
    excluded_names: Iterable[str] = EXCLUDED_NAMES,
    show_hidden: bool = True,
) -> list[DirectoryChild]:
    """List kept children of ``directory`` in tree order.

    Raises ``FilesystemError`` when the directory cannot be listed or an entry
    cannot be classified. A symlink to a directory is listed as a directory
    flagged ``is_symlink`` so the walk never descends through it.
    """
    excluded = frozenset(excluded_names)
    children: list[DirectoryChild] = []
    try:
        with os.scandir(directory) as entries:
            for entry in entries:
                name = entry.name
                if name in excluded:
                    continue
                if not show_hidden and name.startswith("."):
                    continue
                child_path = Path(entry.path)
                if should_ignore(child_path):
                    continue
                try:
                    is_symlink = entry.is_symlink()
                    is_dir = entry.is_dir()
                except OSError as exc:
                    raise wrap_os_error(exc, message="Cannot stat entry", path=child_path) from exc
                children.append(DirectoryChild(name=name, path=child_path, is_dir=is_dir, is_symlink=is_symlink))
    except FilesystemError:
        raise
    except OSError as exc:
        raise wrap_os_error(exc, message="Cannot read directory", path=directory) from exc

    children.sort(key=lambda item: child_sort_key(item.name, item.is_dir))
    return children


def build_tree(
    root: Path,
    should_ignore: IgnorePredicate | None = None,
    *,
    excluded_names: Iterable[str] = EXCLUDED_NAMES,
    show_hidden: bool = True,
) -> list[Node]:
    """Walk ``root`` eagerly and return its children as the canonical tree.

    Every directory is fully materialized and starts collapsed. Symlinked
    directories stay empty, which keeps link cycles out of the tree.
    """
    root = root.resolve()
    predicate = should_ignore if should_ignore is not None else _never_ignore
    excluded = frozenset(excluded_names)

    def build_children(directory: Path, level: int) -> list[Node]:
        nodes: list[Node] = []
        for child in list_directory_children(directory, predicate, excluded, show_hidden):
            node = Node(
                id=str(child.path),
                name=child.name,
                path=child.path,
                is_dir=child.is_dir,
                level=level,
            )
            if child.is_dir and not child.is_symlink:
                node.children = build_children(child.path, level + 1)
            nodes.append(node)
        return nodes

    tree = build_children(root, 0)
    logger.info("built tree for %s (%d nodes)", root, sum(1 for _ in iter_nodes(tree)))
    return tree


__all__ = [
    "EXCLUDED_NAMES",
    "DirectoryChild",
    "IgnorePredicate",
    "build_tree",
    "child_sort_key",
    "ignore_predicate_for",
    "list_directory_children",
]
