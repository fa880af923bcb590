"""Gitignore-aware ignore predicate for the tree builder.

Asks git once for the ignored files and directories under the browsed root
and answers ``is_ignored`` from that snapshot.
"""

from __future__ import annotations

import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path

from .logging import get_logger

logger = get_logger(__name__)


def _is_within(path: Path, root: Path) -> bool:
    """Return whether ``path`` is at or under ``root``."""
    try:
        path.relative_to(root)
        return True
    except ValueError:
        return False


@dataclass(frozen=True)
class GitIgnoreMatcher:
    """Resolved gitignore snapshot for a project subtree.

    ``ignored_dirs`` holds resolved directory paths so one parent hit rejects
    a whole subtree.
    """

    root: Path
    ignored_files: frozenset[Path]
    ignored_dirs: frozenset[Path]

    def is_ignored(self, path: Path) -> bool:
        """Return whether ``path`` is ignored under this matcher root."""
        resolved = path.resolve()
        if not _is_within(resolved, self.root):
            return False
        if resolved in self.ignored_files:
            return True
        current = resolved
        while True:
            if current in self.ignored_dirs:
                return True
            if current == self.root:
                break
            parent = current.parent
            if parent == current:
                break
            current = parent
        return False


def _git_lines(args: list[str]) -> bytes | None:
    try:
        proc = subprocess.run(
            args,
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            check=True,
        )
    except (OSError, subprocess.CalledProcessError) as exc:
        logger.debug("git ls-files failed: %s", exc)
        return None
    return proc.stdout


def get_gitignore_matcher(root: Path) -> GitIgnoreMatcher | None:
    """Build a matcher for ``root`` by querying git for ignored paths.

    Returns ``None`` when git is unavailable, ``root`` is not inside a work
    tree, or the git query fails. Only ignored paths within ``root`` are tracked,
    even when the repository root is higher up.
    """
    if shutil.which("git") is None:
        return None

    root = root.resolve()
    top_level_raw = _git_lines(["git", "-C", str(root), "rev-parse", "--show-toplevel"])
    if top_level_raw is None:
        return None
    top_level = top_level_raw.decode("utf-8", errors="replace").strip()
    if not top_level:
        return None

    repo_root = Path(top_level).resolve()
    if not _is_within(root, repo_root):
        return None

    listing = _git_lines(
        [
            "git",
            "-C",
            str(repo_root),
            "ls-files",
            "-z",
            "--others",
            "-i",
            "--exclude-standard",
            "--directory",
        ]
    )
    if listing is None:
        return None

    ignored_files: set[Path] = set()
    ignored_dirs: set[Path] = set()
    for raw in listing.split(b"\x00"):
        if not raw:
            continue
        rel = raw.decode("utf-8", errors="replace")
        is_dir = rel.endswith("/")
        rel = rel.rstrip("/")
        if not rel:
            continue
        abs_path = (repo_root / rel).resolve()
        if not _is_within(abs_path, root):
            continue
        if is_dir or abs_path.is_dir():
            ignored_dirs.add(abs_path)
        else:
            ignored_files.add(abs_path)

    logger.debug(
        "gitignore matcher for %s: %d files, %d dirs",
        root,
        len(ignored_files),
        len(ignored_dirs),
    )
    return GitIgnoreMatcher(
        root=root,
        ignored_files=frozenset(ignored_files),
        ignored_dirs=frozenset(ignored_dirs),
    )


__all__ = ["GitIgnoreMatcher", "get_gitignore_matcher"]
