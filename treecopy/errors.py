"""Error taxonomy shared by the tree model, serializer, and runtime.

``FilesystemError`` and its subclasses are fatal to the operation in
progress. ``NotFoundError`` is always recovered where it is raised.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass
class TreeCopyError(Exception):
    """Base error carrying a user-facing message and the offending path."""

    message: str
    path: Path | None = None
    detail: str | None = None

    def __str__(self) -> str:
        text = self.message
        if self.path is not None:
            text = f"{text}: {self.path}"
        if self.detail:
            text = f"{text} ({self.detail})"
        return text


class FilesystemError(TreeCopyError):
    """Directory listing or stat failure."""


class FileReadError(FilesystemError):
    """File content could not be read while serializing."""


class NotFoundError(TreeCopyError):
    """A node id no longer resolves in the tree being inspected."""


class ClipboardError(TreeCopyError):
    """No clipboard command accepted the serialized document."""


def wrap_os_error(
    error: OSError,
    *,
    message: str,
    path: Path,
    cls: type[TreeCopyError] = FilesystemError,
) -> TreeCopyError:
    """Convert an ``OSError`` into the matching project error."""
    detail = error.strerror or str(error)
    return cls(message=message, path=path, detail=detail)


__all__ = [
    "TreeCopyError",
    "FilesystemError",
    "FileReadError",
    "NotFoundError",
    "ClipboardError",
    "wrap_os_error",
]
