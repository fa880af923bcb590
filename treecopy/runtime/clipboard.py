"""Clipboard hand-off through the platform clipboard command."""

from __future__ import annotations

import os
import shutil
import subprocess
import sys

from ..errors import ClipboardError
from ..logging import get_logger

logger = get_logger(__name__)


def clipboard_commands() -> list[list[str]]:
    """Return candidate clipboard commands for the current platform, in order."""
    if sys.platform == "darwin":
        return [["pbcopy"]]
    if os.name == "nt":
        return [["clip"]]
    return [
        ["wl-copy"],
        ["xclip", "-selection", "clipboard"],
        ["xsel", "--clipboard", "--input"],
    ]


def copy_to_clipboard(text: str) -> None:
    """Copy ``text`` with the first available clipboard command.

    Raises ``ClipboardError`` when no command is installed or none succeeds.
    """
    tried: list[str] = []
    for command in clipboard_commands():
        if shutil.which(command[0]) is None:
            continue
        tried.append(command[0])
        try:
            proc = subprocess.run(
                command,
                input=text,
                text=True,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                check=False,
            )
        except OSError as exc:
            logger.warning("clipboard command %s failed: %s", command[0], exc)
            continue
        if proc.returncode == 0:
            logger.debug("copied via %s", command[0])
            return
        logger.warning("clipboard command %s exited with %d", command[0], proc.returncode)

    detail = f"tried {', '.join(tried)}" if tried else "no clipboard command found"
    raise ClipboardError(message="Could not copy to clipboard", detail=detail)


__all__ = ["clipboard_commands", "copy_to_clipboard"]
