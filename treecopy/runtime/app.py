"""Interactive session bootstrap.

Builds the canonical tree once, wires state, keys, and terminal together,
and hands the copied document to the clipboard or stdout.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path

from ..input import read_key
from ..logging import get_logger
from ..output import SerializedSelection
from ..tree_model import EXCLUDED_NAMES, build_tree, ignore_predicate_for
from ..ui_theme import resolve_theme
from .clipboard import copy_to_clipboard
from .keys import build_key_registry
from .loop import RuntimeLoopCallbacks, run_main_loop
from .screen import compose_frame, write_frame
from .state import AppState, build_state
from .terminal import TerminalController

logger = get_logger(__name__)


@dataclass(frozen=True)
class AppOptions:
    """Resolved startup options from CLI flags and config."""

    root: Path
    theme_name: str | None = None
    no_color: bool = False
    use_gitignore: bool = True
    show_hidden: bool = True
    include_ascii_tree: bool = True
    destination: str = "clipboard"
    extra_excludes: frozenset[str] = field(default_factory=frozenset)


def load_initial_state(options: AppOptions) -> AppState:
    """Build the canonical tree and initial state; ``FilesystemError`` propagates."""
    root = options.root.resolve()
    predicate = ignore_predicate_for(root, options.use_gitignore)
    tree = build_tree(
        root,
        predicate,
        excluded_names=EXCLUDED_NAMES | options.extra_excludes,
        show_hidden=options.show_hidden,
    )
    return build_state(
        root,
        tree,
        include_ascii_tree=options.include_ascii_tree,
        destination=options.destination,
    )


def _hold_for_stdout(_content: str) -> None:
    """Stdout destination: the document is written after the terminal is restored."""


def _open_tty() -> int | None:
    try:
        return os.open("/dev/tty", os.O_WRONLY)
    except OSError as exc:
        logger.debug("cannot open /dev/tty: %s", exc)
        return None


def ui_output_fd(destination: str, stdout_fd: int) -> tuple[int, bool]:
    """Pick the fd the screen is drawn on and whether the caller must close it.

    When the document goes to a redirected stdout, frames go to the
    controlling terminal, or to stderr when there is none, so the redirected
    stream receives only the document.
    """
    if destination != "stdout" or os.isatty(stdout_fd):
        return stdout_fd, False
    tty_fd = _open_tty()
    if tty_fd is not None:
        return tty_fd, True
    return sys.stderr.fileno(), False


def _terminal_size(fd: int) -> os.terminal_size:
    try:
        return os.get_terminal_size(fd)
    except OSError:
        return os.terminal_size((80, 24))


def run_app(options: AppOptions) -> SerializedSelection | None:
    """Run one interactive session and return the copied document, if any."""
    state = load_initial_state(options)
    theme = resolve_theme(options.theme_name, no_color=options.no_color)
    deliver = copy_to_clipboard if options.destination == "clipboard" else _hold_for_stdout
    registry = build_key_registry(state, deliver)

    stdin_fd = sys.stdin.fileno()
    stdout_fd = sys.stdout.fileno()
    ui_fd, owns_ui_fd = ui_output_fd(options.destination, stdout_fd)
    terminal = TerminalController(stdin_fd, ui_fd)

    def draw() -> None:
        size = _terminal_size(ui_fd)
        write_frame(compose_frame(state, size.columns, size.lines, theme), ui_fd, theme)

    callbacks = RuntimeLoopCallbacks(read_key=lambda: read_key(stdin_fd), draw=draw)
    try:
        with terminal.raw_mode():
            result = run_main_loop(state, registry, callbacks)
    finally:
        if owns_ui_fd:
            os.close(ui_fd)

    if result is None:
        logger.info("session ended without copying")
        return None
    if options.destination == "stdout":
        sys.stdout.write(result.content)
        sys.stdout.write("\n")
        sys.stdout.flush()
        sys.stderr.write(state.message + "\n")
    else:
        sys.stdout.write(state.message + "\n")
    return result


__all__ = ["AppOptions", "load_initial_state", "run_app", "ui_output_fd"]
