"""Main interactive event loop for the terminal UI.

One thread reads a key, applies it to ``AppState``, and redraws. Feature
logic lives in ``actions``; this module is wiring only.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass

from ..output import SerializedSelection
from .keys import KeyComboRegistry, handle_key
from .state import AppState

EXIT_DELAY_SECONDS = 0.3


@dataclass(frozen=True)
class RuntimeLoopCallbacks:
    """Injected operations used by ``run_main_loop``.

    Keeping the loop callback-driven lets tests drive it with scripted keys
    and no terminal.
    """

    read_key: Callable[[], str]
    draw: Callable[[], None]
    sleep: Callable[[float], None] = time.sleep


def run_main_loop(
    state: AppState,
    registry: KeyComboRegistry,
    callbacks: RuntimeLoopCallbacks,
    exit_delay: float = EXIT_DELAY_SECONDS,
) -> SerializedSelection | None:
    """Run until the user copies or quits; return the copied document, if any.

    End of input is treated as a quit.
    """
    while True:
        if state.dirty:
            callbacks.draw()
            state.dirty = False

        key = callbacks.read_key()
        if not key:
            return None
        handle_key(key, state, registry)

        if state.should_exit:
            callbacks.draw()
            if state.result is not None:
                # Leave the success message on screen briefly before exiting.
                callbacks.sleep(exit_delay)
            return state.result


__all__ = ["EXIT_DELAY_SECONDS", "RuntimeLoopCallbacks", "run_main_loop"]
