"""Key-token dispatch onto state actions."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from . import actions
from .state import AppState


@dataclass(frozen=True)
class KeyComboBinding:
    """Mapping from one or more key tokens to a single action callback."""

    combos: tuple[str, ...]
    handler: Callable[[], None]


class KeyComboRegistry:
    """Small exact-match key-dispatch table."""

    def __init__(self) -> None:
        self._handlers: dict[str, Callable[[], None]] = {}

    def register_bindings(self, *bindings: KeyComboBinding) -> KeyComboRegistry:
        """Register bindings, overwriting earlier handlers for the same combos."""
        for binding in bindings:
            for combo in binding.combos:
                self._handlers[combo] = binding.handler
        return self

    def dispatch(self, key: str) -> bool:
        """Invoke bound handler for ``key`` and return whether one existed."""
        handler = self._handlers.get(key)
        if handler is None:
            return False
        handler()
        return True


def build_key_registry(state: AppState, deliver: actions.Deliver) -> KeyComboRegistry:
    """Bind the browser's keys to actions on ``state``."""
    return KeyComboRegistry().register_bindings(
        KeyComboBinding(("ENTER_CR", "ENTER_LF"), lambda: actions.copy_selection(state, deliver)),
        KeyComboBinding(("BACKSPACE",), lambda: actions.delete_query_char(state)),
        KeyComboBinding(("CTRL_U",), lambda: actions.clear_query(state)),
        KeyComboBinding(("DOWN",), lambda: actions.move_next(state)),
        KeyComboBinding(("UP",), lambda: actions.move_previous(state)),
        KeyComboBinding(("TAB",), lambda: actions.toggle_current_expansion(state)),
        KeyComboBinding(("LEFT", "RIGHT"), lambda: actions.toggle_current_selection(state)),
        KeyComboBinding(("CTRL_A",), lambda: actions.toggle_all_visible(state)),
        KeyComboBinding(("ESC", "CTRL_C"), lambda: actions.quit_without_copy(state)),
    )


def handle_key(key: str, state: AppState, registry: KeyComboRegistry) -> bool:
    """Apply one key token to ``state``; printable characters extend the query.

    A message left over from the previous key is cleared first.
    """
    if state.message:
        state.message = ""
        state.message_is_error = False
        state.dirty = True
    if registry.dispatch(key):
        return True
    if len(key) == 1 and key.isprintable():
        actions.append_query(state, key)
        return True
    return False


__all__ = ["KeyComboBinding", "KeyComboRegistry", "build_key_registry", "handle_key"]
