"""Runtime glue: state, key dispatch, terminal, and the event loop."""

from __future__ import annotations

from .app import AppOptions, load_initial_state, run_app

__all__ = ["AppOptions", "load_initial_state", "run_app"]
