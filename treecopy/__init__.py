"""Public package surface for treecopy.

Exports ``main`` for programmatic CLI invocation.
The tree state machine lives in ``treecopy.tree_model``; terminal glue lives
in ``treecopy.runtime``.
"""

from __future__ import annotations


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)

__all__ = ["main"]
