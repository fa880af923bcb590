"""Module entrypoint for ``python -m treecopy``.

This keeps module-mode execution behavior identical to the CLI script.
All argument parsing and runtime setup happen in ``treecopy.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
