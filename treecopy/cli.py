"""Command-line front door for treecopy.

Parses CLI options, merges them with the config file, and launches the
interactive browser on the target directory.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .errors import FilesystemError
from .logging import configure_logging, get_logger
from .runtime import AppOptions, run_app
from .runtime import config
from .ui_theme import available_theme_names

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="treecopy",
        description="Browse a directory, pick files and folders, and copy their contents as one document.",
    )
    parser.add_argument("path", nargs="?", default=None, help="Directory to browse. Defaults to current directory.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument("--no-gitignore", action="store_true", help="Show entries ignored by git.")
    parser.add_argument("--hide-dotfiles", action="store_true", help="Skip entries whose name starts with a dot.")
    parser.add_argument("--no-ascii-tree", action="store_true", help="Omit the ascii tree block from the output.")
    parser.add_argument(
        "--print",
        dest="print_output",
        action="store_true",
        help="Write the document to stdout instead of the clipboard.",
    )
    parser.add_argument("--log-level", default="info", help="Log level for the log file (default: info).")
    parser.add_argument("--log-dir", type=Path, default=None, help="Directory for treecopy.log.")
    return parser


def options_from_args(args: argparse.Namespace, default_path: Path) -> AppOptions:
    """Merge parsed CLI flags over config values; flags always win."""
    path = Path(args.path) if args.path else default_path
    if not path.exists():
        raise SystemExit(f"Path not found: {path}")
    if not path.is_dir():
        raise SystemExit(f"Not a directory: {path}")

    return AppOptions(
        root=path.resolve(),
        theme_name=args.theme or config.load_theme_name(),
        no_color=args.no_color,
        use_gitignore=not args.no_gitignore and config.load_use_gitignore(),
        show_hidden=not args.hide_dotfiles,
        include_ascii_tree=not args.no_ascii_tree and config.load_ascii_tree(),
        destination="stdout" if args.print_output else "clipboard",
        extra_excludes=config.load_extra_excludes(),
    )


def main(default_path: Path | None = None, argv: list[str] | None = None) -> None:
    """Parse CLI arguments and launch treecopy on a directory.

    ``default_path`` and ``argv`` are primarily for tests; the current working
    directory and ``sys.argv`` are used when omitted.
    """
    args = build_parser().parse_args(argv)
    configure_logging(level=args.log_level, log_dir=args.log_dir)

    options = options_from_args(args, default_path or Path.cwd())
    if not sys.stdin.isatty():
        raise SystemExit("treecopy needs an interactive terminal on stdin.")

    try:
        run_app(options)
    except FilesystemError as exc:
        logger.error("startup failed: %s", exc)
        raise SystemExit(str(exc)) from exc


if __name__ == "__main__":
    main()
