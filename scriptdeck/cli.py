"""Command-line front door for scriptdeck.

Parses CLI options, merges them over the JSON config file, validates the
repository root, and then hands control to the interactive runtime.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .log import configure_logging
from .repository import DoesNotExist, NotUTF8, Repository, RepositoryIOError
from .runtime import run_app
from .runtime.config import DEFAULT_CONFIG_PATH, load_config
from .ui_theme import available_theme_names


def _positive_float(value: str) -> float:
    """argparse type for positive rate values."""
    try:
        parsed = float(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid number: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be > 0")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="scriptdeck",
        description="Browse a directory of SQL scripts and queue them for execution.",
    )
    parser.add_argument("root", nargs="?", default=None, help="Repository root. Defaults to current directory.")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help=f"JSON config file (default: {DEFAULT_CONFIG_PATH}).",
    )
    parser.add_argument("--tick-rate", type=_positive_float, default=None, help="Logic ticks per second.")
    parser.add_argument("--frame-rate", type=_positive_float, default=None, help="Render ticks per second.")
    parser.add_argument("--style", default=None, help="Pygments style name for script previews.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--log-file", type=Path, default=None, help="Write logs to this file.")
    parser.add_argument("--verbose", action="store_true", help="Log every dispatched action.")
    return parser


def open_repository(root: Path) -> Repository:
    """Construct the repository or exit with a readable message."""
    try:
        return Repository(root)
    except DoesNotExist:
        raise SystemExit(f"Path not found: {root}")
    except NotUTF8:
        raise SystemExit(f"Path is not valid UTF-8: {root!r}")
    except RepositoryIOError as exc:
        raise SystemExit(f"Cannot access {root}: {exc}")


def main(argv: list[str] | None = None, default_root: Path | None = None) -> None:
    """Parse CLI arguments and launch the interactive picker.

    ``default_root`` is primarily for tests; when omitted the current working
    directory is used.
    """
    args = build_parser().parse_args(argv)
    configure_logging(verbose=args.verbose, log_file=args.log_file)

    config = load_config(args.config)
    overrides = {
        "tick_rate": args.tick_rate,
        "frame_rate": args.frame_rate,
        "style": args.style,
        "theme": args.theme,
    }
    config.update({key: str(value) for key, value in overrides.items() if value is not None})

    root = Path(args.root) if args.root is not None else (default_root or Path.cwd())
    repository = open_repository(root)
    if not repository.base_as_path().is_dir():
        raise SystemExit(f"Not a directory: {root}")
    if not sys.stdin.isatty():
        raise SystemExit("scriptdeck needs an interactive terminal on stdin.")

    run_app(repository, config)


if __name__ == "__main__":
    main()
