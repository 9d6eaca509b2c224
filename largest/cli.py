"""Command-line front door for largest.

Parses CLI options over config-file defaults, resolves the target directory,
collects entries and prints the largest ones. Fatal errors exit through
``SystemExit`` with the error message.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from .collector import collect_entries
from .presenter import print_largest
from .runtime.config import RunConfig, RunDefaults, load_defaults

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"

logger = logging.getLogger(__name__)


def _non_negative_int(value: str) -> int:
    """argparse type for integer values ``>= 0``."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed < 0:
        raise argparse.ArgumentTypeError("value must be >= 0")
    return parsed


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    parsed = _non_negative_int(value)
    if parsed == 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def build_parser(defaults: RunDefaults) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="largest",
        description="Print the largest entries of a directory, largest first.",
    )
    parser.add_argument("paths", nargs="*", metavar="PATH", help="Directory to inspect. Defaults to current directory.")
    parser.add_argument(
        "-n",
        "--lines",
        type=_non_negative_int,
        default=defaults.lines,
        help=f"Lines of output (default: {defaults.lines}).",
    )
    parser.add_argument(
        "-d",
        "--dir",
        dest="include_dirs",
        action="store_true",
        default=defaults.include_dirs,
        help="Include directories, sized by the total of all files below them.",
    )
    parser.add_argument(
        "--no-dir",
        dest="include_dirs",
        action="store_false",
        default=defaults.include_dirs,
        help="Rank files only, overriding a configured default.",
    )
    parser.add_argument(
        "--binary",
        action="store_true",
        default=defaults.binary,
        help="Use binary units (KiB, MiB, ...) instead of decimal ones.",
    )
    parser.add_argument(
        "--no-binary",
        dest="binary",
        action="store_false",
        default=defaults.binary,
        help="Use decimal units, overriding a configured default.",
    )
    parser.add_argument(
        "--workers",
        dest="max_workers",
        type=_positive_int,
        default=defaults.max_workers,
        help="Measure directories on a pool of at most N threads (default: one thread per directory).",
    )
    parser.add_argument("--debug", action="store_true", help="Debug information on stderr.")
    return parser


def configure_logging(debug: bool) -> None:
    """Route log records to stderr; stdout is reserved for the report."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format=LOG_FORMAT,
        stream=sys.stderr,
        force=True,
    )


def resolve_target(paths: Sequence[str], default_path: Path | None = None) -> Path:
    """Return the single target directory from positional arguments."""
    if len(paths) > 1:
        raise SystemExit("too many arguments!")
    if paths:
        return Path(paths[0])
    if default_path is not None:
        return default_path
    try:
        return Path.cwd()
    except OSError as exc:
        raise SystemExit(str(exc)) from exc


def parse_run_config(
    argv: Sequence[str] | None = None,
    default_path: Path | None = None,
) -> RunConfig:
    """Merge config-file defaults and CLI arguments into a ``RunConfig``."""
    args = build_parser(load_defaults()).parse_args(argv)
    return RunConfig(
        target=resolve_target(args.paths, default_path),
        lines=args.lines,
        include_dirs=args.include_dirs,
        binary=args.binary,
        max_workers=args.max_workers,
        debug=args.debug,
    )


def main(argv: Sequence[str] | None = None, default_path: Path | None = None) -> None:
    """Parse CLI arguments and print the largest entries of the target.

    ``default_path`` is primarily for tests; when omitted the current working
    directory is used.
    """
    config = parse_run_config(argv, default_path)
    configure_logging(config.debug)
    logger.debug("run config: %s", config)

    try:
        entries = collect_entries(
            config.target,
            config.include_dirs,
            max_workers=config.max_workers,
        )
    except OSError as exc:
        raise SystemExit(str(exc)) from exc

    print_largest(entries, config.lines, binary=config.binary)


if __name__ == "__main__":
    main()
