"""Command-line front door for ttyconf.

Loads configuration sources exactly as a terminal session would and prints
the effective result in directive syntax.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from .config import Config, merge, merge_all
from .debug_log import format_config
from .errors import ConfigurationError
from .loader import parse_config_file, standard_io_config, user_config


def build_config(paths: Sequence[Path], standard_io: bool) -> Config:
    """Merge the requested sources; raises ``ConfigurationError`` without ``$TERM``."""
    config = user_config() if not paths else merge_all(parse_config_file(path) for path in paths)
    if standard_io:
        config = merge(standard_io_config(), config)
    return config


def main(argv: Sequence[str] | None = None) -> None:
    """Parse CLI arguments and print the merged configuration."""
    parser = argparse.ArgumentParser(
        description="Show the effective terminal configuration built from config files and environment."
    )
    parser.add_argument(
        "paths",
        nargs="*",
        type=Path,
        help="Config files to merge in order. Defaults to the user config and environment sources.",
    )
    parser.add_argument(
        "--standard-io",
        action="store_true",
        help="Start from the stdin/stdout terminal baseline (requires TERM).",
    )
    parser.add_argument("--verbose", action="store_true", help="Log skipped lines and unreadable files.")
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    try:
        config = build_config(args.paths, args.standard_io)
    except ConfigurationError as exc:
        raise SystemExit(str(exc)) from exc
    sys.stdout.write(format_config(config))


if __name__ == "__main__":
    main()
