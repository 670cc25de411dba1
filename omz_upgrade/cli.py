"""
Command-line interface for omz-upgrade.

This module is responsible for argument parsing, detecting terminal
capabilities once, and delegating to the orchestration in the upgrade
module.
"""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from .config import Config, resolve_zsh_dir
from .errors import OmzUpgradeError
from .logging_utils import configure_logging
from .terminal import detect_capabilities
from .upgrade import run_upgrade


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="omz-upgrade",
        description=(
            "Update an Oh My Zsh installation from its remote repository, "
            "then restore the previously checked-out HEAD."
        ),
    )

    parser.add_argument(
        "--interactive",
        action="store_true",
        help="Show the changelog after a successful update.",
    )
    parser.add_argument(
        "--zsh-dir",
        help="Oh My Zsh installation to update (default: $ZSH, then the current directory).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (can be specified multiple times).",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    # Must happen before anything captures or redirects stdout.
    capabilities = detect_capabilities()

    parser = build_arg_parser()
    args = parser.parse_args(argv)

    config = Config(
        zsh_dir=resolve_zsh_dir(args.zsh_dir),
        interactive=args.interactive,
        verbosity=args.verbose,
    )

    configure_logging(verbosity=config.verbosity)

    try:
        result = run_upgrade(config, capabilities)
    except KeyboardInterrupt:
        return 130
    except OmzUpgradeError as exc:
        print(f"omz-upgrade: error: {exc}", file=sys.stderr)
        return 1

    return result.exit_code


if __name__ == "__main__":  # pragma: no cover - manual invocation
    raise SystemExit(main())
