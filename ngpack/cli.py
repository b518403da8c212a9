"""CLI entrypoints for ngpack commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import ConfigError, load_config
from .logging import configure_logging
from .packager import assemble
from .params import load_params


def _shared_options(verbose_default: object) -> argparse.ArgumentParser:
    """Return a parent parser holding the options accepted before and after the command."""
    shared = argparse.ArgumentParser(add_help=False)
    shared.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=verbose_default,
        help="Log every placed file and skipped artifact.",
    )
    return shared


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ngpack",
        description="Assemble a publishable npm package from pre-built artifacts.",
        parents=[_shared_options(False)],
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # SUPPRESS keeps a top-level --verbose from being reset by the subcommand.
    build_parser = subparsers.add_parser(
        "build",
        help="Assemble the package described by a build parameter file.",
        parents=[_shared_options(argparse.SUPPRESS)],
    )
    build_parser.add_argument(
        "params",
        type=Path,
        help="Parameter file with one packaging argument per line.",
    )
    build_parser.add_argument(
        "--config",
        type=Path,
        default=Path("."),
        help="Path to .ngpack.yml or the directory containing it (defaults to current directory).",
    )
    build_parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write log output to this file.",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint for ngpack commands; returns the process exit status."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command != "build":  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")

    try:
        config = load_config(args.config)
    except ConfigError as exc:
        parser.exit(1, f"{exc}\n")

    configure_logging(config, verbose=bool(args.verbose), log_file=args.log_file)

    try:
        params = load_params(args.params)
        result = assemble(params, config)
    except ValueError as exc:
        # Includes JSON and UTF-8 decode errors raised while reading inputs.
        parser.exit(1, f"ngpack build failed: {exc}\n")
    except OSError as exc:
        parser.exit(1, f"ngpack build failed: {exc}\nRun with --verbose for more details.\n")

    if result.exit_code:
        print(
            f"Package written to {params.out} with {len(result.errors)} error(s)",
            file=sys.stderr,
        )
    return result.exit_code


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
