"""Command-line entry point."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Sequence

from .commands.samples import SampleCommand
from .commands.store import StoreCommand
from .commands.version import VersionCommand
from .configuration import Configuration
from .errors import AppError
from .repository import Repository


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="ambros", description="Record and replay shell commands.")
    parser.add_argument("--repository", help="path of the command database")
    parser.add_argument("--debug", action="store_true", help="enable debug logging")
    sub = parser.add_subparsers(dest="action")

    store = sub.add_parser("store", help="Store a command for future use")
    store.add_argument("-n", "--name", default="", help="Name for the stored command")
    store.add_argument("-d", "--description", default="", help="Description of the command")
    store.add_argument("-t", "--tag", action="append", default=[], help="Tags for the command")
    store.add_argument("-c", "--category", default="", help="Category for the command")
    store.add_argument("--force", action="store_true", help="Overwrite existing command with same name")
    store.add_argument("command", nargs=argparse.REMAINDER, help="command and its arguments")

    test = sub.add_parser("test", help="Generate test commands")
    test.add_argument("-n", "--number", type=int, default=3, help="Number of test commands to generate")
    test.add_argument("--cleanup", action="store_true", help="Remove existing test commands before generating new ones")

    version = sub.add_parser("version", help="Show version information")
    version.add_argument("-s", "--short", action="store_true", help="Show only version number")
    return parser


def _split_tags(values: Sequence[str]) -> list[str]:
    return [tag.strip() for value in values for tag in value.split(",") if tag.strip()]


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    ns = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if ns.debug else logging.WARNING)
    logger = logging.getLogger("ambros")

    if ns.action is None:
        parser.print_help()
        return 0

    try:
        if ns.action == "version":
            VersionCommand(logger).run(ns.short)
            return 0

        db_path = ns.repository or Configuration(logger).repository_full_name()
        with Repository(db_path, logger) as repository:
            if ns.action == "store":
                StoreCommand(logger, repository).run(
                    ns.command,
                    name=ns.name,
                    description=ns.description,
                    tags=_split_tags(ns.tag),
                    category=ns.category,
                    force=ns.force,
                )
            else:
                SampleCommand(logger, repository).run(ns.number, ns.cleanup)
    except (AppError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())