"""
KV Shell - Interactive Console Entry Point
Opens the durable store and runs the command loop on stdin/stdout.

The store is journaled, so data entered survives sudden termination and is
there the next time the program starts. Nothing needs flushing on exit.
"""

import argparse
import sys
from typing import List, Optional

from kv_dispatcher import CommandDispatcher
from kv_output import OutputWriter
from kv_shell import CommandShell
from kv_state import ShellConfig
from kv_storage import StoreError, open_or_create
from log_utils import configure_logging, log_event, print_error


def parse_args(argv: Optional[List[str]] = None) -> ShellConfig:
    """Parse command-line options into a ShellConfig."""
    defaults = ShellConfig()
    parser = argparse.ArgumentParser(
        description="Interactive shell over a durable key-value store."
    )
    parser.add_argument(
        "--db",
        default=defaults.db_path,
        metavar="PATH",
        help=f"Database file path (default: {defaults.db_path})",
    )
    parser.add_argument(
        "--prompt",
        default=defaults.prompt,
        help="Prompt shown before each command",
    )
    parser.add_argument(
        "--ack",
        action="store_true",
        help="Print a confirmation after put/delete",
    )
    parser.add_argument(
        "--compact-threshold",
        type=int,
        default=defaults.compact_threshold,
        metavar="N",
        help=f"Journal records before the snapshot is rewritten (default: {defaults.compact_threshold})",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("--verbose", "-v", action="store_true", help="Log at INFO level")
    verbosity.add_argument("--debug", action="store_true", help="Log at DEBUG level")
    args = parser.parse_args(argv)

    if args.compact_threshold < 1:
        parser.error("--compact-threshold must be at least 1")

    log_level = defaults.log_level
    if args.debug:
        log_level = "DEBUG"
    elif args.verbose:
        log_level = "INFO"

    return ShellConfig(
        db_path=args.db,
        prompt=args.prompt,
        acknowledge=args.ack,
        compact_threshold=args.compact_threshold,
        log_level=log_level,
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    config = parse_args(argv)
    configure_logging(config.log_level)

    try:
        store = open_or_create(config.db_path, compact_threshold=config.compact_threshold)
    except StoreError as e:
        print_error(str(e))
        return 1

    log_event(f"Store ready at {config.db_path} with {store.size()} entries")
    writer = OutputWriter(sys.stdout)
    dispatcher = CommandDispatcher(store, writer, acknowledge=config.acknowledge)
    shell = CommandShell(dispatcher, writer, sys.stdin, prompt=config.prompt)

    try:
        return shell.run()
    except StoreError as e:
        print_error(f"Storage failure: {e}")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
