"""Command-line interface for loading seeds and running the report.

Provides subcommands: `load`, `report`, and `all`. Each command is
implemented as a `cmd_*` function that accepts an argparse namespace and a
store handle opened once by `main`.
"""
from __future__ import annotations

import argparse
import logging
from pathlib import Path

from dotenv import load_dotenv
from pymongo.errors import PyMongoError

from zenclass_queries.config import get_settings
from zenclass_queries.db import DocumentStore, open_store
from zenclass_queries.ingest.load_collections import load_all
from zenclass_queries.ingest.seed import SeedDataError
from zenclass_queries.logging_config import DEFAULT_LOG_PATH, configure_logging
from zenclass_queries.report.questions import run_report

log = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1


# --------------------------------------------------
# Commands
# --------------------------------------------------
def cmd_load(args: argparse.Namespace, store: DocumentStore) -> None:
    """Replace every seed collection with the contents of `args.seed_dir`."""
    load_all(store, args.settings.seed_dir)


def cmd_report(_: argparse.Namespace, store: DocumentStore) -> None:
    """Ask the six questions against the stored collections."""
    run_report(store)


def cmd_all(args: argparse.Namespace, store: DocumentStore) -> None:
    """Convenience: load, then report, over one connection."""
    cmd_load(args, store)
    cmd_report(args, store)


COMMANDS = {
    "load": cmd_load,
    "report": cmd_report,
    "all": cmd_all,
}


# --------------------------------------------------
# CLI
# --------------------------------------------------
def build_parser() -> argparse.ArgumentParser:
    """Build and return the top-level argument parser for the CLI.

    Returns:
        Configured argparse.ArgumentParser instance.
    """
    p = argparse.ArgumentParser(prog="zenclass-queries")
    p.add_argument("--mongo-uri", default=None, help="used when MONGODB_URI/MONGO_URI are unset")
    p.add_argument("--seed-dir", type=Path, default=None)
    p.add_argument("--memory", action="store_true", help="use an in-process store instead of MongoDB")
    p.add_argument("--log-file", type=Path, default=DEFAULT_LOG_PATH)

    sub = p.add_subparsers(dest="cmd", required=True)
    sub.add_parser("load")
    sub.add_parser("report")
    sub.add_parser("all")
    return p


def main(argv: list[str] | None = None) -> int:
    """CLI entry point: parse args, configure logging, run the command.

    Returns:
        0 on success, 1 when the store fails or a seed file is missing or malformed.
    """
    load_dotenv()
    args = build_parser().parse_args(argv)
    configure_logging(args.log_file)

    args.settings = get_settings(
        uri=args.mongo_uri,
        seed_dir=args.seed_dir,
        store="memory" if args.memory else "mongo",
    )

    try:
        with open_store(args.settings) as store:
            COMMANDS[args.cmd](args, store)
    except PyMongoError:
        log.exception("Error running queries: MongoDB operation failed")
        return EXIT_FAILURE
    except (OSError, SeedDataError):
        log.exception("Error running queries: seed data could not be loaded")
        return EXIT_FAILURE

    log.info("Finished.")
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
