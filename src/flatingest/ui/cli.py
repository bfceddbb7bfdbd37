# ruff: noqa: T201

from __future__ import annotations

import argparse
import json
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING
from uuid import UUID

from dotenv import load_dotenv

from flatingest.app import bulk_import, create_term
from flatingest.config import ConfigurationError, configure_logging
from flatingest.domain.bulk_import import BatchSourceError

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Bulk import repository objects, files, and media"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    bulk = subparsers.add_parser(
        "bulk-import",
        help="Import entities defined in a JSON batch file",
    )
    bulk.add_argument("json_file", type=str, help="Path to the JSON batch file")
    bulk.add_argument(
        "--indent",
        type=int,
        default=4,
        help="Indentation of the JSON report printed to stdout (default: %(default)s)",
    )

    term = subparsers.add_parser("term", help="Classification term commands")
    term_sub = term.add_subparsers(dest="term_command", required=True)
    term_create = term_sub.add_parser("create", help="Create a classification term")
    term_create.add_argument(
        "--vocabulary",
        type=str,
        required=True,
        help="Vocabulary the term belongs to (for example islandora_models)",
    )
    term_create.add_argument(
        "--name",
        type=str,
        required=True,
        help="Human readable term name",
    )
    term_create.add_argument(
        "--uuid",
        type=str,
        help="Optional uuid to assign instead of a generated one",
    )

    return parser.parse_args(list(argv))


def _parse_uuid(value: str) -> UUID:
    try:
        return UUID(value)
    except ValueError as exc:
        raise ValueError(f"Invalid UUID: {value}") from exc


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    configure_logging()
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)

    term_uuid: UUID | None = None
    try:
        if parsed_args.command == "term" and parsed_args.uuid is not None:
            term_uuid = _parse_uuid(parsed_args.uuid)
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        if parsed_args.command == "bulk-import":
            report = bulk_import(parsed_args.json_file)
            print(json.dumps(report.to_dict(), indent=parsed_args.indent))
        elif parsed_args.command == "term" and parsed_args.term_command == "create":
            term = create_term(
                vocabulary=parsed_args.vocabulary,
                name=parsed_args.name,
                uuid=term_uuid,
            )
            print(term.uuid)
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301

    except (BatchSourceError, ConfigurationError) as exc:
        log.error("%s", exc)  # noqa: TRY400
        sys.exit(1)
    except Exception:
        log.exception("Fatal error during import")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    """Console-script entry point."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
