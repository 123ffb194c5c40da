from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING
from uuid import UUID

from dotenv import load_dotenv

from catalogsync.adapters.batch_file import load_batch
from catalogsync.app import (
    find_objects,
    ingest_batch,
    register_external_source,
    remove_object,
)
from catalogsync.config import ConfigurationError, configure_logging, read_env
from catalogsync.domain.errors import CatalogError
from catalogsync.domain.model import DeleteSemantic, ObjectKind

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)

DEFAULT_USER = "catalogsync"


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Reconcile data-engine reports into the catalog")
    parser.add_argument(
        "--user",
        type=str,
        default=read_env("CATALOGSYNC_USER", default=DEFAULT_USER),
        help="User recorded on every change (default: %(default)s)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    source = subparsers.add_parser("source", help="External source management commands")
    source_sub = source.add_subparsers(dest="source_command", required=True)
    source_register = source_sub.add_parser("register", help="Register an external source")
    source_register.add_argument("qualified_name", type=str, help="Source qualified name")
    source_register.add_argument(
        "--display-name",
        type=str,
        help="Optional human readable name",
    )

    ingest = subparsers.add_parser("ingest", help="Ingest a JSON batch document")
    ingest.add_argument("path", type=Path, help="Path to the batch document")

    remove = subparsers.add_parser("remove", help="Remove a catalogued object")
    remove.add_argument("--id", dest="object_id", type=str, required=True, help="Object id")
    remove.add_argument(
        "--qualified-name",
        type=str,
        required=True,
        help="Qualified name of the object (must match the id)",
    )
    remove.add_argument(
        "--source",
        type=str,
        required=True,
        help="Qualified name of the requesting external source",
    )
    remove.add_argument(
        "--semantic",
        type=str,
        choices=[semantic.value for semantic in DeleteSemantic],
        default=DeleteSemantic.SOFT.value,
        help="Delete semantic (default: %(default)s)",
    )

    show = subparsers.add_parser("show", help="Look up a catalogued object")
    show.add_argument("qualified_name", type=str, help="Qualified name to look up")
    show.add_argument(
        "--kind",
        type=str,
        choices=[kind.value for kind in ObjectKind],
        default=ObjectKind.CONTAINER.value,
        help="Object kind (default: %(default)s)",
    )
    show.add_argument(
        "--include-deleted",
        action="store_true",
        help="Also list soft-deleted tombstones",
    )

    return parser.parse_args(list(argv))


def _parse_uuid(value: str) -> UUID:
    try:
        return UUID(value)
    except ValueError as exc:
        raise ValueError(f"Invalid UUID: {value}") from exc


def _run_command(args: argparse.Namespace) -> None:
    if args.command == "source" and args.source_command == "register":
        source_id = register_external_source(
            args.qualified_name,
            user=args.user,
            display_name=args.display_name,
        )
        log.info("Registered source %r as %s", args.qualified_name, source_id)
    elif args.command == "ingest":
        batch = load_batch(args.path)
        results = ingest_batch(batch, user=args.user)
        log.info("Ingest finished: applied=%s", sum(result.applied for result in results))
    elif args.command == "remove":
        remove_object(
            _parse_uuid(args.object_id),
            args.qualified_name,
            args.source,
            user=args.user,
            semantic=DeleteSemantic(args.semantic),
        )
    elif args.command == "show":
        found = find_objects(
            args.qualified_name,
            ObjectKind(args.kind),
            user=args.user,
            include_deleted=args.include_deleted,
        )
        if not found:
            log.info("No %s found for %r", args.kind, args.qualified_name)
        for catalogued in found:
            log.info(
                "%s %s %r display_name=%r source=%s parent=%s deleted_at=%s",
                catalogued.kind,
                catalogued.id,
                catalogued.qualified_name,
                catalogued.display_name,
                catalogued.owning_source_id,
                catalogued.parent_id,
                catalogued.deleted_at,
            )
    else:
        raise ValueError(f"Unsupported command: {args.command}")


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    try:
        configure_logging()
    except ConfigurationError:
        configure_logging(level=logging.INFO)
        log.exception("Invalid logging configuration")
        sys.exit(2)
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        parsed_args = _parse_args(args_list)
        if parsed_args.command == "remove":
            _parse_uuid(parsed_args.object_id)
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        _run_command(parsed_args)
    except CatalogError as exc:
        log.error("Catalog operation failed: %s", exc)  # noqa: TRY400
        sys.exit(1)
    except ConfigurationError as exc:
        log.error("Configuration error: %s", exc)  # noqa: TRY400
        sys.exit(2)
    except ValueError:
        log.exception("Invalid input")
        sys.exit(2)
    except Exception:
        log.exception("Fatal error")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
