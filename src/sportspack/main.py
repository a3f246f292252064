from __future__ import annotations

import argparse
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING
from uuid import UUID

from dotenv import load_dotenv

from sportspack.app import (
    create_container,
    describe_node,
    set_node_attributes,
    sync_competition_events,
)
from sportspack.common import configure_logging
from sportspack.config import DEFAULT_SYNC_DAYS
from sportspack.domain.errors import NodeNotFoundError
from sportspack.domain.sync import SyncError

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _add_attribute_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--logo", type=str, help="Logo attachment id or URL")
    parser.add_argument(
        "--remote-provider",
        type=str,
        help="Provider name (statsperform, heimspiel, sportradar, custom)",
    )
    parser.add_argument("--remote-id", type=str, help="Identifier at the remote provider")


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Manage sportspack hierarchies and syncs")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    sync = subparsers.add_parser("sync-events", help="Sync events for a competition")
    sync.add_argument(
        "--competition",
        type=str,
        required=True,
        help="Node id of the competition container",
    )
    sync.add_argument(
        "--days",
        type=int,
        default=DEFAULT_SYNC_DAYS,
        help="Number of days to sync events for (default: %(default)s)",
    )
    sync.add_argument(
        "--provider",
        type=str,
        help="Override the provider (defaults to the competition's inherited provider)",
    )

    node = subparsers.add_parser("node", help="Node management commands")
    node_sub = node.add_subparsers(dest="node_command", required=True)

    node_create = node_sub.add_parser("create", help="Create a container")
    node_create.add_argument("--title", type=str, required=True, help="Container title")
    node_create.add_argument("--parent", type=str, help="Parent container id")
    _add_attribute_arguments(node_create)

    node_set = node_sub.add_parser("set", help="Update a node's title or attributes")
    node_set.add_argument("node_id", type=str, help="Node id")
    node_set.add_argument("--title", type=str, help="New title")
    _add_attribute_arguments(node_set)

    node_show = node_sub.add_parser("show", help="Show a node with inherited attributes")
    node_show.add_argument("node_id", type=str, help="Node id")

    return parser.parse_args(list(argv))


def _parse_uuid(value: str) -> UUID:
    try:
        return UUID(value)
    except ValueError as exc:
        raise ValueError(f"Invalid node id: {value}") from exc


def _validate(args: argparse.Namespace) -> None:
    if args.command == "sync-events":
        _parse_uuid(args.competition)
        if args.days < 1:
            raise ValueError("--days must be at least 1")
    elif args.command == "node":
        if args.node_command == "create" and args.parent is not None:
            _parse_uuid(args.parent)
        if args.node_command in {"set", "show"}:
            _parse_uuid(args.node_id)


def _run_sync(args: argparse.Namespace) -> None:
    result = sync_competition_events(
        _parse_uuid(args.competition),
        days=args.days,
        provider_override=args.provider,
    )
    for failure in result.failures:
        log.warning("Skipped event %s (%s): %s", failure.remote_id, failure.action, failure.reason)
    log.info("Sync complete! Created: %d, Updated: %d", result.created, result.updated)


def _run_node(args: argparse.Namespace) -> None:
    if args.node_command == "create":
        node_id = create_container(
            title=args.title,
            parent_id=_parse_uuid(args.parent) if args.parent else None,
            logo=args.logo,
            remote_provider=args.remote_provider,
            remote_id=args.remote_id,
        )
        log.info("Created container %s", node_id)
    elif args.node_command == "set":
        node_id = _parse_uuid(args.node_id)
        set_node_attributes(
            node_id,
            title=args.title,
            logo=args.logo,
            remote_provider=args.remote_provider,
            remote_id=args.remote_id,
        )
        log.info("Updated node %s", node_id)
    elif args.node_command == "show":
        summary = describe_node(_parse_uuid(args.node_id))
        log.info("%s [%s, level %d]", summary.breadcrumb, summary.label, summary.level)
        for attribute, value in summary.resolved.items():
            own = summary.node.attribute(attribute)
            origin = "own" if own else ("inherited" if value else "unset")
            log.info("  %s = %r (%s)", attribute, value, origin)
    else:
        raise ValueError(f"Unsupported node command: {args.node_command}")


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args: argparse.Namespace
    try:
        parsed_args = _parse_args(args_list)
        configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)
        _validate(parsed_args)
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        if parsed_args.command == "sync-events":
            _run_sync(parsed_args)
        elif parsed_args.command == "node":
            _run_node(parsed_args)
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301
    except (SyncError, NodeNotFoundError) as exc:
        log.error("%s", exc)  # noqa: TRY400
        sys.exit(1)
    except Exception:
        log.exception("Fatal error during %s", parsed_args.command)
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
