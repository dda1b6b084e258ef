from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from kontentsync.app import list_nodes, process_webhook
from kontentsync.config import VERBOSE, ConfigurationError, configure_logging

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)

STDIN_MARKER = "-"


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Reconcile cached Kontent content")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Emit debug diagnostics for every ignored or skipped step",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    webhook = subparsers.add_parser("webhook", help="Process one Kontent webhook body")
    webhook.add_argument(
        "source",
        type=str,
        help=f"Path to a JSON webhook body, or '{STDIN_MARKER}' to read from stdin",
    )

    nodes = subparsers.add_parser("nodes", help="List nodes in the local store")
    nodes.add_argument(
        "--type",
        dest="node_type",
        type=str,
        help="Only list nodes of this type (e.g. kontent_item_article)",
    )

    return parser.parse_args(list(argv))


def _read_body(source: str) -> str:
    if source == STDIN_MARKER:
        return sys.stdin.read()
    path = Path(source)
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ValueError(f"Cannot read webhook body from {path}: {exc}") from exc


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args: argparse.Namespace
    try:
        parsed_args = _parse_args(args_list)
        configure_logging(level=VERBOSE if parsed_args.verbose else logging.INFO)
        body = _read_body(parsed_args.source) if parsed_args.command == "webhook" else None
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        if parsed_args.command == "webhook":
            outcome = process_webhook(body)
            log.info(
                "Webhook %s: processed=%s, touched=%s",
                outcome.status,
                len(outcome.processed_ids),
                len(outcome.touched_ids),
            )
        elif parsed_args.command == "nodes":
            for node in list_nodes(node_type=parsed_args.node_type):
                print(f"{node.id}\t{node.type}\t{node.codename or ''}\t{node.preferred_language or ''}")
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301
    except ConfigurationError:
        log.exception("Configuration error")
        sys.exit(2)
    except Exception:
        log.exception("Fatal error during reconciliation")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    """Console script entry point: load ``.env`` and install the SIGINT handler."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
