"""Command-line interface for the chain observer."""
from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from .chains.gnfd import GnfdClientProvider
from .config import load_config
from .errors import TIMEOUT_ERRORS, ChainError
from .logging_setup import configure_logging
from .metrics import start_metrics_server
from .services import ChainObserver

logger = logging.getLogger(__name__)

EXIT_FAILURE = 1
EXIT_TIMEOUT = 2


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse CLI parser."""
    parser = argparse.ArgumentParser(
        prog="gnfd-observer",
        description="Observe and confirm Greenfield chain state transitions",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to config.yaml (default: config.yaml in project root)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )

    sub = parser.add_subparsers(dest="command")

    sub.add_parser("height", help="Print the latest committed block height")
    sub.add_parser("wait-block", help="Wait for the next block to be produced")

    confirm_parser = sub.add_parser("confirm-tx", help="Confirm a transaction")
    confirm_parser.add_argument("tx_hash", help="Transaction hash")

    for name, help_text in (
        ("wait-seal", "Wait for an object to be sealed"),
        ("wait-reject", "Wait for an object to be rejected"),
    ):
        listen_parser = sub.add_parser(name, help=help_text)
        listen_parser.add_argument("object_id", type=int, help="On-chain object id")
        listen_parser.add_argument(
            "--iterations",
            type=_positive_int,
            default=None,
            help="Polling iterations (overrides config)",
        )

    return parser


async def _run(args: argparse.Namespace) -> int:
    """Execute the selected command and return the process exit code."""
    config = load_config(args.config)
    start_metrics_server(config.metrics)

    observer = ChainObserver(
        GnfdClientProvider.from_config(config.chain), config.observer
    )
    iterations = getattr(args, "iterations", None)
    if iterations is None:
        iterations = config.observer.listen_iterations

    try:
        if args.command == "height":
            print(await observer.current_height())
        elif args.command == "wait-block":
            await observer.wait_for_next_block()
            print(f"new block at height {await observer.current_height()}")
        elif args.command == "confirm-tx":
            tx = await observer.confirm_transaction(args.tx_hash)
            status = "ok" if tx.succeeded else f"failed (code {tx.code})"
            print(f"tx {tx.tx_hash} included at height {tx.height}: {status}")
        elif args.command == "wait-seal":
            await observer.listen_object_seal(args.object_id, iterations)
            print(f"object {args.object_id} sealed")
        elif args.command == "wait-reject":
            await observer.listen_reject_unseal_object(args.object_id, iterations)
            print(f"object {args.object_id} rejected")
    except TIMEOUT_ERRORS as e:
        logger.error("%s", e)
        return EXIT_TIMEOUT
    except ChainError as e:
        logger.error("%s", e)
        return EXIT_FAILURE
    return 0


def main() -> None:
    """Entry point."""
    parser = build_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    configure_logging(args.log_level)
    sys.exit(asyncio.run(_run(args)))
