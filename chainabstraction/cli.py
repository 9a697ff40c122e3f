"""Command-line interface for the chain abstraction client."""
from __future__ import annotations

import argparse
import asyncio
import json
import sys
from typing import Any

from .client import Client
from .config import build_client, load_config
from .errors import ChainAbstractionError
from .logging_setup import configure_logging
from .providers import RpcError


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse CLI parser."""
    parser = argparse.ArgumentParser(
        prog="chain-client",
        description="Query and broadcast through configured chain providers",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to config.yaml (default: config.yaml in the current directory)",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )

    sub = parser.add_subparsers(dest="command")

    sub.add_parser("height", help="Current block height")

    block_parser = sub.add_parser("block", help="Block by hash or number")
    block_parser.add_argument("block", help="Block hash (hex) or block number")
    block_parser.add_argument(
        "--include-tx", action="store_true", help="Fetch full transactions"
    )

    tx_parser = sub.add_parser("tx", help="Transaction by hash")
    tx_parser.add_argument("tx_hash")

    balance_parser = sub.add_parser("balance", help="Balance of one or more addresses")
    balance_parser.add_argument("addresses", nargs="+")

    broadcast_parser = sub.add_parser("broadcast", help="Broadcast a raw transaction")
    broadcast_parser.add_argument("raw_transaction")

    secret_parser = sub.add_parser("secret", help="Derive a swap secret from a message")
    secret_parser.add_argument("message")

    return parser


async def _dispatch(client: Client, args: argparse.Namespace) -> Any:
    """Execute the selected command."""
    if args.command == "height":
        return await client.get_block_height()
    if args.command == "block":
        if args.block.isdigit():
            return await client.get_block_by_number(int(args.block), args.include_tx)
        return await client.get_block_by_hash(args.block, args.include_tx)
    if args.command == "tx":
        return await client.get_transaction_by_hash(args.tx_hash)
    if args.command == "balance":
        return await client.get_balance(args.addresses)
    if args.command == "broadcast":
        return await client.send_raw_transaction(args.raw_transaction)
    if args.command == "secret":
        return await client.swap.generate_secret(args.message)
    raise ValueError(f"Unknown command: {args.command}")


async def _run(args: argparse.Namespace) -> int:
    configure_logging(args.log_level)
    client = build_client(load_config(args.config))

    try:
        result = await _dispatch(client, args)
    except (ChainAbstractionError, RpcError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(json.dumps(result, indent=2, default=str))
    return 0


def main() -> None:
    """Entry point."""
    parser = build_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    sys.exit(asyncio.run(_run(args)))
