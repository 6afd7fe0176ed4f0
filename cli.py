#!/usr/bin/env python3
"""walletfetch: print a wallet's balances across configured EVM networks"""

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Optional

from walletfetch import __version__
from walletfetch.core.errors import ConfigurationError, ResolutionFailed
from walletfetch.logging_config import setup_logging
from walletfetch.providers.rpc import JsonRpcClient
from walletfetch.render import render_report
from walletfetch.services.balances import BalanceAggregator
from walletfetch.services.config_file import create_default_config, default_config_path, load_registry
from walletfetch.services.name_resolver import NameResolver


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="walletfetch", description="Neofetch but for your wallet")
    parser.add_argument("identifier", nargs="?", help="Address or ENS name (default: address from config)")
    parser.add_argument("--config", type=Path, help="Path to config.toml")
    parser.add_argument("--log-level", help="Logging level (default: WARNING)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


async def fetch(identifier: Optional[str], config_path: Path) -> int:
    registry = load_registry(config_path)

    identifier = identifier or registry.default_address
    if not identifier:
        print(
            "❌ No address provided. Pass it as an argument or set it in the config file",
            file=sys.stderr,
        )
        return 1

    if not registry.networks:
        print(f"⚠️  No networks defined in {config_path}", file=sys.stderr)

    async with JsonRpcClient() as rpc:
        address = await NameResolver.from_registry(rpc, registry).resolve(identifier)
        report = await BalanceAggregator(rpc).aggregate(address, registry, identifier=identifier)

    print(render_report(report))
    return 0


async def main(argv: Optional[list] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.log_level)

    config_path = args.config or default_config_path()
    if not config_path.exists():
        create_default_config(config_path)
        print(f"📝 Created a config file at {config_path}; edit it and run again.")
        return 1

    try:
        return await fetch(args.identifier, config_path)
    except ConfigurationError as e:
        print(f"❌ Config error: {e}", file=sys.stderr)
    except ResolutionFailed as e:
        print(f"❌ {e}", file=sys.stderr)
    return 1


def run() -> None:
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
