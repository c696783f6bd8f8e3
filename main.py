#!/usr/bin/env python3
"""
Display an NFT and the balances held by a wallet.

Reads BP_TOKEN and the other settings from the environment or a .env file,
fetches the token and balances from OneSource, and prints the page.
"""

import argparse
import asyncio
import logging
import sys

from adapters.onesource import OneSourceAdapter
from config import Config, ConfigError
from nft_viewer import NFTViewer
from renderer import render_page

EXIT_CODES = {"ok": 0, "error": 1, "not_found": 2}


def positive_int(value):
    number = int(value)
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return number


def non_negative_int(value):
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"must not be negative, got {value}")
    return number


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Show NFT metadata and balances")
    parser.add_argument("--contract", help="Contract address")
    parser.add_argument("--token-id", help="Token ID")
    parser.add_argument("--owner", help="Wallet address for the balance list")
    parser.add_argument(
        "--first", type=positive_int, default=10, help="Balance page size"
    )
    parser.add_argument(
        "--skip", type=non_negative_int, default=0, help="Balance page offset"
    )
    parser.add_argument(
        "--no-balances", action="store_true", help="Only fetch the token"
    )
    parser.add_argument(
        "--check", action="store_true", help="Check the API token before loading"
    )
    parser.add_argument("--debug", action="store_true", help="Verbose logging")
    return parser.parse_args(argv)


async def run(config: Config, args) -> int:
    async with NFTViewer(config) as viewer:
        result = await viewer.load(
            contract=args.contract,
            token_id=args.token_id,
            owner=args.owner,
            include_balances=not args.no_balances,
            first=args.first,
            skip=args.skip,
        )

    print(render_page(result, config.image_hosts))
    return EXIT_CODES[result.status]


def main(argv=None) -> int:
    args = parse_args(argv)

    try:
        config = Config.from_env()
    except ConfigError as e:
        print(f"❌ {e}")
        return EXIT_CODES["error"]

    logging.basicConfig(
        level=logging.DEBUG if args.debug else config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if not config.bp_token:
        print("❌ BP_TOKEN environment variable is required")
        print("Please set your OneSource API token in a .env file")
        return EXIT_CODES["error"]

    if args.check:
        checker = OneSourceAdapter(config)
        try:
            accepted = checker.authenticate()
        finally:
            checker.session.close()
        if not accepted:
            print("❌ OneSource rejected BP_TOKEN")
            return EXIT_CODES["error"]

    return asyncio.run(run(config, args))


if __name__ == "__main__":
    sys.exit(main())
