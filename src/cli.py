#!/usr/bin/env python3
"""
Command line entry point for the access list storage inspector.

Fetches a transaction, asks the provider for the access list it would produce
(eth_createAccessList) and prints the current value of every listed storage
slot.
"""

import argparse
import sys
from typing import List, Optional

import structlog
from eth_utils import is_hexstr
from web3 import Web3

from storage_probe.config import DEFAULT_TX_HASH, SUPPORTED_NETWORKS, Settings
from storage_probe.exceptions import ConfigurationError, StorageProbeError
from storage_probe.logging_config import configure_logging
from storage_probe.pipeline import run_inspection
from storage_probe.request_builder import DEFAULT_BLOCK
from storage_probe.rpc_client import AccessListClient

logger = structlog.get_logger()

TX_HASH_HEX_LENGTH = 64


def is_tx_hash(value: str) -> bool:
    """True for a 0x-prefixed, 32 byte hex string."""
    return (
        isinstance(value, str)
        and value.startswith("0x")
        and len(value) == TX_HASH_HEX_LENGTH + 2
        and is_hexstr(value)
    )


def connect_to_ethereum(rpc_url: str, timeout: Optional[float] = None) -> Web3:
    """
    Create a Web3 instance for the provider endpoint.

    No connectivity probe is made here; the first real call surfaces any
    connection problem.
    """
    # an explicit None timeout replaces web3's 30s default
    return Web3(Web3.HTTPProvider(rpc_url, request_kwargs={"timeout": timeout}))


def resolve_tx_hash(cli_value: Optional[str], settings: Settings) -> str:
    return cli_value or settings.tx_hash or DEFAULT_TX_HASH


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Show which storage slots a transaction touches and their current values",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )

    parser.add_argument(
        "tx_hash",
        nargs="?",
        help="Transaction hash (falls back to TX_HASH, then a built-in example)"
    )

    parser.add_argument(
        "--network",
        choices=SUPPORTED_NETWORKS,
        help="Alchemy network to query (overrides ETH_NETWORK)"
    )

    parser.add_argument(
        "--rpc-url",
        help="Custom RPC URL (overrides ETH_RPC_URL and the Alchemy endpoint)"
    )

    parser.add_argument(
        "--block",
        default=DEFAULT_BLOCK,
        help="Block tag for the access list and storage reads"
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (overrides LOG_LEVEL)"
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging"
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Parse arguments and run a single inspection.

    Returns:
        Exit code: 1 for a configuration error, 130 on interrupt, otherwise 0.
        Errors raised while inspecting are logged, not reflected in the exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = Settings.from_env(network=args.network)
    except ConfigurationError as e:
        configure_logging("INFO")
        logger.error("Configuration error", error=str(e))
        return 1

    log_level = "DEBUG" if args.verbose else (args.log_level or settings.log_level)
    configure_logging(log_level)

    tx_hash = resolve_tx_hash(args.tx_hash, settings)
    if not is_tx_hash(tx_hash):
        parser.error(f"Invalid transaction hash: {tx_hash}")

    rpc_url = args.rpc_url or settings.rpc_url

    print(f"txHash: {tx_hash}")

    try:
        web3 = connect_to_ethereum(rpc_url, settings.timeout)
        client = AccessListClient(rpc_url, timeout=settings.timeout)
        run_inspection(web3, client, tx_hash, block=args.block)

    except KeyboardInterrupt:
        logger.info("Inspection interrupted by user")
        return 130  # Standard exit code for Ctrl+C

    except StorageProbeError as e:
        logger.exception("Inspection failed", tx_hash=tx_hash, error=str(e))

    except Exception as e:
        logger.exception("Unexpected error during inspection", tx_hash=tx_hash, error=str(e))

    return 0


if __name__ == "__main__":
    sys.exit(main())
