# storage_probe/config.py
"""
Environment driven settings for the storage probe.

A ``.env`` file in the working directory is loaded first (python-dotenv), so
``ALCHEMY_API_KEY`` can live there instead of the shell environment.
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

from .exceptions import ConfigurationError

API_KEY_ENV = "ALCHEMY_API_KEY"

DEFAULT_NETWORK = "sepolia"
ALCHEMY_URL_TEMPLATE = "https://eth-{network}.g.alchemy.com/v2/{api_key}"
SUPPORTED_NETWORKS = ("mainnet", "sepolia", "holesky")

# Example transaction used when no hash is supplied on the command line or in TX_HASH
DEFAULT_TX_HASH = "0xee6285bebb260c120525d4e09c6fa783a8ddb6beeee89468ec9a2cc9a9a98ce8"


@dataclass(frozen=True)
class Settings:
    api_key: str
    network: str = DEFAULT_NETWORK
    rpc_url_override: Optional[str] = None
    tx_hash: Optional[str] = None
    timeout: Optional[float] = None
    log_level: str = "INFO"

    @property
    def rpc_url(self) -> str:
        if self.rpc_url_override:
            return self.rpc_url_override
        return ALCHEMY_URL_TEMPLATE.format(network=self.network, api_key=self.api_key)

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        load_dotenv_file: bool = True,
        network: Optional[str] = None,
    ) -> "Settings":
        """
        Build settings from environment variables.

        Args:
            environ: Mapping to read from (defaults to ``os.environ``)
            load_dotenv_file: Whether to load a ``.env`` file into ``os.environ`` first
            network: Network chosen by the caller; takes precedence over ETH_NETWORK

        Raises:
            ConfigurationError: If the API key is missing or a value is invalid
        """
        if environ is None:
            if load_dotenv_file:
                load_dotenv()
            environ = os.environ

        api_key = environ.get(API_KEY_ENV, "").strip()
        if not api_key:
            raise ConfigurationError(f"{API_KEY_ENV} is not defined in the environment or .env")

        network = validate_network(network or environ.get("ETH_NETWORK", DEFAULT_NETWORK))

        return cls(
            api_key=api_key,
            network=network,
            rpc_url_override=environ.get("ETH_RPC_URL") or None,
            tx_hash=environ.get("TX_HASH") or None,
            timeout=parse_timeout(environ.get("RPC_TIMEOUT")),
            log_level=environ.get("LOG_LEVEL", "INFO"),
        )


def validate_network(network: str) -> str:
    network = network.strip().lower()
    if network not in SUPPORTED_NETWORKS:
        raise ConfigurationError(
            f"Unsupported network: {network}. Supported networks: {', '.join(SUPPORTED_NETWORKS)}"
        )
    return network


def parse_timeout(raw: Optional[str]) -> Optional[float]:
    if raw is None or not raw.strip():
        return None
    try:
        timeout = float(raw)
    except ValueError:
        raise ConfigurationError(f"RPC_TIMEOUT must be a number of seconds, got {raw!r}")
    if timeout <= 0:
        raise ConfigurationError(f"RPC_TIMEOUT must be positive, got {raw!r}")
    return timeout
