"""
Configuration for the NFT viewer.

Settings are read from the process environment (and a local .env file via
python-dotenv) once, then passed explicitly to the adapter and viewer.
"""

import logging
import os
from dataclasses import dataclass
from typing import Dict, Mapping, Optional, Tuple

from dotenv import load_dotenv

DEFAULT_API_URL = "https://api.onesource.io/v1/ethereum/graphql"
DEFAULT_CONTRACT = "0xc9041f80dce73721a5f6a779672ec57ef255d27c"
DEFAULT_TOKEN_ID = "29"
DEFAULT_OWNER = "0xd8da6bf26964af9d7eed9e03e53415d37aa96045"
DEFAULT_IPFS_GATEWAY = "ipfs.io"
DEFAULT_IMAGE_HOSTS = (
    "api.onesource.io",
    "arweave.net",
    "ipfs.io",
    "gateway.pinata.cloud",
)


class ConfigError(ValueError):
    """Raised when a setting is missing or cannot be parsed."""


@dataclass(frozen=True)
class Config:
    """Settings for one viewer run."""

    bp_token: Optional[str] = None
    api_url: str = DEFAULT_API_URL
    contract: str = DEFAULT_CONTRACT
    token_id: str = DEFAULT_TOKEN_ID
    owner: str = DEFAULT_OWNER
    request_timeout: float = 30.0
    image_hosts: Tuple[str, ...] = DEFAULT_IMAGE_HOSTS
    ipfs_gateway: str = DEFAULT_IPFS_GATEWAY
    log_level: str = "INFO"

    @classmethod
    def from_env(
        cls, environ: Mapping[str, str] = None, dotenv: bool = True
    ) -> "Config":
        """
        Build a Config from environment variables.

        Args:
            environ: Mapping to read from (defaults to os.environ)
            dotenv: Whether to load a .env file into os.environ first

        Returns:
            Populated Config

        Raises:
            ConfigError: If a numeric setting is not a positive number, or
                LOG_LEVEL is not a logging level name
        """
        if dotenv:
            load_dotenv()
        env = os.environ if environ is None else environ

        raw_timeout = env.get("REQUEST_TIMEOUT", "30")
        try:
            timeout = float(raw_timeout)
        except ValueError:
            raise ConfigError(f"REQUEST_TIMEOUT must be a number, got {raw_timeout!r}")
        if timeout <= 0:
            raise ConfigError("REQUEST_TIMEOUT must be greater than zero")

        log_level = env.get("LOG_LEVEL", "INFO").strip().upper()
        if not isinstance(logging.getLevelName(log_level), int):
            raise ConfigError(f"LOG_LEVEL must be a logging level name, got {log_level!r}")

        hosts = env.get("IMAGE_HOSTS")
        image_hosts = (
            tuple(h.strip().lower() for h in hosts.split(",") if h.strip())
            if hosts
            else DEFAULT_IMAGE_HOSTS
        )

        return cls(
            bp_token=env.get("BP_TOKEN") or None,
            api_url=env.get("ONESOURCE_API_URL", DEFAULT_API_URL),
            contract=env.get("NFT_CONTRACT", DEFAULT_CONTRACT),
            token_id=env.get("NFT_TOKEN_ID", DEFAULT_TOKEN_ID),
            owner=env.get("NFT_OWNER", DEFAULT_OWNER),
            request_timeout=timeout,
            image_hosts=image_hosts,
            ipfs_gateway=env.get("IPFS_GATEWAY", DEFAULT_IPFS_GATEWAY),
            log_level=log_level,
        )

    def auth_headers(self) -> Dict[str, str]:
        """Headers carrying the OneSource credential."""
        if not self.bp_token:
            raise ConfigError(
                "BP_TOKEN is required. Set BP_TOKEN env var or add it to .env."
            )
        return {"x-bp-token": self.bp_token}
