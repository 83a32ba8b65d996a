"""
NFT Staking API configuration

Settings are read once at process start from environment variables
(optionally seeded from a .env file) and handed to every component
explicitly.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Mapping

from dotenv import load_dotenv
from eth_utils import is_address

DEFAULT_INDEXER_API_URL = "https://api-testnet.bscscan.com/api"
VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class ConfigError(ValueError):
    """Raised when the service configuration is incomplete or invalid."""


def _parse_bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in ("true", "yes", "1", "on")


def _parse_list(value: str | None) -> list[str]:
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


def _parse_number(env: Mapping[str, str], key: str, default, cast):
    raw = env.get(key)
    if raw is None or raw == "":
        return default
    try:
        return cast(raw)
    except ValueError as exc:
        raise ConfigError(f"Invalid {key}: {raw!r}") from exc


@dataclass(frozen=True)
class StakingConfig:
    """Configuration for the NFT staking API"""
    rpc_url: str = ""
    staking_contract_address: str = ""
    nft_contract_address: str = ""
    indexer_api_url: str = DEFAULT_INDEXER_API_URL
    indexer_api_key: str = ""
    indexer_timeout: float = 30.0  # seconds
    receipt_timeout: int = 120  # seconds
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"
    cors_origins: list[str] = field(default_factory=lambda: ["*"])
    require_api_key: bool = False
    api_key_file: str | None = None

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> "StakingConfig":
        """
        Build configuration from environment variables.

        When ``env`` is omitted, ``.env`` is loaded into the process
        environment first and ``os.environ`` is used.
        """
        if env is None:
            load_dotenv()
            env = os.environ

        return cls(
            rpc_url=env.get("BSC_TESTNET_RPC", ""),
            staking_contract_address=env.get("STAKING_CONTRACT_ADDRESS", ""),
            nft_contract_address=env.get("NFT_CONTRACT_ADDRESS", ""),
            indexer_api_url=env.get("BSCSCAN_API_URL") or DEFAULT_INDEXER_API_URL,
            indexer_api_key=env.get("BSCSCAN_API_KEY", ""),
            indexer_timeout=_parse_number(env, "INDEXER_TIMEOUT", 30.0, float),
            receipt_timeout=_parse_number(env, "RECEIPT_TIMEOUT", 120, int),
            host=env.get("HOST", "0.0.0.0"),
            port=_parse_number(env, "PORT", 3000, int),
            log_level=env.get("LOG_LEVEL", "INFO").upper(),
            cors_origins=_parse_list(env.get("CORS_ORIGINS")) or ["*"],
            require_api_key=_parse_bool(env.get("NFT_API_REQUIRE_API_KEY")),
            api_key_file=env.get("NFT_API_KEY_FILE") or None,
        )

    def validate(self) -> None:
        """Validate configuration, raising ConfigError on the first problem"""
        if not self.rpc_url:
            raise ConfigError("BSC_TESTNET_RPC must be set")
        if not is_address(self.staking_contract_address):
            raise ConfigError(
                f"Invalid staking contract address: {self.staking_contract_address!r}"
            )
        if not is_address(self.nft_contract_address):
            raise ConfigError(f"Invalid NFT contract address: {self.nft_contract_address!r}")
        if not self.indexer_api_url:
            raise ConfigError("BSCSCAN_API_URL cannot be empty")
        if self.indexer_timeout <= 0:
            raise ConfigError(f"Invalid indexer_timeout: {self.indexer_timeout}. Must be > 0")
        if self.receipt_timeout <= 0:
            raise ConfigError(f"Invalid receipt_timeout: {self.receipt_timeout}. Must be > 0")
        if not (1 <= self.port <= 65535):
            raise ConfigError(f"Invalid port: {self.port}. Must be between 1-65535")
        if self.log_level.upper() not in VALID_LOG_LEVELS:
            raise ConfigError(f"Invalid log level: {self.log_level}. Must be one of {VALID_LOG_LEVELS}")

    def get_public_config(self) -> dict:
        """Configuration safe to expose (no API keys)"""
        return {
            "rpc_url": self.rpc_url,
            "staking_contract_address": self.staking_contract_address,
            "nft_contract_address": self.nft_contract_address,
            "indexer_api_url": self.indexer_api_url,
            "require_api_key": self.require_api_key,
        }
