"""
API key check for the /api/nft routes.

Enabled with NFT_API_REQUIRE_API_KEY. Accepted keys come from the
NFT_API_KEY variable and/or a key file with one key per line.
"""

import hmac
import logging
import os

from fastapi import Header, Query

from .config import StakingConfig

logger = logging.getLogger(__name__)

API_KEY_ENV_VAR = "NFT_API_KEY"


class APIKeyAuthError(RuntimeError):
    """Raised when a request carries no acceptable API key."""

    def __init__(self, message: str = "Invalid or missing API key") -> None:
        super().__init__(message)


def load_api_keys(key_file: str | None = None) -> frozenset[str]:
    keys = set()
    env_key = os.getenv(API_KEY_ENV_VAR, "").strip()
    if env_key:
        keys.add(env_key)

    if key_file:
        path = os.path.expanduser(key_file)
        try:
            with open(path, "r", encoding="utf-8") as handle:
                keys.update(
                    line.strip() for line in handle if line.strip() and not line.startswith("#")
                )
        except OSError as exc:
            logger.error("Failed to load API keys from %s: %s", path, exc)

    return frozenset(keys)


class APIKeyGuard:
    """FastAPI dependency; the key may be sent as X-API-Key or ?api_key="""

    def __init__(self, keys: frozenset[str]) -> None:
        self.keys = keys
        if not keys:
            logger.warning("API key enforcement is enabled but no keys are configured")

    @classmethod
    def from_config(cls, config: StakingConfig) -> "APIKeyGuard":
        return cls(load_api_keys(config.api_key_file))

    async def __call__(
        self,
        header_key: str | None = Header(default=None, alias="X-API-Key"),
        query_key: str | None = Query(default=None, alias="api_key"),
    ) -> None:
        presented = (header_key or query_key or "").strip()
        if not presented or not any(hmac.compare_digest(presented, key) for key in self.keys):
            raise APIKeyAuthError()
