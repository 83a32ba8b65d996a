"""
Block explorer transaction indexer client

Talks to an Etherscan-compatible ``txlist`` endpoint (BscScan by default).
"""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from ..models import IndexedTransaction

logger = logging.getLogger(__name__)

NO_TRANSACTIONS_MESSAGE = "No transactions found"


class IndexerError(RuntimeError):
    """Raised when the indexer returns an unusable response."""


class TransactionIndexer:
    """
    Fetches the full transaction list of a contract, oldest first.

    An ``httpx.AsyncClient`` may be injected (tests, connection reuse);
    otherwise a client is opened per request.
    """

    def __init__(
        self,
        api_url: str,
        api_key: str = "",
        *,
        timeout: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.api_url = api_url
        self.api_key = api_key
        self.timeout = timeout
        self._client = client

    async def get_transactions(self, address: str) -> list[IndexedTransaction]:
        """Return every transaction for ``address`` in ascending time order"""
        params = {
            "module": "account",
            "action": "txlist",
            "address": address,
            "apikey": self.api_key,
            "sort": "asc",
        }
        payload = await self._http_get(params)
        rows = self._extract_result(payload)

        try:
            transactions = [IndexedTransaction.model_validate(row) for row in rows]
        except ValidationError as exc:
            raise IndexerError(f"Malformed transaction in indexer response: {exc}") from exc

        logger.debug("Indexer returned %d transactions for %s", len(transactions), address)
        return transactions

    async def _http_get(self, params: dict[str, Any]) -> Any:
        if self._client is not None:
            response = await self._client.get(self.api_url, params=params, timeout=self.timeout)
        else:
            async with httpx.AsyncClient() as client:
                response = await client.get(self.api_url, params=params, timeout=self.timeout)
        response.raise_for_status()
        try:
            return response.json()
        except ValueError as exc:
            raise IndexerError("Indexer returned a non-JSON response") from exc

    @staticmethod
    def _extract_result(payload: Any) -> list[dict[str, Any]]:
        if not isinstance(payload, dict):
            raise IndexerError("Unexpected indexer response")

        result = payload.get("result")
        if isinstance(result, list):
            return result

        message = payload.get("message") or ""
        if result is None and message.startswith(NO_TRANSACTIONS_MESSAGE):
            return []

        # Etherscan-style APIs put the error text in ``result`` (e.g. "Invalid API Key")
        detail = result if isinstance(result, str) and result else message or "unknown error"
        raise IndexerError(f"Indexer request failed: {detail}")
