"""
Staking statistics

Joins current ownership with reconstructed history and computes live
reward accrual for staked tokens.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Callable, Union

from ..models import EnrichedTokenRecord, NFTOwnership, StakingStats, TokenRecord, TokenStatus
from .history import HistoryReconstructor
from .ownership import NFTOwnershipReader

logger = logging.getLogger(__name__)

MS_PER_DAY = 1000 * 60 * 60 * 24


def now_ms() -> int:
    return int(time.time() * 1000)


def calculate_rewards(staking_duration_ms: float, multiplier: int) -> float:
    """Linear accrual: fractional days staked times the tier multiplier."""
    days_staked = staking_duration_ms / MS_PER_DAY
    return days_staked * multiplier


def enrich_records(
    records: list[TokenRecord], nfts: list[NFTOwnership], now: int
) -> list[Union[EnrichedTokenRecord, TokenRecord]]:
    """Attach tier, multiplier and rewards to records of tokens still owned."""
    owned = {str(nft.token_id): nft for nft in nfts}
    enriched: list[Union[EnrichedTokenRecord, TokenRecord]] = []

    for record in records:
        nft = owned.get(str(record.token_id))
        if nft is None:
            # No longer held (e.g. transferred away)
            enriched.append(record)
            continue

        rewards = 0.0
        if record.status is TokenStatus.STAKED and record.current_stake_time is not None:
            rewards = calculate_rewards(now - record.current_stake_time, nft.multiplier)

        enriched.append(
            EnrichedTokenRecord(
                **record.model_dump(),
                tier=nft.tier,
                multiplier=nft.multiplier,
                current_rewards=rewards,
            )
        )

    return enriched


class StakingStatsAggregator:
    """Builds the staking summary for an address"""

    def __init__(
        self,
        ownership_reader: NFTOwnershipReader,
        history_reconstructor: HistoryReconstructor,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        self.ownership_reader = ownership_reader
        self.history_reconstructor = history_reconstructor
        self.clock = clock

    async def calculate_staking_stats(self, address: str) -> StakingStats:
        tasks = [
            asyncio.ensure_future(self.ownership_reader.get_nfts_by_address(address)),
            asyncio.ensure_future(self.history_reconstructor.get_transaction_details(address)),
        ]
        try:
            nfts, records = await asyncio.gather(*tasks)
        except BaseException:
            # A failed side fails the request; stop the other one
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

        details = enrich_records(records, nfts, self.clock())

        return StakingStats(
            total_nfts=len(nfts),
            staked_nfts=sum(1 for d in details if d.status is TokenStatus.STAKED),
            rented_nfts=sum(1 for d in details if d.status is TokenStatus.RENTED),
            nft_details=details,
        )
