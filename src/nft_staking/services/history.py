"""
Staking history reconstruction

Replays an address's staking contract transactions, oldest first, through a
small per-token state machine:

    stake    -> staked   (currentStakeTime = tx time)
    unstake  -> unstaked (duration event only if a stake time is known)
    rent     -> rented   (currentRentTime = tx time, never cleared)

There is no decoded "end rent" call, so a rented token stays rented until a
later stake or unstake transaction overrides it.
"""

from __future__ import annotations

import logging
from typing import Iterable

from ..models import (
    IndexedTransaction,
    RentEvent,
    StakeEvent,
    StakingAction,
    TokenRecord,
    TokenStatus,
    UnstakeEvent,
)
from .decoder import DecodedCall, decode_transaction_input
from .indexer import TransactionIndexer

logger = logging.getLogger(__name__)


def apply_call(record: TokenRecord, call: DecodedCall, tx: IndexedTransaction) -> None:
    """Apply one decoded call to a token record in place."""
    timestamp = tx.timestamp_ms

    if call.action is StakingAction.STAKE:
        record.status = TokenStatus.STAKED
        record.current_stake_time = timestamp
        record.stake_history.append(StakeEvent(timestamp=timestamp, transaction_hash=tx.hash))

    elif call.action is StakingAction.UNSTAKE:
        record.status = TokenStatus.UNSTAKED
        if record.current_stake_time is not None:
            record.stake_history.append(
                UnstakeEvent(
                    timestamp=timestamp,
                    duration=timestamp - record.current_stake_time,
                    transaction_hash=tx.hash,
                )
            )
        record.current_stake_time = None

    elif call.action is StakingAction.RENT:
        record.status = TokenStatus.RENTED
        record.current_rent_time = timestamp
        record.rent_history.append(RentEvent(timestamp=timestamp, transaction_hash=tx.hash))

    record.last_action = call.action


def reconstruct_history(
    transactions: Iterable[IndexedTransaction], address: str
) -> list[TokenRecord]:
    """
    Build one TokenRecord per token touched by ``address``.

    Transactions must already be in ascending time order; they are not
    re-sorted. Only successful transactions sent by ``address`` count, and
    calls the decoder does not recognise are skipped without creating a
    record. Records come back in first-seen order.
    """
    sender = address.lower()
    records: dict[int, TokenRecord] = {}

    for tx in transactions:
        if tx.from_address.lower() != sender or not tx.succeeded:
            continue

        call = decode_transaction_input(tx.input)
        if call is None:
            continue

        record = records.get(call.token_id)
        if record is None:
            record = records[call.token_id] = TokenRecord(token_id=call.token_id)

        apply_call(record, call, tx)

    return list(records.values())


class HistoryReconstructor:
    """Fetches staking contract history from the indexer and replays it"""

    def __init__(self, indexer: TransactionIndexer, staking_contract_address: str) -> None:
        self.indexer = indexer
        self.staking_contract_address = staking_contract_address

    async def get_transaction_details(self, address: str) -> list[TokenRecord]:
        transactions = await self.indexer.get_transactions(self.staking_contract_address)
        records = reconstruct_history(transactions, address)
        logger.debug(
            "Rebuilt %d token records for %s from %d transactions",
            len(records),
            address,
            len(transactions),
        )
        return records
