"""
Service layer: on-chain reads, indexer access and history reconstruction.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..config import StakingConfig
from .chain import ChainClients
from .history import HistoryReconstructor
from .indexer import TransactionIndexer
from .ownership import NFTOwnershipReader
from .stats import StakingStatsAggregator
from .transactions import StakingTransactor


@dataclass
class StakingServices:
    """Everything the HTTP layer needs, wired from one configuration"""
    ownership_reader: NFTOwnershipReader
    history_reconstructor: HistoryReconstructor
    stats_aggregator: StakingStatsAggregator
    chain: ChainClients | None = None
    transactor: StakingTransactor | None = None

    @classmethod
    def from_config(cls, config: StakingConfig) -> "StakingServices":
        chain = ChainClients.from_config(config)
        indexer = TransactionIndexer(
            config.indexer_api_url,
            config.indexer_api_key,
            timeout=config.indexer_timeout,
        )
        ownership_reader = NFTOwnershipReader(chain.nft_contract)
        history_reconstructor = HistoryReconstructor(indexer, config.staking_contract_address)
        return cls(
            ownership_reader=ownership_reader,
            history_reconstructor=history_reconstructor,
            stats_aggregator=StakingStatsAggregator(ownership_reader, history_reconstructor),
            chain=chain,
            transactor=StakingTransactor(
                chain.w3,
                chain.staking_contract,
                receipt_timeout=config.receipt_timeout,
            ),
        )


__all__ = [
    "ChainClients",
    "HistoryReconstructor",
    "NFTOwnershipReader",
    "StakingServices",
    "StakingStatsAggregator",
    "StakingTransactor",
    "TransactionIndexer",
]
