from .nft import (
    EnrichedTokenRecord,
    IndexedTransaction,
    NFTOwnership,
    RentEvent,
    StakeEvent,
    StakingAction,
    StakingStats,
    TokenRecord,
    TokenStatus,
    UnstakeEvent,
)

__all__ = [
    "EnrichedTokenRecord",
    "IndexedTransaction",
    "NFTOwnership",
    "RentEvent",
    "StakeEvent",
    "StakingAction",
    "StakingStats",
    "TokenRecord",
    "TokenStatus",
    "UnstakeEvent",
]
