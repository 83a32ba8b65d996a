from __future__ import annotations

"""
NFT staking models

Serialized with camelCase keys to match the public JSON API.
"""
from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class TokenStatus(str, Enum):
    """Current state of a token in the staking contract"""
    UNSTAKED = "unstaked"
    STAKED = "staked"
    RENTED = "rented"


class StakingAction(str, Enum):
    """Staking contract actions recognised in transaction input"""
    STAKE = "stake"
    UNSTAKE = "unstake"
    RENT = "rent"


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class StakeEvent(CamelModel):
    """Token was staked"""
    action: Literal["stake"] = "stake"
    timestamp: int  # epoch milliseconds
    transaction_hash: str


class UnstakeEvent(CamelModel):
    """Token was unstaked after a known stake"""
    action: Literal["unstake"] = "unstake"
    timestamp: int
    duration: int  # milliseconds since the matching stake
    transaction_hash: str


class RentEvent(CamelModel):
    """Token was rented"""
    action: Literal["rent"] = "rent"
    timestamp: int
    transaction_hash: str


StakeHistoryEvent = Annotated[Union[StakeEvent, UnstakeEvent], Field(discriminator="action")]


class TokenRecord(CamelModel):
    """Per-token state rebuilt from the staking contract transaction log"""
    token_id: int
    status: TokenStatus = TokenStatus.UNSTAKED
    stake_history: list[StakeHistoryEvent] = Field(default_factory=list)
    rent_history: list[RentEvent] = Field(default_factory=list)
    current_stake_time: int | None = None
    current_rent_time: int | None = None
    last_action: StakingAction | None = None


class EnrichedTokenRecord(TokenRecord):
    """TokenRecord joined with on-chain ownership data"""
    tier: int
    multiplier: int
    current_rewards: float = 0.0


class NFTOwnership(CamelModel):
    """Token currently held by an address"""
    token_id: int
    tier: int
    multiplier: int


class StakingStats(CamelModel):
    """Summary returned by the stats endpoint"""
    total_nfts: int = Field(alias="totalNFTs")
    staked_nfts: int = Field(alias="stakedNFTs")
    rented_nfts: int = Field(alias="rentedNFTs")
    nft_details: list[Union[EnrichedTokenRecord, TokenRecord]] = Field(default_factory=list)


class IndexedTransaction(CamelModel):
    """Transaction row as returned by the block explorer txlist API"""
    from_address: str = Field(alias="from")
    is_error: str = "0"
    input: str = ""
    time_stamp: int
    hash: str

    @property
    def timestamp_ms(self) -> int:
        return self.time_stamp * 1000

    @property
    def succeeded(self) -> bool:
        return self.is_error == "0"
