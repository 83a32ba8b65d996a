"""
On-chain client handles

Built once per process from configuration and passed to the components
that need them.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from eth_utils import to_checksum_address
from web3 import AsyncHTTPProvider, AsyncWeb3

from ..abis import NFT_CONTRACT_ABI, STAKING_CONTRACT_ABI
from ..config import StakingConfig

logger = logging.getLogger(__name__)


@dataclass
class ChainClients:
    """Node connection plus the NFT and staking contract handles"""
    w3: AsyncWeb3
    nft_contract: Any
    staking_contract: Any

    @classmethod
    def from_config(cls, config: StakingConfig) -> "ChainClients":
        w3 = AsyncWeb3(AsyncHTTPProvider(config.rpc_url))
        nft_contract = w3.eth.contract(
            address=to_checksum_address(config.nft_contract_address),
            abi=NFT_CONTRACT_ABI,
        )
        staking_contract = w3.eth.contract(
            address=to_checksum_address(config.staking_contract_address),
            abi=STAKING_CONTRACT_ABI,
        )
        logger.info("Configured RPC provider %s", config.rpc_url)
        return cls(w3=w3, nft_contract=nft_contract, staking_contract=staking_contract)

    async def is_connected(self) -> bool:
        try:
            return bool(await self.w3.is_connected())
        except Exception as e:
            logger.warning(f"RPC connectivity check failed: {e}")
            return False
