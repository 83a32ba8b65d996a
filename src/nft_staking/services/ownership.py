"""
NFT ownership reader

Enumerates the tokens an address holds through the NFT contract's
enumerable interface and attaches each token's tier and multiplier.
"""

from __future__ import annotations

import logging
from typing import Any

from eth_utils import to_checksum_address

from ..models import NFTOwnership
from .decoder import get_multiplier_for_tier

logger = logging.getLogger(__name__)


class NFTOwnershipReader:
    """Read-only view over the NFT contract"""

    def __init__(self, nft_contract: Any) -> None:
        self.nft_contract = nft_contract

    async def get_nfts_by_address(self, address: str) -> list[NFTOwnership]:
        """
        Return every token owned by ``address``.

        One call per index, strictly in sequence. Any failed call aborts the
        whole read.
        """
        owner = to_checksum_address(address)
        functions = self.nft_contract.functions

        balance = await functions.balanceOf(owner).call()
        nfts: list[NFTOwnership] = []

        for index in range(int(balance)):
            token_id = await functions.tokenOfOwnerByIndex(owner, index).call()
            tier = await functions.getTier(token_id).call()
            nfts.append(
                NFTOwnership(
                    token_id=int(token_id),
                    tier=int(tier),
                    multiplier=get_multiplier_for_tier(tier),
                )
            )

        logger.debug("Address %s holds %d NFTs", owner, len(nfts))
        return nfts
