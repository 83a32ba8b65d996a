"""
Stake, unstake and rent submission helpers.

Thin wrappers around the staking contract: build the call, sign it with a
local key, submit and wait for the receipt. Nothing is simulated or
validated beforehand; node errors propagate to the caller.
"""

from __future__ import annotations

import logging
from typing import Any, Dict

from eth_account import Account
from eth_account.signers.local import LocalAccount
from web3 import AsyncWeb3

logger = logging.getLogger(__name__)


def get_signer(private_key: str) -> LocalAccount:
    """Create a local signing account from a hex private key."""
    return Account.from_key(private_key)


class StakingTransactor:
    """Submits staking contract transactions"""

    def __init__(self, w3: AsyncWeb3, staking_contract: Any, *, receipt_timeout: int = 120) -> None:
        self.w3 = w3
        self.staking_contract = staking_contract
        self.receipt_timeout = receipt_timeout

    async def stake_pass(self, signer: LocalAccount, token_id: int) -> Dict[str, Any]:
        return await self._submit("stakePass", signer, token_id)

    async def unstake_pass(self, signer: LocalAccount, token_id: int) -> Dict[str, Any]:
        return await self._submit("unstakePass", signer, token_id)

    async def rent_pass(self, signer: LocalAccount, token_id: int) -> Dict[str, Any]:
        return await self._submit("rentPass", signer, token_id)

    async def _submit(self, method: str, signer: LocalAccount, token_id: int) -> Dict[str, Any]:
        contract_fn = getattr(self.staking_contract.functions, method)(token_id)
        tx = await contract_fn.build_transaction(
            {
                "from": signer.address,
                "nonce": await self.w3.eth.get_transaction_count(signer.address),
                "chainId": await self.w3.eth.chain_id,
            }
        )
        signed = signer.sign_transaction(tx)
        tx_hash = await self.w3.eth.send_raw_transaction(signed.raw_transaction)
        logger.info("Submitted %s(%s) from %s: %s", method, token_id, signer.address, tx_hash.hex())
        return await self.w3.eth.wait_for_transaction_receipt(tx_hash, timeout=self.receipt_timeout)
