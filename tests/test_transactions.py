"""Tests for stake/unstake/rent submission helpers."""
from unittest.mock import AsyncMock, MagicMock

import pytest
from hexbytes import HexBytes

from nft_staking.services.transactions import StakingTransactor, get_signer

PRIVATE_KEY = "0x" + "42" * 32


def _transactor():
    w3 = MagicMock()
    w3.eth.get_transaction_count = AsyncMock(return_value=7)
    w3.eth.send_raw_transaction = AsyncMock(return_value=HexBytes("0x" + "aa" * 32))
    w3.eth.wait_for_transaction_receipt = AsyncMock(return_value={"status": 1, "blockNumber": 10})

    async def chain_id():
        return 97

    type(w3.eth).chain_id = property(lambda self: chain_id())

    contract = MagicMock()
    built = {"to": "0x" + "11" * 20, "data": "0x", "gas": 100_000, "gasPrice": 10, "value": 0}
    for name in ("stakePass", "unstakePass", "rentPass"):
        fn = MagicMock()
        fn.return_value.build_transaction = AsyncMock(
            side_effect=lambda params, built=built: {**built, **params}
        )
        setattr(contract.functions, name, fn)
    return StakingTransactor(w3, contract, receipt_timeout=30), w3, contract


def test_get_signer_derives_address():
    signer = get_signer(PRIVATE_KEY)
    assert signer.address.startswith("0x")
    assert len(signer.address) == 42


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "method,contract_fn",
    [("stake_pass", "stakePass"), ("unstake_pass", "unstakePass"), ("rent_pass", "rentPass")],
)
async def test_submits_signed_call_and_waits(method, contract_fn):
    transactor, w3, contract = _transactor()
    signer = get_signer(PRIVATE_KEY)

    receipt = await getattr(transactor, method)(signer, 12)

    assert receipt == {"status": 1, "blockNumber": 10}
    getattr(contract.functions, contract_fn).assert_called_once_with(12)
    build = getattr(contract.functions, contract_fn).return_value.build_transaction
    build.assert_awaited_once_with({"from": signer.address, "nonce": 7, "chainId": 97})
    w3.eth.send_raw_transaction.assert_awaited_once()
    w3.eth.wait_for_transaction_receipt.assert_awaited_once_with(
        HexBytes("0x" + "aa" * 32), timeout=30
    )


@pytest.mark.asyncio
async def test_node_errors_propagate():
    transactor, w3, _ = _transactor()
    w3.eth.send_raw_transaction = AsyncMock(side_effect=ValueError("insufficient funds"))

    with pytest.raises(ValueError, match="insufficient funds"):
        await transactor.stake_pass(get_signer(PRIVATE_KEY), 1)
