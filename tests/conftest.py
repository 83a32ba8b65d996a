"""
Test configuration and fixtures
"""
import sys
from pathlib import Path

# Add src to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

import pytest  # noqa: E402

from nft_staking.config import StakingConfig  # noqa: E402
from nft_staking.models import IndexedTransaction, StakingAction  # noqa: E402
from nft_staking.services.decoder import METHOD_IDS  # noqa: E402

WALLET = "0x" + "ab" * 20
OTHER_WALLET = "0x" + "cd" * 20
STAKING_CONTRACT = "0x" + "11" * 20
NFT_CONTRACT = "0x" + "22" * 20

DAY_MS = 24 * 60 * 60 * 1000


def call_input(action: StakingAction, token_id: int) -> str:
    """ABI-style call data: selector followed by one 32-byte word"""
    return METHOD_IDS[action] + format(token_id, "064x")


@pytest.fixture
def make_tx():
    """Factory for indexer transaction rows"""
    counter = {"n": 0}

    def _make(
        action: StakingAction | None = None,
        token_id: int = 1,
        timestamp: int = 1_700_000_000,
        sender: str = WALLET,
        is_error: str = "0",
        tx_input: str | None = None,
    ) -> IndexedTransaction:
        counter["n"] += 1
        if tx_input is None:
            tx_input = call_input(action, token_id)
        return IndexedTransaction.model_validate(
            {
                "from": sender,
                "isError": is_error,
                "input": tx_input,
                "timeStamp": str(timestamp),
                "hash": "0x" + format(counter["n"], "064x"),
            }
        )

    return _make


class FakeCall:
    """Stands in for a web3 contract function call"""

    def __init__(self, result):
        self.result = result

    async def call(self):
        if isinstance(self.result, Exception):
            raise self.result
        return self.result


class FakeNFTFunctions:
    """Enumerable NFT contract backed by a dict of token_id -> tier"""

    def __init__(self, holdings, fail_on=None):
        self.holdings = dict(holdings)
        self.fail_on = fail_on
        self.calls = []

    def _result(self, name, value):
        self.calls.append(name)
        if self.fail_on == name:
            return FakeCall(ConnectionError(f"{name} failed"))
        return FakeCall(value)

    def balanceOf(self, owner):
        return self._result("balanceOf", len(self.holdings))

    def tokenOfOwnerByIndex(self, owner, index):
        return self._result("tokenOfOwnerByIndex", list(self.holdings)[index])

    def getTier(self, token_id):
        return self._result("getTier", self.holdings[token_id])


class FakeNFTContract:
    def __init__(self, holdings, fail_on=None):
        self.functions = FakeNFTFunctions(holdings, fail_on=fail_on)


@pytest.fixture
def nft_contract_factory():
    return FakeNFTContract


@pytest.fixture
def staking_config():
    return StakingConfig(
        rpc_url="http://localhost:8545",
        staking_contract_address=STAKING_CONTRACT,
        nft_contract_address=NFT_CONTRACT,
        indexer_api_url="https://indexer.test/api",
        indexer_api_key="test-key",
    )
