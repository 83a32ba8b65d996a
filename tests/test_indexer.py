"""Tests for the block explorer indexer client."""
import httpx
import pytest

from nft_staking.services.indexer import IndexerError, TransactionIndexer

from conftest import STAKING_CONTRACT, WALLET

API_URL = "https://indexer.test/api"


def _row(**overrides):
    row = {
        "blockNumber": "100",
        "timeStamp": "1700000000",
        "hash": "0xabc",
        "from": WALLET,
        "to": STAKING_CONTRACT,
        "isError": "0",
        "txreceipt_status": "1",
        "input": "0xa422b640" + format(1, "064x"),
    }
    row.update(overrides)
    return row


def _indexer(handler):
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return TransactionIndexer(API_URL, "secret", client=client)


@pytest.mark.asyncio
async def test_requests_ascending_txlist_for_contract():
    seen = {}

    def handler(request):
        seen["params"] = dict(request.url.params)
        seen["host"] = request.url.host
        seen["path"] = request.url.path
        return httpx.Response(200, json={"status": "1", "message": "OK", "result": [_row()]})

    transactions = await _indexer(handler).get_transactions(STAKING_CONTRACT)

    assert seen["host"] == "indexer.test"
    assert seen["path"] == "/api"
    assert seen["params"] == {
        "module": "account",
        "action": "txlist",
        "address": STAKING_CONTRACT,
        "apikey": "secret",
        "sort": "asc",
    }
    [tx] = transactions
    assert tx.from_address == WALLET
    assert tx.time_stamp == 1_700_000_000
    assert tx.timestamp_ms == 1_700_000_000_000
    assert tx.succeeded


@pytest.mark.asyncio
async def test_no_transactions_is_empty_list():
    def handler(request):
        return httpx.Response(200, json={"status": "0", "message": "No transactions found", "result": []})

    assert await _indexer(handler).get_transactions(STAKING_CONTRACT) == []


@pytest.mark.asyncio
async def test_api_error_message_raises():
    def handler(request):
        return httpx.Response(200, json={"status": "0", "message": "NOTOK", "result": "Invalid API Key"})

    with pytest.raises(IndexerError, match="Invalid API Key"):
        await _indexer(handler).get_transactions(STAKING_CONTRACT)


@pytest.mark.asyncio
async def test_http_error_raises():
    def handler(request):
        return httpx.Response(502, text="bad gateway")

    with pytest.raises(httpx.HTTPStatusError):
        await _indexer(handler).get_transactions(STAKING_CONTRACT)


@pytest.mark.asyncio
async def test_non_json_response_raises():
    def handler(request):
        return httpx.Response(200, text="<html>maintenance</html>")

    with pytest.raises(IndexerError):
        await _indexer(handler).get_transactions(STAKING_CONTRACT)


@pytest.mark.asyncio
async def test_malformed_row_raises():
    def handler(request):
        bad = _row()
        del bad["hash"]
        return httpx.Response(200, json={"status": "1", "message": "OK", "result": [bad]})

    with pytest.raises(IndexerError, match="Malformed"):
        await _indexer(handler).get_transactions(STAKING_CONTRACT)


@pytest.mark.asyncio
async def test_failed_transaction_flag():
    def handler(request):
        return httpx.Response(200, json={"status": "1", "message": "OK", "result": [_row(isError="1")]})

    [tx] = await _indexer(handler).get_transactions(STAKING_CONTRACT)
    assert not tx.succeeded
