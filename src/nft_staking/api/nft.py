"""
NFT staking API endpoints
"""
import logging

from fastapi import APIRouter, Depends, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from ..services import StakingServices

logger = logging.getLogger(__name__)

router = APIRouter()


def get_services(request: Request) -> StakingServices:
    """Services wired at startup and stored on the application state"""
    return request.app.state.services


def _failure(action: str, address: str, exc: Exception) -> JSONResponse:
    logger.error(f"Error fetching {action} for {address}: {exc}")
    return JSONResponse(status_code=500, content={"success": False, "error": str(exc)})


@router.get("/stats/{address}")
async def get_staking_stats(address: str, services: StakingServices = Depends(get_services)):
    """Complete staking stats for an address"""
    try:
        stats = await services.stats_aggregator.calculate_staking_stats(address)
        return {"success": True, "data": jsonable_encoder(stats)}
    except Exception as e:
        return _failure("staking stats", address, e)


@router.get("/nfts/{address}")
async def get_nfts(address: str, services: StakingServices = Depends(get_services)):
    """NFTs owned by an address with their tiers and multipliers"""
    try:
        nfts = await services.ownership_reader.get_nfts_by_address(address)
        return {"success": True, "data": jsonable_encoder(nfts)}
    except Exception as e:
        return _failure("NFTs", address, e)


@router.get("/history/{address}")
async def get_history(address: str, services: StakingServices = Depends(get_services)):
    """Per-token staking and rental history for an address"""
    try:
        records = await services.history_reconstructor.get_transaction_details(address)
        return {"success": True, "data": jsonable_encoder(records)}
    except Exception as e:
        return _failure("history", address, e)
