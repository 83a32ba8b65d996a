from __future__ import annotations

"""
NFT Staking API - FastAPI application
Reports NFT staking and rental status for wallet addresses
"""

from contextlib import asynccontextmanager
import logging

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .api import nft
from .config import StakingConfig
from .security import APIKeyAuthError, APIKeyGuard
from .services import StakingServices

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)


def create_app(
    config: StakingConfig | None = None,
    services: StakingServices | None = None,
) -> FastAPI:
    """
    Build the application.

    Services may be injected (tests); otherwise they are constructed from
    the configuration when the application starts.
    """
    if config is None:
        config = StakingConfig.from_env()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Starting NFT Staking API...")
        if app.state.services is None:
            config.validate()
            app.state.services = StakingServices.from_config(config)
        logger.info("NFT Staking API started")

        yield

        logger.info("NFT Staking API stopped")

    app = FastAPI(
        title="NFT Staking API",
        description="NFT staking and rental status reconstructed from on-chain data",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.config = config
    app.state.services = services

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    route_dependencies = [Depends(APIKeyGuard.from_config(config))] if config.require_api_key else []
    app.include_router(nft.router, prefix="/api/nft", tags=["NFT"], dependencies=route_dependencies)

    @app.exception_handler(APIKeyAuthError)
    async def api_key_error_handler(request: Request, exc: APIKeyAuthError):
        logger.warning("Rejected %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=401, content={"success": False, "error": str(exc)})

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.error(
            "Unhandled error on %s %s", request.method, request.url.path, exc_info=exc
        )
        return JSONResponse(
            status_code=500,
            content={"success": False, "error": "Something went wrong!"},
        )

    @app.get("/")
    async def root():
        """Service information"""
        return {
            "name": "NFT Staking API",
            "version": "1.0.0",
            "endpoints": {
                "stats": "/api/nft/stats/{address}",
                "nfts": "/api/nft/nfts/{address}",
                "history": "/api/nft/history/{address}",
                "health": "/health",
                "docs": "/docs",
            },
            "config": config.get_public_config(),
        }

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        chain = app.state.services.chain if app.state.services else None
        rpc_healthy = await chain.is_connected() if chain else False
        return {
            "status": "healthy" if rpc_healthy else "degraded",
            "components": {"rpc": "connected" if rpc_healthy else "disconnected"},
        }

    return app


def main() -> None:
    import uvicorn

    config = StakingConfig.from_env()
    configure_logging(config.log_level)
    config.validate()

    logger.info(f"Starting NFT Staking API on {config.host}:{config.port}")

    uvicorn.run(
        create_app(config),
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
        access_log=True,
    )


if __name__ == "__main__":
    main()
