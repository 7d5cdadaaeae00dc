"""FastAPI application for the Cardano explorer backend"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from explorer.config import Settings
from explorer.services.explorer_service import ExplorerService
from explorer.api import blocks, config, transaction
from explorer.api.error_handlers import register_error_handlers

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    log_level = getattr(logging, settings.effective_log_level, logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    # Align key loggers with configured level
    logging.getLogger("explorer").setLevel(log_level)
    logging.getLogger("uvicorn").setLevel(log_level)
    logging.getLogger("uvicorn.access").setLevel(log_level)
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)


def create_app(
    settings: Optional[Settings] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    """
    Build the application.

    ``settings`` defaults to values read from the environment; ``transport``
    replaces the httpx transport used for Blockfrost (tests pass a mock).
    """
    settings = settings or Settings()
    configure_logging(settings)

    explorer = ExplorerService(settings, transport=transport)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Lifecycle manager for startup/shutdown"""
        logger.info(
            "Starting explorer backend (network=%s, environment=%s)",
            settings.blockfrost_network,
            settings.environment,
        )
        if not settings.blockfrost_api_key:
            logger.warning("BLOCKFROST_API_KEY is not set; upstream calls will fail")

        yield

        logger.info("Shutting down explorer backend...")
        await explorer.close()

    app = FastAPI(
        title=settings.api_title,
        version=settings.api_version,
        description="Cardano blockchain explorer API backed by Blockfrost",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.explorer = explorer

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,  # Must be False when allow_origins is "*"
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    app.include_router(blocks.router, prefix="/api/blocks", tags=["Blocks"])
    app.include_router(transaction.router, prefix="/api/tx", tags=["Transaction"])
    app.include_router(config.router, prefix="/api", tags=["Config"])

    @app.get("/")
    async def root():
        """Root endpoint"""
        return {
            "name": settings.api_title,
            "version": settings.api_version,
            "status": "running",
            "data_source": "blockfrost",
            "network": settings.blockfrost_network,
        }

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {"status": "healthy"}

    return app


if __name__ == "__main__":
    import uvicorn

    settings = Settings()
    uvicorn.run(
        create_app(settings),
        host="0.0.0.0",
        port=8000,
        log_level=settings.effective_log_level.lower(),
        access_log=True,
    )
