# File: src/api/server.py
import logging
import os
from typing import Callable, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.staticfiles import StaticFiles

from ..chain.provider import ChainDataProvider, Web3Provider
from ..config.explorer_config import ExplorerConfig
from ..exceptions import (
    AggregationTimeoutError, ExplorerError, NotFoundError, ProviderError
)
from . import pages
from .routes import explorer_router, pages_router

logger = logging.getLogger(__name__)

ProviderFactory = Callable[[str], ChainDataProvider]

def error_status(error: ExplorerError):
    """HTTP status and page message for an explorer error"""
    if isinstance(error, NotFoundError):
        return 404, "The requested item is not available in the network"
    if isinstance(error, AggregationTimeoutError):
        return 504, "The node took too long to answer"
    if isinstance(error, ProviderError):
        return 502, "The node could not be reached or rejected the request"
    return 500, "Something went wrong while reading the chain"

async def explorer_error_handler(request: Request, error: ExplorerError):
    status, message = error_status(error)
    if status >= 500:
        logger.error(f"{request.url.path} failed: {error}")
    else:
        logger.info(f"{request.url.path}: {error}")

    if request.url.path.startswith("/api/"):
        return JSONResponse(status_code=status, content={"detail": message, "error": str(error)})
    return HTMLResponse(pages.render_error(status, message, str(error)), status_code=status)

def create_app(
    config: Optional[ExplorerConfig] = None,
    provider_factory: Optional[ProviderFactory] = None
) -> FastAPI:
    config = config or ExplorerConfig()
    app = FastAPI(title="ethscope")

    if provider_factory is None:
        timeout = float(config.get("node.request_timeout"))
        provider_factory = lambda url: Web3Provider.from_url(url, timeout)

    app.state.config = config
    app.state.provider_factory = provider_factory
    app.state.default_provider = None

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ExplorerError, explorer_error_handler)

    static_dir = config.get("server.static_dir")
    if static_dir and os.path.isdir(static_dir):
        app.mount("/static", StaticFiles(directory=static_dir), name="static")

    # Include routers
    app.include_router(explorer_router)
    app.include_router(pages_router)

    return app
