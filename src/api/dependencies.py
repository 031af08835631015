# File: src/api/dependencies.py
from typing import Optional
from urllib.parse import unquote
import logging

from fastapi import Request

from ..chain.provider import ChainDataProvider
from ..config.explorer_config import ExplorerConfig
from ..exceptions import ProviderUnavailableError
from ..explorer.accounts import AccountService
from ..explorer.aggregator import BlockRangeAggregator
from ..explorer.models import BlockPage

logger = logging.getLogger(__name__)

NODE_COOKIE = "ethscope_node"

def get_config(request: Request) -> ExplorerConfig:
    return request.app.state.config

def selected_node_url(request: Request, host: Optional[str] = None) -> str:
    """Node chosen by the client: ?host=, then the cookie, then the configured default"""
    url = host or unquote(request.cookies.get(NODE_COOKIE, ""))
    if not url:
        return get_config(request).get("node.url")
    url = url.strip()
    if not url.startswith(("http://", "https://")):
        raise ProviderUnavailableError(f"Host provided is invalid: {url}")
    return url

def get_provider(request: Request, host: Optional[str] = None) -> ChainDataProvider:
    url = selected_node_url(request, host)
    state = request.app.state
    if url == get_config(request).get("node.url"):
        if state.default_provider is None:
            state.default_provider = state.provider_factory(url)
        return state.default_provider
    logger.debug(f"Dialing node {url} for this request")
    return state.provider_factory(url)

def make_aggregator(config: ExplorerConfig, provider: ChainDataProvider) -> BlockRangeAggregator:
    return BlockRangeAggregator(
        provider,
        blocks_per_page=int(config.get("explorer.blocks_per_page")),
        receipt_workers=int(config.get("explorer.receipt_workers", 1)),
        page_timeout=config.get("explorer.page_timeout"),
    )

def build_home_page(config: ExplorerConfig, provider: ChainDataProvider, page: int) -> BlockPage:
    block_page = make_aggregator(config, provider).build_page(page)
    accounts = AccountService(provider)
    return block_page.model_copy(update={
        "stats": accounts.network_stats(),
        "accounts": accounts.node_accounts(),
    })

def parse_page(value: Optional[str]) -> int:
    """Page index from the URL; anything but a non-negative integer means page 0"""
    try:
        page = int(value) if value else 0
    except ValueError:
        return 0
    return max(page, 0)
