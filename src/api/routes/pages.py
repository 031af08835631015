# File: src/api/routes/pages.py
from typing import Optional
from urllib.parse import quote

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from src.api import pages
from src.api.dependencies import (
    NODE_COOKIE, build_home_page, get_config, get_provider, make_aggregator, parse_page, selected_node_url
)
from src.chain.provider import ChainDataProvider
from src.config.explorer_config import ExplorerConfig
from src.exceptions import NotFoundError
from src.explorer.accounts import AccountService

router = APIRouter()

def _require(q: Optional[str], what: str) -> str:
    if not q or not q.strip():
        raise NotFoundError(f"No {what} given")
    return q.strip()

@router.get("/", response_class=HTMLResponse)
def welcome_page(request: Request):
    return HTMLResponse(pages.render_welcome(selected_node_url(request)))

@router.get("/homepage", response_class=HTMLResponse)
@router.get("/homepage/{page}", response_class=HTMLResponse)
def home_page(
    request: Request,
    page: Optional[str] = None,
    host: Optional[str] = None,
    config: ExplorerConfig = Depends(get_config),
    provider: ChainDataProvider = Depends(get_provider)
):
    """Ten blocks per page, newest first, with token transfers and node accounts"""
    block_page = build_home_page(config, provider, parse_page(page))
    response = HTMLResponse(pages.render_home(block_page, selected_node_url(request, host)))
    if host:
        # Later pages keep talking to the node this client picked
        response.set_cookie(NODE_COOKIE, quote(host.strip(), safe=""), httponly=True, samesite="lax")
    return response

@router.get("/txpage", response_class=HTMLResponse)
def transactions_page(
    q: Optional[str] = None,
    config: ExplorerConfig = Depends(get_config),
    provider: ChainDataProvider = Depends(get_provider)
):
    """Transactions of a block given by number or hash"""
    tx_page = make_aggregator(config, provider).block_transactions(_require(q, "block number or hash"))
    return HTMLResponse(pages.render_transactions(tx_page))

@router.get("/txinfo", response_class=HTMLResponse)
def transaction_page(
    q: Optional[str] = None,
    config: ExplorerConfig = Depends(get_config),
    provider: ChainDataProvider = Depends(get_provider)
):
    tx_page = make_aggregator(config, provider).transaction(_require(q, "transaction hash"))
    return HTMLResponse(pages.render_transactions(tx_page))

@router.get("/blockdetails", response_class=HTMLResponse)
def block_details_page(
    q: Optional[str] = None,
    config: ExplorerConfig = Depends(get_config),
    provider: ChainDataProvider = Depends(get_provider)
):
    detail = make_aggregator(config, provider).block_detail(_require(q, "block hash"))
    return HTMLResponse(pages.render_block_detail(detail))

@router.get("/accInfo", response_class=HTMLResponse)
def account_page(
    q: Optional[str] = None,
    provider: ChainDataProvider = Depends(get_provider)
):
    account = AccountService(provider).account(_require(q, "address"))
    return HTMLResponse(pages.render_account(account))
