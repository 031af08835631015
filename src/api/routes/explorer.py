# File: src/api/routes/explorer.py
from fastapi import APIRouter, Depends

from src.api.dependencies import build_home_page, get_config, get_provider, make_aggregator
from src.chain.provider import ChainDataProvider
from src.config.explorer_config import ExplorerConfig
from src.explorer.accounts import AccountService
from src.explorer.models import AccountInfo, BlockDetail, BlockPage, TransactionPage

router = APIRouter(prefix="/api/v1/explorer")

@router.get("/homepage/{page}", response_model=BlockPage)
def get_home_page(
    page: int,
    config: ExplorerConfig = Depends(get_config),
    provider: ChainDataProvider = Depends(get_provider)
):
    return build_home_page(config, provider, max(page, 0))

@router.get("/blocks/{block_id}/transactions", response_model=TransactionPage)
def get_block_transactions(
    block_id: str,
    config: ExplorerConfig = Depends(get_config),
    provider: ChainDataProvider = Depends(get_provider)
):
    return make_aggregator(config, provider).block_transactions(block_id)

@router.get("/blocks/{block_hash}", response_model=BlockDetail)
def get_block(
    block_hash: str,
    config: ExplorerConfig = Depends(get_config),
    provider: ChainDataProvider = Depends(get_provider)
):
    return make_aggregator(config, provider).block_detail(block_hash)

@router.get("/transactions/{tx_hash}", response_model=TransactionPage)
def get_transaction(
    tx_hash: str,
    config: ExplorerConfig = Depends(get_config),
    provider: ChainDataProvider = Depends(get_provider)
):
    return make_aggregator(config, provider).transaction(tx_hash)

@router.get("/address/{address}", response_model=AccountInfo)
def get_address(address: str, provider: ChainDataProvider = Depends(get_provider)):
    return AccountService(provider).account(address)
