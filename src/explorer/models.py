# File: src/explorer/models.py
from pydantic import BaseModel, ConfigDict
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

class TokenTransfer(BaseModel):
    model_config = ConfigDict(frozen=True)

    contract: str
    from_address: str
    to_address: str
    raw_amount: int
    normalized_amount: Decimal
    decimals: Optional[int] = None  # None when decimals() could not be read
    log_index: Optional[int] = None
    transaction_hash: Optional[str] = None

    @property
    def decimals_known(self) -> bool:
        return self.decimals is not None

class TransactionDetail(BaseModel):
    model_config = ConfigDict(frozen=True)

    hash: str
    gas: int
    gas_price: int
    nonce: int
    from_address: str
    to_address: str
    data: str
    value_wei: int
    value_ether: Decimal
    status: str
    block_number: Optional[int] = None
    gas_used: Optional[int] = None

class BlockSummary(BaseModel):
    number: int
    hash: Optional[str] = None
    nonce: int = 0
    transactions: int = 0
    last_transaction_hash: Optional[str] = None
    last_transaction_status: Optional[str] = None
    gas_used: int = 0
    mined_on: Optional[datetime] = None
    transaction_details: List[TransactionDetail] = []
    token_transfers: List[TokenTransfer] = []
    skipped_reason: Optional[str] = None

    @property
    def skipped(self) -> bool:
        return self.skipped_reason is not None

class NetworkStats(BaseModel):
    network_id: int
    pending_transactions: int
    suggested_gas_price: int

class AccountInfo(BaseModel):
    address: str
    balance_ether: Decimal
    transaction_count: int
    index: Optional[int] = None

class BlockPage(BaseModel):
    page: int
    head_number: int
    blocks: List[BlockSummary]
    next_page: int
    prev_page: int
    partial: bool = False
    stats: Optional[NetworkStats] = None
    accounts: List[AccountInfo] = []

class BlockDetail(BaseModel):
    number: int
    hash: str
    nonce: int
    transactions: int
    gas_used: int
    gas_limit: int
    mined_on: datetime
    difficulty: int
    size: int
    parent_hash: str
    uncle_hash: str

class TransactionPage(BaseModel):
    block_number: int
    block_hash: str
    status: Optional[str] = None
    transactions: List[TransactionDetail]
    token_transfers: List[TokenTransfer]
