# src/chain/models.py
from typing import Optional, Tuple
from dataclasses import dataclass, field

@dataclass(frozen=True)
class Log:
    """Event log emitted by a contract"""
    address: str
    topics: Tuple[bytes, ...] = ()
    data: bytes = b''
    log_index: Optional[int] = None
    transaction_hash: Optional[str] = None

@dataclass(frozen=True)
class Receipt:
    """Execution outcome of a transaction"""
    transaction_hash: str
    block_hash: str
    block_number: int
    status: int
    logs: Tuple[Log, ...] = ()
    contract_address: Optional[str] = None
    gas_used: int = 0

    @property
    def succeeded(self) -> bool:
        return self.status == 1

@dataclass(frozen=True)
class Transaction:
    """Transaction as returned inside a block or by hash"""
    hash: str
    nonce: int
    sender: str
    to: Optional[str]
    value: int
    gas: int
    gas_price: int
    input: bytes = b''
    block_number: Optional[int] = None

    @property
    def is_contract_creation(self) -> bool:
        return self.to is None

@dataclass(frozen=True)
class Block:
    """Block with its full transaction objects"""
    number: int
    hash: str
    parent_hash: str
    timestamp: int
    nonce: int = 0
    gas_used: int = 0
    gas_limit: int = 0
    difficulty: int = 0
    size: int = 0
    uncle_hash: str = ''
    transactions: Tuple[Transaction, ...] = field(default_factory=tuple)
