# tests/conftest.py
import pytest
from typing import Dict, List, Optional

from src.chain.models import Block, Log, Receipt, Transaction
from src.chain.provider import ChainDataProvider
from src.exceptions import NotFoundError, ProviderUnavailableError
from src.explorer.signatures import decimals_selector, transfer_event_topic

TOKEN = "0x" + "cc" * 20
OTHER_TOKEN = "0x" + "dd" * 20
ALICE = "0x" + "aa" * 20
BOB = "0x" + "bb" * 20

def pad_address(address: str) -> bytes:
    """Left-pad a 20-byte address to a 32-byte topic"""
    return b"\x00" * 12 + bytes.fromhex(address[2:])

def make_transfer_log(contract=TOKEN, sender=ALICE, recipient=BOB, amount=0, log_index=0, tx_hash=None):
    return Log(
        address=contract,
        topics=(transfer_event_topic(), pad_address(sender), pad_address(recipient)),
        data=amount.to_bytes(32, "big"),
        log_index=log_index,
        transaction_hash=tx_hash,
    )

def tx_hash_for(block_number: int, position: int) -> str:
    return "0x" + f"{block_number:032x}{position:032x}"

def block_hash_for(block_number: int) -> str:
    return "0x" + f"{block_number:064x}".replace("0", "b", 1)

class FakeProvider(ChainDataProvider):
    """In-memory chain; every call is recorded in self.calls"""

    def __init__(self, head: int = 0):
        self.head = head
        self.blocks: Dict[int, Block] = {}
        self.receipts: Dict[str, Receipt] = {}
        self.decimals: Dict[str, int] = {}
        self.balances: Dict[str, int] = {}
        self.nonces: Dict[str, int] = {}
        self.node_accounts: List[str] = []
        self.unavailable_blocks = set()
        self.calls: List[tuple] = []

    def add_block(self, number: int, transactions=(), logs_by_tx=None, timestamp=1_700_000_000) -> Block:
        logs_by_tx = logs_by_tx or {}
        txs = []
        for position, tx in enumerate(transactions):
            tx_hash = tx_hash_for(number, position)
            txs.append(Transaction(
                hash=tx_hash,
                nonce=tx.get("nonce", position),
                sender=tx.get("sender", ALICE),
                to=tx.get("to", BOB),
                value=tx.get("value", 0),
                gas=tx.get("gas", 21000),
                gas_price=tx.get("gas_price", 1_000_000_000),
                input=tx.get("input", b""),
                block_number=number,
            ))
            self.receipts[tx_hash] = Receipt(
                transaction_hash=tx_hash,
                block_hash=block_hash_for(number),
                block_number=number,
                status=tx.get("status", 1),
                logs=tuple(logs_by_tx.get(position, ())),
                contract_address=tx.get("contract_address"),
                gas_used=tx.get("gas_used", 21000),
            )
        block = Block(
            number=number,
            hash=block_hash_for(number),
            parent_hash=block_hash_for(number - 1),
            timestamp=timestamp + number,
            nonce=number,
            gas_used=21000 * len(txs),
            gas_limit=30_000_000,
            difficulty=1,
            size=1000,
            uncle_hash="0x" + "1d" * 32,
            transactions=tuple(txs),
        )
        self.blocks[number] = block
        return block

    def header_latest(self) -> int:
        self.calls.append(("header_latest",))
        return self.head

    def block_by_number(self, number: int) -> Block:
        self.calls.append(("block_by_number", number))
        if number in self.unavailable_blocks:
            raise ProviderUnavailableError(f"timeout fetching block {number}")
        if number not in self.blocks:
            raise NotFoundError(f"block {number} not found")
        return self.blocks[number]

    def block_by_hash(self, block_hash) -> Block:
        self.calls.append(("block_by_hash", block_hash))
        for block in self.blocks.values():
            if block.hash.lower() == str(block_hash).lower():
                return block
        raise NotFoundError(f"block {block_hash} not found")

    def transaction_by_hash(self, tx_hash) -> Transaction:
        self.calls.append(("transaction_by_hash", tx_hash))
        for block in self.blocks.values():
            for tx in block.transactions:
                if tx.hash.lower() == str(tx_hash).lower():
                    return tx
        raise NotFoundError(f"transaction {tx_hash} not found")

    def transaction_receipt(self, tx_hash) -> Receipt:
        self.calls.append(("transaction_receipt", tx_hash))
        receipt = self.receipts.get(str(tx_hash).lower())
        if receipt is None:
            raise NotFoundError(f"receipt {tx_hash} not found")
        return receipt

    def call(self, to: str, data: bytes) -> bytes:
        self.calls.append(("call", to.lower(), data))
        if data != decimals_selector() or to.lower() not in self.decimals:
            raise ProviderUnavailableError("execution reverted")
        return self.decimals[to.lower()].to_bytes(32, "big")

    def balance_at(self, address: str) -> int:
        return self.balances.get(address.lower(), 0)

    def nonce_at(self, address: str, block_number: Optional[int] = None) -> int:
        return self.nonces.get(address.lower(), 0)

    def network_id(self) -> int:
        return 5777

    def pending_transaction_count(self) -> int:
        return 0

    def suggested_gas_price(self) -> int:
        return 20_000_000_000

    def accounts(self) -> List[str]:
        return list(self.node_accounts)

    def count(self, name: str) -> int:
        return sum(1 for call in self.calls if call[0] == name)

@pytest.fixture
def provider():
    return FakeProvider()

@pytest.fixture
def chain():
    """Head at block 105, every block holds one transfer of TOKEN"""
    fake = FakeProvider(head=105)
    fake.decimals[TOKEN] = 18
    for number in range(1, 106):
        fake.add_block(
            number,
            transactions=[{"value": 10 ** 18}],
            logs_by_tx={0: [make_transfer_log(amount=number * 10 ** 18)]},
        )
    return fake
