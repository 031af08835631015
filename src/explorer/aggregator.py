# File: src/explorer/aggregator.py
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, List, Optional, Tuple
import logging
import time

from ..chain.models import Block, Receipt, Transaction
from ..chain.provider import ChainDataProvider
from ..exceptions import AggregationTimeoutError, NotFoundError, ProviderError
from ..monitoring.metrics import metrics
from ..utils.config import Config
from .amounts import wei_to_ether
from .decimals import DecimalsResolver, MemoizingDecimalsResolver
from .decoder import TransferLogDecoder
from .models import (
    BlockDetail, BlockPage, BlockSummary, TokenTransfer, TransactionDetail, TransactionPage
)

logger = logging.getLogger(__name__)

@dataclass(frozen=True)
class PageWindow:
    """Block numbers shown on one home page, most recent first"""
    block_numbers: Tuple[int, ...]
    first_block: int
    last_block: int
    next_page: int
    prev_page: int

def page_window(head_number: int, page: int, blocks_per_page: int = Config.BLOCKS_PER_PAGE) -> PageWindow:
    """Compute the window of block numbers for a page index.

    Page 0 starts at the chain head. When the requested page would start
    below genesis the window falls back to the first blocks of the chain.
    Block 0 and negative numbers are never included.
    """
    if page < 0:
        raise ValueError(f"Page index must be non-negative, got {page}")
    if blocks_per_page < 1:
        raise ValueError(f"Blocks per page must be positive, got {blocks_per_page}")

    first_block = head_number - blocks_per_page * page
    if first_block < 0:
        first_block = blocks_per_page
    last_block = first_block - blocks_per_page
    if first_block < 0:
        first_block = 0

    numbers = []
    for number in range(first_block, last_block, -1):
        if number < 1:
            break
        numbers.append(number)

    next_page = page if last_block == 0 else page + 1
    prev_page = max(page - 1, 0)
    return PageWindow(
        block_numbers=tuple(numbers),
        first_block=first_block,
        last_block=last_block,
        next_page=next_page,
        prev_page=prev_page,
    )

def transaction_status(receipt: Optional[Receipt]) -> str:
    if receipt is not None and receipt.succeeded:
        return Config.STATUS_SUCCESSFUL
    return Config.STATUS_FAILED

def recipient_display(tx: Transaction, receipt: Optional[Receipt]) -> str:
    if not tx.is_contract_creation:
        return tx.to
    created = receipt.contract_address if receipt is not None else None
    return f"{created or ''} {Config.CONTRACT_CREATION_MARKER}".strip()

def build_transaction_detail(tx: Transaction, receipt: Optional[Receipt]) -> TransactionDetail:
    return TransactionDetail(
        hash=tx.hash,
        gas=tx.gas,
        gas_price=tx.gas_price,
        nonce=tx.nonce,
        from_address=tx.sender,
        to_address=recipient_display(tx, receipt),
        data=bytes(tx.input).hex(),
        value_wei=tx.value,
        value_ether=wei_to_ether(tx.value),
        status=transaction_status(receipt),
        block_number=receipt.block_number if receipt is not None else tx.block_number,
        gas_used=receipt.gas_used if receipt is not None else None,
    )

def _mined_on(timestamp: int) -> datetime:
    return datetime.fromtimestamp(timestamp, tz=timezone.utc)

def _parse_hash(value: str) -> str:
    value = value.strip()
    if not value.startswith('0x'):
        value = '0x' + value
    try:
        raw = bytes.fromhex(value[2:])
    except ValueError:
        raw = b''
    if len(raw) != Config.WORD_SIZE:
        raise NotFoundError(f"Not a block or transaction hash: {value}")
    return value.lower()

class BlockRangeAggregator:
    """Assembles explorer pages from live node data.

    Each public call builds its own decoder with a fresh decimals memo, so
    nothing is shared between requests.
    """

    def __init__(
        self,
        provider: ChainDataProvider,
        blocks_per_page: int = Config.BLOCKS_PER_PAGE,
        receipt_workers: int = 1,
        page_timeout: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic
    ):
        self.provider = provider
        self.blocks_per_page = blocks_per_page
        self.receipt_workers = max(1, receipt_workers)
        self.page_timeout = page_timeout
        self.clock = clock

    def _new_decoder(self) -> TransferLogDecoder:
        return TransferLogDecoder(MemoizingDecimalsResolver(DecimalsResolver(self.provider)))

    def _fetch_receipts(self, transactions: Tuple[Transaction, ...]) -> List[Receipt]:
        hashes = [tx.hash for tx in transactions]
        if self.receipt_workers > 1 and len(hashes) > 1:
            # map() yields in submission order, so receipts line up with transactions
            with ThreadPoolExecutor(max_workers=self.receipt_workers) as pool:
                return list(pool.map(self.provider.transaction_receipt, hashes))
        return [self.provider.transaction_receipt(tx_hash) for tx_hash in hashes]

    def _collect(
        self, block: Block, decoder: TransferLogDecoder
    ) -> Tuple[List[Receipt], List[TransactionDetail], List[TokenTransfer]]:
        receipts = self._fetch_receipts(block.transactions)
        details = []
        transfers = []
        for tx, receipt in zip(block.transactions, receipts):
            details.append(build_transaction_detail(tx, receipt))
            transfers.extend(decoder.decode_receipt(receipt))
        return receipts, details, transfers

    def _summarize_block(self, block: Block, decoder: TransferLogDecoder) -> BlockSummary:
        receipts, details, transfers = self._collect(block, decoder)
        last_receipt = receipts[-1] if receipts else None

        return BlockSummary(
            number=block.number,
            hash=receipts[0].block_hash if receipts else block.hash,
            nonce=block.nonce,
            transactions=len(block.transactions),
            last_transaction_hash=block.transactions[-1].hash if block.transactions else None,
            last_transaction_status=transaction_status(last_receipt) if last_receipt else None,
            gas_used=block.gas_used,
            mined_on=_mined_on(block.timestamp),
            transaction_details=details,
            token_transfers=transfers,
        )

    def _check_deadline(self, deadline: Optional[float], page: int):
        if deadline is not None and self.clock() > deadline:
            raise AggregationTimeoutError(
                f"Page {page} took longer than {self.page_timeout} seconds"
            )

    def build_page(self, page: int = 0) -> BlockPage:
        """Build one home page of blocks.

        A block the node fails to return is kept in the page as a skipped
        entry and the page is marked partial. Failing to read the chain head
        fails the whole page.
        """
        started = self.clock()
        deadline = started + self.page_timeout if self.page_timeout else None

        head_number = self.provider.header_latest()
        window = page_window(head_number, page, self.blocks_per_page)
        decoder = self._new_decoder()
        logger.debug(f"Building page {page} for head {head_number}: blocks {list(window.block_numbers)}")

        blocks = []
        for number in window.block_numbers:
            self._check_deadline(deadline, page)
            try:
                block = self.provider.block_by_number(number)
                blocks.append(self._summarize_block(block, decoder))
            except NotFoundError as e:
                logger.warning(f"Block {number} not found, skipping: {e}")
                metrics.record_skipped_block()
                blocks.append(BlockSummary(number=number, skipped_reason=f"not found: {e}"))
            except ProviderError as e:
                logger.warning(f"Block {number} unavailable, skipping: {e}")
                metrics.record_skipped_block()
                blocks.append(BlockSummary(number=number, skipped_reason=f"node unavailable: {e}"))

        metrics.page_build_time.observe(self.clock() - started)
        return BlockPage(
            page=page,
            head_number=head_number,
            blocks=blocks,
            next_page=window.next_page,
            prev_page=window.prev_page,
            partial=any(summary.skipped for summary in blocks),
        )

    def block_transactions(self, block_id: str) -> TransactionPage:
        """All transactions and token transfers of a block given by number or hash"""
        block_id = str(block_id).strip()
        if block_id.isdigit():
            block = self.provider.block_by_number(int(block_id))
        else:
            block = self.provider.block_by_hash(_parse_hash(block_id))

        receipts, details, transfers = self._collect(block, self._new_decoder())
        return TransactionPage(
            block_number=block.number,
            block_hash=receipts[0].block_hash if receipts else block.hash,
            transactions=details,
            token_transfers=transfers,
        )

    def transaction(self, tx_hash: str) -> TransactionPage:
        """A single transaction with the token transfers found in its receipt"""
        tx_hash = _parse_hash(tx_hash)
        tx = self.provider.transaction_by_hash(tx_hash)
        receipt = self.provider.transaction_receipt(tx_hash)
        status = transaction_status(receipt)
        logger.debug(f"Transaction {tx_hash} status: {status}")

        return TransactionPage(
            block_number=receipt.block_number,
            block_hash=receipt.block_hash,
            status=status,
            transactions=[build_transaction_detail(tx, receipt)],
            token_transfers=self._new_decoder().decode_receipt(receipt),
        )

    def block_detail(self, block_hash: str) -> BlockDetail:
        block = self.provider.block_by_hash(_parse_hash(block_hash))
        return BlockDetail(
            number=block.number,
            hash=block.hash,
            nonce=block.nonce,
            transactions=len(block.transactions),
            gas_used=block.gas_used,
            gas_limit=block.gas_limit,
            mined_on=_mined_on(block.timestamp),
            difficulty=block.difficulty,
            size=block.size,
            parent_hash=block.parent_hash,
            uncle_hash=block.uncle_hash,
        )
