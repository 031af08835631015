# File: src/explorer/decoder.py
from decimal import Decimal
from typing import List, Optional, Protocol
import logging

from web3 import Web3

from ..chain.models import Log, Receipt
from ..exceptions import DecimalsResolutionError, LogDecodeError
from ..utils.config import Config
from .amounts import normalize_amount
from .models import TokenTransfer
from .signatures import is_transfer_topic

logger = logging.getLogger(__name__)

class Resolver(Protocol):
    def resolve(self, token_address: str) -> int: ...

def topic_to_address(topic: bytes) -> str:
    """Indexed addresses are left-padded to 32 bytes; keep the trailing 20"""
    topic = bytes(topic)
    if len(topic) != Config.WORD_SIZE:
        raise LogDecodeError(f"Topic is {len(topic)} bytes, expected {Config.WORD_SIZE}")
    return Web3.to_checksum_address(Web3.to_hex(topic[-Config.ADDRESS_SIZE:]))

def is_transfer_log(log: Log) -> bool:
    return len(log.topics) >= Config.MIN_TRANSFER_TOPICS and is_transfer_topic(log.topics[0])

class TransferLogDecoder:
    """Turns receipt logs into ERC-20 token transfer records"""

    def __init__(self, resolver: Resolver):
        self.resolver = resolver

    def decode_log(self, log: Log) -> Optional[TokenTransfer]:
        """Decode one log, returning None when it is not an ERC-20 Transfer.

        Raises LogDecodeError when the log looks like a Transfer but its
        address or topics are malformed.
        """
        if not is_transfer_log(log):
            return None

        if not Web3.is_address(log.address):
            raise LogDecodeError(f"Invalid emitting contract address: {log.address!r}")
        contract = Web3.to_checksum_address(log.address)
        from_address = topic_to_address(log.topics[1])
        to_address = topic_to_address(log.topics[2])

        # Whole data payload is the amount; empty data means zero
        raw_amount = int.from_bytes(bytes(log.data), 'big')

        try:
            decimals: Optional[int] = self.resolver.resolve(contract)
            normalized = normalize_amount(raw_amount, decimals)
        except DecimalsResolutionError as e:
            logger.debug(f"Unknown decimals for token {contract}: {e}")
            decimals = None
            normalized = Decimal(0)

        return TokenTransfer(
            contract=contract,
            from_address=from_address,
            to_address=to_address,
            raw_amount=raw_amount,
            normalized_amount=normalized,
            decimals=decimals,
            log_index=log.log_index,
            transaction_hash=log.transaction_hash,
        )

    def decode_logs(self, logs) -> List[TokenTransfer]:
        transfers = []
        for position, log in enumerate(logs):
            try:
                transfer = self.decode_log(log)
            except LogDecodeError as e:
                logger.warning(f"Skipping malformed log #{position} from {log.address}: {e}")
                continue
            if transfer is not None:
                transfers.append(transfer)
        return transfers

    def decode_receipt(self, receipt: Receipt) -> List[TokenTransfer]:
        return self.decode_logs(receipt.logs)
