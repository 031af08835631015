# File: src/explorer/signatures.py
from functools import lru_cache

from web3 import Web3

from ..utils.config import Config

@lru_cache(maxsize=None)
def transfer_event_topic() -> bytes:
    """Keccak-256 of Transfer(address,address,uint256), the topic[0] of ERC-20 transfers"""
    return bytes(Web3.keccak(text=Config.TRANSFER_EVENT_SIGNATURE))

@lru_cache(maxsize=None)
def decimals_selector() -> bytes:
    """First four bytes of Keccak-256 of decimals()"""
    return bytes(Web3.keccak(text=Config.DECIMALS_FUNCTION_SIGNATURE))[:Config.SELECTOR_SIZE]

def is_transfer_topic(topic: bytes) -> bool:
    return bytes(topic) == transfer_event_topic()
