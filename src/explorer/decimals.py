# File: src/explorer/decimals.py
from typing import Dict, Union
import logging

from ..chain.provider import ChainDataProvider
from ..exceptions import DecimalsResolutionError, ProviderError
from ..monitoring.metrics import metrics
from ..utils.config import Config
from .signatures import decimals_selector

logger = logging.getLogger(__name__)

def encode_decimals_call() -> bytes:
    """Call data for decimals(): the bare selector, no arguments"""
    return decimals_selector()

def decode_decimals_result(result: bytes) -> int:
    """Decode a single ABI-encoded uint8 return value"""
    if len(result) < Config.WORD_SIZE:
        raise DecimalsResolutionError(
            f"decimals() returned {len(result)} bytes, expected {Config.WORD_SIZE}"
        )
    value = int.from_bytes(result[:Config.WORD_SIZE], 'big')
    if value > Config.MAX_UINT8:
        raise DecimalsResolutionError(f"decimals() value {value} does not fit in uint8")
    return value

class DecimalsResolver:
    """Reads a token's decimals() through the chain data provider"""

    def __init__(self, provider: ChainDataProvider):
        self.provider = provider

    def resolve(self, token_address: str) -> int:
        try:
            result = self.provider.call(token_address, encode_decimals_call())
        except ProviderError as e:
            metrics.record_decimals_lookup('failed')
            raise DecimalsResolutionError(f"decimals() call to {token_address} failed: {e}") from e

        try:
            decimals = decode_decimals_result(result)
        except DecimalsResolutionError:
            metrics.record_decimals_lookup('failed')
            raise

        metrics.record_decimals_lookup('resolved')
        return decimals

class MemoizingDecimalsResolver:
    """Remembers each contract's decimals (or its failure) for its own lifetime.

    Meant to live for a single aggregation call, never across requests.
    """

    def __init__(self, resolver: DecimalsResolver):
        self.resolver = resolver
        self._cache: Dict[str, Union[int, DecimalsResolutionError]] = {}

    def resolve(self, token_address: str) -> int:
        key = token_address.lower()
        if key not in self._cache:
            try:
                self._cache[key] = self.resolver.resolve(token_address)
            except DecimalsResolutionError as e:
                self._cache[key] = e
        else:
            metrics.record_decimals_lookup('cached')

        cached = self._cache[key]
        if isinstance(cached, DecimalsResolutionError):
            raise DecimalsResolutionError(str(cached))
        return cached
