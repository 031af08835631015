# File: src/chain/provider.py
from abc import ABC, abstractmethod
from typing import Any, Callable, List, Optional, Union
import logging

from requests.exceptions import RequestException
from web3 import Web3
from web3.exceptions import BlockNotFound, TransactionNotFound, Web3Exception

from .models import Block, Log, Receipt, Transaction
from ..exceptions import NotFoundError, ProviderUnavailableError
from ..monitoring.metrics import metrics
from ..utils.config import Config

logger = logging.getLogger(__name__)

HexLike = Union[str, bytes]

class ChainDataProvider(ABC):
    """Read-only view of an Ethereum-compatible node.

    Every method raises NotFoundError when the requested object does not
    exist and ProviderUnavailableError for transport or RPC failures.
    """

    @abstractmethod
    def header_latest(self) -> int:
        """Number of the current chain head"""
        pass

    @abstractmethod
    def block_by_number(self, number: int) -> Block:
        pass

    @abstractmethod
    def block_by_hash(self, block_hash: HexLike) -> Block:
        pass

    @abstractmethod
    def transaction_by_hash(self, tx_hash: HexLike) -> Transaction:
        pass

    @abstractmethod
    def transaction_receipt(self, tx_hash: HexLike) -> Receipt:
        pass

    @abstractmethod
    def call(self, to: str, data: bytes) -> bytes:
        """Read-only contract call against the latest state"""
        pass

    @abstractmethod
    def balance_at(self, address: str) -> int:
        pass

    @abstractmethod
    def nonce_at(self, address: str, block_number: Optional[int] = None) -> int:
        pass

    @abstractmethod
    def network_id(self) -> int:
        pass

    @abstractmethod
    def pending_transaction_count(self) -> int:
        pass

    @abstractmethod
    def suggested_gas_price(self) -> int:
        pass

    @abstractmethod
    def accounts(self) -> List[str]:
        pass

def _to_bytes(value: Any) -> bytes:
    if value is None:
        return b''
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    return Web3.to_bytes(hexstr=value)

def _to_hex(value: Any) -> str:
    if value is None:
        return ''
    if isinstance(value, str):
        return value if value.startswith('0x') else '0x' + value
    return Web3.to_hex(value)

def _to_int(value: Any) -> int:
    if value is None:
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, (bytes, bytearray)):
        return int.from_bytes(value, 'big')
    return int(value, 16) if str(value).startswith('0x') else int(value)

def convert_log(raw: Any) -> Log:
    return Log(
        address=raw['address'],
        topics=tuple(_to_bytes(topic) for topic in raw.get('topics', [])),
        data=_to_bytes(raw.get('data')),
        log_index=raw.get('logIndex'),
        transaction_hash=_to_hex(raw.get('transactionHash')) or None,
    )

def convert_receipt(raw: Any) -> Receipt:
    return Receipt(
        transaction_hash=_to_hex(raw['transactionHash']),
        block_hash=_to_hex(raw['blockHash']),
        block_number=_to_int(raw['blockNumber']),
        status=_to_int(raw.get('status', 0)),
        logs=tuple(convert_log(log) for log in raw.get('logs', [])),
        contract_address=raw.get('contractAddress'),
        gas_used=_to_int(raw.get('gasUsed')),
    )

def convert_transaction(raw: Any) -> Transaction:
    return Transaction(
        hash=_to_hex(raw['hash']),
        nonce=_to_int(raw.get('nonce')),
        sender=raw['from'],
        to=raw.get('to') or None,
        value=_to_int(raw.get('value')),
        gas=_to_int(raw.get('gas')),
        gas_price=_to_int(raw.get('gasPrice')),
        input=_to_bytes(raw.get('input')),
        block_number=raw.get('blockNumber'),
    )

def convert_block(raw: Any) -> Block:
    transactions = tuple(
        convert_transaction(tx) for tx in raw.get('transactions', [])
        if not isinstance(tx, (str, bytes, bytearray))
    )
    return Block(
        number=_to_int(raw['number']),
        hash=_to_hex(raw['hash']),
        parent_hash=_to_hex(raw.get('parentHash')),
        timestamp=_to_int(raw.get('timestamp')),
        nonce=_to_int(raw.get('nonce')),
        gas_used=_to_int(raw.get('gasUsed')),
        gas_limit=_to_int(raw.get('gasLimit')),
        difficulty=_to_int(raw.get('difficulty')),
        size=_to_int(raw.get('size')),
        uncle_hash=_to_hex(raw.get('sha3Uncles')),
        transactions=transactions,
    )

class Web3Provider(ChainDataProvider):
    """ChainDataProvider backed by a web3 HTTP connection"""

    def __init__(self, web3: Web3, node_url: str = ''):
        self.web3 = web3
        self.node_url = node_url

    @classmethod
    def from_url(cls, node_url: str, timeout: float = Config.DEFAULT_REQUEST_TIMEOUT) -> 'Web3Provider':
        web3 = Web3(Web3.HTTPProvider(node_url, request_kwargs={'timeout': timeout}))
        return cls(web3, node_url)

    def _request(self, method: str, fn: Callable, *args, **kwargs):
        metrics.record_rpc_call(method)
        try:
            return fn(*args, **kwargs)
        except (BlockNotFound, TransactionNotFound) as e:
            metrics.record_rpc_error(method)
            raise NotFoundError(f"{method}: {e}") from e
        except (Web3Exception, RequestException, ValueError, OSError) as e:
            metrics.record_rpc_error(method)
            logger.error(f"{method} failed against {self.node_url or 'node'}: {e}")
            raise ProviderUnavailableError(f"{method}: {e}") from e

    def header_latest(self) -> int:
        return self._request('eth_blockNumber', lambda: self.web3.eth.block_number)

    def block_by_number(self, number: int) -> Block:
        raw = self._request('eth_getBlockByNumber', self.web3.eth.get_block, number, True)
        return convert_block(raw)

    def block_by_hash(self, block_hash: HexLike) -> Block:
        raw = self._request('eth_getBlockByHash', self.web3.eth.get_block, _to_hex(block_hash), True)
        return convert_block(raw)

    def transaction_by_hash(self, tx_hash: HexLike) -> Transaction:
        raw = self._request('eth_getTransactionByHash', self.web3.eth.get_transaction, _to_hex(tx_hash))
        return convert_transaction(raw)

    def transaction_receipt(self, tx_hash: HexLike) -> Receipt:
        raw = self._request(
            'eth_getTransactionReceipt', self.web3.eth.get_transaction_receipt, _to_hex(tx_hash)
        )
        return convert_receipt(raw)

    def call(self, to: str, data: bytes) -> bytes:
        def _call():
            tx = {'to': Web3.to_checksum_address(to), 'data': Web3.to_hex(data)}
            return self.web3.eth.call(tx, 'latest')

        return bytes(self._request('eth_call', _call))

    def balance_at(self, address: str) -> int:
        return self._request('eth_getBalance', self.web3.eth.get_balance, Web3.to_checksum_address(address))

    def nonce_at(self, address: str, block_number: Optional[int] = None) -> int:
        block_identifier = 'latest' if block_number is None else block_number
        return self._request(
            'eth_getTransactionCount',
            self.web3.eth.get_transaction_count,
            Web3.to_checksum_address(address),
            block_identifier,
        )

    def network_id(self) -> int:
        return int(self._request('net_version', lambda: self.web3.net.version))

    def pending_transaction_count(self) -> int:
        return self._request(
            'eth_getBlockTransactionCountByNumber',
            self.web3.eth.get_block_transaction_count,
            'pending',
        )

    def suggested_gas_price(self) -> int:
        return self._request('eth_gasPrice', lambda: self.web3.eth.gas_price)

    def accounts(self) -> List[str]:
        return list(self._request('eth_accounts', lambda: self.web3.eth.accounts))
