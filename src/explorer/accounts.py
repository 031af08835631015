# File: src/explorer/accounts.py
from typing import List
import logging

from web3 import Web3

from ..chain.provider import ChainDataProvider
from ..exceptions import NotFoundError, ProviderError
from .amounts import wei_to_ether
from .models import AccountInfo, NetworkStats

logger = logging.getLogger(__name__)

class AccountService:
    """Balances, nonces and node-level statistics"""

    def __init__(self, provider: ChainDataProvider):
        self.provider = provider

    def network_stats(self) -> NetworkStats:
        return NetworkStats(
            network_id=self.provider.network_id(),
            pending_transactions=self.provider.pending_transaction_count(),
            suggested_gas_price=self.provider.suggested_gas_price(),
        )

    def account(self, address: str, index=None) -> AccountInfo:
        """Balance and transaction count of one address at the latest block"""
        address = address.strip()
        if not Web3.is_address(address):
            raise NotFoundError(f"Not an account address: {address}")
        return self._account_at(Web3.to_checksum_address(address), self.provider.header_latest(), index)

    def _account_at(self, address: str, block_number: int, index=None) -> AccountInfo:
        balance = self.provider.balance_at(address)
        nonce = self.provider.nonce_at(address, block_number)
        return AccountInfo(
            address=address,
            balance_ether=wei_to_ether(balance),
            transaction_count=nonce,
            index=index,
        )

    def node_accounts(self) -> List[AccountInfo]:
        """Accounts unlocked on the node, as Ganache and Anvil expose them.

        Public nodes usually refuse eth_accounts; an empty list is returned then.
        An account whose balance or nonce cannot be read is left out.
        """
        try:
            addresses = self.provider.accounts()
            head = self.provider.header_latest() if addresses else None
        except ProviderError as e:
            logger.warning(f"Node does not list accounts: {e}")
            return []

        accounts = []
        for index, address in enumerate(addresses):
            try:
                accounts.append(self._account_at(Web3.to_checksum_address(address), head, index))
            except (ProviderError, ValueError) as e:
                logger.warning(f"Skipping node account {address}: {e}")
        return accounts
