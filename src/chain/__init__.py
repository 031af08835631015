# src/chain/__init__.py
from .models import Block, Log, Receipt, Transaction
from .provider import ChainDataProvider, Web3Provider

__all__ = ['Block', 'Log', 'Receipt', 'Transaction', 'ChainDataProvider', 'Web3Provider']
