# src/explorer/__init__.py
from .aggregator import BlockRangeAggregator, PageWindow, page_window
from .amounts import format_amount, normalize_amount, wei_to_ether
from .decimals import DecimalsResolver, MemoizingDecimalsResolver
from .decoder import TransferLogDecoder
from .models import BlockPage, TokenTransfer, TransactionDetail
from .signatures import decimals_selector, transfer_event_topic

__all__ = [
    'BlockRangeAggregator', 'PageWindow', 'page_window',
    'format_amount', 'normalize_amount', 'wei_to_ether',
    'DecimalsResolver', 'MemoizingDecimalsResolver', 'TransferLogDecoder',
    'BlockPage', 'TokenTransfer', 'TransactionDetail',
    'decimals_selector', 'transfer_event_topic',
]
