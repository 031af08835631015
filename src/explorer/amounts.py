# File: src/explorer/amounts.py
from decimal import Decimal, localcontext

from ..utils.config import Config

def normalize_amount(raw_amount: int, decimals: int) -> Decimal:
    """Scale a raw integer token amount down by 10**decimals.

    The result is exact: the division by a power of ten only moves the
    exponent, and the working precision grows with the raw amount.
    """
    if raw_amount < 0:
        raise ValueError(f"Raw amount must be non-negative, got {raw_amount}")
    if decimals < 0:
        raise ValueError(f"Decimals must be non-negative, got {decimals}")

    amount = Decimal(int(raw_amount))
    with localcontext() as ctx:
        ctx.prec = max(Config.DECIMAL_PRECISION, len(amount.as_tuple().digits))
        return amount.scaleb(-int(decimals))

def wei_to_ether(wei: int) -> Decimal:
    return normalize_amount(wei, Config.ETHER_DECIMALS)

def format_amount(value: Decimal) -> str:
    """Plain notation without trailing zeros, e.g. 1.500 -> '1.5'"""
    if value == 0:
        return '0'
    text = format(value, 'f')
    if '.' in text:
        text = text.rstrip('0').rstrip('.')
    return text
