# test_amounts.py
import pytest
from decimal import Decimal
from src.explorer.amounts import normalize_amount, wei_to_ether, format_amount

class TestAmounts:
    def test_zero_decimals_is_identity(self):
        for amount in [0, 1, 12345, 2 ** 256 - 1]:
            assert normalize_amount(amount, 0) == amount

    def test_amounts_wider_than_uint256_are_exact(self):
        raw = 10 ** 120 + 1
        assert normalize_amount(raw, 0) == raw
        assert str(normalize_amount(raw, 120)) == "1." + "0" * 119 + "1"

    def test_one_token_with_eighteen_decimals(self):
        assert normalize_amount(10 ** 18, 18) == Decimal("1.0")

    def test_uint256_max_is_exact(self):
        raw = 2 ** 256 - 1
        digits = str(raw)
        assert len(digits) == 78

        expected = Decimal(f"{digits[:-18]}.{digits[-18:]}")
        assert normalize_amount(raw, 18) == expected

    def test_small_amount_many_decimals(self):
        assert normalize_amount(1, 255) == Decimal("1E-255")
        assert normalize_amount(5, 3) == Decimal("0.005")

    def test_amount_smaller_than_one_unit(self):
        assert normalize_amount(123456, 6) == Decimal("0.123456")

    def test_rejects_negative_inputs(self):
        with pytest.raises(ValueError):
            normalize_amount(-1, 18)
        with pytest.raises(ValueError):
            normalize_amount(1, -1)

    def test_wei_to_ether(self):
        assert wei_to_ether(1_500_000_000_000_000_000) == Decimal("1.5")
        assert wei_to_ether(0) == 0

    def test_format_amount(self):
        assert format_amount(Decimal("1.500000000000000000")) == "1.5"
        assert format_amount(normalize_amount(10 ** 18, 18)) == "1"
        assert format_amount(Decimal(0)) == "0"
        assert format_amount(normalize_amount(1, 20)) == "0.00000000000000000001"
        assert format_amount(Decimal("1E+3")) == "1000"
