"""
Unit tests for amount coercion and boundary rounding.

Verifies:
- Decimal passthrough and float-safe conversion
- Rejection of booleans, garbage, NaN and infinity
- Quantum and round-half-up behaviour
"""

import pytest
from decimal import ROUND_DOWN, Decimal

from settlement_kernel.domain.values import quantum, round_amount, to_amount


class TestToAmount:
    """Tests for to_amount."""

    def test_decimal_passthrough(self):
        value = Decimal("12.345")
        assert to_amount(value) is value

    def test_int(self):
        assert to_amount(5000) == Decimal("5000")

    def test_string_with_whitespace(self):
        assert to_amount(" 10.50 ") == Decimal("10.50")

    def test_float_uses_shortest_repr(self):
        """0.1 must not become 0.1000000000000000055511151231257827..."""
        assert to_amount(0.1) == Decimal("0.1")

    def test_bool_rejected(self):
        with pytest.raises(ValueError):
            to_amount(True)

    def test_garbage_string_rejected(self):
        with pytest.raises(ValueError, match="Invalid amount"):
            to_amount("ten rupees")

    @pytest.mark.parametrize("value", ["NaN", "Infinity", float("inf")])
    def test_non_finite_rejected(self, value):
        with pytest.raises(ValueError):
            to_amount(value)

    def test_unsupported_type(self):
        with pytest.raises(TypeError):
            to_amount([1, 2])


class TestRounding:
    """Tests for quantum and round_amount."""

    def test_quantum(self):
        assert quantum(2) == Decimal("0.01")
        assert quantum(0) == Decimal("1")
        assert quantum(3) == Decimal("0.001")

    def test_round_half_up(self):
        assert round_amount(Decimal("2.345")) == Decimal("2.35")
        assert round_amount(Decimal("-2.345")) == Decimal("-2.35")

    def test_pads_to_places(self):
        assert str(round_amount(Decimal("2500"))) == "2500.00"

    def test_non_terminating_share(self):
        assert round_amount(Decimal("10") / 3) == Decimal("3.33")

    def test_custom_mode(self):
        assert round_amount(Decimal("2.349"), 2, ROUND_DOWN) == Decimal("2.34")
