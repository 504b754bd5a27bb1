"""Tests for 64.64 fixed-point division and conversions."""

import pytest
from structlog.testing import capture_logs

from ammsim.constants import ONE_18, Q64, U128_MAX, UINT256_MAX
from ammsim.errors import AmmArithmeticError, DivisionByZero
from ammsim.math.fixed_point import (
    MAX_DIRECT_NUMERATOR,
    precise_div,
    to_float,
    wide_decimal_to_float,
)


def _rel_error(actual: float, expected: float) -> float:
    return abs(actual - expected) / abs(expected)


class TestPreciseDivDirect:
    """Numerators up to 2^192 - 1 use the exact shifted division."""

    def test_one(self):
        """1 / 1 is exactly 1.0 in 64.64."""
        assert precise_div(1, 1) == Q64

    def test_half(self):
        """1 / 2 is exactly 0.5."""
        assert precise_div(1, 2) == Q64 // 2

    def test_zero_numerator(self):
        """0 / y is 0."""
        assert precise_div(0, 12345) == 0

    def test_floor(self):
        """The result is floor(x * 2^64 / y)."""
        assert precise_div(1, 3) == Q64 // 3

    @pytest.mark.parametrize(
        "x,y",
        [
            (15_466_423 * 10**9, 23_595_096),
            (23_595_096, 15_466_423 * 10**9),
            (10**30, 7 * 10**25),
            (MAX_DIRECT_NUMERATOR, 2**180 + 1),
        ],
    )
    def test_matches_float_ratio(self, x, y):
        """to_float(precise_div(x, y)) approximates x / y."""
        assert _rel_error(to_float(precise_div(x, y)), x / y) < 1e-9


class TestPreciseDivWide:
    """Numerators above 2^192 - 1 go through the MSB estimate and correction."""

    @pytest.mark.parametrize(
        "x,y",
        [
            (2**192, 2**140),
            (3 * 2**200, 7 * 2**140),
            (UINT256_MAX, 2**200 + 12345),
            (2**255 + 987654321, 3**130),
        ],
    )
    def test_matches_float_ratio(self, x, y):
        """The wide branch stays within 1e-9 relative error."""
        assert _rel_error(to_float(precise_div(x, y)), x / y) < 1e-9

    def test_matches_exact_division(self):
        """The corrected estimate equals the exact floor quotient."""
        x, y = 3 * 2**200 + 17, 7 * 2**140 + 3
        assert precise_div(x, y) == (x << 64) // y

    def test_saturates_to_zero(self):
        """A quotient above 2^128 - 1 returns 0 instead of a wrong value."""
        with capture_logs() as logs:
            assert precise_div(UINT256_MAX, 3) == 0
        assert any(log["event"] == "precise_div_saturated" for log in logs)

    def test_direct_branch_saturates_to_zero(self):
        """Saturation also applies to small numerators."""
        assert precise_div(2**70, 1) == 0


class TestPreciseDivErrors:
    """Error handling."""

    @pytest.mark.parametrize("x", [0, 1, 2**100, UINT256_MAX])
    def test_zero_denominator_raises(self, x):
        """Division by zero raises DivisionByZero for every numerator."""
        with pytest.raises(DivisionByZero):
            precise_div(x, 0)

    def test_division_by_zero_is_arithmetic_error(self):
        """DivisionByZero belongs to the pricing error family."""
        with pytest.raises(AmmArithmeticError):
            precise_div(5, 0)

    def test_out_of_range_operands_raise(self):
        """Operands must be uint256."""
        with pytest.raises(ValueError):
            precise_div(UINT256_MAX + 1, 1)
        with pytest.raises(ValueError):
            precise_div(-1, 1)


class TestConversions:
    """Fixed point to float conversions."""

    def test_to_float(self):
        """to_float divides by 2^64."""
        assert to_float(Q64) == 1.0
        assert to_float(3 * Q64 // 2) == 1.5
        assert to_float(U128_MAX) == pytest.approx(2.0**64)

    def test_wide_decimal_to_float(self):
        """18-decimal values keep their fractional part."""
        assert wide_decimal_to_float(ONE_18) == 1.0
        assert wide_decimal_to_float(ONE_18 // 4) == 0.25
        assert wide_decimal_to_float(12 * ONE_18 + ONE_18 // 2) == 12.5

    def test_wide_decimal_to_float_huge(self):
        """Values far beyond 2^64 still convert."""
        value = 10**50 * ONE_18 + 1
        assert wide_decimal_to_float(value) == pytest.approx(1e50)
