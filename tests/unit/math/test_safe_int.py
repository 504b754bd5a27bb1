"""Tests for SafeInt uint256-bounded arithmetic wrapper."""

import pytest

from ammsim.constants import U64_MAX, UINT256_MAX
from ammsim.safe_int import (
    DivisionByZero,
    S,
    SafeInt,
    SafeIntError,
    Uint256Overflow,
    Underflow,
)


class TestSafeIntConstruction:
    """Tests for SafeInt construction."""

    def test_from_int(self):
        """SafeInt can be constructed from int."""
        assert SafeInt(42).value == 42

    def test_from_safeint(self):
        """SafeInt can be constructed from another SafeInt."""
        assert SafeInt(SafeInt(42)).value == 42

    def test_from_uint256_max(self):
        """The largest uint256 is accepted."""
        assert SafeInt(UINT256_MAX).value == UINT256_MAX

    def test_negative_raises_underflow(self):
        """Negative values cannot be unsigned."""
        with pytest.raises(Underflow):
            SafeInt(-1)

    def test_above_uint256_raises_overflow(self):
        """Values above 2^256-1 are rejected."""
        with pytest.raises(Uint256Overflow):
            SafeInt(UINT256_MAX + 1)

    def test_from_invalid_type_raises(self):
        """SafeInt rejects non-int types, including bool."""
        with pytest.raises(TypeError):
            SafeInt("42")  # type: ignore
        with pytest.raises(TypeError):
            SafeInt(3.14)  # type: ignore
        with pytest.raises(TypeError):
            SafeInt(True)

    def test_alias_s(self):
        """S is an alias for SafeInt."""
        assert S is SafeInt


class TestSafeIntArithmetic:
    """Tests for SafeInt arithmetic operations."""

    def test_add(self):
        """Addition works with SafeInt and int operands."""
        assert (S(10) + S(5)).value == 15
        assert (S(10) + 5).value == 15
        assert (5 + S(10)).value == 15

    def test_add_overflow_raises(self):
        """A sum above uint256 raises Uint256Overflow."""
        with pytest.raises(Uint256Overflow):
            S(UINT256_MAX) + 1

    def test_sub(self):
        """Subtraction with non-negative result works."""
        assert (S(10) - S(3)).value == 7
        assert (10 - S(3)).value == 7
        assert (S(5) - S(5)).value == 0

    def test_sub_underflow_raises(self):
        """Subtraction underflow raises Underflow."""
        with pytest.raises(Underflow) as exc_info:
            S(5) - S(10)
        assert "5 - 10" in str(exc_info.value)

    def test_rsub_underflow_raises(self):
        """Reverse subtraction underflow raises Underflow."""
        with pytest.raises(Underflow):
            5 - S(10)

    def test_mul(self):
        """Multiplication works correctly."""
        assert (S(6) * S(7)).value == 42
        assert (6 * S(7)).value == 42

    def test_mul_overflow_raises(self):
        """A product above uint256 raises Uint256Overflow."""
        with pytest.raises(Uint256Overflow):
            S(2**200) * S(2**60)

    def test_floordiv(self):
        """Floor division rounds down."""
        assert (S(10) // S(3)).value == 3

    def test_floordiv_by_zero_raises(self):
        """Division by zero raises DivisionByZero."""
        with pytest.raises(DivisionByZero):
            S(10) // S(0)

    def test_errors_share_base(self):
        """All SafeInt errors are ArithmeticErrors."""
        for err in (DivisionByZero, Underflow, Uint256Overflow):
            assert issubclass(err, SafeIntError)
            assert issubclass(err, ArithmeticError)


class TestSafeIntNamedOperations:
    """Tests for saturating and conversion helpers."""

    def test_saturating_sub_clamps(self):
        """saturating_sub never goes below zero."""
        assert S(3).saturating_sub(5).value == 0
        assert S(5).saturating_sub(3).value == 2

    def test_abs_diff(self):
        """abs_diff is symmetric."""
        assert S(3).abs_diff(10).value == 7
        assert S(10).abs_diff(3).value == 7

    def test_to_u64(self):
        """to_u64 accepts the u64 range and rejects beyond it."""
        assert S(U64_MAX).to_u64() == U64_MAX
        with pytest.raises(Uint256Overflow):
            S(U64_MAX + 1).to_u64()

    def test_comparisons(self):
        """Comparisons work against SafeInt and int."""
        assert S(5) == 5
        assert S(5) < S(6)
        assert S(6) >= 6
        assert not S(0)
