"""64.64 fixed-point division and conversions.

precise_div computes (x << 64) / y for unsigned 256-bit x and y. When the
shifted numerator would not fit in 256 bits, the quotient is estimated from
the most significant bit of x and then corrected with a 256-bit
multiply-back, the same scheme as ABDK's divuu.

All values are plain Python ints; 256-bit wrapping is applied explicitly
with masks where the on-chain arithmetic relies on it.
"""

from __future__ import annotations

import structlog

from ammsim.constants import ONE_18, Q64, U128_MAX, UINT256_MAX
from ammsim.errors import DivisionByZero, RoundingError

__all__ = [
    "precise_div",
    "to_float",
    "wide_decimal_to_float",
    "MAX_DIRECT_NUMERATOR",
]

logger = structlog.get_logger()

# Largest numerator whose 64-bit left shift still fits in 256 bits
MAX_DIRECT_NUMERATOR = 2**192 - 1

# (threshold, shift) pairs for the binary MSB search above bit 192
_MSB_STEPS = (
    (0x100000000, 32),
    (0x10000, 16),
    (0x100, 8),
    (0x10, 4),
    (0x4, 2),
)


def _msb_above_192(x: int) -> int:
    """Index of the most significant bit of x, for x > 2^192 - 1."""
    msb = 192
    xc = x >> 192
    for threshold, shift in _MSB_STEPS:
        if xc >= threshold:
            xc >>= shift
            msb += shift
    if xc >= 0x2:
        msb += 1
    return msb


def precise_div(x: int, y: int) -> int:
    """Divide x by y as an unsigned 64.64 fixed-point number.

    Args:
        x: Numerator, 0 <= x < 2^256
        y: Denominator, 0 <= y < 2^256

    Returns:
        floor(x * 2^64 / y) as an int. Returns 0 when the quotient does not
        fit in 128 bits; this saturation is silent (logged at debug level),
        so callers must treat 0 as "price out of range", not as a price.

    Raises:
        DivisionByZero: If y is zero
        RoundingError: If the multiply-back check finds the estimate
            inconsistent
        ValueError: If x or y is outside the uint256 range
    """
    if y == 0:
        raise DivisionByZero(f"precise_div: {x} / 0")
    if not (0 <= x <= UINT256_MAX and 0 < y <= UINT256_MAX):
        raise ValueError(f"precise_div operands must be uint256, got x={x} y={y}")

    if x <= MAX_DIRECT_NUMERATOR:
        answer = (x << 64) // y
    else:
        msb = _msb_above_192(x)
        answer = (x << (255 - msb)) // (((y - 1) >> (msb - 191)) + 1)

        if answer > U128_MAX:
            logger.debug("precise_div_saturated", stage="estimate", x=x, y=y)
            return 0

        # answer * y split across the 128-bit halves of y
        hi = answer * (y >> 128)
        lo = answer * (y & U128_MAX)

        xh = x >> 192
        xl = (x << 64) & UINT256_MAX

        if xl < lo:
            xh -= 1
        xl = (xl - lo) & UINT256_MAX
        lo = (hi << 128) & UINT256_MAX
        if xl < lo:
            xh -= 1
        xl = (xl - lo) & UINT256_MAX

        if xh != hi >> 128:
            raise RoundingError(f"precise_div: inconsistent estimate for {x} / {y}")

        answer += xl // y

    if answer > U128_MAX:
        logger.debug("precise_div_saturated", stage="result", x=x, y=y)
        return 0

    return answer


def to_float(x: int) -> float:
    """Convert a 64.64 fixed-point value to a float ratio."""
    # int / int is correctly rounded, no intermediate float of x
    return x / Q64


def wide_decimal_to_float(x: int) -> float:
    """Convert an 18-decimal fixed-point value (up to 256 bits) to a float.

    Splits into integer and fractional parts so that the fractional digits
    are not lost to the float mantissa of a huge integer.
    """
    integer_part, fractional_part = divmod(x, ONE_18)
    return float(integer_part) + fractional_part / ONE_18
