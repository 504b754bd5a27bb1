"""Stable-curve (stableswap) math for hybrid pools.

The stable branch of a hybrid pool trades on the invariant

    k(x, y) = x^3 * y + x * y^3

evaluated on reserves normalized to 18 decimals. The curve is nearly
linear around the 1:1 price and approaches constant product away from it.
Swapping has no closed form, so the new output reserve is found with a
Newton-Raphson iteration bounded at 255 steps with a 1-unit tolerance.

All swap arithmetic goes through SafeInt so that intermediates above
uint256 raise instead of silently growing.
"""

import structlog

from ammsim.constants import (
    FEE_DENOMINATOR,
    ONE_18,
    STABLE_CONVERGENCE_TOLERANCE,
    STABLE_MAX_ITERATIONS,
)
from ammsim.errors import YIsZero
from ammsim.safe_int import S, SafeInt

logger = structlog.get_logger()


def adjust(value: int, decimals: int) -> int:
    """Scale an amount in native decimals to 18-decimal fixed point."""
    return (S(value) * ONE_18 // S(10**decimals)).value


def unadjust(value: int, decimals: int) -> int:
    """Scale an 18-decimal fixed-point amount back to native decimals."""
    return (S(value) * S(10**decimals) // ONE_18).value


def invariant(x: int, y: int) -> int:
    """Stable invariant k = x*y*(x^2 + y^2) on 18-decimal reserves."""
    sx, sy = S(x), S(y)
    a = sx * sy // ONE_18
    b = sx * sx // ONE_18 + sy * sy // ONE_18
    return (a * b // ONE_18).value


def _f(x0: SafeInt, y: SafeInt) -> SafeInt:
    # x0*y^3 + x0^3*y in 18-decimal fixed point
    return x0 * (y * y // ONE_18 * y // ONE_18) // ONE_18 + (x0 * x0 // ONE_18 * x0 // ONE_18) * y // ONE_18


def _d(x0: SafeInt, y: SafeInt) -> SafeInt:
    # df/dy scaled by 1e18
    return S(3) * x0 * (y * y // ONE_18) // ONE_18 + (x0 * x0 // ONE_18 * x0 // ONE_18)


def get_y(x0: int, target_k: int, y: int) -> int:
    """Solve f(x0, y) == target_k for y with Newton-Raphson.

    Algorithm:
        1. Start from the current output reserve y
        2. Step y by (target_k - f) * 1e18 / d, never going below zero
        3. Stop when consecutive iterates differ by at most 1
        4. Give up after 255 iterations and return the last iterate

    Non-convergence is not an error: the last iterate is a best-effort
    approximation and the bound caps the cost of a single simulation.

    Args:
        x0: New input reserve (18 decimals), old reserve plus amount in
        target_k: Invariant to preserve
        y: Initial guess, the current output reserve (18 decimals)

    Returns:
        The output reserve that preserves the invariant

    Raises:
        DivisionByZero: If the derivative term is zero (x0 == 0)
        Uint256Overflow: If an intermediate exceeds uint256
    """
    sx0, sk, sy = S(x0), S(target_k), S(y)

    for _ in range(STABLE_MAX_ITERATIONS):
        y_prev = sy
        k = _f(sx0, sy)
        d = _d(sx0, sy)
        if k < sk:
            sy = sy + (sk - k) * ONE_18 // d
        else:
            sy = sy.saturating_sub((k - sk) * ONE_18 // d)

        if sy.abs_diff(y_prev) <= STABLE_CONVERGENCE_TOLERANCE:
            return sy.value

    logger.debug(
        "stable_get_y_not_converged",
        iterations=STABLE_MAX_ITERATIONS,
        x0=x0,
        target_k=target_k,
        y=sy.value,
    )
    return sy.value


def stable_get_amount_out(
    amount_in: int,
    reserve_in: int,
    reserve_out: int,
    decimals_in: int,
    decimals_out: int,
    fee: int,
) -> int:
    """Output amount of a stable-curve swap.

    The fee (300 = 0.30%) is deducted from amount_in before the curve is
    evaluated.

    Returns:
        Output amount in the output token's native decimals, 0 if any of
        amount_in, reserve_in or reserve_out is zero

    Raises:
        Uint256Overflow: If an intermediate exceeds uint256
        DivisionByZero: If the Newton derivative is zero
    """
    if amount_in == 0 or reserve_in == 0 or reserve_out == 0:
        return 0

    amount_in_after_fee = S(amount_in) - S(amount_in) * S(fee) // FEE_DENOMINATOR

    x = adjust(reserve_in, decimals_in)
    y = adjust(reserve_out, decimals_out)
    target_k = invariant(x, y)

    x0 = (S(x) + adjust(amount_in_after_fee.value, decimals_in)).value
    y_new = get_y(x0, target_k, y)
    if y_new >= y:
        return 0

    return unadjust(y - y_new, decimals_out)


def stable_price_wad(
    reserve_base: int,
    reserve_quote: int,
    decimals_base: int,
    decimals_quote: int,
) -> int:
    """Marginal price of the base token on the stable curve, 18 decimals.

    With b and q the decimal-normalized base and quote reserves, the slope
    of the invariant gives

        price = (3*b^2*q + q^3) / (b^3 + 3*b*q^2)

    which is exactly 1 for balanced reserves. The ratio is homogeneous, so
    both reserves are brought to a common integer scale instead of being
    rounded to 18 decimals, and only the final division floors. Computed
    with unbounded ints; there is no on-chain counterpart to overflow
    against.

    Raises:
        YIsZero: If the base reserve is zero
    """
    b = reserve_base * 10**decimals_quote
    q = reserve_quote * 10**decimals_base

    numerator = 3 * b * b * q + q**3
    denominator = b**3 + 3 * b * q * q
    if denominator == 0:
        raise YIsZero(f"Stable price undefined for base reserve {reserve_base}")

    return numerator * ONE_18 // denominator
