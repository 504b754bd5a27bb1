"""Error classes for pricing, swap simulation and chain access.

All errors are recoverable: callers handle them per pool so that one
pool's failure never aborts a batch of many pools.
"""


class AmmError(Exception):
    """Base error for the pool engine."""

    pass


# =============================================================================
# Pricing arithmetic
# =============================================================================


class AmmArithmeticError(AmmError, ArithmeticError):
    """Price computation failed."""

    pass


class DivisionByZero(AmmArithmeticError):
    """Denominator was zero."""

    pass


class RoundingError(AmmArithmeticError):
    """Fixed-point correction found an inconsistent estimate.

    The result cannot be trusted; skip this pricing attempt.
    """

    pass


class YIsZero(AmmArithmeticError):
    """Degenerate zero input on the divisor side of a price."""

    pass


# =============================================================================
# Swap simulation
# =============================================================================


class SwapSimulationError(AmmError):
    """Swap simulation failed."""

    pass


class SwapOverflow(SwapSimulationError):
    """An intermediate or resulting integer exceeds its representable range."""

    pass


class SwapDivisionByZero(SwapSimulationError):
    """Zero reserve or zero derivative on the relevant side."""

    pass


# =============================================================================
# Chain access
# =============================================================================


class TransportError(Exception):
    """Raised by chain-client implementations on any transport failure.

    Network errors, contract reverts and decoding failures all map here.
    """

    pass


class ChainError(AmmError):
    """A chain read failed; wraps the underlying TransportError.

    Attributes:
        contract_id: Contract the call or log query targeted
        operation: Method or event name
    """

    def __init__(self, contract_id: str, operation: str, message: str) -> None:
        super().__init__(f"{operation} on {contract_id} failed: {message}")
        self.contract_id = contract_id
        self.operation = operation
