"""Capability contract shared by every pool model."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from ammsim.errors import SwapDivisionByZero, SwapOverflow, SwapSimulationError
from ammsim.safe_int import DivisionByZero, S, Uint256Overflow, Underflow

if TYPE_CHECKING:
    from ammsim.chain.client import ChainClient


@runtime_checkable
class AutomatedMarketMaker(Protocol):
    """Protocol every pool variant satisfies.

    Pure methods operate on the pool's local snapshot. The async methods
    read the chain through the client passed in; nothing is global.
    """

    address: str

    def tokens(self) -> list[str]:
        """Return the pool's tokens as [token_0, token_1]."""
        ...

    def get_token_out(self, token_in: str) -> str:
        """Return the counter-asset for token_in."""
        ...

    def calculate_price(self, base_token: str) -> float:
        """Price of base_token in units of the other token.

        Raises:
            AmmArithmeticError: If the price cannot be computed
        """
        ...

    def simulate_swap(self, base_token: str, amount_in: int) -> int:
        """Amount received for amount_in of base_token, without mutation.

        Raises:
            SwapSimulationError: If the swap cannot be simulated
        """
        ...

    def simulate_swap_mut(self, base_token: str, amount_in: int) -> int:
        """Like simulate_swap, then apply the swap to the local reserves."""
        ...

    async def sync(self, client: ChainClient) -> None:
        """Refresh reserves from the chain."""
        ...

    async def populate_data(self, client: ChainClient, block_number: int | None = None) -> None:
        """Replace the pool's whole on-chain state from the chain."""
        ...


@contextmanager
def swap_arithmetic(pool_address: str) -> Iterator[None]:
    """Translate SafeInt failures inside swap math into SwapSimulationError."""
    try:
        yield
    except Uint256Overflow as err:
        raise SwapOverflow(f"pool {pool_address}: {err}") from err
    except DivisionByZero as err:
        raise SwapDivisionByZero(f"pool {pool_address}: {err}") from err
    except Underflow as err:
        raise SwapSimulationError(f"pool {pool_address}: {err}") from err


def swapped_reserves(
    reserve_in: int,
    reserve_out: int,
    amount_in: int,
    amount_out: int,
) -> tuple[int, int]:
    """Reserves after a swap, as (new_reserve_in, new_reserve_out).

    Raises:
        Uint256Overflow: If the input reserve no longer fits in u64
        Underflow: If amount_out exceeds reserve_out
    """
    new_reserve_in = (S(reserve_in) + S(amount_in)).to_u64()
    new_reserve_out = (S(reserve_out) - S(amount_out)).value
    return new_reserve_in, new_reserve_out
