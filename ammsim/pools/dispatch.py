"""Variant dispatch over AnyPool.

These functions are the integration surface for routing and arbitrage
code: they accept any pool variant and route to its model with one match
arm per variant. Adding a pool model means adding a variant to AnyPool and
an arm to _model.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from ammsim.amm.constant_product import ConstantProductPool
from ammsim.amm.hybrid import HybridPool
from ammsim.errors import AmmArithmeticError
from ammsim.pools.types import AnyPool

if TYPE_CHECKING:
    from ammsim.chain.client import ChainClient

logger = structlog.get_logger()


def _model(pool: AnyPool) -> ConstantProductPool | HybridPool:
    match pool:
        case ConstantProductPool():
            return pool
        case HybridPool():
            return pool
        case _:
            raise TypeError(f"Unknown pool type: {type(pool)}")


def address(pool: AnyPool) -> str:
    """Contract id of the pool (the hosting AMM contract for hybrid pools)."""
    return _model(pool).address


def tokens(pool: AnyPool) -> list[str]:
    """The pool's two tokens, in pool order."""
    return _model(pool).tokens()


def get_token_out(pool: AnyPool, token_in: str) -> str:
    """Counter-asset of token_in.

    Raises:
        ValueError: If token_in is not one of the pool's tokens
    """
    return _model(pool).get_token_out(token_in)


def calculate_price(pool: AnyPool, base_token: str) -> float:
    """Price of base_token in units of the pool's other token.

    Raises:
        AmmArithmeticError: If the price cannot be computed
    """
    return _model(pool).calculate_price(base_token)


def simulate_swap(pool: AnyPool, base_token: str, amount_in: int) -> int:
    """Amount of the counter-asset received for amount_in of base_token.

    Raises:
        SwapSimulationError: If the swap cannot be simulated
    """
    return _model(pool).simulate_swap(base_token, amount_in)


def simulate_swap_mut(pool: AnyPool, base_token: str, amount_in: int) -> int:
    """Like simulate_swap, then apply the swap to the pool's reserves."""
    return _model(pool).simulate_swap_mut(base_token, amount_in)


async def sync(pool: AnyPool, client: ChainClient) -> None:
    """Refresh the pool's reserves from the chain.

    Raises:
        ChainError: If the chain read fails
    """
    await _model(pool).sync(client)


async def populate_data(pool: AnyPool, client: ChainClient, block_number: int | None = None) -> None:
    """Replace the pool's on-chain state from the chain.

    Raises:
        ChainError: If the chain read fails
    """
    await _model(pool).populate_data(client, block_number)


def price_all(pools: list[AnyPool], base_tokens: list[str]) -> list[float | None]:
    """Price each pool's base token, isolating per-pool failures.

    A pool whose price cannot be computed, or that does not hold its base
    token, yields None instead of aborting the batch.
    """
    prices: list[float | None] = []
    for pool, base_token in zip(pools, base_tokens, strict=True):
        try:
            prices.append(calculate_price(pool, base_token))
        except (AmmArithmeticError, ValueError) as err:
            logger.warning(
                "pool_price_failed",
                pool=address(pool)[-8:],
                base_token=base_token[-8:],
                error=str(err),
            )
            prices.append(None)
    return prices


__all__ = [
    "address",
    "tokens",
    "get_token_out",
    "calculate_price",
    "simulate_swap",
    "simulate_swap_mut",
    "sync",
    "populate_data",
    "price_all",
]
