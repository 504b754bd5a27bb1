"""Pool abstraction: the AnyPool union, dispatch and filters."""

from ammsim.pools.dispatch import (
    address,
    calculate_price,
    get_token_out,
    populate_data,
    price_all,
    simulate_swap,
    simulate_swap_mut,
    sync,
    tokens,
)
from ammsim.pools.filters import (
    filter_amms_with_empty_reserves,
    filter_blacklisted_amms,
    filter_blacklisted_tokens,
    filter_empty_amms,
)
from ammsim.pools.types import AnyPool, ConstantProductPool, HybridPool

__all__ = [
    # Types
    "AnyPool",
    "ConstantProductPool",
    "HybridPool",
    # Dispatch
    "address",
    "tokens",
    "get_token_out",
    "calculate_price",
    "simulate_swap",
    "simulate_swap_mut",
    "sync",
    "populate_data",
    "price_all",
    # Filters
    "filter_blacklisted_tokens",
    "filter_blacklisted_amms",
    "filter_empty_amms",
    "filter_amms_with_empty_reserves",
]
