"""Test helpers module for shared test utilities.

This module consolidates common test utilities to reduce duplication:
- constants: Asset and contract ids
- chain: Fixture-backed fake ChainClient
- factories: Pool factory functions
"""

from tests.helpers.chain import FakeChainClient
from tests.helpers.constants import (
    CP_FACTORY,
    CP_POOL_1,
    CP_POOL_2,
    CP_POOL_3,
    ETH,
    FUEL,
    HYBRID_AMM,
    USDC,
    USDT,
    make_id,
)
from tests.helpers.factories import make_cp_pool, make_hybrid_pool

__all__ = [
    # Constants
    "ETH",
    "USDC",
    "USDT",
    "FUEL",
    "HYBRID_AMM",
    "CP_FACTORY",
    "CP_POOL_1",
    "CP_POOL_2",
    "CP_POOL_3",
    "make_id",
    # Chain
    "FakeChainClient",
    # Factories
    "make_cp_pool",
    "make_hybrid_pool",
]
