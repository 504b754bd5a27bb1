"""Pytest configuration and fixtures."""

import pytest

from ammsim.amm.constant_product import ConstantProductPool
from ammsim.amm.hybrid import HybridFees, HybridPool
from tests.helpers import ETH, USDC, FakeChainClient, make_cp_pool, make_hybrid_pool


@pytest.fixture
def client() -> FakeChainClient:
    """Return an empty fake chain client."""
    return FakeChainClient()


@pytest.fixture
def cp_pool() -> ConstantProductPool:
    """ETH/USDC constant-product pool with a 0.30% fee."""
    return make_cp_pool()


@pytest.fixture
def stable_pool() -> HybridPool:
    """Balanced USDC/USDT stable pool with a 0.05% fee."""
    return make_hybrid_pool(
        is_stable=True,
        fee=HybridFees(lp_fee_stable=40, protocol_fee_stable=10),
    )


@pytest.fixture
def volatile_pool() -> HybridPool:
    """ETH/USDC volatile hybrid pool with a 0.30% fee."""
    return make_hybrid_pool(
        is_stable=False,
        token_0=ETH,
        token_1=USDC,
        reserve_0=1_000 * 10**9,
        reserve_1=2_500_000 * 10**6,
        token_0_decimals=9,
        token_1_decimals=6,
        fee=HybridFees(lp_fee_volatile=250, protocol_fee_volatile=50),
    )
