"""Tests for pool filters."""

from ammsim.amm.constant_product import ConstantProductPool
from ammsim.amm.hybrid import HybridPool
from ammsim.pools.filters import (
    filter_amms_with_empty_reserves,
    filter_blacklisted_amms,
    filter_blacklisted_tokens,
    filter_empty_amms,
)
from tests.helpers import (
    CP_POOL_1,
    CP_POOL_2,
    CP_POOL_3,
    ETH,
    FUEL,
    HYBRID_AMM,
    USDC,
    USDT,
    make_cp_pool,
    make_hybrid_pool,
)


def _pools():
    return [
        make_cp_pool(address=CP_POOL_1, token_0=ETH, token_1=USDC),
        make_cp_pool(address=CP_POOL_2, token_0=FUEL, token_1=USDT),
        make_hybrid_pool(token_0=USDC, token_1=USDT),
        make_cp_pool(address=CP_POOL_3, token_0=ETH, token_1=FUEL),
    ]


class TestBlacklistFilters:
    """Tests for token and address blacklists."""

    def test_filter_blacklisted_tokens(self):
        """Pools holding a blacklisted token are dropped, order kept."""
        result = filter_blacklisted_tokens(_pools(), [USDC])
        assert [pool.address for pool in result] == [CP_POOL_2, CP_POOL_3]

    def test_filter_blacklisted_tokens_case_insensitive(self):
        """Blacklist entries match regardless of hex case."""
        result = filter_blacklisted_tokens(_pools(), [FUEL.upper().replace("0X", "0x")])
        assert [pool.address for pool in result] == [CP_POOL_1, HYBRID_AMM]

    def test_filter_blacklisted_tokens_idempotent(self):
        """Filtering twice equals filtering once."""
        once = filter_blacklisted_tokens(_pools(), [ETH])
        twice = filter_blacklisted_tokens(once, [ETH])
        assert twice == once

    def test_filter_blacklisted_amms(self):
        """Pools at blacklisted addresses are dropped."""
        result = filter_blacklisted_amms(_pools(), [CP_POOL_2, HYBRID_AMM])
        assert [pool.address for pool in result] == [CP_POOL_1, CP_POOL_3]

    def test_filter_blacklisted_amms_idempotent(self):
        """Filtering twice equals filtering once."""
        once = filter_blacklisted_amms(_pools(), [CP_POOL_1])
        assert filter_blacklisted_amms(once, [CP_POOL_1]) == once

    def test_empty_blacklist_keeps_everything(self):
        """An empty blacklist is a no-op."""
        pools = _pools()
        assert filter_blacklisted_tokens(pools, []) == pools
        assert filter_blacklisted_amms(pools, []) == pools


class TestEmptyFilters:
    """Tests for dropping unpopulated pools."""

    def test_filter_empty_amms(self):
        """Pools never populated (zero tokens) are dropped."""
        pools = [ConstantProductPool(address=CP_POOL_1), *_pools(), HybridPool(address=HYBRID_AMM)]
        result = filter_empty_amms(pools)
        assert result == _pools()
        assert filter_empty_amms(result) == result

    def test_filter_amms_with_empty_reserves(self):
        """Pools with both reserves zero are dropped; one-sided pools are kept."""
        empty = make_cp_pool(address=CP_POOL_2, reserve_0=0, reserve_1=0)
        one_sided = make_cp_pool(address=CP_POOL_3, reserve_0=0, reserve_1=10)
        pools = [make_cp_pool(), empty, one_sided]

        result = filter_amms_with_empty_reserves(pools)

        assert [pool.address for pool in result] == [CP_POOL_1, CP_POOL_3]
        assert filter_amms_with_empty_reserves(result) == result
