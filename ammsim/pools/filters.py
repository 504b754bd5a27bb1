"""Pool filters.

Simple set-membership passes over a pool list. Every filter preserves the
input order and is idempotent.
"""

from collections.abc import Iterable

import structlog

from ammsim.models.types import ZERO_ID, normalize_id
from ammsim.pools.types import AnyPool

logger = structlog.get_logger()


def filter_blacklisted_tokens(pools: list[AnyPool], blacklisted_tokens: Iterable[str]) -> list[AnyPool]:
    """Drop pools that contain a blacklisted token."""
    blacklist = {normalize_id(token) for token in blacklisted_tokens}
    filtered = [
        pool
        for pool in pools
        if not any(normalize_id(token) in blacklist for token in pool.tokens())
    ]
    logger.debug("filter_blacklisted_tokens", kept=len(filtered), dropped=len(pools) - len(filtered))
    return filtered


def filter_blacklisted_amms(pools: list[AnyPool], blacklisted_addresses: Iterable[str]) -> list[AnyPool]:
    """Drop pools whose address is blacklisted."""
    blacklist = {normalize_id(address) for address in blacklisted_addresses}
    filtered = [pool for pool in pools if normalize_id(pool.address) not in blacklist]
    logger.debug("filter_blacklisted_amms", kept=len(filtered), dropped=len(pools) - len(filtered))
    return filtered


def filter_empty_amms(pools: list[AnyPool]) -> list[AnyPool]:
    """Drop pools whose two tokens are both the zero id (never populated)."""
    return [
        pool
        for pool in pools
        if not (normalize_id(pool.token_0) == ZERO_ID and normalize_id(pool.token_1) == ZERO_ID)
    ]


def filter_amms_with_empty_reserves(pools: list[AnyPool]) -> list[AnyPool]:
    """Drop uninitialized pools (both reserves zero)."""
    return [pool for pool in pools if pool.reserve_0 != 0 or pool.reserve_1 != 0]


__all__ = [
    "filter_blacklisted_tokens",
    "filter_blacklisted_amms",
    "filter_empty_amms",
    "filter_amms_with_empty_reserves",
]
