"""Factory discovery.

A factory is the registry contract that knows every pool of one AMM
design. Discovery enumerates its pools in pages of `step`, builds zeroed
pool models and then fills them in with batched getter calls, one call per
page instead of one call per pool.

Supported factories:
- HybridFactory: the hybrid AMM contract itself. Pools are listed by index
  (`total_pools`, `get_pools`) and populated with `get_pools_metadata`.
- ConstantProductFactory: pools are found through `PoolCreated` events and
  populated with the factory's `get_pools_info`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, TypeAlias, runtime_checkable

import structlog
from pydantic import ValidationError

from ammsim.amm.constant_product import ConstantProductPool
from ammsim.amm.hybrid import FEES, HybridFees, HybridPool
from ammsim.chain.client import LogEntry, call_contract, fetch_logs
from ammsim.chain.responses import (
    AddressedPoolInfo,
    HybridFeesResponse,
    HybridPoolId,
    HybridPoolMetadata,
    PoolCreatedEvent,
)
from ammsim.config import DEFAULT_DISCOVERY_CONFIG, DiscoveryConfig
from ammsim.discovery.paging import chunks, gather_pages, page_windows
from ammsim.errors import ChainError
from ammsim.models.types import normalize_id
from ammsim.pools.types import AnyPool

if TYPE_CHECKING:
    from ammsim.chain.client import ChainClient

logger = structlog.get_logger()

# Hybrid AMM contract methods
TOTAL_POOLS = "total_pools"
GET_POOLS = "get_pools"
GET_POOLS_METADATA = "get_pools_metadata"

# Constant-product factory methods and events
GET_POOLS_INFO = "get_pools_info"
POOL_CREATED = "PoolCreated"


@runtime_checkable
class AutomatedMarketMakerFactory(Protocol):
    """Protocol every factory variant satisfies."""

    address: str
    creation_block: int

    async def get_all_amms(
        self,
        to_block: int | None,
        client: ChainClient,
        step: int | None = None,
    ) -> list[AnyPool]:
        """Discover and populate every pool created up to to_block."""
        ...

    async def populate_amm_data(
        self,
        amms: list[AnyPool],
        block_number: int | None,
        client: ChainClient,
        step: int | None = None,
    ) -> None:
        """Fill in the on-chain state of the given pools with batched calls."""
        ...


def _expect_length(contract_id: str, operation: str, items: list, expected: int) -> None:
    if len(items) != expected:
        raise ChainError(contract_id, operation, f"expected {expected} entries, got {len(items)}")


@dataclass
class HybridFactory:
    """Discovery for a hybrid AMM contract.

    The contract is its own registry: every pool it hosts has an index in
    [0, total_pools).
    """

    address: str
    creation_block: int = 0
    config: DiscoveryConfig = DEFAULT_DISCOVERY_CONFIG

    async def get_pool_count(self, client: ChainClient) -> int:
        return await call_contract(client, self.address, TOTAL_POOLS, (), int)

    async def get_pool_ids(self, client: ChainClient, step: int | None = None) -> list[HybridPoolId]:
        """List every pool id, in index order."""
        total = await self.get_pool_count(client)
        windows = page_windows(total, step or self.config.step)

        async def fetch(window: tuple[int, int]) -> list[HybridPoolId]:
            start, end = window
            pool_ids = await call_contract(client, self.address, GET_POOLS, [start, end], list[HybridPoolId])
            _expect_length(self.address, GET_POOLS, pool_ids, end - start)
            return pool_ids

        return await gather_pages(windows, fetch, self.config.max_concurrent_pages)

    async def get_all_amms(
        self,
        to_block: int | None,
        client: ChainClient,
        step: int | None = None,
    ) -> list[AnyPool]:
        """Discover and populate every pool of the contract.

        The pool list is read at head; to_block only bounds population.

        Raises:
            ChainError: If any chain read fails
        """
        pool_ids = await self.get_pool_ids(client, step)
        amms: list[AnyPool] = [
            HybridPool(
                address=self.address,
                token_0=pool_id.token_0,
                token_1=pool_id.token_1,
                is_stable=pool_id.is_stable,
            )
            for pool_id in pool_ids
        ]
        logger.info("hybrid_pools_discovered", factory=self.address[-8:], pools=len(amms))

        await self.populate_amm_data(amms, to_block, client, step)
        return amms

    async def populate_amm_data(
        self,
        amms: list[AnyPool],
        block_number: int | None,
        client: ChainClient,
        step: int | None = None,
    ) -> None:
        """Overwrite decimals, reserves and fees of every pool.

        One `fees` call, then one `get_pools_metadata` call per page of pools.

        Raises:
            TypeError: If a pool is not a HybridPool
            ChainError: If any chain read fails
        """
        pools: list[HybridPool] = []
        for amm in amms:
            if not isinstance(amm, HybridPool):
                raise TypeError(f"HybridFactory cannot populate {type(amm).__name__}")
            pools.append(amm)

        fees = HybridFees.from_response(
            await call_contract(client, self.address, FEES, (), HybridFeesResponse)
        )

        async def fetch(page: list[HybridPool]) -> list[HybridPoolMetadata]:
            metadata = await call_contract(
                client,
                self.address,
                GET_POOLS_METADATA,
                [[pool.pool_id for pool in page]],
                list[HybridPoolMetadata],
            )
            _expect_length(self.address, GET_POOLS_METADATA, metadata, len(page))
            return metadata

        metadata = await gather_pages(
            chunks(pools, step or self.config.step), fetch, self.config.max_concurrent_pages
        )
        for pool, pool_metadata in zip(pools, metadata, strict=True):
            pool.apply_metadata(pool_metadata, fees)

        logger.debug("hybrid_pools_populated", factory=self.address[-8:], pools=len(pools))


@dataclass
class ConstantProductFactory:
    """Discovery for a constant-product factory contract.

    Pools are found through the factory's pool-creation events, scanned in
    windows of `step` blocks starting at creation_block.
    """

    address: str
    creation_block: int = 0
    config: DiscoveryConfig = DEFAULT_DISCOVERY_CONFIG

    def block_windows(self, to_block: int, step: int) -> list[tuple[int, int]]:
        """Inclusive block ranges covering [creation_block, to_block]."""
        if to_block < self.creation_block:
            return []
        total = to_block - self.creation_block + 1
        return [
            (self.creation_block + start, self.creation_block + end - 1)
            for start, end in page_windows(total, step)
        ]

    async def get_pool_created_logs(
        self,
        to_block: int | None,
        client: ChainClient,
        step: int | None = None,
    ) -> list[LogEntry]:
        """Pool-creation logs up to to_block, in (block, log index) order."""
        if to_block is None:
            logs = await fetch_logs(client, self.address, POOL_CREATED, self.creation_block, None)
            return sorted(logs, key=lambda log: (log.block_number, log.log_index))

        async def fetch(window: tuple[int, int]) -> list[LogEntry]:
            from_block, window_to_block = window
            logs = await fetch_logs(client, self.address, POOL_CREATED, from_block, window_to_block)
            return sorted(logs, key=lambda log: (log.block_number, log.log_index))

        return await gather_pages(
            self.block_windows(to_block, step or self.config.step),
            fetch,
            self.config.max_concurrent_pages,
        )

    def pool_from_log(self, log: LogEntry) -> ConstantProductPool:
        """Build a pool from a creation log; only tokens and address are set."""
        try:
            event = PoolCreatedEvent.model_validate(log.data)
        except ValidationError as err:
            raise ChainError(self.address, POOL_CREATED, f"undecodable log: {err}") from err
        return ConstantProductPool(address=event.pool, token_0=event.token_0, token_1=event.token_1)

    async def get_all_amms(
        self,
        to_block: int | None,
        client: ChainClient,
        step: int | None = None,
    ) -> list[AnyPool]:
        """Discover every pool created up to to_block, then populate it.

        Raises:
            ChainError: If any chain read fails or a log cannot be decoded
        """
        logs = await self.get_pool_created_logs(to_block, client, step)

        amms: list[AnyPool] = []
        seen: set[str] = set()
        for log in logs:
            pool = self.pool_from_log(log)
            if pool.address in seen:
                continue
            seen.add(pool.address)
            amms.append(pool)
        logger.info("constant_product_pools_discovered", factory=self.address[-8:], pools=len(amms))

        await self.populate_amm_data(amms, to_block, client, step)
        return amms

    async def populate_amm_data(
        self,
        amms: list[AnyPool],
        block_number: int | None,
        client: ChainClient,
        step: int | None = None,
    ) -> None:
        """Overwrite every pool's state with one `get_pools_info` call per page.

        Raises:
            TypeError: If a pool is not a ConstantProductPool
            ChainError: If any chain read fails or a pool is missing from a page
        """
        pools: list[ConstantProductPool] = []
        for amm in amms:
            if not isinstance(amm, ConstantProductPool):
                raise TypeError(f"ConstantProductFactory cannot populate {type(amm).__name__}")
            pools.append(amm)

        async def fetch(page: list[ConstantProductPool]) -> list[AddressedPoolInfo]:
            infos = await call_contract(
                client,
                self.address,
                GET_POOLS_INFO,
                [[pool.address for pool in page]],
                list[AddressedPoolInfo],
            )
            _expect_length(self.address, GET_POOLS_INFO, infos, len(page))
            for pool, info in zip(page, infos, strict=True):
                if normalize_id(pool.address) != info.address:
                    raise ChainError(
                        self.address, GET_POOLS_INFO, f"expected info for {pool.address}, got {info.address}"
                    )
            return infos

        infos = await gather_pages(
            chunks(pools, step or self.config.step), fetch, self.config.max_concurrent_pages
        )
        for pool, info in zip(pools, infos, strict=True):
            pool.apply_pool_info(info)

        logger.debug("constant_product_pools_populated", factory=self.address[-8:], pools=len(pools))


AnyFactory: TypeAlias = ConstantProductFactory | HybridFactory

__all__ = [
    "AnyFactory",
    "AutomatedMarketMakerFactory",
    "ConstantProductFactory",
    "HybridFactory",
    "TOTAL_POOLS",
    "GET_POOLS",
    "GET_POOLS_METADATA",
    "GET_POOLS_INFO",
    "POOL_CREATED",
]
