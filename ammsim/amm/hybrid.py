"""Hybrid (volatile/stable) pool model.

A hybrid AMM contract hosts many pools, each keyed by
(token_0, token_1, is_stable). Volatile pools use the constant-product
formula; stable pools use the stableswap curve from stable_math.

Fees are contract-wide and come as four parts: LP and protocol fees for
each of the two curves. A swap pays the sum for its curve.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import structlog

from ammsim.amm.base import swap_arithmetic, swapped_reserves
from ammsim.amm.constant_product import get_amount_out, price_64_x_64
from ammsim.amm.stable_math import stable_get_amount_out, stable_price_wad
from ammsim.chain.client import call_contract
from ammsim.chain.responses import HybridFeesResponse, HybridPoolMetadata
from ammsim.math.fixed_point import to_float, wide_decimal_to_float
from ammsim.models.types import ZERO_ID, normalize_id
from ammsim.safe_int import S

if TYPE_CHECKING:
    from ammsim.chain.client import ChainClient

logger = structlog.get_logger()

# Read-only methods exposed by a hybrid AMM contract
POOL_METADATA = "pool_metadata"
FEES = "fees"


@dataclass(frozen=True)
class HybridFees:
    """Fee parameters of a hybrid AMM (each 300 = 0.30%)."""

    lp_fee_volatile: int = 0
    lp_fee_stable: int = 0
    protocol_fee_volatile: int = 0
    protocol_fee_stable: int = 0

    @property
    def volatile(self) -> int:
        """Total fee paid by a volatile swap."""
        return self.lp_fee_volatile + self.protocol_fee_volatile

    @property
    def stable(self) -> int:
        """Total fee paid by a stable swap."""
        return self.lp_fee_stable + self.protocol_fee_stable

    def as_tuple(self) -> tuple[int, int, int, int]:
        return (
            self.lp_fee_volatile,
            self.lp_fee_stable,
            self.protocol_fee_volatile,
            self.protocol_fee_stable,
        )

    @classmethod
    def from_response(cls, response: HybridFeesResponse) -> HybridFees:
        return cls(
            lp_fee_volatile=response.lp_fee_volatile,
            lp_fee_stable=response.lp_fee_stable,
            protocol_fee_volatile=response.protocol_fee_volatile,
            protocol_fee_stable=response.protocol_fee_stable,
        )


@dataclass
class HybridPool:
    """A pool inside a hybrid AMM contract.

    `address` is the AMM contract the pool lives in; `pool_id` selects the
    pool within it.
    """

    address: str
    token_0: str = ZERO_ID
    token_0_decimals: int = 0
    token_1: str = ZERO_ID
    token_1_decimals: int = 0
    reserve_0: int = 0
    reserve_1: int = 0
    fee: HybridFees = field(default_factory=HybridFees)
    is_stable: bool = False

    @property
    def pool_id(self) -> tuple[str, str, bool]:
        """Composite key used to query the AMM contract."""
        return (self.token_0, self.token_1, self.is_stable)

    def tokens(self) -> list[str]:
        return [self.token_0, self.token_1]

    def _is_token_0(self, token: str) -> bool:
        token_norm = normalize_id(token)
        if token_norm == normalize_id(self.token_0):
            return True
        if token_norm == normalize_id(self.token_1):
            return False
        raise ValueError(f"Token {token} not in pool {self.pool_id}")

    def get_reserves(self, token_in: str) -> tuple[int, int]:
        """Get reserves ordered as (reserve_in, reserve_out)."""
        if self._is_token_0(token_in):
            return self.reserve_0, self.reserve_1
        return self.reserve_1, self.reserve_0

    def get_decimals(self, token_in: str) -> tuple[int, int]:
        """Get decimals ordered as (decimals_in, decimals_out)."""
        if self._is_token_0(token_in):
            return self.token_0_decimals, self.token_1_decimals
        return self.token_1_decimals, self.token_0_decimals

    def get_token_out(self, token_in: str) -> str:
        """Get the output token for a given input token."""
        return self.token_1 if self._is_token_0(token_in) else self.token_0

    def calculate_price(self, base_token: str) -> float:
        """Price of base_token in units of the other token.

        Volatile pools use the reserve ratio (64.64 fixed point); stable
        pools use the marginal price of the stable curve (18 decimals).
        """
        if not self.is_stable:
            return to_float(
                price_64_x_64(
                    self.reserve_0,
                    self.reserve_1,
                    self.token_0_decimals,
                    self.token_1_decimals,
                    self._is_token_0(base_token),
                )
            )

        reserve_base, reserve_quote = self.get_reserves(base_token)
        decimals_base, decimals_quote = self.get_decimals(base_token)
        return wide_decimal_to_float(
            stable_price_wad(reserve_base, reserve_quote, decimals_base, decimals_quote)
        )

    def get_amount_out(self, amount_in: int, token_in: str) -> int:
        """Output amount for amount_in of token_in on this pool's curve."""
        reserve_in, reserve_out = self.get_reserves(token_in)
        if not self.is_stable:
            return get_amount_out(amount_in, reserve_in, reserve_out, self.fee.volatile)

        decimals_in, decimals_out = self.get_decimals(token_in)
        return stable_get_amount_out(
            amount_in,
            reserve_in,
            reserve_out,
            decimals_in,
            decimals_out,
            self.fee.stable,
        )

    def simulate_swap(self, base_token: str, amount_in: int) -> int:
        """Simulate a swap (exact input) without modifying reserves."""
        with swap_arithmetic(self.address):
            return self.get_amount_out(S(amount_in).value, base_token)

    def simulate_swap_mut(self, base_token: str, amount_in: int) -> int:
        """Simulate a swap and apply it to the local reserves."""
        amount_out = self.simulate_swap(base_token, amount_in)
        reserve_in, reserve_out = self.get_reserves(base_token)

        with swap_arithmetic(self.address):
            new_in, new_out = swapped_reserves(reserve_in, reserve_out, amount_in, amount_out)

        if self._is_token_0(base_token):
            self.reserve_0, self.reserve_1 = new_in, new_out
        else:
            self.reserve_1, self.reserve_0 = new_in, new_out
        return amount_out

    async def get_metadata(self, client: ChainClient) -> HybridPoolMetadata:
        """Fetch this pool's metadata from the AMM contract."""
        return await call_contract(client, self.address, POOL_METADATA, [self.pool_id], HybridPoolMetadata)

    async def sync(self, client: ChainClient) -> None:
        """Refresh reserves from the chain."""
        metadata = await self.get_metadata(client)
        self.reserve_0, self.reserve_1 = metadata.reserve_0, metadata.reserve_1
        logger.debug(
            "pool_synced",
            pool=self.address[-8:],
            is_stable=self.is_stable,
            reserve_0=self.reserve_0,
            reserve_1=self.reserve_1,
        )

    async def populate_data(self, client: ChainClient, block_number: int | None = None) -> None:
        """Replace reserves, decimals and fees from the AMM contract.

        block_number is accepted for interface parity; reads are at head.
        """
        metadata, fees = await asyncio.gather(
            self.get_metadata(client),
            call_contract(client, self.address, FEES, (), HybridFeesResponse),
        )
        self.apply_metadata(metadata, HybridFees.from_response(fees))

    def apply_metadata(self, metadata: HybridPoolMetadata, fees: HybridFees) -> None:
        """Overwrite every on-chain field from validated responses."""
        self.token_0_decimals = metadata.decimals_0
        self.token_1_decimals = metadata.decimals_1
        self.reserve_0 = metadata.reserve_0
        self.reserve_1 = metadata.reserve_1
        self.fee = fees


__all__ = ["HybridFees", "HybridPool", "POOL_METADATA", "FEES"]
