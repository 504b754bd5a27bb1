"""Constant-product pool model.

Constant product formula: x * y = k, with the fee taken from the input.

    fee_multiplier = (10000 - fee / 10) / 10        # fee=300 -> 997
    amount_out = (in * fee_multiplier * r_out) / (r_in * 1000 + in * fee_multiplier)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import structlog

from ammsim.amm.base import swap_arithmetic, swapped_reserves
from ammsim.chain.client import call_contract
from ammsim.chain.responses import ConstantProductPoolInfo, Reserves
from ammsim.constants import U128_MAX, UINT256_MAX
from ammsim.errors import AmmArithmeticError
from ammsim.math.fixed_point import precise_div, to_float
from ammsim.models.types import ZERO_ID, normalize_id
from ammsim.safe_int import S

if TYPE_CHECKING:
    from ammsim.chain.client import ChainClient

logger = structlog.get_logger()

# Read-only methods exposed by a constant-product pool contract
GET_POOL_INFO = "get_pool_info"
GET_RESERVES = "get_reserves"


def fee_multiplier(fee: int) -> int:
    """Per-mille multiplier left after the fee (300 -> 997)."""
    return (10000 - fee // 10) // 10


def get_amount_out(amount_in: int, reserve_in: int, reserve_out: int, fee: int) -> int:
    """Calculate output amount using the constant product formula.

    Args:
        amount_in: Input token amount
        reserve_in: Reserve of input token in pool
        reserve_out: Reserve of output token in pool
        fee: Pool fee (300 = 0.30%)

    Returns:
        Output token amount, 0 if any of the inputs is zero

    Raises:
        Uint256Overflow: If an intermediate product exceeds uint256
    """
    if amount_in == 0 or reserve_in == 0 or reserve_out == 0:
        return 0

    amount_in_with_fee = S(amount_in) * S(fee_multiplier(fee))
    numerator = amount_in_with_fee * S(reserve_out)
    denominator = S(reserve_in) * S(1000) + amount_in_with_fee

    return (numerator // denominator).value


def price_64_x_64(
    reserve_0: int,
    reserve_1: int,
    decimals_0: int,
    decimals_1: int,
    base_is_token_0: bool,
) -> int:
    """Reserve-ratio price of the base token as a 64.64 fixed-point number.

    Reserves are first brought to a common decimal count by scaling the
    side with fewer decimals. A zero reserve on the divisor side yields the
    saturated value 2^128 - 1.

    Raises:
        AmmArithmeticError: If a normalized reserve no longer fits in uint256
    """
    decimal_shift = decimals_0 - decimals_1
    if decimal_shift < 0:
        r_0 = reserve_0 * 10 ** (-decimal_shift)
        r_1 = reserve_1
    else:
        r_0 = reserve_0
        r_1 = reserve_1 * 10**decimal_shift

    if r_0 > UINT256_MAX or r_1 > UINT256_MAX:
        raise AmmArithmeticError(f"Normalized reserves exceed uint256 (decimal shift {decimal_shift})")

    if base_is_token_0:
        if r_0 == 0:
            return U128_MAX
        return precise_div(r_1, r_0)
    if r_1 == 0:
        return U128_MAX
    return precise_div(r_0, r_1)


@dataclass
class ConstantProductPool:
    """A constant-product (x * y = k) pool with a single fee rate.

    A pool built from just an address is zeroed; populate_data fills it in.
    """

    address: str
    token_0: str = ZERO_ID
    token_0_decimals: int = 0
    token_1: str = ZERO_ID
    token_1_decimals: int = 0
    reserve_0: int = 0
    reserve_1: int = 0
    # Fee where 300 = 0.30%
    fee: int = 0

    def tokens(self) -> list[str]:
        return [self.token_0, self.token_1]

    def _is_token_0(self, token: str) -> bool:
        token_norm = normalize_id(token)
        if token_norm == normalize_id(self.token_0):
            return True
        if token_norm == normalize_id(self.token_1):
            return False
        raise ValueError(f"Token {token} not in pool {self.address}")

    def get_reserves(self, token_in: str) -> tuple[int, int]:
        """Get reserves ordered as (reserve_in, reserve_out)."""
        if self._is_token_0(token_in):
            return self.reserve_0, self.reserve_1
        return self.reserve_1, self.reserve_0

    def get_token_out(self, token_in: str) -> str:
        """Get the output token for a given input token."""
        return self.token_1 if self._is_token_0(token_in) else self.token_0

    def calculate_price_64_x_64(self, base_token: str) -> int:
        """Price of base_token in the other token, as 64.64 fixed point."""
        return price_64_x_64(
            self.reserve_0,
            self.reserve_1,
            self.token_0_decimals,
            self.token_1_decimals,
            self._is_token_0(base_token),
        )

    def calculate_price(self, base_token: str) -> float:
        """Price of base_token in units of the other token."""
        return to_float(self.calculate_price_64_x_64(base_token))

    def simulate_swap(self, base_token: str, amount_in: int) -> int:
        """Simulate a swap (exact input) without modifying reserves."""
        reserve_in, reserve_out = self.get_reserves(base_token)
        with swap_arithmetic(self.address):
            return get_amount_out(S(amount_in).value, reserve_in, reserve_out, self.fee)

    def simulate_swap_mut(self, base_token: str, amount_in: int) -> int:
        """Simulate a swap and apply it to the local reserves.

        Reserves are only written once both new values are known.
        """
        amount_out = self.simulate_swap(base_token, amount_in)
        is_token_0 = self._is_token_0(base_token)
        reserve_in, reserve_out = self.get_reserves(base_token)

        with swap_arithmetic(self.address):
            new_in, new_out = swapped_reserves(reserve_in, reserve_out, amount_in, amount_out)

        if is_token_0:
            self.reserve_0, self.reserve_1 = new_in, new_out
        else:
            self.reserve_1, self.reserve_0 = new_in, new_out
        return amount_out

    async def get_reserves_from_chain(self, client: ChainClient) -> tuple[int, int]:
        """Fetch the current reserves from the pool contract."""
        reserves = await call_contract(client, self.address, GET_RESERVES, (), Reserves)
        return reserves.reserve_0, reserves.reserve_1

    async def sync(self, client: ChainClient) -> None:
        """Refresh reserves from the chain."""
        self.reserve_0, self.reserve_1 = await self.get_reserves_from_chain(client)
        logger.debug(
            "pool_synced",
            pool=self.address[-8:],
            reserve_0=self.reserve_0,
            reserve_1=self.reserve_1,
        )

    async def populate_data(self, client: ChainClient, block_number: int | None = None) -> None:
        """Replace the pool's state with the pool contract's current state.

        block_number is accepted for interface parity; reads are at head.
        """
        info = await call_contract(client, self.address, GET_POOL_INFO, (), ConstantProductPoolInfo)
        self.apply_pool_info(info)

    def apply_pool_info(self, info: ConstantProductPoolInfo) -> None:
        """Overwrite every on-chain field from a validated response."""
        self.token_0 = info.token_0
        self.token_0_decimals = info.token_0_decimals
        self.token_1 = info.token_1
        self.token_1_decimals = info.token_1_decimals
        self.reserve_0 = info.reserve_0
        self.reserve_1 = info.reserve_1
        self.fee = info.fee


__all__ = [
    "ConstantProductPool",
    "fee_multiplier",
    "get_amount_out",
    "price_64_x_64",
    "GET_POOL_INFO",
    "GET_RESERVES",
]
