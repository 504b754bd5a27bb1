"""Persisted pool records.

A pool snapshot is stored as a plain dict tagged with its `kind`, so a list
of mixed pool variants can be written to JSON and read back into the
matching pool models.
"""

from typing import Annotated, Any, Literal

from pydantic import BaseModel, Discriminator, Field, Tag, TypeAdapter

from ammsim.amm.constant_product import ConstantProductPool
from ammsim.amm.hybrid import HybridFees, HybridPool
from ammsim.chain.responses import HybridFeesResponse
from ammsim.constants import FEE_DENOMINATOR
from ammsim.models.types import U64, AssetId, ContractId, Decimals


class ConstantProductRecord(BaseModel):
    """Stored state of a constant-product pool."""

    kind: Literal["constant_product"] = "constant_product"
    address: ContractId
    token_0: AssetId
    token_0_decimals: Decimals
    token_1: AssetId
    token_1_decimals: Decimals
    reserve_0: U64
    reserve_1: U64
    fee: int = Field(ge=0, lt=FEE_DENOMINATOR, description="Fee where 300 = 0.30%.")

    @classmethod
    def from_pool(cls, pool: ConstantProductPool) -> "ConstantProductRecord":
        return cls(
            address=pool.address,
            token_0=pool.token_0,
            token_0_decimals=pool.token_0_decimals,
            token_1=pool.token_1,
            token_1_decimals=pool.token_1_decimals,
            reserve_0=pool.reserve_0,
            reserve_1=pool.reserve_1,
            fee=pool.fee,
        )

    def to_pool(self) -> ConstantProductPool:
        return ConstantProductPool(
            address=self.address,
            token_0=self.token_0,
            token_0_decimals=self.token_0_decimals,
            token_1=self.token_1,
            token_1_decimals=self.token_1_decimals,
            reserve_0=self.reserve_0,
            reserve_1=self.reserve_1,
            fee=self.fee,
        )


class HybridRecord(BaseModel):
    """Stored state of a pool inside a hybrid AMM contract."""

    kind: Literal["hybrid"] = "hybrid"
    address: ContractId = Field(description="Hybrid AMM contract hosting the pool.")
    token_0: AssetId
    token_0_decimals: Decimals
    token_1: AssetId
    token_1_decimals: Decimals
    reserve_0: U64
    reserve_1: U64
    fee: HybridFeesResponse
    is_stable: bool

    @classmethod
    def from_pool(cls, pool: HybridPool) -> "HybridRecord":
        return cls(
            address=pool.address,
            token_0=pool.token_0,
            token_0_decimals=pool.token_0_decimals,
            token_1=pool.token_1,
            token_1_decimals=pool.token_1_decimals,
            reserve_0=pool.reserve_0,
            reserve_1=pool.reserve_1,
            fee=HybridFeesResponse(
                lp_fee_volatile=pool.fee.lp_fee_volatile,
                lp_fee_stable=pool.fee.lp_fee_stable,
                protocol_fee_volatile=pool.fee.protocol_fee_volatile,
                protocol_fee_stable=pool.fee.protocol_fee_stable,
            ),
            is_stable=pool.is_stable,
        )

    def to_pool(self) -> HybridPool:
        return HybridPool(
            address=self.address,
            token_0=self.token_0,
            token_0_decimals=self.token_0_decimals,
            token_1=self.token_1,
            token_1_decimals=self.token_1_decimals,
            reserve_0=self.reserve_0,
            reserve_1=self.reserve_1,
            fee=HybridFees.from_response(self.fee),
            is_stable=self.is_stable,
        )


def _get_record_kind(v: dict[str, Any] | ConstantProductRecord | HybridRecord) -> str | None:
    """Discriminator function for PoolRecord union type."""
    if isinstance(v, dict):
        kind = v.get("kind")
        return str(kind) if kind is not None else None
    return v.kind


# A record without a recognised `kind` fails validation
PoolRecord = Annotated[
    Annotated[ConstantProductRecord, Tag("constant_product")] | Annotated[HybridRecord, Tag("hybrid")],
    Discriminator(_get_record_kind),
]

_records_adapter: TypeAdapter[list[PoolRecord]] = TypeAdapter(list[PoolRecord])


def to_record(pool: ConstantProductPool | HybridPool) -> ConstantProductRecord | HybridRecord:
    """Build the record for a pool.

    Raises:
        TypeError: If pool is not a known pool variant
        ValidationError: If the pool holds out-of-range values
    """
    match pool:
        case ConstantProductPool():
            return ConstantProductRecord.from_pool(pool)
        case HybridPool():
            return HybridRecord.from_pool(pool)
        case _:
            raise TypeError(f"Unknown pool type: {type(pool)}")


def dump_pools(pools: list[ConstantProductPool | HybridPool]) -> list[dict[str, Any]]:
    """Serialize pools to JSON-compatible dicts tagged with their kind."""
    return [to_record(pool).model_dump(mode="json") for pool in pools]


def load_pools(data: list[dict[str, Any]]) -> list[ConstantProductPool | HybridPool]:
    """Rebuild pools from dicts produced by dump_pools.

    Raises:
        ValidationError: If a record is missing a field, has an unknown kind
            or holds an out-of-range value
    """
    return [record.to_pool() for record in _records_adapter.validate_python(data)]


__all__ = [
    "ConstantProductRecord",
    "HybridRecord",
    "PoolRecord",
    "to_record",
    "dump_pools",
    "load_pools",
]
