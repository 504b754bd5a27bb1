"""Pydantic models for decoded chain responses.

Values returned by a ChainClient are validated against these models before
they reach a pool, so a malformed response surfaces as a ChainError rather
than as a corrupt pool.
"""

from pydantic import BaseModel, Field, model_validator

from ammsim.constants import FEE_DENOMINATOR
from ammsim.models.types import U64, AssetId, ContractId, Decimals


class Reserves(BaseModel):
    """Current reserves of a pool."""

    reserve_0: U64
    reserve_1: U64


class ConstantProductPoolInfo(BaseModel):
    """Full state of a constant-product pool contract."""

    token_0: AssetId
    token_1: AssetId
    token_0_decimals: Decimals
    token_1_decimals: Decimals
    reserve_0: U64
    reserve_1: U64
    fee: int = Field(ge=0, lt=FEE_DENOMINATOR)


class AddressedPoolInfo(ConstantProductPoolInfo):
    """Pool info returned by a factory's batched getter, keyed by pool."""

    address: ContractId


class HybridPoolId(BaseModel):
    """Composite key of a pool inside a hybrid AMM contract."""

    token_0: AssetId
    token_1: AssetId
    is_stable: bool


class HybridPoolMetadata(BaseModel):
    """Per-pool state held by a hybrid AMM contract."""

    reserve_0: U64
    reserve_1: U64
    liquidity: int = Field(default=0, ge=0)
    decimals_0: Decimals
    decimals_1: Decimals


class HybridFeesResponse(BaseModel):
    """Contract-wide fee parameters of a hybrid AMM."""

    lp_fee_volatile: int = Field(ge=0, lt=FEE_DENOMINATOR)
    lp_fee_stable: int = Field(ge=0, lt=FEE_DENOMINATOR)
    protocol_fee_volatile: int = Field(ge=0, lt=FEE_DENOMINATOR)
    protocol_fee_stable: int = Field(ge=0, lt=FEE_DENOMINATOR)

    @model_validator(mode="after")
    def check_curve_totals(self) -> "HybridFeesResponse":
        """Each curve's LP plus protocol fee must stay below 100%."""
        for curve in ("volatile", "stable"):
            total = getattr(self, f"lp_fee_{curve}") + getattr(self, f"protocol_fee_{curve}")
            if total >= FEE_DENOMINATOR:
                raise ValueError(f"{curve} fee total {total} must be below {FEE_DENOMINATOR}")
        return self


class PoolCreatedEvent(BaseModel):
    """Payload of a factory's pool-creation event."""

    pool: ContractId
    token_0: AssetId
    token_1: AssetId
