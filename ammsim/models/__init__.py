"""Identifier types and persisted pool records."""

from ammsim.models.types import (
    ZERO_ID,
    AssetId,
    ContractId,
    is_valid_id,
    normalize_id,
)

__all__ = [
    "ZERO_ID",
    "AssetId",
    "ContractId",
    "is_valid_id",
    "normalize_id",
]
