"""Identifier types for contracts and assets.

Contracts and assets are identified by 32-byte ids written as 0x-prefixed
64-character hex strings. Comparison is case-insensitive, so ids are
normalized to lowercase before being stored or compared.
"""

from typing import Annotated

from pydantic import AfterValidator, Field

# 32-byte identifier (64 hex chars after 0x prefix)
ID_PATTERN = r"^0x[a-fA-F0-9]{64}$"

ZERO_ID = "0x" + "00" * 32


def normalize_id(identifier: str, *, validate: bool = False) -> str:
    """Normalize a contract or asset id to lowercase with 0x prefix.

    Args:
        identifier: A 32-byte id (with or without 0x prefix)
        validate: If True, raises ValueError for malformed ids

    Returns:
        Lowercase id with 0x prefix

    Raises:
        ValueError: If validate=True and identifier is not a valid id
    """
    ident = identifier.lower()
    if not ident.startswith("0x"):
        ident = "0x" + ident

    if validate and not is_valid_id(ident):
        raise ValueError(f"Invalid id: {identifier}")

    return ident


def is_valid_id(identifier: str) -> bool:
    """Check if a string is a well-formed 32-byte id."""
    if not isinstance(identifier, str):
        return False
    if not identifier.startswith("0x") or len(identifier) != 66:
        return False
    try:
        int(identifier, 16)
        return True
    except ValueError:
        return False


# Validated, normalized id for pydantic models
ContractId = Annotated[str, Field(pattern=ID_PATTERN), AfterValidator(normalize_id)]
AssetId = Annotated[str, Field(pattern=ID_PATTERN), AfterValidator(normalize_id)]

# Small unsigned integer widths used by pool records
Decimals = Annotated[int, Field(ge=0, le=255)]
U64 = Annotated[int, Field(ge=0, le=2**64 - 1)]
