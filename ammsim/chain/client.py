"""Chain-client collaborator interface.

The engine never owns a connection. Every chain-touching operation takes a
ChainClient explicitly, so pricing and swap logic can be exercised against
a fixture-backed fake.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any, Protocol, runtime_checkable

import structlog
from pydantic import TypeAdapter, ValidationError

from ammsim.errors import ChainError, TransportError

logger = structlog.get_logger()


@dataclass(frozen=True)
class LogEntry:
    """A decoded event log emitted by a contract."""

    contract_id: str
    event_name: str
    block_number: int
    log_index: int = 0
    data: dict[str, Any] = field(default_factory=dict)


@runtime_checkable
class ChainClient(Protocol):
    """Read-only access to contract state and event logs.

    Implementations raise TransportError for network failures, contract
    reverts and decoding failures. The engine does not retry.
    """

    async def simulate(self, contract_id: str, method_name: str, args: Sequence[Any]) -> Any:
        """Run a read-only contract call and return its decoded value."""
        ...

    async def get_logs(
        self,
        contract_id: str,
        event_name: str,
        from_block: int | None,
        to_block: int | None,
    ) -> list[LogEntry]:
        """Fetch logs of one event in the inclusive block range.

        A None bound means "from genesis" / "up to the chain head".
        """
        ...


@lru_cache(maxsize=64)
def _adapter(response_type: Any) -> TypeAdapter[Any]:
    return TypeAdapter(response_type)


async def call_contract(
    client: ChainClient,
    contract_id: str,
    method_name: str,
    args: Sequence[Any] = (),
    response_type: Any = None,
) -> Any:
    """Run a read-only call, validating the response shape when requested.

    Args:
        client: Chain client to use
        contract_id: Target contract
        method_name: Contract method
        args: Positional call arguments
        response_type: Optional type (pydantic model, list[...], int, ...)
            the decoded value must validate against

    Returns:
        The raw value, or the validated value when response_type is given

    Raises:
        ChainError: On transport failure or an undecodable response
    """
    try:
        value = await client.simulate(contract_id, method_name, list(args))
    except TransportError as err:
        logger.warning(
            "chain_call_failed",
            contract=contract_id,
            method=method_name,
            error=str(err),
        )
        raise ChainError(contract_id, method_name, str(err)) from err

    if response_type is None:
        return value
    try:
        return _adapter(response_type).validate_python(value)
    except ValidationError as err:
        logger.warning(
            "chain_response_invalid",
            contract=contract_id,
            method=method_name,
            errors=err.error_count(),
        )
        raise ChainError(contract_id, method_name, f"undecodable response: {err}") from err


async def fetch_logs(
    client: ChainClient,
    contract_id: str,
    event_name: str,
    from_block: int | None,
    to_block: int | None,
) -> list[LogEntry]:
    """Fetch event logs, translating transport failures to ChainError."""
    try:
        logs = await client.get_logs(contract_id, event_name, from_block, to_block)
    except TransportError as err:
        logger.warning(
            "chain_logs_failed",
            contract=contract_id,
            event_name=event_name,
            from_block=from_block,
            to_block=to_block,
            error=str(err),
        )
        raise ChainError(contract_id, event_name, str(err)) from err
    return list(logs)
