"""Fixture-backed fake ChainClient.

Usage:
    client = FakeChainClient()
    client.set_response(POOL, "get_reserves", {"reserve_0": 1, "reserve_1": 2})
    client.set_response(AMM, "get_pools", lambda args: pools[args[0]:args[1]])
    client.fail(POOL, "get_reserves")

    asyncio.run(pool.sync(client))
    assert client.calls == [(POOL, "get_reserves", [])]
"""

from collections.abc import Callable
from typing import Any

from ammsim.chain.client import LogEntry
from ammsim.errors import TransportError
from ammsim.models.types import normalize_id

Response = Any | Callable[[list[Any]], Any]


class FakeChainClient:
    """In-memory ChainClient that records every call it receives.

    Responses are keyed by (contract, method). A callable response is called
    with the call arguments. Unknown keys and registered failures raise
    TransportError like a real client would.
    """

    def __init__(self) -> None:
        self.responses: dict[tuple[str, str], Response] = {}
        self.logs: dict[tuple[str, str], list[LogEntry]] = {}
        self.failures: dict[tuple[str, str], Callable[[list[Any]], bool]] = {}
        self.calls: list[tuple[str, str, list[Any]]] = []
        self.log_queries: list[tuple[str, str, int | None, int | None]] = []

    def set_response(self, contract_id: str, method_name: str, response: Response) -> None:
        self.responses[(normalize_id(contract_id), method_name)] = response

    def add_log(self, log: LogEntry) -> None:
        key = (normalize_id(log.contract_id), log.event_name)
        self.logs.setdefault(key, []).append(log)

    def fail(
        self,
        contract_id: str,
        name: str,
        when: Callable[[list[Any]], bool] | None = None,
    ) -> None:
        """Make calls (or log queries) to contract/name raise TransportError."""
        self.failures[(normalize_id(contract_id), name)] = when or (lambda args: True)

    def _check_failure(self, key: tuple[str, str], args: list[Any]) -> None:
        predicate = self.failures.get(key)
        if predicate is not None and predicate(args):
            raise TransportError(f"simulated transport failure: {key[1]}")

    async def simulate(self, contract_id: str, method_name: str, args: list[Any]) -> Any:
        key = (normalize_id(contract_id), method_name)
        self.calls.append((key[0], method_name, list(args)))
        self._check_failure(key, list(args))
        if key not in self.responses:
            raise TransportError(f"no fixture for {method_name} on {contract_id}")
        response = self.responses[key]
        return response(list(args)) if callable(response) else response

    async def get_logs(
        self,
        contract_id: str,
        event_name: str,
        from_block: int | None,
        to_block: int | None,
    ) -> list[LogEntry]:
        key = (normalize_id(contract_id), event_name)
        self.log_queries.append((key[0], event_name, from_block, to_block))
        self._check_failure(key, [from_block, to_block])
        return [
            log
            for log in self.logs.get(key, [])
            if (from_block is None or log.block_number >= from_block)
            and (to_block is None or log.block_number <= to_block)
        ]

    def calls_to(self, method_name: str) -> list[list[Any]]:
        """Arguments of every call made to method_name, in call order."""
        return [args for _, method, args in self.calls if method == method_name]


__all__ = ["FakeChainClient"]
