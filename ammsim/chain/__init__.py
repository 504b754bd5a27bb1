"""Chain-client interface and response models."""

from ammsim.chain.client import ChainClient, LogEntry, call_contract, fetch_logs

__all__ = ["ChainClient", "LogEntry", "call_contract", "fetch_logs"]
