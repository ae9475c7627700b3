"""
Capabilities the reconciler consumes.

Live implementations are ``Web3ChainClient`` and ``SqlValueStore``; tests
substitute in-memory fakes.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Protocol


@dataclass(frozen=True)
class StoredRecord:
    id: int
    value: str
    updated_at: datetime


class ChainAdapter(Protocol):
    def read_value(self) -> int:
        """Read-only contract call."""
        ...

    def write_value(self, value: int) -> str:
        """Sign and broadcast a state change; returns the transaction hash."""
        ...

    def chain_id(self) -> int:
        ...


class StoreAdapter(Protocol):
    def read_record(self) -> StoredRecord:
        """Latest record, materialized as "0" when the table is empty."""
        ...

    def write_record(self, value: str) -> StoredRecord:
        """Upsert the singleton record and advance its timestamp."""
        ...
