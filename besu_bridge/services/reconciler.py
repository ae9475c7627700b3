"""
Reconciliation between the on-chain value and its stored projection.

The chain is authoritative: ``sync`` only ever copies the chain value into
the store, never the other way round. Values are compared as decimal strings,
so a stored ``"0500"`` does not match an on-chain ``500``.
"""
import logging
import re
from dataclasses import dataclass

from ..core.errors import PersistError, UpstreamReadError, UpstreamWriteError, ValidationError
from .interfaces import ChainAdapter, StoreAdapter, StoredRecord

logger = logging.getLogger(__name__)

_DECIMAL = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True)
class CheckResult:
    chain_value: str
    stored_value: str
    match: bool


@dataclass(frozen=True)
class SyncResult:
    chain_value: str
    record: StoredRecord
    changed: bool


@dataclass(frozen=True)
class SetResult:
    tx_hash: str
    value: str


def parse_decimal(raw: str) -> int:
    """Parse a base-10 integer. Sign is accepted; the contract decides what it allows."""
    if not _DECIMAL.fullmatch(raw):
        raise ValidationError("Invalid numeric value", "Failed to parse value as number")
    try:
        return int(raw)
    except ValueError as e:
        # Longer than the interpreter's int conversion limit, far above uint256
        raise ValidationError("Invalid numeric value", "Failed to parse value as number") from e


class ValueReconciler:
    def __init__(self, chain: ChainAdapter, store: StoreAdapter):
        self.chain = chain
        self.store = store

    def _read_chain(self) -> str:
        try:
            return str(self.chain.read_value())
        except Exception as e:
            logger.error(f"Error getting value from blockchain: {e}")
            raise UpstreamReadError("Failed to retrieve value from blockchain", str(e)) from e

    def _read_store(self) -> StoredRecord:
        try:
            return self.store.read_record()
        except Exception as e:
            logger.error(f"Error getting value from database: {e}")
            raise UpstreamReadError("Failed to retrieve value from database", str(e)) from e

    def get_value(self) -> str:
        return self._read_chain()

    def set_value(self, raw: str) -> SetResult:
        value = parse_decimal(raw)

        try:
            tx_hash = self.chain.write_value(value)
        except Exception as e:
            logger.error(f"Error setting value on blockchain: {e}")
            raise UpstreamWriteError("Failed to set value on blockchain", str(e)) from e

        logger.info(f"Transaction sent: value={raw}, tx_hash={tx_hash}")
        return SetResult(tx_hash=tx_hash, value=raw)

    def check(self) -> CheckResult:
        chain_value = self._read_chain()
        record = self._read_store()

        match = record.value == chain_value
        if match:
            logger.info(f"CHECK: Values match - blockchain={chain_value}, database={record.value}")
        else:
            logger.info(f"CHECK: Values differ - blockchain={chain_value}, database={record.value}")

        return CheckResult(chain_value=chain_value, stored_value=record.value, match=match)

    def sync(self) -> SyncResult:
        chain_value = self._read_chain()
        record = self._read_store()

        if record.value == chain_value:
            logger.info(f"Values already synchronized: blockchain={chain_value}, database={record.value}")
            return SyncResult(chain_value=chain_value, record=record, changed=False)

        try:
            updated = self.store.write_record(chain_value)
        except Exception as e:
            logger.error(f"Error updating value in database: {e}")
            raise PersistError("Failed to update value in database", str(e)) from e

        logger.info(f"Synchronized value: blockchain={chain_value}, database={record.value} -> {updated.value}")
        return SyncResult(chain_value=chain_value, record=updated, changed=True)
