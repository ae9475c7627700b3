"""
SQL-backed store adapter for the mirrored contract value.
"""
import logging
import re
from datetime import timezone

from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session
from sqlalchemy.sql import func

from ..core.config import Settings
from ..core.database import Base, create_db_engine, create_session_factory
from ..models.contract_value import ContractValue
from .interfaces import StoredRecord

logger = logging.getLogger(__name__)

_NON_NEGATIVE_DECIMAL = re.compile(r"[0-9]+")


def _to_record(row: ContractValue) -> StoredRecord:
    updated_at = row.updated_at
    # CURRENT_TIMESTAMP is UTC; drivers without zone support return it naive
    if updated_at.tzinfo is None:
        updated_at = updated_at.replace(tzinfo=timezone.utc)
    return StoredRecord(id=row.id, value=row.value, updated_at=updated_at)


class SqlValueStore:
    """Keeps the singleton ``contract_values`` row."""

    def __init__(self, engine: Engine):
        self.engine = engine
        self.SessionLocal = create_session_factory(engine)

        with engine.connect() as conn:
            conn.execute(text("SELECT 1")).fetchone()

        # Create tables (only creates if they don't exist)
        Base.metadata.create_all(bind=engine)

        # Seed the initial row so reads never come back empty
        self.read_record()

    @classmethod
    def from_settings(cls, settings: Settings) -> "SqlValueStore":
        return cls(create_db_engine(settings.database_url))

    def _latest(self, db: Session):
        return (
            db.query(ContractValue)
            .order_by(ContractValue.updated_at.desc(), ContractValue.id.desc())
            .first()
        )

    def read_record(self) -> StoredRecord:
        db = self.SessionLocal()
        try:
            row = self._latest(db)
        finally:
            db.close()

        if row is None:
            logger.info("No stored value found, initializing with 0")
            return self.write_record("0")
        return _to_record(row)

    def write_record(self, value: str) -> StoredRecord:
        if not _NON_NEGATIVE_DECIMAL.fullmatch(value):
            raise ValueError(f"Refusing to store non-numeric value {value!r}")

        db = self.SessionLocal()
        try:
            row = self._latest(db)
            if row is None:
                row = ContractValue(value=value)
                db.add(row)
            else:
                row.value = value
                row.updated_at = func.now()

            db.commit()
            db.refresh(row)
            return _to_record(row)
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def close(self) -> None:
        self.engine.dispose()
