"""
Database model for the mirrored contract value.
"""
from sqlalchemy import Column, DateTime, Integer, Text
from sqlalchemy.sql import func

from ..core.database import Base


class ContractValue(Base):
    """Singleton-row table: the most recently updated row is the live record."""
    __tablename__ = "contract_values"

    id = Column(Integer, primary_key=True, index=True)
    value = Column(Text, nullable=False)  # Decimal string, uint256 does not fit BIGINT
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
