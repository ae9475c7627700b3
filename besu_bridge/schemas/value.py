"""
Pydantic schemas for API requests and responses.
"""
from datetime import datetime

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: str
    service: str
    message: str


class GetValueResponse(BaseModel):
    value: str
    success: bool
    message: str


class SetValueRequest(BaseModel):
    value: str = Field(min_length=1)


class SetValueResponse(BaseModel):
    tx_hash: str
    success: bool
    message: str
    value: str


class SyncResponse(BaseModel):
    blockchain_value: str
    database_value: str
    synced: bool
    success: bool
    message: str
    synced_at: datetime


class CheckResponse(BaseModel):
    blockchain_value: str
    database_value: str
    match: bool
    success: bool
    message: str


class ErrorResponse(BaseModel):
    success: bool = False
    message: str
    error: str
