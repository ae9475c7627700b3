from fastapi import APIRouter, Depends

from ....schemas.value import (
    CheckResponse,
    GetValueResponse,
    SetValueRequest,
    SetValueResponse,
    SyncResponse,
)
from ....services.reconciler import ValueReconciler
from ..dependencies import get_reconciler

router = APIRouter()


@router.get("/value", response_model=GetValueResponse)
def get_value(reconciler: ValueReconciler = Depends(get_reconciler)):
    """
    Reads the current value straight from the contract.
    """
    return GetValueResponse(
        value=reconciler.get_value(),
        success=True,
        message="Value retrieved successfully from blockchain",
    )


@router.post("/value", response_model=SetValueResponse)
def set_value(body: SetValueRequest, reconciler: ValueReconciler = Depends(get_reconciler)):
    """
    Submits a set() transaction. The database is not updated until the next sync.
    """
    result = reconciler.set_value(body.value)
    return SetValueResponse(
        tx_hash=result.tx_hash,
        success=True,
        message="Transaction sent successfully",
        value=result.value,
    )


@router.post("/sync", response_model=SyncResponse)
def sync_value(reconciler: ValueReconciler = Depends(get_reconciler)):
    """
    Copies the blockchain value into the database when they differ.
    """
    result = reconciler.sync()
    if result.changed:
        message = "Value synchronized successfully from blockchain to database"
    else:
        message = "Values are already synchronized"

    return SyncResponse(
        blockchain_value=result.chain_value,
        database_value=result.record.value,
        synced=True,
        success=True,
        message=message,
        synced_at=result.record.updated_at,
    )


@router.get("/check", response_model=CheckResponse)
def check_value(reconciler: ValueReconciler = Depends(get_reconciler)):
    result = reconciler.check()
    if result.match:
        message = "Database and blockchain values match"
    else:
        message = "Database and blockchain values do not match"

    return CheckResponse(
        blockchain_value=result.chain_value,
        database_value=result.stored_value,
        match=result.match,
        success=True,
        message=message,
    )
