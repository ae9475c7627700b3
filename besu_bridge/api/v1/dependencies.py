from fastapi import Request

from ...services.reconciler import ValueReconciler


def get_reconciler(request: Request) -> ValueReconciler:
    """Reconciler built at startup from the process-wide adapters."""
    return request.app.state.reconciler
