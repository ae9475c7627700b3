from fastapi import APIRouter

from ....core.config import settings
from ....schemas.value import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
def health_check():
    """Liveness only: no adapter calls, always 200."""
    return HealthResponse(
        status="healthy",
        service=settings.SERVICE_NAME,
        message="Service is running",
    )
