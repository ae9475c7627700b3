from fastapi import APIRouter

from .endpoints import health, value

api_router = APIRouter()
api_router.include_router(health.router, tags=["health"])
api_router.include_router(value.router, tags=["value"])
