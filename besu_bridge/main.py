import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response

from .api.v1.router import api_router
from .core.blockchain import Web3ChainClient
from .core.config import settings
from .core.errors import BridgeError
from .schemas.value import ErrorResponse
from .services.interfaces import ChainAdapter, StoreAdapter
from .services.reconciler import ValueReconciler
from .services.store import SqlValueStore

logging.basicConfig(level=settings.LOG_LEVEL.upper())
logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    logger.info("Starting besu value bridge API service...")

    # Adapter failures here are fatal: the exception aborts startup
    chain = app.state.chain
    if chain is None:
        chain = Web3ChainClient.from_settings(settings)

    logger.info("Testing blockchain connection...")
    logger.info(f"Connected to blockchain with Chain ID: {chain.chain_id()}")

    store = app.state.store
    owns_store = store is None
    if owns_store:
        store = SqlValueStore.from_settings(settings)
    logger.info("Connected to database successfully")

    app.state.reconciler = ValueReconciler(chain, store)

    yield

    # Shutdown
    logger.info("Shutting down besu value bridge API service...")
    if owns_store:
        store.close()


def create_app(chain: Optional[ChainAdapter] = None, store: Optional[StoreAdapter] = None) -> FastAPI:
    """
    Build the API. Adapters not passed in are constructed from settings at startup.
    """
    app = FastAPI(
        title=settings.PROJECT_NAME,
        description="Bridges a contract value between a Besu node and a relational store",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.chain = chain
    app.state.store = store

    @app.middleware("http")
    async def cors_middleware(request: Request, call_next):
        # Preflight never reaches the router
        if request.method == "OPTIONS":
            response = Response(status_code=204)
        else:
            response = await call_next(request)
        response.headers.update(CORS_HEADERS)
        return response

    @app.exception_handler(BridgeError)
    async def bridge_error_handler(request: Request, exc: BridgeError):
        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(message=exc.message, error=exc.detail).model_dump(),
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        # Rendered by the outermost server-error layer, so the CORS middleware never sees it
        logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(message="Internal server error", error=str(exc)).model_dump(),
            headers=CORS_HEADERS,
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        detail = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()
        )
        return JSONResponse(
            status_code=400,
            content=ErrorResponse(message="Invalid request format", error=detail).model_dump(),
        )

    app.include_router(api_router, prefix=settings.API_V1_STR)
    return app


app = create_app()
