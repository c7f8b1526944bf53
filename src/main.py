"""FastAPI application entry point.

Run with: uvicorn src.main:app --port 8000
"""

# ruff: noqa: E402  -- uvloop.install() must run before other imports

import uvloop

uvloop.install()

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config.settings import settings
from src.pc_common.errors import AppError, InternalError
from src.pc_common.response import error_response
from src.pc_gateway.middleware.request_log import RequestLogMiddleware
from src.pc_pool.api.dependencies import build_pool_service
from src.pc_pool.api.router import router as pool_router

VERSION = "0.1.0"

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup: create cache root + shared RPC client. Shutdown: close client."""
    # Startup
    client = httpx.AsyncClient(timeout=settings.RPC_TIMEOUT_SECONDS)
    try:
        app.state.settings = settings
        app.state.pool_service = build_pool_service(settings, client)
        yield
    finally:
        # Shutdown
        await client.aclose()


app = FastAPI(
    title=settings.APP_NAME,
    version=VERSION,
    lifespan=lifespan,
)


app.add_middleware(RequestLogMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["GET"],
    allow_headers=["Content-Type"],
)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    resp = error_response(exc.code, exc.message)
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return JSONResponse(
        status_code=exc.http_status,
        content=resp.model_dump(),
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "unhandled error on %s %s", request.method, request.url.path, exc_info=exc
    )
    err = InternalError()
    resp = error_response(err.code, err.message)
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return JSONResponse(
        status_code=err.http_status,
        content=resp.model_dump(),
    )


app.include_router(pool_router, prefix="/api/v1")


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok", "version": VERSION}
