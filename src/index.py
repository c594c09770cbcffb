from __future__ import annotations

import logging
import time
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from .config import Settings, load_settings
from .directory import Directory
from .directory import router as directory_router
from .directory.store import seed_sample_data
from .routes.system import router as system_router

logger = logging.getLogger(__name__)


class LoggingMiddleware(BaseHTTPMiddleware):
    """Logs method, path, status and latency of every request."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start) * 1000
        logger.info(
            f"{request.method} {request.url.path} -> {response.status_code} "
            f"({duration_ms:.1f} ms)"
        )
        return response


async def _unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the API with a fresh, empty directory attached to ``app.state``."""
    settings = settings or load_settings()

    app = FastAPI(title="Group Directory Service", version="1.0.0")
    app.state.settings = settings
    app.state.directory = Directory()
    if settings.seed_sample_data:
        seed_sample_data(app.state.directory)

    app.add_middleware(LoggingMiddleware)
    # Added last so it wraps logging and answers preflight requests first
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(Exception, _unhandled_exception_handler)

    app.include_router(system_router)
    app.include_router(directory_router)
    return app


app = create_app()
