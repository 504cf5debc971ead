from __future__ import annotations

import logging

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError

from .config import get_settings
from .routers import collections, folders
from .services.error_handling import (
    AppError,
    build_error_response,
    log_exception,
    map_exception_to_error_code,
    new_trace_id,
)

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(
        title="Shelfkit Gateway",
        docs_url="/docs" if settings.debug else None,
    )

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ):
        trace_id = new_trace_id()
        await log_exception(request=request, exc=exc, trace_id=trace_id, handled=True)
        error_code, reason, status_code = map_exception_to_error_code(exc)
        return build_error_response(
            error_code=error_code,
            reason=reason,
            status_code=status_code,
            debug_payload={"trace_id": trace_id},
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        trace_id = new_trace_id()
        await log_exception(request=request, exc=exc, trace_id=trace_id, handled=True)
        error_code, reason, status_code = map_exception_to_error_code(exc)
        return build_error_response(
            error_code=error_code,
            reason=reason,
            status_code=status_code,
            debug_payload={"trace_id": trace_id},
        )

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        trace_id = new_trace_id()
        await log_exception(request=request, exc=exc, trace_id=trace_id, handled=True)
        error_code, reason, status_code = map_exception_to_error_code(exc)
        debug_payload = {"trace_id": trace_id}
        if exc.debug:
            debug_payload.update(exc.debug)
        return build_error_response(
            error_code=error_code,
            reason=reason,
            status_code=status_code,
            debug_payload=debug_payload,
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        trace_id = new_trace_id()
        await log_exception(request=request, exc=exc, trace_id=trace_id, handled=False)
        error_code, reason, status_code = map_exception_to_error_code(exc)
        return build_error_response(
            error_code=error_code,
            reason=reason,
            status_code=status_code,
            debug_payload={"trace_id": trace_id},
        )

    app.include_router(folders.router)
    app.include_router(collections.router)
    logger.info(
        "FastAPI app initialized (env=%s, keep_partial=%s)",
        settings.env,
        settings.keep_partial_conversions,
    )
    return app


app = create_app()
