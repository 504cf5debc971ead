from __future__ import annotations

import logging
import traceback
import uuid
from typing import Any, Tuple

from fastapi import HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base application error rendered into the ``meta.error`` envelope."""

    code = "INTERNAL_ERROR"
    default_reason = "internal_error"
    http_status = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(
        self,
        message: str | None = None,
        *,
        reason: str | None = None,
        debug: dict[str, Any] | None = None,
    ) -> None:
        self.reason = reason or self.default_reason
        super().__init__(message or self.reason)
        self.debug = debug or {}


class BadRequestError(AppError):
    """Raised when the request is well-formed but cannot be processed."""

    code = "BAD_REQUEST"
    default_reason = "bad_request"
    http_status = status.HTTP_400_BAD_REQUEST


class BatchTooLargeError(BadRequestError):
    """More names, entries or books than ``MAX_BATCH_SIZE`` in one request."""

    default_reason = "batch_too_large"

    def __init__(self, size: int, limit: int) -> None:
        super().__init__(
            f"batch of {size} exceeds limit {limit}",
            debug={"batch_size": size, "max_batch_size": limit},
        )
        self.size = size
        self.limit = limit


class UnknownFieldError(BadRequestError):
    """Metadata field without smart-collection support."""

    default_reason = "unknown_field"
    http_status = status.HTTP_404_NOT_FOUND

    def __init__(self, field_name: str) -> None:
        super().__init__(
            f"unknown metadata field {field_name!r}",
            debug={"field": field_name},
        )
        self.field_name = field_name


def _detail_to_reason(detail: Any) -> str:
    if isinstance(detail, dict):
        return str(detail.get("reason") or detail.get("message") or "unknown")
    if isinstance(detail, list):
        return str(detail[0]) if detail else "unknown"
    if detail:
        return str(detail)
    return "unknown"


def map_exception_to_error_code(exc: Exception) -> Tuple[str, str, int]:
    """Return normalized error code, reason, and HTTP status for the given exception."""

    if isinstance(exc, AppError):
        return exc.code, exc.reason, exc.http_status

    if isinstance(exc, RequestValidationError):
        return ("BAD_REQUEST", "request_validation_error", status.HTTP_422_UNPROCESSABLE_ENTITY)

    if isinstance(exc, HTTPException):
        status_code = exc.status_code or status.HTTP_500_INTERNAL_SERVER_ERROR
        reason = _detail_to_reason(exc.detail)
        if status.HTTP_400_BAD_REQUEST <= status_code < status.HTTP_500_INTERNAL_SERVER_ERROR:
            return ("BAD_REQUEST", reason, status_code)
        return ("INTERNAL_ERROR", reason, status_code)

    return ("INTERNAL_ERROR", exc.__class__.__name__, status.HTTP_500_INTERNAL_SERVER_ERROR)


def build_error_response(
    *,
    error_code: str,
    reason: str,
    status_code: int,
    debug_payload: dict[str, Any] | None = None,
) -> JSONResponse:
    meta: dict[str, Any] = {"error": {"code": error_code, "reason": reason}}
    if debug_payload:
        meta["debug"] = debug_payload
    return JSONResponse(
        status_code=status_code,
        content={"data": None, "meta": meta},
    )


def new_trace_id() -> str:
    return uuid.uuid4().hex


async def get_request_payload(request: Request) -> str | None:
    try:
        body = await request.body()
    except RuntimeError:
        # body stream already consumed
        return None
    if not body:
        return None
    return body.decode("utf-8", errors="replace")


async def log_exception(
    *,
    request: Request,
    exc: Exception,
    trace_id: str,
    handled: bool,
) -> None:
    payload = await get_request_payload(request)
    log_message = "Handled application error" if handled else "Unhandled application error"
    log_method = logger.warning if handled else logger.exception
    log_method(
        "%s trace_id=%s path=%s reason=%s payload=%s",
        log_message,
        trace_id,
        request.url.path,
        getattr(exc, "reason", None) or exc.__class__.__name__,
        payload,
        exc_info=exc if not handled else None,
    )
    if handled:
        logger.debug(
            "Full traceback for trace_id=%s\n%s",
            trace_id,
            "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)),
        )
