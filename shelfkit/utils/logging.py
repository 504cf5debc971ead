from __future__ import annotations

import logging
from typing import Any


class RequestLoggerAdapter(logging.LoggerAdapter):
    """Logger adapter that prefixes messages with trace/endpoint context."""

    def process(self, msg: Any, kwargs: dict[str, Any]) -> tuple[str, dict[str, Any]]:
        trace_id = self.extra.get("trace_id") or "-"
        endpoint = self.extra.get("endpoint") or "-"
        prefix = f"trace_id={trace_id} endpoint={endpoint}"
        return f'{prefix} msg="{msg}"', kwargs


def get_request_logger(
    logger: logging.Logger | str,
    *,
    trace_id: str | None,
    endpoint: str | None = None,
) -> RequestLoggerAdapter:
    base_logger = logging.getLogger(logger) if isinstance(logger, str) else logger
    return RequestLoggerAdapter(
        base_logger,
        {
            "trace_id": trace_id or "-",
            "endpoint": endpoint or "-",
        },
    )
