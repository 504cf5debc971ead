from __future__ import annotations

import logging
from uuid import uuid4

from fastapi import APIRouter, Depends

from ..config import Settings, get_settings
from ..models import EvaluateRequest, EvaluateResponse, OperatorsResponse
from ..services.error_handling import BatchTooLargeError, UnknownFieldError
from ..services.smart_collections import METADATA_FIELDS, operators_for_field, plan_membership
from ..utils.logging import get_request_logger

router = APIRouter(prefix="/api/collections", tags=["collections"])
logger = logging.getLogger(__name__)


@router.post("/evaluate", response_model=EvaluateResponse)
async def evaluate_collection(
    request: EvaluateRequest,
    settings: Settings = Depends(get_settings),
) -> EvaluateResponse:
    if len(request.books) > settings.max_batch_size:
        raise BatchTooLargeError(len(request.books), settings.max_batch_size)
    request_logger = get_request_logger(logger, trace_id=uuid4().hex, endpoint="evaluate")

    update = plan_membership(request.rules, request.books, request.members)
    request_logger.info(
        "Smart collection evaluated rules=%d books=%d added=%d removed=%d",
        len(request.rules.rules),
        update.checked,
        len(update.added),
        len(update.removed),
    )
    return EvaluateResponse(
        matches=update.matches,
        added=update.added,
        removed=update.removed,
        checked=update.checked,
        with_metadata=update.with_metadata,
    )


@router.get("/operators/{field_name}", response_model=OperatorsResponse)
async def field_operators(field_name: str) -> OperatorsResponse:
    metadata = METADATA_FIELDS.get(field_name)
    if metadata is None:
        raise UnknownFieldError(field_name)
    return OperatorsResponse(
        field=field_name,
        text=metadata.text,
        multi_value=metadata.multi_value,
        numeric=metadata.numeric,
        operators=operators_for_field(field_name),
    )
