from __future__ import annotations

import logging
from typing import Sequence
from uuid import uuid4

from fastapi import APIRouter, Depends

from ..config import Settings, get_settings
from ..models import (
    ConversionItem,
    ConvertResponse,
    FolderNamesRequest,
    LabelsRequest,
    LabelsResponse,
    SortResponse,
)
from ..services.error_handling import BatchTooLargeError
from ..services.folder_labels import FolderEntry, folder_label
from ..services.translit import TransliterationReverter, get_reverter
from ..utils.logging import get_request_logger

router = APIRouter(prefix="/api/folders", tags=["folders"])
logger = logging.getLogger(__name__)


def get_reverter_dependency() -> TransliterationReverter:
    return get_reverter()


def _check_batch(items: Sequence[object], settings: Settings) -> None:
    if len(items) > settings.max_batch_size:
        raise BatchTooLargeError(len(items), settings.max_batch_size)


@router.post("/convert", response_model=ConvertResponse)
async def convert_names(
    request: FolderNamesRequest,
    settings: Settings = Depends(get_settings),
    reverter: TransliterationReverter = Depends(get_reverter_dependency),
) -> ConvertResponse:
    _check_batch(request.names, settings)
    request_logger = get_request_logger(logger, trace_id=uuid4().hex, endpoint="convert")

    items = []
    for name in request.names:
        result = reverter.convert(name)
        items.append(
            ConversionItem(
                original=result.original,
                converted=result.converted,
                changed=result.changed,
                is_directory_hint=result.is_directory_hint,
            )
        )
    changed_count = sum(1 for item in items if item.changed)
    request_logger.info("Converted names total=%d changed=%d", len(items), changed_count)
    return ConvertResponse(items=items, changed_count=changed_count)


@router.post("/sort", response_model=SortResponse)
async def sort_names(
    request: FolderNamesRequest,
    settings: Settings = Depends(get_settings),
    reverter: TransliterationReverter = Depends(get_reverter_dependency),
) -> SortResponse:
    _check_batch(request.names, settings)
    names = reverter.sort_names(request.names)
    return SortResponse(names=names, keys=[reverter.sort_key(name) for name in names])


@router.post("/labels", response_model=LabelsResponse)
async def folder_labels(
    request: LabelsRequest,
    settings: Settings = Depends(get_settings),
    reverter: TransliterationReverter = Depends(get_reverter_dependency),
) -> LabelsResponse:
    _check_batch(request.entries, settings)
    labels = [
        folder_label(
            FolderEntry(**entry.model_dump()),
            reverter=reverter,
            check_filesystem=False,
        )
        for entry in request.entries
    ]
    return LabelsResponse(labels=labels)
