from __future__ import annotations

from .collections import (
    CollectionRule,
    CombineOperator,
    EvaluateRequest,
    EvaluateResponse,
    OperatorOption,
    OperatorsResponse,
    RuleOperator,
    SmartCollectionRules,
)
from .folders import (
    ConversionItem,
    ConvertResponse,
    FolderEntryPayload,
    FolderNamesRequest,
    LabelsRequest,
    LabelsResponse,
    SortResponse,
)

__all__ = [
    "CollectionRule",
    "CombineOperator",
    "EvaluateRequest",
    "EvaluateResponse",
    "OperatorOption",
    "OperatorsResponse",
    "RuleOperator",
    "SmartCollectionRules",
    "ConversionItem",
    "ConvertResponse",
    "FolderEntryPayload",
    "FolderNamesRequest",
    "LabelsRequest",
    "LabelsResponse",
    "SortResponse",
]
