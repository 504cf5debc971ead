from __future__ import annotations

from enum import StrEnum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class RuleOperator(StrEnum):
    """Comparison operators for smart collection rules."""

    EQUALS = "equals"
    CONTAINS = "contains"
    STARTS_WITH = "starts_with"
    ENDS_WITH = "ends_with"
    NOT_EQUALS = "not_equals"
    NOT_CONTAINS = "not_contains"
    GREATER_THAN = "greater_than"
    LESS_THAN = "less_than"
    IS_EMPTY = "is_empty"
    IS_NOT_EMPTY = "is_not_empty"


class CombineOperator(StrEnum):
    AND = "AND"
    OR = "OR"


class CollectionRule(BaseModel):
    """Single condition: ``<field> <operator> <value>``."""

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    field: str
    operator: RuleOperator
    value: str = ""


class SmartCollectionRules(BaseModel):
    """Rule set of one smart collection."""

    model_config = ConfigDict(extra="ignore")

    combine_operator: CombineOperator = CombineOperator.AND
    rules: List[CollectionRule] = Field(default_factory=list)


class EvaluateRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    rules: SmartCollectionRules
    # file path -> document properties (None when metadata is unavailable)
    books: Dict[str, Optional[Dict[str, Any]]] = Field(default_factory=dict)
    members: List[str] = Field(default_factory=list)


class EvaluateResponse(BaseModel):
    matches: Dict[str, bool] = Field(default_factory=dict)
    added: List[str] = Field(default_factory=list)
    removed: List[str] = Field(default_factory=list)
    checked: int = 0
    with_metadata: int = 0


class OperatorOption(BaseModel):
    value: RuleOperator
    text: str


class OperatorsResponse(BaseModel):
    field: str
    text: str
    multi_value: bool = False
    numeric: bool = False
    operators: List[OperatorOption] = Field(default_factory=list)
