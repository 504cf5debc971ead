"""
Smart collections: membership by metadata rules.

A smart collection is a regular collection plus a rule set. Each rule
compares one document property (authors, title, series, ...) with a value;
rules are combined with AND (all) or OR (any). String comparisons are
case-insensitive and literal.

Scanning folders and persisting rules belong to the host; this module only
evaluates rules and plans additions/removals.
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional

from ..models.collections import (
    CollectionRule,
    CombineOperator,
    OperatorOption,
    RuleOperator,
    SmartCollectionRules,
)

logger = logging.getLogger(__name__)

SMART_COLLECTION_MARKER = "\U0001F4A1"  # 💡


@dataclass(frozen=True)
class MetadataField:
    text: str
    multi_value: bool = False
    numeric: bool = False


METADATA_FIELDS: Dict[str, MetadataField] = {
    "authors": MetadataField("Authors", multi_value=True),
    "title": MetadataField("Title"),
    "series": MetadataField("Series"),
    "keywords": MetadataField("Keywords", multi_value=True),
    "language": MetadataField("Language"),
    "pubdate": MetadataField("Publication date"),
    "pages": MetadataField("Pages", numeric=True),
}

OPERATOR_TEXTS: Dict[RuleOperator, str] = {
    RuleOperator.EQUALS: "equals",
    RuleOperator.CONTAINS: "contains",
    RuleOperator.STARTS_WITH: "starts with",
    RuleOperator.ENDS_WITH: "ends with",
    RuleOperator.NOT_EQUALS: "not equals",
    RuleOperator.NOT_CONTAINS: "not contains",
    RuleOperator.GREATER_THAN: "greater than",
    RuleOperator.LESS_THAN: "less than",
    RuleOperator.IS_EMPTY: "is empty",
    RuleOperator.IS_NOT_EMPTY: "is not empty",
}

NUMERIC_OPERATORS = (
    RuleOperator.EQUALS,
    RuleOperator.NOT_EQUALS,
    RuleOperator.GREATER_THAN,
    RuleOperator.LESS_THAN,
    RuleOperator.IS_EMPTY,
    RuleOperator.IS_NOT_EMPTY,
)

TEXT_OPERATORS = (
    RuleOperator.EQUALS,
    RuleOperator.CONTAINS,
    RuleOperator.STARTS_WITH,
    RuleOperator.ENDS_WITH,
    RuleOperator.NOT_EQUALS,
    RuleOperator.NOT_CONTAINS,
    RuleOperator.IS_EMPTY,
    RuleOperator.IS_NOT_EMPTY,
)

RE_DECIMAL = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")

# Negated operator -> positive counterpart
_NEGATIONS = {
    RuleOperator.NOT_EQUALS: RuleOperator.EQUALS,
    RuleOperator.NOT_CONTAINS: RuleOperator.CONTAINS,
}


@dataclass
class MembershipUpdate:
    """Planned changes for one smart collection."""
    added: List[str] = field(default_factory=list)
    removed: List[str] = field(default_factory=list)
    matches: Dict[str, bool] = field(default_factory=dict)
    checked: int = 0
    with_metadata: int = 0

    @property
    def changed(self) -> int:
        return len(self.added) + len(self.removed)


def operators_for_field(field_name: str) -> List[OperatorOption]:
    """Operators offered for a field; unknown fields get none."""
    metadata = METADATA_FIELDS.get(field_name)
    if metadata is None:
        return []
    operators = NUMERIC_OPERATORS if metadata.numeric else TEXT_OPERATORS
    return [OperatorOption(value=op, text=OPERATOR_TEXTS[op]) for op in operators]


def _to_number(value: Any) -> Optional[float]:
    """Plain decimal numbers only; "inf", "nan" and "1_000" are not numbers."""
    text = str(value).strip()
    if not RE_DECIMAL.fullmatch(text):
        return None
    number = float(text)
    return number if math.isfinite(number) else None


def _is_empty(value: Any) -> bool:
    return value is None or str(value) == ""


def evaluate_single_value(field_value: Any, operator: RuleOperator, value: Any) -> bool:
    """Compare one property value with the rule value."""
    if field_value is None:
        return False

    field_text = str(field_value)
    value_text = "" if value is None else str(value)
    field_lower = field_text.lower()
    value_lower = value_text.lower()

    if operator == RuleOperator.EQUALS:
        return field_lower == value_lower
    if operator == RuleOperator.CONTAINS:
        return value_lower in field_lower
    if operator == RuleOperator.STARTS_WITH:
        return field_lower.startswith(value_lower)
    if operator == RuleOperator.ENDS_WITH:
        return field_lower.endswith(value_lower)
    if operator == RuleOperator.NOT_EQUALS:
        return field_lower != value_lower
    if operator == RuleOperator.NOT_CONTAINS:
        return value_lower not in field_lower
    if operator in (RuleOperator.GREATER_THAN, RuleOperator.LESS_THAN):
        left = _to_number(field_text)
        right = _to_number(value_text)
        if left is None or right is None:
            return False
        return left > right if operator == RuleOperator.GREATER_THAN else left < right
    return False


def evaluate_condition(props: Mapping[str, Any], rule: CollectionRule) -> bool:
    """
    Evaluate one rule against document properties.

    Emptiness is checked on the whole property. Multi-value properties
    (newline separated) match when any value matches; negated operators
    match only when no value matches the positive form.
    """
    field_value = props.get(rule.field)
    operator = rule.operator

    if _is_empty(field_value):
        return operator == RuleOperator.IS_EMPTY
    if operator == RuleOperator.IS_EMPTY:
        return False
    if operator == RuleOperator.IS_NOT_EMPTY:
        return True

    metadata = METADATA_FIELDS.get(rule.field)
    if metadata and metadata.multi_value:
        values = [v for v in str(field_value).split("\n") if v.strip()]
        positive = _NEGATIONS.get(operator)
        if positive is not None:
            return not any(evaluate_single_value(v, positive, rule.value) for v in values)
        return any(evaluate_single_value(v, operator, rule.value) for v in values)

    return evaluate_single_value(field_value, operator, rule.value)


def evaluate_rules(props: Mapping[str, Any], rules: SmartCollectionRules | None) -> bool:
    """AND: every rule holds; OR: at least one does. No rules never match."""
    if rules is None or not rules.rules:
        return False
    if rules.combine_operator == CombineOperator.AND:
        return all(evaluate_condition(props, rule) for rule in rules.rules)
    return any(evaluate_condition(props, rule) for rule in rules.rules)


def plan_membership(
    rules: SmartCollectionRules,
    books: Mapping[str, Optional[Mapping[str, Any]]],
    members: Iterable[str],
) -> MembershipUpdate:
    """
    Decide which books to add to or remove from a smart collection.

    Books without metadata are counted but never moved.
    """
    update = MembershipUpdate()
    if not rules.rules:
        return update

    current = set(members)
    for path in sorted(books):
        update.checked += 1
        props = books[path]
        if not props:
            continue
        update.with_metadata += 1

        matches = evaluate_rules(props, rules)
        update.matches[path] = matches
        if matches and path not in current:
            update.added.append(path)
        elif not matches and path in current:
            update.removed.append(path)

    logger.debug(
        "Smart collection plan: checked=%d with_metadata=%d added=%d removed=%d",
        update.checked,
        update.with_metadata,
        len(update.added),
        len(update.removed),
    )
    return update


def collection_marker(base_marker: str | None, is_smart: bool) -> str | None:
    """Marker shown next to a collection name; smart ones get 💡 appended."""
    if not is_smart:
        return base_marker
    return f"{base_marker} {SMART_COLLECTION_MARKER}" if base_marker else SMART_COLLECTION_MARKER
