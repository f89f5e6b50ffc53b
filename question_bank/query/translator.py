"""
Translate question-listing query strings into store filters.

``GET /api/questions?level=easy&points[gte]=2&solved=false`` becomes::

    {"level": "easy", "points": {"$gte": 2}, "_id": {"$nin": [...]}}

Reserved parameters (select, sort, page, limit, solved) never reach the
filter; each is consumed by its own concern.

Known imprecision of the ``text`` rewrite mode: operator names are prefixed
by substitution over the serialized filter, so a value that literally
contains a bounded ``gt``/``gte``/``lt``/``lte``/``in`` word (for example
``questionText=what is in a set``) is rewritten too. The ``structural`` mode
only rewrites keys of comparison sub-objects.
"""

from __future__ import annotations

import json
import logging
import re
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

logger = logging.getLogger(__name__)

RawValue = Union[str, List[str], Dict[str, Any]]
RawQueryParameters = Dict[str, RawValue]
FilterExpression = Dict[str, Any]

OPERATOR_MARKER = "$"


class ReservedParameter(str, Enum):
    SELECT = "select"
    SORT = "sort"
    PAGE = "page"
    LIMIT = "limit"
    SOLVED = "solved"


class ComparisonOperator(str, Enum):
    GT = "gt"
    GTE = "gte"
    LT = "lt"
    LTE = "lte"
    IN = "in"


class RewriteMode(str, Enum):
    TEXT = "text"
    STRUCTURAL = "structural"


RESERVED_PARAMETERS = frozenset(p.value for p in ReservedParameter)
COMPARISON_OPERATORS = tuple(op.value for op in ComparisonOperator)

_OPERATOR_PATTERN = re.compile(r"\b(" + "|".join(COMPARISON_OPERATORS) + r")\b")
_BRACKET_KEY = re.compile(r"^([^\[\]]+)\[([^\[\]]+)\]$")
_INTEGER = re.compile(r"^[+-]?\d+$")


def parse_query_params(items: Iterable[Tuple[str, str]]) -> RawQueryParameters:
    """
    Build the raw parameter mapping from decoded query-string pairs.

    ``points[gte]=2`` nests as ``{"points": {"gte": "2"}}`` and a key that
    repeats collects its values into a list.
    """
    params: RawQueryParameters = {}
    for key, value in items:
        match = _BRACKET_KEY.match(key)
        if match:
            field, op = match.groups()
            target = params.get(field)
            if not isinstance(target, dict):
                # A bracketed key wins over an earlier plain value
                target = {}
                params[field] = target
            _collect(target, op, value)
        else:
            if isinstance(params.get(key), dict):
                continue
            _collect(params, key, value)
    return params


def _collect(target: Dict[str, Any], key: str, value: str) -> None:
    if key not in target:
        target[key] = value
    elif isinstance(target[key], list):
        target[key].append(value)
    else:
        target[key] = [target[key], value]


def rewrite_operators(filter_expr: FilterExpression, mode: RewriteMode = RewriteMode.TEXT) -> FilterExpression:
    """Prefix comparison operator names with the store's operator marker."""
    if RewriteMode(mode) == RewriteMode.TEXT:
        serialized = json.dumps(filter_expr, ensure_ascii=False)
        serialized = _OPERATOR_PATTERN.sub(lambda m: OPERATOR_MARKER + m.group(1), serialized)
        return json.loads(serialized)

    rewritten: FilterExpression = {}
    for field, value in filter_expr.items():
        if isinstance(value, dict):
            value = {
                (OPERATOR_MARKER + op if op in COMPARISON_OPERATORS else op): operand
                for op, operand in value.items()
            }
        rewritten[field] = value
    return rewritten


def coerce_value(value: Any, kind: type) -> Any:
    """Convert a query-string value to ``kind``; unparseable values pass through."""
    if isinstance(value, list):
        return [coerce_value(v, kind) for v in value]
    if not isinstance(value, str):
        return value
    if kind is int:
        if not _INTEGER.match(value.strip()):
            return value
        try:
            return int(value)
        except ValueError:
            # beyond the interpreter's int-string digit limit
            return value
    if kind is datetime:
        try:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return value
        return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)
    return value


def coerce_filter_values(filter_expr: FilterExpression, field_types: Mapping[str, type]) -> FilterExpression:
    coerced: FilterExpression = {}
    for field, value in filter_expr.items():
        kind = field_types.get(field)
        if kind is None:
            coerced[field] = value
        elif isinstance(value, dict):
            coerced[field] = {op: coerce_value(operand, kind) for op, operand in value.items()}
        else:
            coerced[field] = coerce_value(value, kind)
    return coerced


def solved_predicate(solved_flag: Optional[str], solved_answer_ids: Iterable[str]) -> Optional[Dict[str, Any]]:
    """Identifier restriction for ``solved=true|false``; anything else yields None."""
    ids = list(solved_answer_ids)
    if solved_flag == "true":
        return {"$in": ids}
    if solved_flag == "false":
        return {"$nin": ids}
    return None


def translate(
    raw_params: RawQueryParameters,
    reserved_names: Iterable[str] = RESERVED_PARAMETERS,
    solved_answer_ids: Optional[Iterable[str]] = None,
    solved_flag: Optional[str] = None,
    *,
    mode: RewriteMode = RewriteMode.TEXT,
    field_types: Optional[Mapping[str, type]] = None,
) -> FilterExpression:
    """
    Turn raw query parameters into a filter the store adapter accepts.

    Malformed operator values are not rejected here; the store is the one
    that refuses filters it cannot run.
    """
    reserved = set(reserved_names)
    filter_expr: FilterExpression = {k: v for k, v in raw_params.items() if k not in reserved}

    filter_expr = rewrite_operators(filter_expr, mode)

    if field_types:
        filter_expr = coerce_filter_values(filter_expr, field_types)

    predicate = solved_predicate(solved_flag, solved_answer_ids or ())
    if predicate is not None:
        if "_id" in filter_expr:
            existing = filter_expr.pop("_id")
            filter_expr["$and"] = [{"_id": existing}, {"_id": predicate}]
        else:
            filter_expr["_id"] = predicate

    logger.debug(f"Translated query {raw_params} -> {filter_expr}")
    return filter_expr
