# Query building for list endpoints: filter translation, selection, pagination

from question_bank.query.pagination import PageResult, PageWindow, paginate
from question_bank.query.selection import parse_select, parse_sort
from question_bank.query.translator import (
    COMPARISON_OPERATORS, RESERVED_PARAMETERS, RewriteMode,
    parse_query_params, translate
)

__all__ = [
    "PageResult", "PageWindow", "paginate",
    "parse_select", "parse_sort",
    "COMPARISON_OPERATORS", "RESERVED_PARAMETERS", "RewriteMode",
    "parse_query_params", "translate",
]
