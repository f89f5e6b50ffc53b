"""
Page window and next/prev descriptors for list endpoints.

``page`` and ``limit`` are parsed leniently: a leading integer is taken
("3abc" -> 3), missing, unparseable or zero input falls back to the default
and negative numbers are clamped to 1, so no input can crash the listing.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 25

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


@dataclass(frozen=True)
class PageWindow:
    start_index: int
    end_index: int


@dataclass
class PageResult:
    window: PageWindow
    page: int
    limit: int
    descriptor: Dict[str, Dict[str, int]] = field(default_factory=dict)

    @property
    def skip(self) -> int:
        return self.window.start_index


def parse_page_number(value: Optional[Any], default: int) -> int:
    if value is None:
        return default
    match = _LEADING_INT.match(str(value))
    if not match:
        return default
    number = int(match.group(1))
    if number == 0:
        return default
    return max(number, 1)


def page_window(page: int, limit: int) -> PageWindow:
    return PageWindow(start_index=(page - 1) * limit, end_index=page * limit)


def paginate(
    page: Optional[Any],
    limit: Optional[Any],
    total: int,
    default_limit: int = DEFAULT_LIMIT,
) -> PageResult:
    effective_page = parse_page_number(page, DEFAULT_PAGE)
    effective_limit = parse_page_number(limit, default_limit)
    window = page_window(effective_page, effective_limit)

    descriptor: Dict[str, Dict[str, int]] = {}
    if window.end_index < total:
        descriptor["next"] = {"page": effective_page + 1, "limit": effective_limit}
    if window.start_index > 0:
        descriptor["prev"] = {"page": effective_page - 1, "limit": effective_limit}

    return PageResult(window=window, page=effective_page, limit=effective_limit, descriptor=descriptor)
