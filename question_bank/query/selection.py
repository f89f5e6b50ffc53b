"""Comma-separated ``select`` and ``sort`` parameters as store selectors."""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple

ASCENDING = 1
DESCENDING = -1

DEFAULT_SORT = "-createdAt"

SortSpec = List[Tuple[str, int]]


def _tokens(value: str) -> List[str]:
    # "a,b" and the space-separated "a b" form both split to fields
    return [t for t in value.replace(",", " ").split() if t]


def parse_select(select: Optional[str]) -> Optional[Dict[str, int]]:
    """``"questionText,-options"`` -> ``{"questionText": 1, "options": 0}``."""
    if not select:
        return None
    projection: Dict[str, int] = {}
    for token in _tokens(select):
        if token.startswith("-"):
            projection[token[1:]] = 0
        else:
            projection[token.lstrip("+")] = 1
    return projection or None


def parse_sort(sort: Optional[str]) -> SortSpec:
    """``"-createdAt,points"`` -> ``[("createdAt", -1), ("points", 1)]``."""
    spec: SortSpec = []
    for token in _tokens(sort or DEFAULT_SORT):
        if token.startswith("-"):
            spec.append((token[1:], DESCENDING))
        else:
            spec.append((token.lstrip("+"), ASCENDING))
    return spec or parse_sort(DEFAULT_SORT)
