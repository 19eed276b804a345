"""Translates list query parameters into document store arguments.

Malformed input never raises: it degrades to match-all, no sort, no
projection or the default paging value.
"""

import json
from dataclasses import dataclass, field
from typing import Any

from taskboard.domain.identifiers import to_object_id
from taskboard.domain.repositories.document_collection import Document, SortSpec

ID_OPERATORS = ("$eq", "$ne", "$in", "$nin")
LOGICAL_OPERATORS = ("$and", "$or", "$nor")


@dataclass
class ListQuery:
    """Store arguments for a list request."""

    filter: Document = field(default_factory=dict)
    sort: SortSpec = field(default_factory=list)
    projection: Document | None = None
    skip: int = 0
    limit: int = 0
    count: bool = False

    @classmethod
    def parse(
        cls,
        where: str | None = None,
        sort: str | None = None,
        select: str | None = None,
        skip: str | None = None,
        limit: str | None = None,
        count: str | None = None,
        default_limit: int = 0,
        max_limit: int | None = None,
    ) -> "ListQuery":
        return cls(
            filter=parse_where(where),
            sort=parse_sort(sort),
            projection=parse_select(select),
            skip=parse_skip(skip),
            limit=parse_limit(limit, default_limit, max_limit),
            count=parse_count(count),
        )


def _load_json(raw: str | None) -> Any:
    if raw is None or not raw.strip():
        return None
    try:
        return json.loads(raw)
    except ValueError:
        return None


def _coerce_id(value: Any) -> Any:
    if isinstance(value, str):
        oid = to_object_id(value)
        return oid if oid is not None else value
    if isinstance(value, list):
        return [_coerce_id(item) for item in value]
    if isinstance(value, dict):
        return {op: _coerce_id(operand) if op in ID_OPERATORS else operand for op, operand in value.items()}
    return value


def _coerce_filter(filter: Document) -> Document:
    coerced: Document = {}
    for key, value in filter.items():
        if key == "_id":
            coerced[key] = _coerce_id(value)
        elif key in LOGICAL_OPERATORS and isinstance(value, list):
            coerced[key] = [_coerce_filter(clause) if isinstance(clause, dict) else clause for clause in value]
        else:
            coerced[key] = value
    return coerced


def parse_where(raw: str | None) -> Document:
    """Parse a JSON filter. Anything but a JSON object matches everything.

    24-hex strings compared against ``_id`` are converted to ObjectId.
    """
    filter = _load_json(raw)
    if not isinstance(filter, dict):
        return {}
    return _coerce_filter(filter)


def _direction(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int | float) and value in (1, -1):
        return int(value)
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("1", "asc", "ascending"):
            return 1
        if lowered in ("-1", "desc", "descending"):
            return -1
    return None


def parse_sort(raw: str | None) -> SortSpec:
    """Parse ``{"name": 1, "deadline": -1}`` or ``"name,-deadline"``."""
    if raw is None or not raw.strip():
        return []
    if raw.lstrip().startswith("{"):
        parsed = _load_json(raw)
        if not isinstance(parsed, dict):
            return []
        sort: SortSpec = []
        for key, value in parsed.items():
            direction = _direction(value)
            if direction is None:
                return []
            sort.append((key, direction))
        return sort
    sort = []
    for token in raw.replace(",", " ").split():
        if token.startswith("-"):
            sort.append((token[1:], -1))
        else:
            sort.append((token.lstrip("+"), 1))
    return [(key, direction) for key, direction in sort if key]


def _inclusion(value: Any) -> int | None:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int | float) and value in (0, 1):
        return int(value)
    return None


def parse_select(raw: str | None) -> Document | None:
    """Parse ``{"_id": 0, "name": 1}`` or ``"name email"`` / ``"-pendingTasks"``.

    Returns None (no projection) when the selection is empty, malformed or mixes
    inclusions and exclusions on fields other than ``_id``.
    """
    if raw is None or not raw.strip():
        return None
    projection: Document = {}
    if raw.lstrip().startswith("{"):
        parsed = _load_json(raw)
        if not isinstance(parsed, dict):
            return None
        for key, value in parsed.items():
            flag = _inclusion(value)
            if flag is None:
                return None
            projection[key] = flag
    else:
        for token in raw.replace(",", " ").split():
            key = token.lstrip("+-")
            if key:
                projection[key] = 0 if token.startswith("-") else 1
    modes = {flag for key, flag in projection.items() if key != "_id"}
    if not projection or len(modes) > 1:
        return None
    return projection


def parse_skip(raw: str | None) -> int:
    try:
        return max(0, int(raw)) if raw is not None else 0
    except ValueError:
        return 0


def parse_limit(raw: str | None, default: int = 0, maximum: int | None = None) -> int:
    """Parse a non-negative limit clamped to ``maximum``.

    ``0`` means unbounded, except when a maximum applies.
    """
    try:
        limit = max(0, int(raw)) if raw is not None and raw.strip() else default
    except ValueError:
        limit = default
    if maximum is not None:
        limit = min(limit, maximum) if limit else maximum
    return limit


def parse_count(raw: str | None) -> bool:
    return raw is not None and raw.strip().lower() == "true"
