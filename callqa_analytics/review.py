"""Filtering, sorting and paging for the Search & Review and Data Feed views."""

import math
import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, replace
from datetime import date, datetime, time, timezone
from typing import Any

from .aggregator import normalize_reason
from .constants import (
    ALL_CALL_TYPES,
    FEED_PAGE_SIZE,
    FEED_SEARCH_FIELDS,
    FIRST_PAGE,
    ReviewField,
    SortDirection,
)
from .models import AnalysisResult, ResultItem
from .scoring import calculate_qa_scores, parse_duration_to_seconds

QA_SCORES_SEGMENT = "qa_scores"
DURATION_SEGMENT = "call_duration"
DATE_TIME_SEGMENT = "call_date_time"
END_OF_DAY = time(23, 59, 59, 999000)

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")

Record = ResultItem | AnalysisResult


def _result_of(item: Record) -> AnalysisResult:
    return item.result if isinstance(item, ResultItem) else item


def parse_call_datetime(value: str | None) -> datetime | None:
    """Parse an ISO 8601 call timestamp; naive values are taken as UTC.

    Returns:
        datetime | None: Timezone-aware timestamp, or None if unparseable.
    """
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except (ValueError, AttributeError):
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def safe_get_time(value: str | None) -> int:
    """Epoch milliseconds of a timestamp, or 0 when it cannot be parsed."""
    parsed = parse_call_datetime(value)
    if parsed is None:
        return 0
    return int(parsed.timestamp() * 1000)


def _as_date(value: date | str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(value)


def filter_by_date_range(
    items: Iterable[Record],
    start: date | str | None = None,
    end: date | str | None = None,
) -> list[Record]:
    """Keep calls whose timestamp falls within [start, end], inclusive, in UTC.

    ``start`` means 00:00:00.000 UTC of that day and ``end`` 23:59:59.999 UTC.
    While either bound is set, calls with unparseable timestamps are dropped.

    Args:
        items: Result items or bare analyses.
        start: First day to include, as a date or ``YYYY-MM-DD``.
        end: Last day to include, as a date or ``YYYY-MM-DD``.

    Returns:
        list: Matching items in input order.

    Raises:
        ValueError: If a bound is a string that is not an ISO date.
    """
    if not start and not end:
        return list(items)

    lower = (
        datetime.combine(_as_date(start), time.min, tzinfo=timezone.utc)
        if start
        else None
    )
    upper = (
        datetime.combine(_as_date(end), END_OF_DAY, tzinfo=timezone.utc)
        if end
        else None
    )

    filtered = []
    for item in items:
        call_time = parse_call_datetime(_result_of(item).call_details.call_date_time)
        if call_time is None:
            continue
        if lower is not None and call_time < lower:
            continue
        if upper is not None and call_time > upper:
            continue
        filtered.append(item)
    return filtered


def _snake_case(segment: str) -> str:
    return _CAMEL_BOUNDARY.sub("_", segment).lower()


def get_nested_value(obj: Any, path: str) -> Any:
    """Resolve a dotted path such as ``result.callDetails.callDateTime``.

    Segments may be snake_case or camelCase. A leading ``qa_scores`` segment
    resolves against the call's computed QA score breakdown.

    Returns:
        Any: The value, or None when any segment is missing.
    """
    segments = path.split(".")
    if _snake_case(segments[0]) == QA_SCORES_SEGMENT and isinstance(
        obj, (ResultItem, AnalysisResult)
    ):
        obj = calculate_qa_scores(_result_of(obj))
        segments = segments[1:]

    value = obj
    for segment in segments:
        if value is None:
            return None
        if isinstance(value, dict):
            # Plain dicts may be keyed either way
            value = value.get(segment, value.get(_snake_case(segment)))
        else:
            value = getattr(value, _snake_case(segment), None)
    return value


def filter_by_text(
    items: Iterable[Record],
    query: str,
    fields: Sequence[str] = FEED_SEARCH_FIELDS,
) -> list[Record]:
    """Keep items where any of ``fields`` contains ``query``, ignoring case.

    An empty query matches everything.
    """
    if not query:
        return list(items)

    needle = query.lower()
    filtered = []
    for item in items:
        for path in fields:
            value = get_nested_value(item, path)
            if value is not None and needle in str(value).lower():
                filtered.append(item)
                break
    return filtered


def filter_by_call_type(items: Iterable[Record], call_type: str | None) -> list[Record]:
    """Keep calls with exactly this call type; ``"all"`` or empty keeps every call."""
    if not call_type or call_type == ALL_CALL_TYPES:
        return list(items)
    return [item for item in items if _result_of(item).call_type == call_type]


def filter_by_unresolved_reason(items: Iterable[Record], reason: str) -> list[Record]:
    """Unresolved calls behind one bucket of the unresolved-reason histogram.

    Categories are compared after the same normalisation the histogram applies,
    so ``"System Outage."`` falls into the ``"System Outage"`` bucket.
    """
    bucket = normalize_reason(reason)
    return [
        item
        for item in items
        if not _result_of(item).resolution.issue_resolved
        and normalize_reason(_result_of(item).resolution.reason_category) == bucket
    ]


def search_calls(
    items: Iterable[Record],
    *,
    call_id: str = "",
    agent_name: str = "",
    start: date | str | None = None,
    end: date | str | None = None,
) -> list[Record]:
    """Search & Review filters: call ID, agent name and date range, all required to match."""
    matched = filter_by_text(items, call_id, fields=(ReviewField.CALL_ID,))
    matched = filter_by_text(matched, agent_name, fields=(ReviewField.AGENT_NAME,))
    return filter_by_date_range(matched, start, end)


def _sort_value(item: Any, key: str) -> Any:
    value = get_nested_value(item, key)
    last_segment = _snake_case(key.rsplit(".", 1)[-1])
    if last_segment == DURATION_SEGMENT:
        return parse_duration_to_seconds(value)
    if last_segment == DATE_TIME_SEGMENT:
        return safe_get_time(value)
    return value


def sort_by(
    items: Iterable[Any],
    key: str,
    direction: SortDirection = SortDirection.ASCENDING,
) -> list[Any]:
    """Stable sort by a dotted-path key.

    Durations compare as seconds and call timestamps as epoch milliseconds
    (unparseable ones as 0). Missing values sort first when ascending.
    """
    return sorted(
        items,
        key=lambda item: _sort_key(_sort_value(item, key)),
        reverse=direction == SortDirection.DESCENDING,
    )


def _sort_key(value: Any) -> tuple[bool, Any]:
    return (value is not None, value)


@dataclass(frozen=True)
class SortConfig:
    """Current sort column and direction of a table."""

    key: str
    direction: SortDirection = SortDirection.ASCENDING

    def request(self, key: str) -> "SortConfig":
        """Sort config after a header click on ``key``.

        Clicking the column that is currently ascending flips it to descending;
        any other click sorts ascending.
        """
        if key == self.key and self.direction == SortDirection.ASCENDING:
            return replace(self, direction=SortDirection.DESCENDING)
        return SortConfig(key=key, direction=SortDirection.ASCENDING)

    def apply(self, items: Iterable[Any]) -> list[Any]:
        return sort_by(items, self.key, self.direction)


@dataclass
class DataFeed:
    """Paged, text-filtered feed of analysed calls.

    Attributes:
        query: Current free-text filter.
        page: Current 1-based page.
        page_size: Items per page.
    """

    query: str = ""
    page: int = FIRST_PAGE
    page_size: int = FEED_PAGE_SIZE

    def set_query(self, query: str) -> None:
        """Change the filter; always returns to the first page."""
        self.query = query
        self.page = FIRST_PAGE

    def filter(self, items: Iterable[Record]) -> list[Record]:
        return filter_by_text(items, self.query)

    def total_pages(self, items: Sequence[Record]) -> int:
        return math.ceil(len(self.filter(items)) / self.page_size)

    def go_to_page(self, page: int, items: Sequence[Record]) -> None:
        """Move to ``page``, clamped to the pages available."""
        self.page = max(FIRST_PAGE, min(page, self.total_pages(items)))

    def page_items(self, items: Sequence[Record]) -> list[Record]:
        filtered = self.filter(items)
        start_index = (self.page - 1) * self.page_size
        return filtered[start_index : start_index + self.page_size]
