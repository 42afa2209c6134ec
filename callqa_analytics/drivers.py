"""Call-driver breakdown: per call type volume, duration, pillar and outcome metrics."""

from collections.abc import Sequence
from dataclasses import dataclass

from loguru import logger

from .constants import DriverSortKey, LogMessage, SortDirection
from .models import AnalysisResult
from .reports.models import DriverBreakdown, DriverMaxValues, DriverMetric
from .scoring import parse_duration_to_seconds


@dataclass
class _DriverTotals:
    count: int = 0
    duration_seconds: int = 0
    procedure_flow_score: float = 0.0
    ownership_score: float = 0.0
    empathy_score: float = 0.0
    verification_score: float = 0.0
    resolved_count: int = 0
    repeat_call_count: int = 0

    def add(self, record: AnalysisResult) -> None:
        self.count += 1
        self.duration_seconds += parse_duration_to_seconds(
            record.call_details.call_duration
        )
        # Each pillar only counts where the call's campaign measures it
        if record.procedure_flow is not None:
            self.procedure_flow_score += record.procedure_flow.adherence_score
        if record.ownership is not None:
            self.ownership_score += record.ownership.ownership_score
        if record.account_verification is not None:
            self.verification_score += record.account_verification.verification_score
        self.empathy_score += record.empathy.empathy_score
        if record.resolution.issue_resolved:
            self.resolved_count += 1
        if record.is_repeat_call:
            self.repeat_call_count += 1

    def to_metric(self, *, driver: str, total_calls: int) -> DriverMetric:
        return DriverMetric(
            driver=driver,
            count=self.count,
            percent_of_total=self.count / total_calls * 100,
            avg_duration=self.duration_seconds / self.count,
            avg_procedure_flow_score=self.procedure_flow_score / self.count,
            avg_ownership_score=self.ownership_score / self.count,
            avg_empathy_score=self.empathy_score / self.count,
            avg_verification_score=self.verification_score / self.count,
            resolution_rate=self.resolved_count / self.count * 100,
            repeat_percent=self.repeat_call_count / self.count * 100,
        )


def build_driver_metrics(records: Sequence[AnalysisResult]) -> DriverBreakdown:
    """Group calls by exact call type and compute one metric row per group.

    Rows come out in first-seen order of their call type. ``max_values`` holds the
    largest percent-of-total and average duration across rows (0 with no rows),
    used to scale relative bars.

    Args:
        records: Analyses to group. Not modified.

    Returns:
        DriverBreakdown: Metric rows and column maxima.
    """
    if not records:
        return DriverBreakdown()

    logger.debug(LogMessage.BUILDING_DRIVERS.format(len(records)))

    totals_by_driver: dict[str, _DriverTotals] = {}
    for record in records:
        totals_by_driver.setdefault(record.call_type, _DriverTotals()).add(record)

    total_calls = len(records)
    data = [
        totals.to_metric(driver=driver, total_calls=total_calls)
        for driver, totals in totals_by_driver.items()
    ]
    max_values = DriverMaxValues(
        percent_of_total=max((row.percent_of_total for row in data), default=0.0),
        avg_duration=max((row.avg_duration for row in data), default=0.0),
    )
    return DriverBreakdown(data=data, max_values=max_values)


def sort_driver_metrics(
    rows: Sequence[DriverMetric],
    *,
    key: DriverSortKey | str = DriverSortKey.COUNT,
    direction: SortDirection = SortDirection.DESCENDING,
) -> list[DriverMetric]:
    """Return driver rows sorted by one column.

    Numeric columns compare numerically and ``driver`` compares as a string.
    The sort is stable in both directions.

    Raises:
        ValueError: If ``key`` is not a driver table column.
    """
    column = DriverSortKey(key)
    return sorted(
        rows,
        key=lambda row: getattr(row, column),
        reverse=direction == SortDirection.DESCENDING,
    )
