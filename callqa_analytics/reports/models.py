"""Derived value objects produced by the analytics engine."""

from dataclasses import asdict, dataclass, field
from typing import Any

from ..constants import (
    DEFAULT_COMMENDATION_MIN_SCORE,
    DEFAULT_RED_FLAG_MAX_SCORE,
    EMPTY_DURATION,
    SCORE_POSSIBLE,
    Campaign,
)


@dataclass(frozen=True)
class Thresholds:
    """Configurable thresholds for call classification."""

    red_flag_max_score: float = DEFAULT_RED_FLAG_MAX_SCORE  # strictly below
    commendation_min_score: float = DEFAULT_COMMENDATION_MIN_SCORE  # strictly above


@dataclass
class ScoreEntry:
    """One scored pillar out of a fixed maximum."""

    score: float
    possible: int = SCORE_POSSIBLE


@dataclass
class QaScoreBreakdown:
    """Per-call pillar scores and blended total.

    For Banking calls the procedure_flow slot carries the verification score so
    tables can render every campaign with the same columns.
    """

    procedure_flow: ScoreEntry
    ownership: ScoreEntry
    empathy: ScoreEntry
    total: ScoreEntry

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class AgentPerformanceSummary:
    """Leaderboard row for one agent."""

    name: str
    avg_qa_score: float
    call_count: int


@dataclass
class ReasonCount:
    reason: str
    count: int


@dataclass
class CallTypeCount:
    label: str
    value: int


@dataclass
class CallCount:
    count: int = 0


@dataclass
class SentimentSplit:
    """Customer sentiment across calls, from raw mention counts.

    The two percentages are rounded independently and need not sum to 100.
    """

    positive: int = 0
    negative: int = 0
    positive_percent: int = 0
    negative_percent: int = 0


@dataclass
class AnalyticsSummary:
    """Aggregate view over a collection of calls."""

    total_calls: int = 0
    resolution_rate: float = 0.0
    avg_qa_score: float = 0.0
    avg_procedure_flow_score: float = 0.0
    avg_ownership_score: float = 0.0
    avg_empathy_score: float = 0.0
    avg_verification_score: float = 0.0
    top_call_driver: CallTypeCount | None = None
    agent_performance: list[AgentPerformanceSummary] = field(default_factory=list)
    top_unresolved_root_cause: str | None = None
    unresolved_reason_counts: list[ReasonCount] = field(default_factory=list)
    top_dissatisfaction_reason: str | None = None
    dissatisfaction_reason_counts: list[ReasonCount] = field(default_factory=list)


@dataclass
class DashboardMetrics:
    """Everything the dashboard shows for one filtered collection of calls."""

    total_calls: int = 0
    avg_duration: str = EMPTY_DURATION
    avg_qa_score: float = 0.0
    avg_procedure_flow_score: float = 0.0
    avg_ownership_score: float = 0.0
    avg_empathy_score: float = 0.0
    avg_verification_score: float = 0.0
    resolved: CallCount = field(default_factory=CallCount)
    unresolved: CallCount = field(default_factory=CallCount)
    sentiment: SentimentSplit = field(default_factory=SentimentSplit)
    call_types: list[CallTypeCount] = field(default_factory=list)
    analytics_summary: AnalyticsSummary = field(default_factory=AnalyticsSummary)

    def reason_counts(self) -> list[ReasonCount]:
        return self.analytics_summary.unresolved_reason_counts

    @staticmethod
    def reason_label(campaign: Campaign | None) -> str:
        """Heading for the unresolved-reason histogram in the given campaign."""
        if campaign == Campaign.BANKING:
            return "Dissatisfaction reasons"
        return "Unresolved reasons"

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class DriverMetric:
    """One row of the call-driver table; durations are in seconds."""

    driver: str
    count: int
    percent_of_total: float
    avg_duration: float
    avg_procedure_flow_score: float
    avg_ownership_score: float
    avg_empathy_score: float
    avg_verification_score: float
    resolution_rate: float
    repeat_percent: float


@dataclass
class DriverMaxValues:
    """Column maxima used to scale relative bars."""

    percent_of_total: float = 0.0
    avg_duration: float = 0.0


@dataclass
class DriverBreakdown:
    data: list[DriverMetric] = field(default_factory=list)
    max_values: DriverMaxValues = field(default_factory=DriverMaxValues)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class RedFlag:
    """Call surfaced for manager review."""

    call_id: str
    agent_name: str
    reason: str
    quote: str | None = None


@dataclass
class Commendation:
    """Call surfaced as an example of excellent service."""

    call_id: str
    agent_name: str
    quote: str | None


@dataclass
class TroubleshootingScore:
    """Reviewer-confirmed adherence to the suggested troubleshooting flow."""

    followed: int
    applicable: int
    percentage: float | None  # None when no step is applicable
