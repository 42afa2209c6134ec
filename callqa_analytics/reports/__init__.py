"""Report value objects and formatting.

- models.py: derived value objects (Thresholds, QaScoreBreakdown, DashboardMetrics, ...)
- formatters.py: date formatting and the plain-text call report

Formatters depend on the scoring helpers, so import them from
``callqa_analytics.reports.formatters`` directly.
"""

from .models import (
    AgentPerformanceSummary,
    AnalyticsSummary,
    CallCount,
    CallTypeCount,
    Commendation,
    DashboardMetrics,
    DriverBreakdown,
    DriverMaxValues,
    DriverMetric,
    QaScoreBreakdown,
    ReasonCount,
    RedFlag,
    ScoreEntry,
    SentimentSplit,
    Thresholds,
    TroubleshootingScore,
)

__all__ = [
    "AgentPerformanceSummary",
    "AnalyticsSummary",
    "CallCount",
    "CallTypeCount",
    "Commendation",
    "DashboardMetrics",
    "DriverBreakdown",
    "DriverMaxValues",
    "DriverMetric",
    "QaScoreBreakdown",
    "ReasonCount",
    "RedFlag",
    "ScoreEntry",
    "SentimentSplit",
    "Thresholds",
    "TroubleshootingScore",
]
