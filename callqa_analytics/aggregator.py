"""Fold a collection of call analyses into dashboard metrics."""

from collections import Counter
from collections.abc import Sequence

from loguru import logger

from .constants import UNKNOWN_ROOT_CAUSE, LogMessage
from .models import AnalysisResult
from .reports.models import (
    AgentPerformanceSummary,
    AnalyticsSummary,
    CallCount,
    CallTypeCount,
    DashboardMetrics,
    ReasonCount,
    SentimentSplit,
)
from .scoring import (
    calculate_qa_scores,
    format_seconds_as_mmss,
    parse_duration_to_seconds,
    round_half_up,
)


def normalize_reason(reason: str) -> str:
    """Trim a reason category and drop one trailing period."""
    return reason.strip().removesuffix(".")


def rank_counts(counts: Counter) -> list[tuple[str, int]]:
    """Sort count entries by descending count.

    Ties keep first-seen order: Counter preserves insertion order and the sort
    is stable.
    """
    return sorted(counts.items(), key=lambda entry: entry[1], reverse=True)


def _percent(part: int, whole: int) -> int:
    return round_half_up(part / whole * 100) if whole > 0 else 0


def _agent_leaderboard(
    scores_by_agent: dict[str, list[float]],
) -> list[AgentPerformanceSummary]:
    leaderboard = [
        AgentPerformanceSummary(
            name=name,
            avg_qa_score=sum(scores) / len(scores),
            call_count=len(scores),
        )
        for name, scores in scores_by_agent.items()
    ]
    leaderboard.sort(key=lambda agent: agent.avg_qa_score, reverse=True)
    return leaderboard


def generate_dashboard_metrics(records: Sequence[AnalysisResult]) -> DashboardMetrics:
    """Aggregate call analyses into the dashboard summary.

    Computes totals, resolution counts, per-pillar averages, the sentiment split
    (from raw mention counts, so long calls are not under-weighted), call type
    ranking, agent leaderboard and the unresolved-reason histogram. The same
    histogram is exposed as ``dissatisfaction_reason_counts`` for banking views.

    Ties in every ranking are broken by first occurrence in ``records``.

    Args:
        records: Analyses to aggregate. Not modified.

    Returns:
        DashboardMetrics: Fresh summary; an all-zero structure when ``records`` is empty.
    """
    if not records:
        return DashboardMetrics()

    logger.debug(LogMessage.AGGREGATING.format(len(records)))

    total_qa_score = 0.0
    total_procedure_flow_score = 0.0
    total_ownership_score = 0.0
    total_empathy_score = 0.0
    total_verification_score = 0.0
    total_duration_seconds = 0
    resolved_count = 0
    positive_mentions = 0
    negative_mentions = 0
    call_type_counts: Counter = Counter()
    scores_by_agent: dict[str, list[float]] = {}
    unresolved_root_causes: Counter = Counter()
    unresolved_reasons: Counter = Counter()

    for record in records:
        scores = calculate_qa_scores(record)
        total_qa_score += scores.total.score
        total_procedure_flow_score += scores.procedure_flow.score
        total_ownership_score += scores.ownership.score
        total_empathy_score += scores.empathy.score
        if record.account_verification is not None:
            total_verification_score += record.account_verification.verification_score

        positive_mentions += record.customer_sentiment.positive_count
        negative_mentions += record.customer_sentiment.negative_count
        call_type_counts[record.call_type] += 1
        total_duration_seconds += parse_duration_to_seconds(
            record.call_details.call_duration
        )
        scores_by_agent.setdefault(record.call_details.agent_name, []).append(
            scores.total.score
        )

        if record.resolution.issue_resolved:
            resolved_count += 1
            continue

        unresolved_root_causes[record.root_cause or UNKNOWN_ROOT_CAUSE] += 1
        reason = normalize_reason(record.resolution.reason_category)
        if reason:
            unresolved_reasons[reason] += 1

    total_calls = len(records)
    call_types = [
        CallTypeCount(label=label, value=count)
        for label, count in rank_counts(call_type_counts)
    ]
    ranked_root_causes = rank_counts(unresolved_root_causes)
    top_root_cause = ranked_root_causes[0][0] if ranked_root_causes else None
    reason_counts = [
        ReasonCount(reason=reason, count=count)
        for reason, count in rank_counts(unresolved_reasons)
    ]
    total_mentions = positive_mentions + negative_mentions

    summary = AnalyticsSummary(
        total_calls=total_calls,
        resolution_rate=resolved_count / total_calls * 100,
        avg_qa_score=total_qa_score / total_calls,
        avg_procedure_flow_score=total_procedure_flow_score / total_calls,
        avg_ownership_score=total_ownership_score / total_calls,
        avg_empathy_score=total_empathy_score / total_calls,
        avg_verification_score=total_verification_score / total_calls,
        top_call_driver=call_types[0] if call_types else None,
        agent_performance=_agent_leaderboard(scores_by_agent),
        top_unresolved_root_cause=top_root_cause,
        unresolved_reason_counts=reason_counts,
        top_dissatisfaction_reason=top_root_cause,
        dissatisfaction_reason_counts=list(reason_counts),
    )

    return DashboardMetrics(
        total_calls=total_calls,
        avg_duration=format_seconds_as_mmss(total_duration_seconds / total_calls),
        avg_qa_score=summary.avg_qa_score,
        avg_procedure_flow_score=summary.avg_procedure_flow_score,
        avg_ownership_score=summary.avg_ownership_score,
        avg_empathy_score=summary.avg_empathy_score,
        avg_verification_score=summary.avg_verification_score,
        resolved=CallCount(count=resolved_count),
        unresolved=CallCount(count=total_calls - resolved_count),
        sentiment=SentimentSplit(
            positive=positive_mentions,
            negative=negative_mentions,
            positive_percent=_percent(positive_mentions, total_mentions),
            negative_percent=_percent(negative_mentions, total_mentions),
        ),
        call_types=call_types,
        analytics_summary=summary,
    )
