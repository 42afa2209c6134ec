"""Surface calls needing manager attention: red flags and commendations."""

from collections.abc import Iterable

from .constants import RED_FLAG_REASON
from .models import AnalysisResult
from .reports.models import Commendation, RedFlag, Thresholds
from .scoring import calculate_qa_scores


def find_red_flags(
    records: Iterable[AnalysisResult],
    *,
    thresholds: Thresholds | None = None,
) -> list[RedFlag]:
    """Find calls with a behavior complaint corroborated by a low QA score.

    A detected complaint only flags the call when the total QA score is below
    ``thresholds.red_flag_max_score`` (50 by default).

    Args:
        records: Analyses to scan, in display order.
        thresholds: Optional custom thresholds.

    Returns:
        list[RedFlag]: Flags in input order.
    """
    thresholds = thresholds or Thresholds()
    flags: list[RedFlag] = []

    for record in records:
        complaint = record.agent_behavior_complaint
        if not complaint.detected:
            continue
        if calculate_qa_scores(record).total.score >= thresholds.red_flag_max_score:
            continue
        flags.append(
            RedFlag(
                call_id=record.call_details.call_id,
                agent_name=record.call_details.agent_name,
                reason=RED_FLAG_REASON,
                quote=complaint.customer_complaint_quote,
            )
        )

    return flags


def find_commendations(
    records: Iterable[AnalysisResult],
    *,
    thresholds: Thresholds | None = None,
) -> list[Commendation]:
    """Find praised calls that also scored above the commendation threshold.

    Requires the detection flag, a non-empty praise quote, and a total QA score
    above ``thresholds.commendation_min_score`` (90 by default).

    Args:
        records: Analyses to scan, in display order.
        thresholds: Optional custom thresholds.

    Returns:
        list[Commendation]: Commendations in input order.
    """
    thresholds = thresholds or Thresholds()
    commendations: list[Commendation] = []

    for record in records:
        praise = record.agent_commendation
        if not praise.detected or not praise.customer_praise_quote:
            continue
        if calculate_qa_scores(record).total.score <= thresholds.commendation_min_score:
            continue
        commendations.append(
            Commendation(
                call_id=record.call_details.call_id,
                agent_name=record.call_details.agent_name,
                quote=praise.customer_praise_quote,
            )
        )

    return commendations
