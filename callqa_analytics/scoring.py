"""Per-call scoring helpers."""

import math
import re
from collections.abc import Mapping, Sequence

from .constants import EMPTY_DURATION, SECONDS_PER_MINUTE, TroubleshootingStatus
from .models import (
    AnalysisResult,
    BankingPillars,
    InternetCablePillars,
)
from .reports.models import QaScoreBreakdown, ScoreEntry, TroubleshootingScore

DURATION_PATTERN = re.compile(r"[0-9]+:[0-9]+")


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up, as dashboards display it."""
    return math.floor(value + 0.5)


def parse_duration_to_seconds(duration: str | None) -> int:
    """Convert a ``MM:SS`` duration to seconds.

    Anything not shaped like ``digits:digits`` counts as zero seconds. The
    minutes field is unbounded, so ``"65:00"`` is 3900.

    Args:
        duration: Duration string from the call details.

    Returns:
        int: Duration in seconds, 0 if the value is missing or malformed.
    """
    if not duration or not DURATION_PATTERN.fullmatch(duration):
        return 0
    minutes, seconds = duration.split(":")
    return int(minutes) * SECONDS_PER_MINUTE + int(seconds)


def format_seconds_as_mmss(seconds: float) -> str:
    """Format a (possibly fractional) number of seconds as ``MM:SS``.

    Seconds are rounded before splitting, so 59.6 becomes ``"01:00"``.
    """
    if seconds <= 0:
        return EMPTY_DURATION
    minutes, remainder = divmod(round_half_up(seconds), SECONDS_PER_MINUTE)
    return f"{minutes:02d}:{remainder:02d}"


def calculate_qa_scores(result: AnalysisResult) -> QaScoreBreakdown:
    """Derive the QA score breakdown for one call.

    Internet & Cable calls average procedure flow, ownership and empathy. Banking
    calls average verification and empathy, with verification reported in the
    procedure flow slot. Calls with no scored pillar besides empathy get a total
    of 0: they are not comparably scored, and averaging empathy alone would
    inflate them.

    Args:
        result: Analysis of a single call.

    Returns:
        QaScoreBreakdown: Pillar scores and blended total, each out of 100.
    """
    pillars = result.pillars
    empathy = ScoreEntry(score=pillars.empathy.empathy_score)

    if isinstance(pillars, InternetCablePillars):
        adherence = pillars.procedure_flow.adherence_score
        ownership = pillars.ownership.ownership_score
        return QaScoreBreakdown(
            procedure_flow=ScoreEntry(score=adherence),
            ownership=ScoreEntry(score=ownership),
            empathy=empathy,
            total=ScoreEntry(score=(adherence + ownership + empathy.score) / 3),
        )

    if isinstance(pillars, BankingPillars):
        verification = pillars.account_verification.verification_score
        return QaScoreBreakdown(
            procedure_flow=ScoreEntry(score=verification),
            ownership=ScoreEntry(score=0),
            empathy=empathy,
            total=ScoreEntry(score=(verification + empathy.score) / 2),
        )

    # GeneralInquiryPillars
    return QaScoreBreakdown(
        procedure_flow=ScoreEntry(score=0),
        ownership=ScoreEntry(score=0),
        empathy=empathy,
        total=ScoreEntry(score=0),
    )


def calculate_troubleshooting_score(
    *,
    steps: Sequence[str],
    feedback: Mapping[int, TroubleshootingStatus | None],
) -> TroubleshootingScore:
    """Score how many suggested troubleshooting steps the agent followed.

    Steps marked ``na`` are not applicable; steps marked ``checked`` count as
    followed.

    Args:
        steps: Troubleshooting steps suggested for the call.
        feedback: Reviewer status per step index.

    Returns:
        TroubleshootingScore: Followed and applicable counts, with a percentage
            that is None when no step is applicable.
    """
    statuses = list(feedback.values())
    applicable = len(steps) - statuses.count(TroubleshootingStatus.NA)
    followed = statuses.count(TroubleshootingStatus.CHECKED)
    percentage = followed / applicable * 100 if applicable > 0 else None
    return TroubleshootingScore(
        followed=followed, applicable=applicable, percentage=percentage
    )


def toggle_troubleshooting_feedback(
    feedback: Mapping[int, TroubleshootingStatus | None],
    *,
    step_index: int,
    status: TroubleshootingStatus,
) -> dict[int, TroubleshootingStatus | None]:
    """Return new feedback with ``status`` set for a step, or cleared if already set."""
    updated = dict(feedback)
    updated[step_index] = None if feedback.get(step_index) == status else status
    return updated
