"""Utilities for formatting call analyses for people."""

from collections.abc import Mapping

from loguru import logger

from ..constants import (
    DATE_FORMAT,
    DATETIME_FORMAT,
    NOT_AVAILABLE,
    TroubleshootingStatus,
)
from ..models import AnalysisResult, BankingPillars, InternetCablePillars
from ..review import parse_call_datetime
from ..scoring import calculate_qa_scores, calculate_troubleshooting_score

STATUS_TEXT = {
    TroubleshootingStatus.CHECKED: "[Necessary]",
    TroubleshootingStatus.CROSSED: "[Unnecessary]",
    TroubleshootingStatus.NA: "[N/A]",
}
NOT_REVIEWED_TEXT = "[Not Reviewed]"
TRANSCRIPT_SEPARATOR = "call transcript:"
HEADER_KEYWORDS = ("agent name", "call id", "callid", "date", "time", "duration", "filename")


def split_transcript(transcript: str) -> tuple[str, str]:
    """Split a transcript into its metadata header and the dialogue.

    A line reading ``Call Transcript:`` (any case) ends the header. Without one,
    the dialogue starts at the first ``label: text`` line whose label is not a
    header keyword such as agent name, call ID or duration.

    Args:
        transcript: Raw transcript text.

    Returns:
        tuple[str, str]: (header, dialogue). The header is empty when no dialogue
            line can be told apart from it.
    """
    lines = transcript.split("\n")

    for idx, line in enumerate(lines):
        if line.strip().lower() == TRANSCRIPT_SEPARATOR:
            return "\n".join(lines[: idx + 1]), "\n".join(lines[idx + 1 :])

    for idx, line in enumerate(lines):
        label, colon, _ = line.lower().partition(":")
        label = label.strip()
        if not colon or not label:
            continue
        if not any(keyword in label for keyword in HEADER_KEYWORDS):
            return "\n".join(lines[:idx]), "\n".join(lines[idx:])

    return "", transcript


def safe_format_date(value: str | None) -> str:
    """Format a call timestamp, returning the raw value when it cannot be parsed."""
    if not value:
        return NOT_AVAILABLE
    parsed = parse_call_datetime(value)
    if parsed is None:
        return value
    return parsed.strftime(DATETIME_FORMAT)


def safe_format_date_only(value: str | None) -> str:
    """Like safe_format_date, but only the date part."""
    if not value:
        return NOT_AVAILABLE
    parsed = parse_call_datetime(value)
    if parsed is None:
        return value
    return parsed.strftime(DATE_FORMAT)


def _quoted(phrases: tuple[str, ...] | list[str]) -> str:
    return ", ".join(f'"{phrase}"' for phrase in phrases) if phrases else "None"


def _numbered(steps: tuple[str, ...], suffixes: list[str] | None = None) -> str:
    if not steps:
        return "  None"
    lines = []
    for idx, step in enumerate(steps):
        suffix = f" {suffixes[idx]}" if suffixes else ""
        lines.append(f"  {idx + 1}. {step}{suffix}")
    return "\n".join(lines)


def _pillar_section(result: AnalysisResult, total_score: float) -> str:
    pillars = result.pillars
    empathy = pillars.empathy
    lines = [f"CORE PILLAR PERFORMANCE (Call Quality Score: {total_score:.1f}%)"]

    if isinstance(pillars, BankingPillars):
        verification = pillars.account_verification
        lines += [
            f"- Account Verification ({verification.verification_score}%):",
            f"  - Client Name Verified: {'Yes' if verification.client_name_verified else 'No'}",
            f"  - Details: {verification.verification_details}",
            "  - Static/Non-Static Asked: "
            f"{verification.static_questions_asked}/{verification.non_static_questions_asked}",
        ]
    elif isinstance(pillars, InternetCablePillars):
        flow = pillars.procedure_flow
        ownership = pillars.ownership
        lines += [
            f"- Procedure Flow ({flow.adherence_score}%):",
            f"  - Deviations: {', '.join(flow.deviations) if flow.deviations else 'None'}",
            f"  - Efficiency: {flow.efficiency_gains or NOT_AVAILABLE}",
            f"- Ownership ({ownership.ownership_score}%):",
            f"  - Suggestions: {_quoted(ownership.suggested_phrases)}",
            f"  - Opportunities: {ownership.missed_opportunities or NOT_AVAILABLE}",
        ]

    lines += [
        f"- Empathy ({empathy.empathy_score}%):",
        f"  - Suggestions: {_quoted(empathy.suggested_phrases)}",
        f"  - Sentiment Alignment: {empathy.sentiment_alignment}",
    ]
    return "\n".join(lines)


def _root_cause_section(
    result: AnalysisResult,
    feedback: Mapping[int, TroubleshootingStatus | None] | None,
) -> str:
    if isinstance(result.pillars, BankingPillars):
        return "\n".join(
            [
                "ROOT CAUSE & SECURITY VERIFICATION",
                f"- Root Cause: {result.root_cause}",
                "- Security Verification Asked:",
                _numbered(result.security_verification_asked),
            ]
        )

    lines = ["ROOT CAUSE & TROUBLESHOOTING"]
    suffixes = None
    if result.troubleshooting_flow and feedback is not None:
        score = calculate_troubleshooting_score(
            steps=result.troubleshooting_flow, feedback=feedback
        )
        if score.percentage is None:
            lines.append(f"Score: {NOT_AVAILABLE}")
        else:
            lines.append(
                f"Score: {score.followed}/{score.applicable} ({score.percentage:.0f}%)"
            )
        suffixes = [
            STATUS_TEXT.get(feedback.get(idx), NOT_REVIEWED_TEXT)
            for idx in range(len(result.troubleshooting_flow))
        ]

    lines += [
        f"- Root Cause: {result.root_cause}",
        "- Troubleshooting Steps:",
        _numbered(result.troubleshooting_flow, suffixes),
    ]
    return "\n".join(lines)


def format_analysis_as_text(
    file_name: str,
    result: AnalysisResult,
    *,
    note: str | None = None,
    feedback: Mapping[int, TroubleshootingStatus | None] | None = None,
    transcript: str | None = None,
) -> str:
    """Render one call analysis as a plain-text report.

    Args:
        file_name: Name of the analysed transcript file.
        result: Analysis to render.
        note: Optional reviewer note appended at the end.
        feedback: Optional reviewer verdicts on troubleshooting steps.
        transcript: Optional raw transcript; its dialogue (without the metadata
            header) is included before the notes.

    Returns:
        str: The report text.
    """
    logger.debug(f"Formatting analysis for {file_name}")

    scores = calculate_qa_scores(result)
    details = result.call_details
    outcome = "Resolved" if result.resolution.issue_resolved else "Not Resolved"

    sections = [
        f"Analysis for: {file_name}\n" + "-" * 50,
        "\n".join(
            [
                "CALL DETAILS",
                f"- Agent Name: {details.agent_name}",
                f"- Call ID: {details.call_id}",
                f"- Date & Time: {safe_format_date(details.call_date_time)}",
                f"- Duration: {details.call_duration}",
            ]
        ),
        f"SUMMARY\n{result.summary}",
        "\n".join(
            [
                "KEY INSIGHTS",
                f"- Call Type: {result.call_type}",
                f"- Call Outcome: {outcome} ({result.resolution.reason_detail})",
            ]
        ),
        _pillar_section(result, scores.total.score)
        + "\n"
        + _root_cause_section(result, feedback),
        "\n".join(
            [
                "OVERALL FINDINGS",
                f"- Opportunities: {result.overall_findings.opportunities}",
                f"- Recommendations: {result.overall_findings.recommendations}",
            ]
        ),
    ]
    if transcript:
        _, dialogue = split_transcript(transcript)
        sections.append(f"CALL TRANSCRIPT\n{dialogue.strip()}")
    if note:
        sections.append(f"NOTES & COMMENTS\n{note}")

    return "\n\n".join(sections)
