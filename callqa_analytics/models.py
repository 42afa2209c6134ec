"""Domain records for call QA analytics."""

import hashlib
import json
from dataclasses import dataclass, field
from typing import Any

from .constants import ItemKey
from .schema import (
    AccountVerification,
    AgentBehaviorComplaint,
    AgentCommendation,
    AnalysisPayload,
    CallDetails,
    CorePillarsPayload,
    CustomerSentiment,
    Empathy,
    OverallFindings,
    Ownership,
    ProcedureFlowAdherence,
    Resolution,
    UnderstandabilityIssues,
)


@dataclass(frozen=True)
class InternetCablePillars:
    """Pillars scored on Internet & Cable calls."""

    procedure_flow: ProcedureFlowAdherence
    ownership: Ownership
    empathy: Empathy


@dataclass(frozen=True)
class BankingPillars:
    """Pillars scored on account-specific Banking calls."""

    account_verification: AccountVerification
    empathy: Empathy


@dataclass(frozen=True)
class GeneralInquiryPillars:
    """Calls where empathy is the only measured pillar (e.g. Banking general inquiries)."""

    empathy: Empathy


CorePillars = InternetCablePillars | BankingPillars | GeneralInquiryPillars


def classify_pillars(*, pillars: CorePillarsPayload) -> CorePillars:
    """Decide the campaign shape of a pillar block from the fields it carries.

    Args:
        pillars: Pillar block as received from the analysis service.

    Returns:
        CorePillars: InternetCablePillars when procedure flow and ownership are both
            present, BankingPillars when account verification is present, otherwise
            GeneralInquiryPillars.
    """
    if pillars.procedure_flow is not None and pillars.ownership is not None:
        return InternetCablePillars(
            procedure_flow=pillars.procedure_flow,
            ownership=pillars.ownership,
            empathy=pillars.empathy,
        )
    if pillars.account_verification is not None:
        return BankingPillars(
            account_verification=pillars.account_verification,
            empathy=pillars.empathy,
        )
    return GeneralInquiryPillars(empathy=pillars.empathy)


@dataclass(frozen=True)
class AnalysisResult:
    """Structured outcome for one analyzed call.

    Attributes:
        call_details: Agent, call ID, duration and timestamp of the call.
        summary: Short narrative summary of the call.
        call_type: Call driver label.
        root_cause: Free-text root cause.
        customer_sentiment: Positive/negative mention counts and percentages.
        resolution: Whether the issue was resolved and why (not).
        pillars: Campaign-specific pillar variant, fixed at ingestion.
        agent_behavior_complaint: Complaint about the agent detected in the call.
        agent_commendation: Praise for the agent detected in the call.
        hold_or_silence_count: Number of holds or long silences.
        is_repeat_call: Whether the customer had called about this before.
        troubleshooting_flow: Troubleshooting steps suggested for the call.
        security_verification_asked: Security questions the agent asked.
        overall_findings: Opportunities and recommendations for the agent.
        understandability_issues: Communication problems detected in the call.
    """

    call_details: CallDetails
    summary: str
    call_type: str
    root_cause: str
    customer_sentiment: CustomerSentiment
    resolution: Resolution
    pillars: CorePillars
    agent_behavior_complaint: AgentBehaviorComplaint
    agent_commendation: AgentCommendation
    hold_or_silence_count: int = 0
    is_repeat_call: bool = False
    troubleshooting_flow: tuple[str, ...] = ()
    security_verification_asked: tuple[str, ...] = ()
    overall_findings: OverallFindings = field(default_factory=OverallFindings)
    understandability_issues: UnderstandabilityIssues = field(
        default_factory=UnderstandabilityIssues
    )

    @classmethod
    def from_payload(cls, *, payload: AnalysisPayload) -> "AnalysisResult":
        """Build a result from a validated payload, classifying its pillars once."""
        return cls(
            call_details=payload.call_details,
            summary=payload.summary,
            call_type=payload.call_type,
            root_cause=payload.root_cause,
            customer_sentiment=payload.customer_sentiment,
            resolution=payload.resolution,
            pillars=classify_pillars(pillars=payload.agent_performance.core_pillars),
            agent_behavior_complaint=payload.agent_behavior_complaint,
            agent_commendation=payload.agent_commendation,
            hold_or_silence_count=payload.hold_or_silence_count,
            is_repeat_call=bool(payload.is_repeat_call),
            troubleshooting_flow=tuple(payload.troubleshooting_flow),
            security_verification_asked=tuple(payload.security_verification_asked),
            overall_findings=payload.overall_findings,
            understandability_issues=payload.understandability_issues,
        )

    @classmethod
    def from_dict(cls, *, data: dict[str, Any]) -> "AnalysisResult":
        """Validate a raw analysis dictionary and build a result from it.

        Args:
            data: Analysis JSON object, camelCase or snake_case keys.

        Returns:
            AnalysisResult: The validated result.

        Raises:
            pydantic.ValidationError: If a required block is missing or malformed.
        """
        return cls.from_payload(payload=AnalysisPayload.model_validate(data))

    @property
    def empathy(self) -> Empathy:
        return self.pillars.empathy

    @property
    def procedure_flow(self) -> ProcedureFlowAdherence | None:
        if isinstance(self.pillars, InternetCablePillars):
            return self.pillars.procedure_flow
        return None

    @property
    def ownership(self) -> Ownership | None:
        if isinstance(self.pillars, InternetCablePillars):
            return self.pillars.ownership
        return None

    @property
    def account_verification(self) -> AccountVerification | None:
        if isinstance(self.pillars, BankingPillars):
            return self.pillars.account_verification
        return None


@dataclass(frozen=True)
class WordTimestamp:
    """Timing of one transcribed word in seconds."""

    word: str
    start_time: float
    end_time: float


def compute_content_hash(content: str) -> str:
    """Return the SHA-256 hex digest used as a stable join key for a call."""
    return hashlib.sha256(content.encode("utf-8")).hexdigest()


def stored_content_hash(data: dict[str, Any]) -> str:
    """Content hash of a stored item, derived when the item carries none.

    The transcript text is hashed when present, otherwise the canonical JSON of
    the analysis.
    """
    content_hash = data.get(ItemKey.CONTENT_HASH) or data.get("content_hash")
    if content_hash:
        return content_hash
    transcript = _transcript_of(data)
    raw_result = data.get(ItemKey.RESULT) or {}
    return compute_content_hash(transcript or json.dumps(raw_result, sort_keys=True))


def _transcript_of(data: dict[str, Any]) -> str:
    return data.get(ItemKey.TRANSCRIPT_CONTENT) or data.get("transcript_content") or ""


@dataclass(frozen=True)
class ResultItem:
    """A stored call analysis together with its source file.

    Attributes:
        file_name: Name of the uploaded transcript file.
        result: Structured analysis of the call.
        content_hash: Opaque key joining the call to notes and review state.
        transcript_content: Raw transcript text.
        audio_url: Optional location of the call recording.
    """

    file_name: str
    result: AnalysisResult
    content_hash: str
    transcript_content: str = ""
    audio_url: str | None = None

    @classmethod
    def from_dict(
        cls, *, data: dict[str, Any], result: AnalysisResult | None = None
    ) -> "ResultItem":
        """Create a ResultItem from a stored dictionary.

        Handles both stored format (fileName/result/contentHash) and snake_case
        keys.

        Args:
            data: Dictionary containing the stored item.
            result: Already parsed analysis to use instead of validating
                ``data["result"]`` again.

        Returns:
            ResultItem: A new ResultItem instance.

        Raises:
            pydantic.ValidationError: If the nested analysis is malformed.
        """
        if result is None:
            result = AnalysisResult.from_dict(data=data.get(ItemKey.RESULT) or {})

        return cls(
            file_name=data.get(ItemKey.FILE_NAME) or data.get("file_name", ""),
            result=result,
            content_hash=stored_content_hash(data),
            transcript_content=_transcript_of(data),
            audio_url=data.get(ItemKey.AUDIO_URL) or data.get("audio_url"),
        )
