"""Pydantic models for the structured call analysis produced upstream.

These mirror the JSON emitted by the transcript analysis service (camelCase
keys). Scores are taken as given: the upstream contract promises 0-100 values
and nothing here clamps or range-checks them.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ContractModel(BaseModel):
    """Base model accepting camelCase payload keys or snake_case names."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class KeyStep(ContractModel):
    """One expected step of the call procedure."""

    step_name: str = Field(description="Name of the procedure step")
    completed: bool = Field(description="Whether the agent completed the step")
    details: str = Field(default="", description="Evidence for the verdict")


class ProcedureFlowAdherence(ContractModel):
    """Procedure Flow pillar (Internet & Cable)."""

    adherence_score: int | float = Field(description="Adherence score 0-100")
    key_steps: list[KeyStep] = Field(default_factory=list)
    deviations: list[str] = Field(default_factory=list)
    efficiency_gains: str = Field(default="")


class Ownership(ContractModel):
    """Ownership pillar (Internet & Cable)."""

    ownership_score: int | float = Field(description="Ownership score 0-100")
    suggested_phrases: list[str] = Field(default_factory=list)
    missed_opportunities: str = Field(default="")


class Empathy(ContractModel):
    """Empathy pillar, present in every campaign."""

    empathy_score: int | float = Field(description="Empathy score 0-100")
    suggested_phrases: list[str] = Field(default_factory=list)
    sentiment_alignment: str = Field(default="")


class AccountVerification(ContractModel):
    """Account Verification pillar (Banking, account-specific calls only)."""

    verification_score: int | float = Field(description="Verification score 0-100")
    client_name_verified: bool = Field(default=False)
    static_questions_asked: int = Field(default=0)
    non_static_questions_asked: int = Field(default=0)
    passed_verification: bool = Field(default=False)
    verification_details: str = Field(default="")


class CorePillarsPayload(ContractModel):
    """Pillar block as sent upstream, with the campaign shape left implicit."""

    procedure_flow: ProcedureFlowAdherence | None = None
    ownership: Ownership | None = None
    empathy: Empathy
    account_verification: AccountVerification | None = None


class AgentPerformance(ContractModel):
    core_pillars: CorePillarsPayload


class CallDetails(ContractModel):
    """Header information of one call."""

    agent_name: str = Field(default="")
    call_id: str = Field(default="")
    call_duration: str = Field(default="", description='Duration such as "05:32"')
    call_date_time: str = Field(default="", description="ISO 8601 timestamp")


class CustomerSentiment(ContractModel):
    positive_percentage: float = Field(default=0)
    negative_percentage: float = Field(default=0)
    positive_count: int = Field(default=0)
    negative_count: int = Field(default=0)


class Resolution(ContractModel):
    issue_resolved: bool = Field(default=False)
    resolution_language: str | None = Field(default=None)
    reason_category: str = Field(default="")
    reason_detail: str = Field(default="")


class UnderstandabilityIssue(ContractModel):
    detected: bool = Field(default=False)
    sample_phrase: str | None = Field(default=None)


class UnderstandabilityIssues(ContractModel):
    not_understanding_info: UnderstandabilityIssue = Field(
        default_factory=UnderstandabilityIssue
    )
    audio_volume: UnderstandabilityIssue = Field(default_factory=UnderstandabilityIssue)
    clarity_of_speech: UnderstandabilityIssue = Field(
        default_factory=UnderstandabilityIssue
    )


class OverallFindings(ContractModel):
    opportunities: str = Field(default="")
    recommendations: str = Field(default="")


class AgentBehaviorComplaint(ContractModel):
    detected: bool = Field(default=False)
    customer_complaint_quote: str | None = Field(default=None)


class AgentCommendation(ContractModel):
    detected: bool = Field(default=False)
    customer_praise_quote: str | None = Field(default=None)


class AnalysisPayload(ContractModel):
    """Complete structured analysis of one call."""

    call_details: CallDetails
    summary: str = Field(default="")
    call_type: str = Field(default="", description="Campaign-specific call driver label")
    root_cause: str = Field(default="")
    customer_sentiment: CustomerSentiment = Field(default_factory=CustomerSentiment)
    hold_or_silence_count: int = Field(default=0)
    agent_performance: AgentPerformance
    resolution: Resolution = Field(default_factory=Resolution)
    understandability_issues: UnderstandabilityIssues = Field(
        default_factory=UnderstandabilityIssues
    )
    troubleshooting_flow: list[str] = Field(default_factory=list)
    security_verification_asked: list[str] = Field(default_factory=list)
    overall_findings: OverallFindings = Field(default_factory=OverallFindings)
    agent_behavior_complaint: AgentBehaviorComplaint = Field(
        default_factory=AgentBehaviorComplaint
    )
    agent_commendation: AgentCommendation = Field(default_factory=AgentCommendation)
    is_repeat_call: bool | None = Field(default=None)
