"""Shared fixtures: builders for camelCase analysis payloads as stored upstream."""

import json

import pytest

from callqa_analytics.models import AnalysisResult, ResultItem


def build_payload(
    *,
    campaign: str = "internet_cable",
    agent: str = "Alice",
    call_id: str = "CALL-1",
    call_type: str = "Billing",
    duration: str = "05:00",
    date_time: str = "2024-03-01T10:00:00Z",
    procedure_flow: float = 80,
    ownership: float = 70,
    empathy: float = 90,
    verification: float = 60,
    resolved: bool = True,
    reason_category: str = "",
    root_cause: str = "Outage",
    positive_count: int = 3,
    negative_count: int = 1,
    complaint_quote: str | None = None,
    praise_quote: str | None = None,
    is_repeat_call: bool | None = None,
    troubleshooting: list[str] | None = None,
    summary: str = "Customer called about a bill.",
) -> dict:
    """Build one analysis payload; campaign is internet_cable, banking or general."""
    pillars: dict = {
        "empathy": {
            "empathyScore": empathy,
            "suggestedPhrases": ["I understand"],
            "sentimentAlignment": "Good",
        }
    }
    if campaign == "internet_cable":
        pillars["procedureFlow"] = {
            "adherenceScore": procedure_flow,
            "keySteps": [{"stepName": "Greeting", "completed": True}],
            "deviations": [],
            "efficiencyGains": "",
        }
        pillars["ownership"] = {
            "ownershipScore": ownership,
            "suggestedPhrases": ["I will take care of it"],
            "missedOpportunities": "",
        }
    elif campaign == "banking":
        pillars["accountVerification"] = {
            "verificationScore": verification,
            "clientNameVerified": True,
            "staticQuestionsAsked": 2,
            "nonStaticQuestionsAsked": 1,
            "passedVerification": True,
            "verificationDetails": "Verified date of birth",
        }

    payload = {
        "callDetails": {
            "agentName": agent,
            "callId": call_id,
            "callDuration": duration,
            "callDateTime": date_time,
        },
        "summary": summary,
        "callType": call_type,
        "rootCause": root_cause,
        "customerSentiment": {
            "positivePercentage": 75,
            "negativePercentage": 25,
            "positiveCount": positive_count,
            "negativeCount": negative_count,
        },
        "holdOrSilenceCount": 1,
        "agentPerformance": {"corePillars": pillars},
        "resolution": {
            "issueResolved": resolved,
            "reasonCategory": reason_category,
            "reasonDetail": "Refund issued" if resolved else "Escalated",
        },
        "troubleshootingFlow": troubleshooting or [],
        "securityVerificationAsked": ["Date of birth"] if campaign == "banking" else [],
        "overallFindings": {
            "opportunities": "Confirm next steps",
            "recommendations": "Summarize at close",
        },
        "agentBehaviorComplaint": {
            "detected": complaint_quote is not None,
            "customerComplaintQuote": complaint_quote,
        },
        "agentCommendation": {
            "detected": praise_quote is not None,
            "customerPraiseQuote": praise_quote,
        },
    }
    if is_repeat_call is not None:
        payload["isRepeatCall"] = is_repeat_call
    return payload


@pytest.fixture
def make_payload():
    return build_payload


@pytest.fixture
def make_result():
    def _make(**kwargs) -> AnalysisResult:
        return AnalysisResult.from_dict(data=build_payload(**kwargs))

    return _make


@pytest.fixture
def make_item():
    def _make(*, file_name: str = "call.txt", transcript: str = "", **kwargs) -> ResultItem:
        data = {
            "fileName": file_name,
            "result": build_payload(**kwargs),
            "transcriptContent": transcript,
        }
        return ResultItem.from_dict(data=data)

    return _make


@pytest.fixture
def data_dir(tmp_path):
    """Directory with one stored-item file and one bare-analysis file."""
    items = [
        {
            "fileName": "alice_1.txt",
            "result": build_payload(
                agent="Alice",
                call_id="CALL-1",
                call_type="Billing",
                date_time="2024-03-01T10:00:00Z",
            ),
            "transcriptContent": "hello from alice",
        },
        {
            "fileName": "bob_1.txt",
            "result": build_payload(
                agent="Bob",
                call_id="CALL-2",
                call_type="Outage",
                date_time="2024-03-02T10:00:00Z",
                resolved=False,
                reason_category="System Outage.",
                complaint_quote="He was rude",
                procedure_flow=20,
                ownership=20,
                empathy=20,
            ),
        },
    ]
    (tmp_path / "items.json").write_text(json.dumps(items))
    (tmp_path / "carol.json").write_text(
        json.dumps(
            build_payload(
                agent="Carol",
                call_id="CALL-3",
                call_type="Billing",
                date_time="2024-03-05T10:00:00Z",
                procedure_flow=100,
                ownership=100,
                empathy=100,
                praise_quote="Best service ever",
            )
        )
    )
    return tmp_path
