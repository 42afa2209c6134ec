"""Tests for report formatting."""

from callqa_analytics.constants import TroubleshootingStatus
from callqa_analytics.reports.formatters import (
    format_analysis_as_text,
    safe_format_date,
    safe_format_date_only,
    split_transcript,
)


class TestSafeFormatDate:
    def test_empty(self):
        assert safe_format_date("") == "N/A"
        assert safe_format_date(None) == "N/A"
        assert safe_format_date_only(None) == "N/A"

    def test_unparseable_returned_verbatim(self):
        assert safe_format_date("last tuesday") == "last tuesday"
        assert safe_format_date_only("last tuesday") == "last tuesday"

    def test_formats(self):
        assert safe_format_date("2024-03-01T10:05:09Z") == "2024-03-01 10:05:09"
        assert safe_format_date_only("2024-03-01T10:05:09Z") == "2024-03-01"


class TestFormatAnalysisAsText:
    def test_internet_cable_report(self, make_result):
        result = make_result(
            agent="Alice",
            call_id="CALL-7",
            procedure_flow=80,
            ownership=60,
            empathy=100,
            troubleshooting=["Restart modem", "Check cables", "Reset router"],
        )
        text = format_analysis_as_text("call_7.txt", result)
        assert text.startswith("Analysis for: call_7.txt")
        assert "- Agent Name: Alice" in text
        assert "- Date & Time: 2024-03-01 10:00:00" in text
        assert "Call Quality Score: 80.0%" in text
        assert "- Procedure Flow (80%):" in text
        assert "- Ownership (60%):" in text
        assert "ROOT CAUSE & TROUBLESHOOTING" in text
        assert "  1. Restart modem" in text
        assert "\nScore:" not in text
        assert "NOTES & COMMENTS" not in text

    def test_troubleshooting_feedback(self, make_result):
        result = make_result(troubleshooting=["Restart modem", "Check cables", "Reset router"])
        feedback = {0: TroubleshootingStatus.CHECKED, 1: TroubleshootingStatus.NA}
        text = format_analysis_as_text("call.txt", result, feedback=feedback)
        assert "Score: 1/2 (50%)" in text
        assert "1. Restart modem [Necessary]" in text
        assert "2. Check cables [N/A]" in text
        assert "3. Reset router [Not Reviewed]" in text

    def test_banking_report(self, make_result):
        result = make_result(campaign="banking", verification=100, empathy=50)
        text = format_analysis_as_text("bank.txt", result, note="Follow up Monday")
        assert "Call Quality Score: 75.0%" in text
        assert "- Account Verification (100%):" in text
        assert "Procedure Flow" not in text
        assert "ROOT CAUSE & SECURITY VERIFICATION" in text
        assert "  1. Date of birth" in text
        assert text.endswith("NOTES & COMMENTS\nFollow up Monday")

    def test_general_inquiry_report(self, make_result):
        text = format_analysis_as_text("g.txt", make_result(campaign="general", empathy=90))
        assert "Call Quality Score: 0.0%" in text
        assert "- Empathy (90%):" in text
        assert "Account Verification" not in text

    def test_transcript_dialogue_before_notes(self, make_result):
        transcript = "Agent Name: Alice\nCall ID: CALL-1\nCall Transcript:\nAgent: Hello\nCustomer: Hi\n"
        text = format_analysis_as_text(
            "call.txt", make_result(), note="Check audio", transcript=transcript
        )
        assert text.endswith(
            "CALL TRANSCRIPT\nAgent: Hello\nCustomer: Hi\n\nNOTES & COMMENTS\nCheck audio"
        )
        assert "Call Transcript:" not in text


class TestSplitTranscript:
    def test_separator_line_ends_header(self):
        transcript = "Agent Name: Alice\nCall ID: 7\n  CALL TRANSCRIPT:  \nAgent: Hello\nCustomer: Hi"
        header, dialogue = split_transcript(transcript)
        assert header == "Agent Name: Alice\nCall ID: 7\n  CALL TRANSCRIPT:  "
        assert dialogue == "Agent: Hello\nCustomer: Hi"

    def test_first_non_metadata_label_starts_dialogue(self):
        transcript = "Agent Name: Alice\nDate: 2024-03-01\nDuration: 05:00\n\nAgent: Hello\nCustomer: Hi"
        header, dialogue = split_transcript(transcript)
        assert header == "Agent Name: Alice\nDate: 2024-03-01\nDuration: 05:00\n"
        assert dialogue == "Agent: Hello\nCustomer: Hi"

    def test_metadata_only_is_all_dialogue(self):
        transcript = "Agent Name: Alice\nFilename: call.wav"
        assert split_transcript(transcript) == ("", transcript)
        assert split_transcript("no speakers here") == ("", "no speakers here")
        assert split_transcript("") == ("", "")
