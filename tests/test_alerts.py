"""Tests for red-flag and commendation detection."""

from callqa_analytics.alerts import find_commendations, find_red_flags
from callqa_analytics.reports.models import Thresholds


def _scored(make_result, score, **kwargs):
    return make_result(procedure_flow=score, ownership=score, empathy=score, **kwargs)


class TestRedFlags:
    def test_complaint_with_low_score_is_flagged(self, make_result):
        record = _scored(make_result, 40, call_id="C-9", agent="Dan", complaint_quote="Rude")
        flags = find_red_flags([record])
        assert len(flags) == 1
        assert flags[0].call_id == "C-9"
        assert flags[0].agent_name == "Dan"
        assert flags[0].reason == "Customer Complaint about Agent Behavior"
        assert flags[0].quote == "Rude"

    def test_complaint_at_threshold_is_not_flagged(self, make_result):
        assert find_red_flags([_scored(make_result, 50, complaint_quote="Rude")]) == []

    def test_low_score_without_complaint_is_not_flagged(self, make_result):
        assert find_red_flags([_scored(make_result, 10)]) == []

    def test_general_inquiry_complaint_is_flagged(self, make_result):
        record = make_result(campaign="general", empathy=100, complaint_quote="Rude")
        assert len(find_red_flags([record])) == 1

    def test_keeps_input_order(self, make_result):
        records = [
            _scored(make_result, 10, call_id="B", complaint_quote="x"),
            _scored(make_result, 95, call_id="skip", complaint_quote="x"),
            _scored(make_result, 20, call_id="A", complaint_quote="x"),
        ]
        assert [flag.call_id for flag in find_red_flags(records)] == ["B", "A"]

    def test_custom_threshold(self, make_result):
        record = _scored(make_result, 60, complaint_quote="Rude")
        flags = find_red_flags([record], thresholds=Thresholds(red_flag_max_score=70))
        assert len(flags) == 1


class TestCommendations:
    def test_praise_with_high_score(self, make_result):
        record = _scored(make_result, 95, call_id="C-1", praise_quote="Wonderful")
        commendations = find_commendations([record])
        assert len(commendations) == 1
        assert commendations[0].call_id == "C-1"
        assert commendations[0].quote == "Wonderful"

    def test_score_at_threshold_is_excluded(self, make_result):
        assert find_commendations([_scored(make_result, 90, praise_quote="Nice")]) == []

    def test_empty_quote_is_excluded(self, make_result):
        record = _scored(make_result, 100, praise_quote="")
        assert record.agent_commendation.detected
        assert find_commendations([record]) == []

    def test_not_detected_is_excluded(self, make_result):
        assert find_commendations([_scored(make_result, 100)]) == []

    def test_inputs_not_mutated(self, make_result):
        records = [_scored(make_result, 100, praise_quote="Great")]
        snapshot = list(records)
        find_commendations(records)
        find_red_flags(records)
        assert records == snapshot
