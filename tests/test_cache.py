"""Tests for the injected analysis cache."""

from callqa_analytics.cache import AnalysisCache
from callqa_analytics.constants import Campaign
from callqa_analytics.models import WordTimestamp


class TestAnalysisCache:
    def test_put_and_get(self, make_result):
        cache = AnalysisCache(campaign=Campaign.INTERNET_CABLE)
        result = make_result()
        cache.put("h1", result)
        assert "h1" in cache
        assert cache.get("h1") is result
        assert cache.get("missing") is None
        assert len(cache) == 1

    def test_timestamps(self):
        cache = AnalysisCache()
        words = [WordTimestamp(word="hello", start_time=0.0, end_time=0.4)]
        cache.put_timestamps("h1", words)
        words.append(WordTimestamp(word="there", start_time=0.4, end_time=0.8))
        assert cache.get_timestamps("h1") == words[:1]
        assert cache.get_timestamps("h2") is None

    def test_reset_on_campaign_switch(self, make_result):
        cache = AnalysisCache(campaign=Campaign.INTERNET_CABLE)
        cache.put("h1", make_result())
        cache.put_timestamps("h1", [])
        cache.reset(campaign=Campaign.BANKING)
        assert len(cache) == 0
        assert cache.get_timestamps("h1") is None
        assert cache.campaign == Campaign.BANKING

    def test_instances_are_independent(self, make_result):
        first, second = AnalysisCache(), AnalysisCache()
        first.put("h1", make_result())
        assert "h1" not in second
