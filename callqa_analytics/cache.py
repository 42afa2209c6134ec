"""Campaign-scoped cache of parsed analyses, passed explicitly to loaders."""

from loguru import logger

from .constants import Campaign, LogMessage
from .models import AnalysisResult, WordTimestamp


class AnalysisCache:
    """Parsed analyses and word timestamps keyed by content hash.

    The owner decides the lifetime. Switching campaign through ``reset`` drops
    every entry so results never leak between campaigns.

    Attributes:
        campaign: Campaign the cached entries belong to.
    """

    def __init__(self, *, campaign: Campaign | None = None):
        self.campaign = campaign
        self._results: dict[str, AnalysisResult] = {}
        self._timestamps: dict[str, list[WordTimestamp]] = {}

    def __len__(self) -> int:
        return len(self._results)

    def __contains__(self, content_hash: object) -> bool:
        return content_hash in self._results

    def get(self, content_hash: str) -> AnalysisResult | None:
        return self._results.get(content_hash)

    def put(self, content_hash: str, result: AnalysisResult) -> None:
        self._results[content_hash] = result

    def get_timestamps(self, content_hash: str) -> list[WordTimestamp] | None:
        return self._timestamps.get(content_hash)

    def put_timestamps(self, content_hash: str, timestamps: list[WordTimestamp]) -> None:
        self._timestamps[content_hash] = list(timestamps)

    def reset(self, *, campaign: Campaign | None = None) -> None:
        """Empty the cache and rescope it to ``campaign``."""
        self._results.clear()
        self._timestamps.clear()
        self.campaign = campaign
        logger.debug(LogMessage.CACHE_RESET.format(campaign))
