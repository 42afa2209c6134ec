"""Call-center QA analytics over structured call analyses."""

from .aggregator import generate_dashboard_metrics
from .alerts import find_commendations, find_red_flags
from .cache import AnalysisCache
from .drivers import build_driver_metrics, sort_driver_metrics
from .models import AnalysisResult, ResultItem
from .reports.formatters import format_analysis_as_text
from .review import DataFeed, SortConfig, filter_by_date_range, search_calls
from .scoring import calculate_qa_scores, parse_duration_to_seconds
from .storage import ResultStorage

__all__ = [
    "AnalysisCache",
    "AnalysisResult",
    "DataFeed",
    "ResultItem",
    "ResultStorage",
    "SortConfig",
    "build_driver_metrics",
    "calculate_qa_scores",
    "filter_by_date_range",
    "find_commendations",
    "find_red_flags",
    "format_analysis_as_text",
    "generate_dashboard_metrics",
    "parse_duration_to_seconds",
    "search_calls",
    "sort_driver_metrics",
]
