"""Constants and enumerations for call QA analytics."""

from enum import StrEnum
from typing import Final


# Scoring
SCORE_POSSIBLE: Final[int] = 100
DEFAULT_RED_FLAG_MAX_SCORE: Final[int] = 50
DEFAULT_COMMENDATION_MIN_SCORE: Final[int] = 90
SECONDS_PER_MINUTE: Final[int] = 60

# Review views
FEED_PAGE_SIZE: Final[int] = 5
FIRST_PAGE: Final[int] = 1
ALL_CALL_TYPES: Final[str] = "all"

# Default Values
EMPTY_DURATION: Final[str] = "00:00"
UNKNOWN_ROOT_CAUSE: Final[str] = "Unknown"
NOT_AVAILABLE: Final[str] = "N/A"
RED_FLAG_REASON: Final[str] = "Customer Complaint about Agent Behavior"
DEFAULT_DATA_PATH: Final[str] = "analyses"
DEFAULT_METRICS_OUTPUT: Final[str] = "dashboard_metrics.json"
DEFAULT_CSV_OUTPUT: Final[str] = "call_analyses.csv"

# Environment
DATA_PATH_ENV_VAR: Final[str] = "CALLQA_DATA_PATH"
CAMPAIGN_ENV_VAR: Final[str] = "CALLQA_CAMPAIGN"

# JSON Serialization
JSON_INDENT: Final[int] = 2

# Date formats
DATE_FORMAT: Final[str] = "%Y-%m-%d"
DATETIME_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"

# Numeric Constants
EXIT_CODE_ERROR: Final[int] = 1


class Campaign(StrEnum):
    """Evaluation contexts that decide which pillars apply."""

    INTERNET_CABLE = "internet_cable"
    BANKING = "banking"


class SortDirection(StrEnum):
    """Sort direction for tables."""

    ASCENDING = "ascending"
    DESCENDING = "descending"


class TroubleshootingStatus(StrEnum):
    """Reviewer verdict on one suggested troubleshooting step."""

    CHECKED = "checked"
    CROSSED = "crossed"
    NA = "na"


class DriverSortKey(StrEnum):
    """Sortable columns of the call-driver table."""

    DRIVER = "driver"
    COUNT = "count"
    PERCENT_OF_TOTAL = "percent_of_total"
    AVG_DURATION = "avg_duration"
    AVG_PROCEDURE_FLOW_SCORE = "avg_procedure_flow_score"
    AVG_OWNERSHIP_SCORE = "avg_ownership_score"
    AVG_EMPATHY_SCORE = "avg_empathy_score"
    AVG_VERIFICATION_SCORE = "avg_verification_score"
    RESOLUTION_RATE = "resolution_rate"
    REPEAT_PERCENT = "repeat_percent"


class ReviewField(StrEnum):
    """Dotted paths into a ResultItem used by the review views."""

    FILE_NAME = "file_name"
    AGENT_NAME = "result.call_details.agent_name"
    CALL_ID = "result.call_details.call_id"
    SUMMARY = "result.summary"
    ROOT_CAUSE = "result.root_cause"
    CALL_TYPE = "result.call_type"
    CALL_DURATION = "result.call_details.call_duration"
    CALL_DATE_TIME = "result.call_details.call_date_time"
    QA_SCORE = "qa_scores.total.score"


FEED_SEARCH_FIELDS: Final[tuple[str, ...]] = (
    ReviewField.FILE_NAME,
    ReviewField.AGENT_NAME,
    ReviewField.CALL_ID,
    ReviewField.SUMMARY,
    ReviewField.ROOT_CAUSE,
    ReviewField.CALL_TYPE,
)


class ItemKey(StrEnum):
    """Keys of a stored result item."""

    FILE_NAME = "fileName"
    RESULT = "result"
    CONTENT_HASH = "contentHash"
    TRANSCRIPT_CONTENT = "transcriptContent"
    AUDIO_URL = "audioUrl"
    TIMESTAMPS = "timestamps"


class CsvColumn(StrEnum):
    """Column names of the call analyses CSV export."""

    CALL_ID = "callId"
    AGENT_NAME = "agentName"
    CALL_DATE_TIME = "callDateTime"
    CALL_DURATION = "callDuration"
    CALL_TYPE = "callType"
    ROOT_CAUSE = "rootCause"
    SUMMARY = "summary"
    ISSUE_RESOLVED = "issueResolved"
    REASON_CATEGORY = "resolutionReasonCategory"
    REASON_DETAIL = "resolutionReasonDetail"
    HOLD_OR_SILENCE_COUNT = "holdOrSilenceCount"
    QUALITY_SCORE = "callQualityScorePercent"
    PROCEDURE_FLOW_SCORE = "procedureFlowScore"
    OWNERSHIP_SCORE = "ownershipScore"
    EMPATHY_SCORE = "empathyScore"
    PROCEDURE_FLOW_DEVIATIONS = "procedureFlowDeviations"
    OWNERSHIP_PHRASES = "ownershipSuggestedPhrases"
    EMPATHY_PHRASES = "empathySuggestedPhrases"
    POSITIVE_PERCENT = "customerSentimentPositivePercent"
    NEGATIVE_PERCENT = "customerSentimentNegativePercent"
    OPPORTUNITIES = "opportunities"
    RECOMMENDATIONS = "recommendations"


class LogMessage(StrEnum):
    """Log message templates."""

    LOADING_FILES = "Loading {} analysis files from {}..."
    LOADED_ITEMS = "Loaded {} call analyses"
    SKIPPED_OBJECT = "Skipping invalid analysis in {}: {}"
    PATH_MISSING = "Path {} does not exist"
    NO_ITEMS = "No call analyses found to process"
    CACHE_HIT = "Reusing cached analysis for {}"
    CACHE_RESET = "Analysis cache reset for campaign {}"
    AGGREGATING = "Aggregating {} call analyses"
    BUILDING_DRIVERS = "Building call-driver breakdown for {} calls"
    SAVED_METRICS = "Saved dashboard metrics to {}"
    SAVED_CSV = "Saved {} call analyses to {}"
    ERROR_OCCURRED = "Error occurred: {}"


class CliHelp(StrEnum):
    """CLI help messages."""

    APP = "Call-center QA analytics over structured call analyses"
    DATA = "JSON file or directory of JSON files holding call analyses."
    CAMPAIGN = "Campaign whose labels are used when printing results."
    START = "Only include calls on or after this date (YYYY-MM-DD, UTC)."
    END = "Only include calls on or before this date (YYYY-MM-DD, UTC)."
    CALL_TYPE = "Only include calls with this exact call type ('all' for every type)."
    OUTPUT = "Optional path to write the result to."
    SORT_KEY = "Column (dotted path) to sort by."
    DESCENDING = "Sort in descending order."
    QUERY = "Case-insensitive text matched against file name, agent, call ID, summary, root cause and call type."
    PAGE = "Feed page to show (5 calls per page)."
    CALL_ID = "Case-insensitive substring of the call ID."
    AGENT = "Case-insensitive substring of the agent name."
    REPORT_CALL_ID = "Exact call ID of the call to report on."
    NOTE = "Reviewer note appended to the report."
    REASON = "Only unresolved calls in this unresolved-reason bucket (trailing period ignored)."
    DASHBOARD_COMMAND = """Print fleet-wide dashboard metrics for the loaded calls.

Computes totals, resolution counts, pillar averages, sentiment split, call
driver ranking, agent leaderboard and the unresolved-reason histogram."""
