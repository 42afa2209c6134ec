"""Loading call analyses from disk and exporting results."""

import json
from pathlib import Path
from typing import Any

import polars as pl
from loguru import logger
from pydantic import ValidationError

from .cache import AnalysisCache
from .constants import (
    DEFAULT_CSV_OUTPUT,
    DEFAULT_METRICS_OUTPUT,
    JSON_INDENT,
    CsvColumn,
    ItemKey,
    LogMessage,
)
from .models import AnalysisResult, ResultItem, WordTimestamp, stored_content_hash
from .reports.models import DashboardMetrics
from .scoring import calculate_qa_scores

LIST_SEPARATOR = "; "


class ResultStorage:
    """Reads stored call analyses and writes analytics output.

    Attributes:
        cache: Optional cache reused across loads; analyses already cached under
            the same content hash are not validated again.
    """

    def __init__(self, *, cache: AnalysisCache | None = None):
        self.cache = cache

    def load_items(self, *, path: Path | str) -> list[ResultItem]:
        """Load result items from a JSON file or a directory of JSON files.

        Each file holds one object or a list of objects. An object is either a
        stored item (``fileName``, ``result``, ...) or a bare analysis, which is
        wrapped using the file name. Invalid files and objects are logged and
        skipped.

        Args:
            path: JSON file or directory.

        Returns:
            list[ResultItem]: Loaded items in file then list order.
        """
        path = Path(path)
        if not path.exists():
            logger.error(LogMessage.PATH_MISSING.format(path))
            return []

        json_files = sorted(path.glob("*.json")) if path.is_dir() else [path]
        logger.info(LogMessage.LOADING_FILES.format(len(json_files), path))

        items: list[ResultItem] = []
        for json_file in json_files:
            try:
                with json_file.open("r", encoding="utf-8") as f:
                    data = json.load(f)
            except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
                logger.error(LogMessage.SKIPPED_OBJECT.format(json_file, e))
                continue

            objects = data if isinstance(data, list) else [data]
            for obj in objects:
                if not isinstance(obj, dict):
                    logger.error(
                        LogMessage.SKIPPED_OBJECT.format(json_file, type(obj).__name__)
                    )
                    continue
                try:
                    items.append(self._item_from_object(obj, source=json_file))
                except (ValidationError, KeyError, TypeError) as e:
                    logger.error(LogMessage.SKIPPED_OBJECT.format(json_file, e))

        if not items:
            logger.warning(LogMessage.NO_ITEMS)
        logger.info(LogMessage.LOADED_ITEMS.format(len(items)))
        return items

    def _item_from_object(self, obj: dict[str, Any], *, source: Path) -> ResultItem:
        if ItemKey.RESULT not in obj:
            obj = {ItemKey.FILE_NAME: source.name, ItemKey.RESULT: obj}

        # Parsed before any cache access so an invalid object never leaves an entry
        timestamps = _word_timestamps(obj.get(ItemKey.TIMESTAMPS) or [])

        content_hash = stored_content_hash(obj)
        cached = self.cache.get(content_hash) if self.cache is not None else None
        if cached is not None:
            logger.debug(LogMessage.CACHE_HIT.format(content_hash))
            return ResultItem.from_dict(data=obj, result=cached)

        item = ResultItem.from_dict(data=obj)
        if self.cache is not None:
            self.cache.put(item.content_hash, item.result)
            if timestamps:
                self.cache.put_timestamps(item.content_hash, timestamps)
        return item

    def save_metrics(
        self,
        *,
        metrics: DashboardMetrics,
        filepath: Path | str = DEFAULT_METRICS_OUTPUT,
    ) -> None:
        """Save dashboard metrics to a JSON file."""
        filepath = Path(filepath)

        with filepath.open("w") as f:
            json.dump(metrics.to_dict(), f, indent=JSON_INDENT, default=str)

        logger.success(LogMessage.SAVED_METRICS.format(filepath))

    def save_results_csv(
        self,
        *,
        items: list[ResultItem],
        filepath: Path | str = DEFAULT_CSV_OUTPUT,
    ) -> None:
        """Save one CSV row per call using Polars.

        Args:
            items: Result items to export, in row order.
            filepath: Path where the CSV file should be saved.
        """
        filepath = Path(filepath)

        if not items:
            logger.warning(LogMessage.NO_ITEMS)
            return

        df = results_to_frame([item.result for item in items])
        df.write_csv(filepath)

        logger.success(LogMessage.SAVED_CSV.format(len(df), filepath))


def _word_timestamps(raw: list[dict[str, Any]]) -> list[WordTimestamp]:
    return [
        WordTimestamp(word=t["word"], start_time=t["startTime"], end_time=t["endTime"])
        for t in raw
    ]


def results_to_frame(results: list[AnalysisResult]) -> pl.DataFrame:
    """Flatten analyses into the export table, one row per call.

    Pillar columns stay empty where the campaign does not score that pillar.
    """
    rows: list[dict[str, Any]] = []

    for result in results:
        flow = result.procedure_flow
        ownership = result.ownership
        empathy = result.empathy
        details = result.call_details

        rows.append(
            {
                CsvColumn.CALL_ID: details.call_id,
                CsvColumn.AGENT_NAME: details.agent_name,
                CsvColumn.CALL_DATE_TIME: details.call_date_time,
                CsvColumn.CALL_DURATION: details.call_duration,
                CsvColumn.CALL_TYPE: result.call_type,
                CsvColumn.ROOT_CAUSE: result.root_cause,
                CsvColumn.SUMMARY: result.summary,
                CsvColumn.ISSUE_RESOLVED: result.resolution.issue_resolved,
                CsvColumn.REASON_CATEGORY: result.resolution.reason_category,
                CsvColumn.REASON_DETAIL: result.resolution.reason_detail,
                CsvColumn.HOLD_OR_SILENCE_COUNT: result.hold_or_silence_count,
                CsvColumn.QUALITY_SCORE: f"{calculate_qa_scores(result).total.score:.2f}",
                CsvColumn.PROCEDURE_FLOW_SCORE: _as_float(
                    flow.adherence_score if flow else None
                ),
                CsvColumn.OWNERSHIP_SCORE: _as_float(
                    ownership.ownership_score if ownership else None
                ),
                CsvColumn.EMPATHY_SCORE: _as_float(empathy.empathy_score),
                CsvColumn.PROCEDURE_FLOW_DEVIATIONS: (
                    LIST_SEPARATOR.join(flow.deviations) if flow else None
                ),
                CsvColumn.OWNERSHIP_PHRASES: (
                    LIST_SEPARATOR.join(ownership.suggested_phrases) if ownership else None
                ),
                CsvColumn.EMPATHY_PHRASES: LIST_SEPARATOR.join(empathy.suggested_phrases),
                CsvColumn.POSITIVE_PERCENT: _as_float(
                    result.customer_sentiment.positive_percentage
                ),
                CsvColumn.NEGATIVE_PERCENT: _as_float(
                    result.customer_sentiment.negative_percentage
                ),
                CsvColumn.OPPORTUNITIES: result.overall_findings.opportunities,
                CsvColumn.RECOMMENDATIONS: result.overall_findings.recommendations,
            }
        )

    # Column order and dtypes stay fixed even for an empty export
    schema = {column.value: _column_dtype(column) for column in CsvColumn}
    return pl.DataFrame(
        [{str(key): value for key, value in row.items()} for row in rows],
        schema=schema,
    )


def _column_dtype(column: CsvColumn) -> pl.DataType:
    if column == CsvColumn.ISSUE_RESOLVED:
        return pl.Boolean
    if column == CsvColumn.HOLD_OR_SILENCE_COUNT:
        return pl.Int64
    if column in (
        CsvColumn.PROCEDURE_FLOW_SCORE,
        CsvColumn.OWNERSHIP_SCORE,
        CsvColumn.EMPATHY_SCORE,
        CsvColumn.POSITIVE_PERCENT,
        CsvColumn.NEGATIVE_PERCENT,
    ):
        return pl.Float64
    return pl.Utf8


def _as_float(value: float | None) -> float | None:
    return None if value is None else float(value)
