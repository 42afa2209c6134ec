"""CLI interface for call QA analytics."""

from pathlib import Path

import typer
from loguru import logger
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .aggregator import generate_dashboard_metrics
from .alerts import find_commendations, find_red_flags
from .cache import AnalysisCache
from .constants import (
    ALL_CALL_TYPES,
    CAMPAIGN_ENV_VAR,
    DATA_PATH_ENV_VAR,
    DEFAULT_CSV_OUTPUT,
    DEFAULT_DATA_PATH,
    EXIT_CODE_ERROR,
    FIRST_PAGE,
    Campaign,
    CliHelp,
    DriverSortKey,
    LogMessage,
    ReviewField,
    SortDirection,
)
from .drivers import build_driver_metrics, sort_driver_metrics
from .models import ResultItem
from .reports.formatters import format_analysis_as_text, safe_format_date
from .reports.models import DashboardMetrics
from .review import (
    DataFeed,
    SortConfig,
    filter_by_call_type,
    filter_by_date_range,
    filter_by_unresolved_reason,
    search_calls,
)
from .scoring import calculate_qa_scores, format_seconds_as_mmss
from .storage import ResultStorage

app = typer.Typer(help=CliHelp.APP)
console = Console()

DataOption = typer.Option(
    DEFAULT_DATA_PATH, "--data", "-d", envvar=DATA_PATH_ENV_VAR, help=CliHelp.DATA
)
CampaignOption = typer.Option(
    None, "--campaign", envvar=CAMPAIGN_ENV_VAR, help=CliHelp.CAMPAIGN
)
StartOption = typer.Option(None, "--start", help=CliHelp.START)
EndOption = typer.Option(None, "--end", help=CliHelp.END)
CallTypeOption = typer.Option(ALL_CALL_TYPES, "--call-type", help=CliHelp.CALL_TYPE)


def _load_items(
    *,
    data: Path,
    campaign: Campaign | None,
    start: str | None = None,
    end: str | None = None,
    call_type: str = ALL_CALL_TYPES,
) -> list[ResultItem]:
    """Load items from disk and apply the common date and call type filters."""
    storage = ResultStorage(cache=AnalysisCache(campaign=campaign))
    items = storage.load_items(path=data)
    items = filter_by_date_range(items, start, end)
    return filter_by_call_type(items, call_type)


def _print_dashboard(metrics: DashboardMetrics, campaign: Campaign | None) -> None:
    summary = metrics.analytics_summary

    overview = Table(title="Dashboard")
    overview.add_column("Metric")
    overview.add_column("Value", justify="right")
    overview.add_row("Total calls", str(metrics.total_calls))
    overview.add_row("Resolved", str(metrics.resolved.count))
    overview.add_row("Unresolved", str(metrics.unresolved.count))
    overview.add_row("Resolution rate", f"{summary.resolution_rate:.1f}%")
    overview.add_row("Avg duration", metrics.avg_duration)
    overview.add_row("Avg QA score", f"{metrics.avg_qa_score:.1f}")
    if campaign == Campaign.BANKING:
        overview.add_row("Avg verification", f"{metrics.avg_verification_score:.1f}")
    else:
        overview.add_row("Avg procedure flow", f"{metrics.avg_procedure_flow_score:.1f}")
        overview.add_row("Avg ownership", f"{metrics.avg_ownership_score:.1f}")
    overview.add_row("Avg empathy", f"{metrics.avg_empathy_score:.1f}")
    overview.add_row(
        "Sentiment (+/-)",
        f"{metrics.sentiment.positive_percent}% / {metrics.sentiment.negative_percent}%",
    )
    top_driver = summary.top_call_driver
    overview.add_row("Top call driver", escape(top_driver.label) if top_driver else "-")
    overview.add_row(
        "Top unresolved root cause", escape(summary.top_unresolved_root_cause or "-")
    )
    console.print(overview)

    agents = Table(title="Agent performance")
    agents.add_column("Agent")
    agents.add_column("Avg QA", justify="right")
    agents.add_column("Calls", justify="right")
    for agent in summary.agent_performance:
        agents.add_row(
            escape(agent.name), f"{agent.avg_qa_score:.1f}", str(agent.call_count)
        )
    console.print(agents)

    reasons = Table(title=DashboardMetrics.reason_label(campaign))
    reasons.add_column("Reason")
    reasons.add_column("Count", justify="right")
    for reason in metrics.reason_counts():
        reasons.add_row(escape(reason.reason), str(reason.count))
    console.print(reasons)


def _print_items(items: list[ResultItem], *, title: str) -> None:
    table = Table(title=title)
    table.add_column("Call ID")
    table.add_column("Agent")
    table.add_column("Date")
    table.add_column("Type")
    table.add_column("QA", justify="right")
    for item in items:
        details = item.result.call_details
        table.add_row(
            escape(details.call_id),
            escape(details.agent_name),
            escape(safe_format_date(details.call_date_time)),
            escape(item.result.call_type),
            f"{calculate_qa_scores(item.result).total.score:.1f}",
        )
    console.print(table)


@app.command(help=CliHelp.DASHBOARD_COMMAND)
def dashboard(
    data: Path = DataOption,
    campaign: Campaign = CampaignOption,
    start: str = StartOption,
    end: str = EndOption,
    call_type: str = CallTypeOption,
    output: Path = typer.Option(None, "--output", "-o", help=CliHelp.OUTPUT),
) -> None:
    try:
        items = _load_items(
            data=data, campaign=campaign, start=start, end=end, call_type=call_type
        )
        metrics = generate_dashboard_metrics([item.result for item in items])
        _print_dashboard(metrics, campaign)
        if output is not None:
            ResultStorage().save_metrics(metrics=metrics, filepath=output)
    except Exception as e:
        logger.exception(LogMessage.ERROR_OCCURRED.format(e))
        raise typer.Exit(code=EXIT_CODE_ERROR)


@app.command()
def drivers(
    data: Path = DataOption,
    campaign: Campaign = CampaignOption,
    start: str = StartOption,
    end: str = EndOption,
    sort_key: DriverSortKey = typer.Option(
        DriverSortKey.COUNT, "--sort-key", "-s", help=CliHelp.SORT_KEY
    ),
    descending: bool = typer.Option(
        True, "--descending/--ascending", help=CliHelp.DESCENDING
    ),
) -> None:
    """Print the call-driver breakdown, one row per call type."""
    try:
        items = _load_items(data=data, campaign=campaign, start=start, end=end)
        breakdown = build_driver_metrics([item.result for item in items])
        direction = SortDirection.DESCENDING if descending else SortDirection.ASCENDING
        rows = sort_driver_metrics(breakdown.data, key=sort_key, direction=direction)

        table = Table(title="Call drivers")
        table.add_column("Driver")
        table.add_column("Calls", justify="right")
        table.add_column("% of total", justify="right")
        table.add_column("Avg duration", justify="right")
        if campaign == Campaign.BANKING:
            table.add_column("Verification", justify="right")
        else:
            table.add_column("Procedure", justify="right")
            table.add_column("Ownership", justify="right")
        table.add_column("Empathy", justify="right")
        table.add_column("Resolved %", justify="right")
        table.add_column("Repeat %", justify="right")

        for row in rows:
            pillar_cells = (
                [f"{row.avg_verification_score:.1f}"]
                if campaign == Campaign.BANKING
                else [
                    f"{row.avg_procedure_flow_score:.1f}",
                    f"{row.avg_ownership_score:.1f}",
                ]
            )
            table.add_row(
                escape(row.driver),
                str(row.count),
                f"{row.percent_of_total:.1f}",
                format_seconds_as_mmss(row.avg_duration),
                *pillar_cells,
                f"{row.avg_empathy_score:.1f}",
                f"{row.resolution_rate:.1f}",
                f"{row.repeat_percent:.1f}",
            )
        console.print(table)
    except Exception as e:
        logger.exception(LogMessage.ERROR_OCCURRED.format(e))
        raise typer.Exit(code=EXIT_CODE_ERROR)


@app.command()
def alerts(
    data: Path = DataOption,
    campaign: Campaign = CampaignOption,
    start: str = StartOption,
    end: str = EndOption,
) -> None:
    """Print red-flagged and commended calls."""
    try:
        items = _load_items(data=data, campaign=campaign, start=start, end=end)
        records = [item.result for item in items]

        flags = Table(title="Red flags")
        flags.add_column("Call ID")
        flags.add_column("Agent")
        flags.add_column("Reason")
        flags.add_column("Quote")
        for flag in find_red_flags(records):
            flags.add_row(
                escape(flag.call_id),
                escape(flag.agent_name),
                escape(flag.reason),
                escape(flag.quote or ""),
            )
        console.print(flags)

        praise = Table(title="Commendations")
        praise.add_column("Call ID")
        praise.add_column("Agent")
        praise.add_column("Quote")
        for commendation in find_commendations(records):
            praise.add_row(
                escape(commendation.call_id),
                escape(commendation.agent_name),
                escape(commendation.quote or ""),
            )
        console.print(praise)
    except Exception as e:
        logger.exception(LogMessage.ERROR_OCCURRED.format(e))
        raise typer.Exit(code=EXIT_CODE_ERROR)


@app.command()
def search(
    data: Path = DataOption,
    campaign: Campaign = CampaignOption,
    call_id: str = typer.Option("", "--call-id", help=CliHelp.CALL_ID),
    agent: str = typer.Option("", "--agent", help=CliHelp.AGENT),
    start: str = StartOption,
    end: str = EndOption,
    sort_key: str = typer.Option(
        ReviewField.CALL_DATE_TIME, "--sort-key", "-s", help=CliHelp.SORT_KEY
    ),
    descending: bool = typer.Option(
        True, "--descending/--ascending", help=CliHelp.DESCENDING
    ),
    reason: str = typer.Option(None, "--reason", help=CliHelp.REASON),
) -> None:
    """Search calls by call ID, agent name and date range."""
    try:
        items = _load_items(data=data, campaign=campaign)
        matched = search_calls(
            items, call_id=call_id, agent_name=agent, start=start, end=end
        )
        if reason is not None:
            matched = filter_by_unresolved_reason(matched, reason)
        direction = SortDirection.DESCENDING if descending else SortDirection.ASCENDING
        ordered = SortConfig(key=sort_key, direction=direction).apply(matched)
        _print_items(ordered, title=f"Search results ({len(ordered)})")
    except Exception as e:
        logger.exception(LogMessage.ERROR_OCCURRED.format(e))
        raise typer.Exit(code=EXIT_CODE_ERROR)


@app.command()
def feed(
    data: Path = DataOption,
    campaign: Campaign = CampaignOption,
    query: str = typer.Option("", "--query", "-q", help=CliHelp.QUERY),
    page: int = typer.Option(FIRST_PAGE, "--page", "-p", help=CliHelp.PAGE),
) -> None:
    """Print one page of the data feed."""
    try:
        items = _load_items(data=data, campaign=campaign)
        data_feed = DataFeed()
        data_feed.set_query(query)
        data_feed.go_to_page(page, items)
        _print_items(
            data_feed.page_items(items),
            title=f"Data feed (page {data_feed.page} of {data_feed.total_pages(items)})",
        )
    except Exception as e:
        logger.exception(LogMessage.ERROR_OCCURRED.format(e))
        raise typer.Exit(code=EXIT_CODE_ERROR)


@app.command()
def report(
    call_id: str = typer.Argument(..., help=CliHelp.REPORT_CALL_ID),
    data: Path = DataOption,
    campaign: Campaign = CampaignOption,
    note: str = typer.Option(None, "--note", help=CliHelp.NOTE),
) -> None:
    """Print the plain-text report of every call with the given call ID."""
    try:
        items = _load_items(data=data, campaign=campaign)
        matches = [item for item in items if item.result.call_details.call_id == call_id]
        if not matches:
            logger.warning(LogMessage.NO_ITEMS)
        for item in matches:
            console.print(
                format_analysis_as_text(
                    item.file_name,
                    item.result,
                    note=note,
                    transcript=item.transcript_content,
                ),
                markup=False,
                highlight=False,
            )
    except Exception as e:
        logger.exception(LogMessage.ERROR_OCCURRED.format(e))
        raise typer.Exit(code=EXIT_CODE_ERROR)


@app.command()
def export(
    data: Path = DataOption,
    campaign: Campaign = CampaignOption,
    start: str = StartOption,
    end: str = EndOption,
    call_type: str = CallTypeOption,
    output: Path = typer.Option(DEFAULT_CSV_OUTPUT, "--output", "-o", help=CliHelp.OUTPUT),
) -> None:
    """Export the filtered calls to CSV, one row per call."""
    try:
        items = _load_items(
            data=data, campaign=campaign, start=start, end=end, call_type=call_type
        )
        ResultStorage().save_results_csv(items=items, filepath=output)
    except Exception as e:
        logger.exception(LogMessage.ERROR_OCCURRED.format(e))
        raise typer.Exit(code=EXIT_CODE_ERROR)
