"""
Command-line interface for Repo Pulse.
"""

import asyncio
import functools
import json
from datetime import datetime, timezone
from pathlib import Path

import httpx
import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from repo_pulse.config import (
    get_activity_window_days,
    is_verbose_enabled,
    set_activity_window_days,
    set_verbose,
    set_verify_ssl,
)
from repo_pulse.core import (
    RepositoryReport,
    analyze_repository,
    build_report,
    report_to_dict,
)
from repo_pulse.formatting import format_number, format_relative_date, format_size
from repo_pulse.http_client import close_async_http_client
from repo_pulse.rank import DEFAULT_RANK_POLICY, score_breakdown
from repo_pulse.signals import parse_timestamp, signals_from_dict, signals_from_github

# --- Typer App ---
app = typer.Typer(help="Repository health, activity and rank from raw signals.")
console = Console()

TIER_COLORS = {"S": "magenta", "A": "green", "B": "cyan", "C": "yellow", "D": "red"}
ACTIVITY_COLORS = {"high": "green", "medium": "yellow", "low": "red"}
SPARK_CHARS = " ▁▂▃▄▅▆▇█"

# --- Helper Functions ---


def syncify(func):
    """Run an async Typer command in a fresh event loop."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        return asyncio.run(func(*args, **kwargs))

    return wrapper


def parse_repository(value: str) -> tuple[str, str]:
    """
    Parse 'owner/repo' or a GitHub URL into (owner, repo).

    Raises:
        ValueError: If the value has no owner or repository part.
    """
    cleaned = value.strip().removesuffix(".git").rstrip("/")
    for prefix in ("https://github.com/", "http://github.com/", "github.com/"):
        if cleaned.startswith(prefix):
            cleaned = cleaned[len(prefix) :]
            break

    parts = cleaned.split("/")
    if len(parts) != 2 or not all(parts):
        raise ValueError(f"Invalid repository '{value}'. Use the 'owner/repo' format.")
    return parts[0], parts[1]


def _sparkline(counts: list[int]) -> str:
    peak = max(counts, default=0)
    if peak == 0:
        return SPARK_CHARS[0] * len(counts)
    steps = len(SPARK_CHARS) - 1
    return "".join(
        SPARK_CHARS[max(1, round(count / peak * steps))] if count else SPARK_CHARS[0]
        for count in counts
    )


def _apply_window(window: int | None) -> int:
    # None clears any override left by a previous command
    set_activity_window_days(window)
    return get_activity_window_days()


def display_report(report: RepositoryReport, now: datetime) -> None:
    """Display a repository report with rich tables."""
    analytics = report.analytics
    signals = report.signals
    tier_color = TIER_COLORS.get(report.rank.tier, "white")

    title = report.repo_url.replace("https://github.com/", "") or "Repository"
    console.print(f"\n📦 [bold cyan]{title}[/bold cyan]")
    console.print(
        f"   Rank: [{tier_color}]{report.rank.score}/100 "
        f"(Tier {report.rank.tier})[/{tier_color}]"
    )
    console.print(
        f"   ⭐ {format_number(signals.star_count)}  "
        f"🍴 {format_number(signals.fork_count)}  "
        f"👀 {format_number(signals.watcher_count)}  "
        f"Last push: {format_relative_date(signals.repo_pushed_at, now)} "
        f"({report.health_status})"
    )
    display_profile(report, now)

    metrics_table = Table(
        title="Analytics", show_header=True, header_style="bold magenta"
    )
    metrics_table.add_column("Metric", style="cyan", no_wrap=True)
    metrics_table.add_column("Value", justify="left")

    activity_color = ACTIVITY_COLORS.get(analytics.commit_activity, "dim")
    activity_label = (
        f"[{activity_color}]{analytics.commit_activity}[/{activity_color}]"
    )
    growth_label = f"{analytics.growth_trend} ({analytics.stars_per_day} ⭐/day)"
    rows = [
        ("Commit Activity", activity_label),
        ("PR Merge Rate", f"{analytics.pr_merge_rate}%"),
        ("Issue Close Rate", f"{analytics.issue_close_rate}%"),
        ("Avg Time to Merge", analytics.avg_time_to_merge),
        ("Avg Response Time", analytics.avg_response_time),
        ("Stale Issues", str(analytics.stale_issues_count)),
        ("Contributor Diversity", analytics.contributor_diversity),
        ("Active Contributors", str(analytics.active_contributors)),
        ("Bus Factor", analytics.bus_factor),
        ("Release Cadence", analytics.release_cadence),
        ("Commit Quality", f"{analytics.commit_quality_score}%"),
        ("Growth Trend", growth_label),
        ("Discussion Activity", f"{analytics.discussion_activity} comments/item"),
    ]
    for name, value in rows:
        metrics_table.add_row(name, value)
    console.print(metrics_table)

    counts = [day.count for day in report.activity]
    console.print(
        f"\n[bold]Activity ({len(counts)} days)[/bold] {_sparkline(counts)}"
    )
    console.print(
        f"   Current streak: {report.streak.current_streak}d  "
        f"Longest streak: {report.streak.longest_streak}d  "
        f"Total: {report.streak.total_contributions}"
    )


def display_profile(report: RepositoryReport, now: datetime) -> None:
    """Display license, size, languages, topics, contributors and latest release."""
    signals = report.signals
    console.print(
        f"   📄 {signals.license_spdx_id or 'No license'}  "
        f"💾 {format_size(signals.disk_usage_kb)}  "
        f"👥 {format_number(len(signals.contributors))} contributors"
    )
    if report.languages:
        shares = ", ".join(
            f"{lang.name} {lang.percentage}%" for lang in report.languages
        )
        console.print(f"   Languages: {shares}")
    if signals.topics:
        console.print(f"   Topics: [dim]{escape(', '.join(signals.topics))}[/dim]")
    if report.top_contributors:
        top = ", ".join(
            f"{c.login} ({c.contribution_count})" for c in report.top_contributors
        )
        console.print(f"   Top contributors: {escape(top)}")
    release = report.latest_release
    if release is not None:
        label = release.name or release.tag_name or "unnamed"
        console.print(
            f"   Latest release: {escape(label)} "
            f"({format_relative_date(release.published_at, now)})"
        )


def display_breakdown(report: RepositoryReport, now: datetime) -> None:
    """Display the weighted sub-scores behind the rank."""
    signals = report.signals
    breakdown = score_breakdown(
        report.analytics,
        signals.star_count,
        signals.fork_count,
        signals.watcher_count,
        signals.repo_pushed_at,
        now,
    )
    weights = DEFAULT_RANK_POLICY.weights._asdict()

    table = Table(
        title="Rank Breakdown", show_header=True, header_style="bold magenta"
    )
    table.add_column("Signal", style="cyan", no_wrap=True)
    table.add_column("Score", justify="right")
    table.add_column("Weight", justify="right")
    table.add_column("Points", justify="right", style="magenta")
    for key, sub_score in breakdown.items():
        table.add_row(
            key.replace("_", " ").title(),
            f"{sub_score:.1f}",
            str(weights[key]),
            f"{sub_score * weights[key] / 100:.2f}",
        )
    console.print(table)


def _emit(report: RepositoryReport, now: datetime, as_json: bool) -> None:
    if as_json:
        typer.echo(json.dumps(report_to_dict(report, include_signals=True), indent=2))
        return
    display_report(report, now)
    if is_verbose_enabled():
        display_breakdown(report, now)


# --- Commands ---


@app.command()
@syncify
async def analyze(
    repository: str = typer.Argument(
        ...,
        help="Repository to analyze, as 'owner/repo' or a GitHub URL.",
    ),
    window: int | None = typer.Option(
        None,
        "--window",
        "-w",
        help="Days in the activity series (default: config value or 30).",
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print the report as JSON instead of tables.",
    ),
    verbose: bool | None = typer.Option(
        None,
        "--verbose",
        "-v",
        help="Show fetch details and the rank breakdown. If not specified, uses config file default.",
    ),
    insecure: bool = typer.Option(
        False,
        "--insecure",
        help="Disable SSL certificate verification for HTTPS requests.",
    ),
):
    """Fetch a GitHub repository and report its health, activity and rank."""
    set_verify_ssl(not insecure)
    set_verbose(verbose)

    try:
        owner, name = parse_repository(repository)
        window_days = _apply_window(window)
        now = datetime.now(timezone.utc)
        if is_verbose_enabled() and not as_json:
            console.print(f"[dim]Fetching signals for {owner}/{name}...[/dim]")
        report = await analyze_repository(
            owner, name, now=now, window_days=window_days
        )
    except ValueError as e:
        console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(code=1)
    except httpx.HTTPError as e:
        console.print(f"[red]❌ Failed to fetch repository data: {e}[/red]")
        raise typer.Exit(code=1)
    finally:
        await close_async_http_client()

    if is_verbose_enabled() and not as_json:
        signals = report.signals
        console.print(
            f"[dim]Sampled {len(signals.commits)} commits, "
            f"{len(signals.pull_requests)} PRs, {len(signals.issues)} issues, "
            f"{len(signals.contributors)} contributors, "
            f"{len(signals.releases)} releases[/dim]"
        )
    _emit(report, now, as_json)


@app.command()
def report(
    path: Path = typer.Argument(
        ...,
        help="JSON file with flat signals or a {'repository': ..., 'contributors': ...} payload.",
    ),
    window: int | None = typer.Option(
        None,
        "--window",
        "-w",
        help="Days in the activity series (default: config value or 30).",
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print the report as JSON instead of tables.",
    ),
    now_value: str | None = typer.Option(
        None,
        "--now",
        help="Reference time as ISO-8601 (default: current UTC time).",
    ),
    verbose: bool | None = typer.Option(
        None,
        "--verbose",
        "-v",
        help="Show the rank breakdown. If not specified, uses config file default.",
    ),
):
    """Compute a report offline from a JSON signals file."""
    set_verbose(verbose)

    if not path.is_file():
        console.print(f"[red]❌ File not found: {path}[/red]")
        raise typer.Exit(code=1)

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        console.print(f"[red]❌ Could not read {path.name}: {e}[/red]")
        raise typer.Exit(code=1)

    if not isinstance(data, dict):
        console.print(f"[red]❌ {path.name} should contain a JSON object.[/red]")
        raise typer.Exit(code=1)

    if now_value is None:
        now = datetime.now(timezone.utc)
    else:
        parsed_now = parse_timestamp(now_value)
        if parsed_now is None:
            console.print(f"[red]❌ Invalid --now value: {now_value}[/red]")
            raise typer.Exit(code=1)
        now = parsed_now

    try:
        window_days = _apply_window(window)
    except ValueError as e:
        console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(code=1)

    if "repository" in data:
        signals = signals_from_github(
            data.get("repository"), data.get("contributors")
        )
    else:
        signals = signals_from_dict(data)

    result = build_report(
        signals, now, window_days=window_days, repo_url=data.get("repo_url", "")
    )
    _emit(result, now, as_json)


if __name__ == "__main__":
    app()
