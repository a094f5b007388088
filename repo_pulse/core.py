"""
Core analysis logic for Repo Pulse.

Runs the calculators in dependency order over one set of raw signals:
analytics and the activity series first, then the rank (from analytics) and
the streaks (from the activity series).
"""

from datetime import datetime, timezone
from typing import Any, NamedTuple

from repo_pulse.activity import (
    DEFAULT_ACTIVITY_WINDOW_DAYS,
    ActivityDay,
    calculate_activity_data,
)
from repo_pulse.analytics import (
    AnalyticsMetrics,
    analytics_to_dict,
    calculate_analytics,
)
from repo_pulse.formatting import (
    LanguageShare,
    format_size,
    health_status,
    language_breakdown,
)
from repo_pulse.rank import RankResult, calculate_rank
from repo_pulse.signals import (
    ContributorSignal,
    RawSignals,
    ReleaseSignal,
    ensure_utc,
    format_timestamp,
    signals_to_dict,
)
from repo_pulse.streak import StreakStats, calculate_streak_stats
from repo_pulse.vcs import BaseVCSProvider, get_vcs_provider

TOP_CONTRIBUTOR_COUNT = 5


class RepositoryReport(NamedTuple):
    """Everything derived from one repository's signals."""

    repo_url: str
    analytics: AnalyticsMetrics
    rank: RankResult
    activity: list[ActivityDay]
    streak: StreakStats
    health_status: str
    signals: RawSignals
    languages: list[LanguageShare]
    top_contributors: list[ContributorSignal]
    latest_release: ReleaseSignal | None


def build_report(
    signals: RawSignals,
    now: datetime,
    window_days: int = DEFAULT_ACTIVITY_WINDOW_DAYS,
    repo_url: str = "",
) -> RepositoryReport:
    """
    Compute the full report for a repository.

    Args:
        signals: Raw repository signals.
        now: Reference instant shared by every calculator.
        window_days: Length of the activity series in days.
        repo_url: Repository URL carried into the report.

    Returns:
        RepositoryReport with analytics, rank, activity series, streaks and
        the repository profile (languages, top contributors, latest release).
    """
    now = ensure_utc(now)

    analytics = calculate_analytics(signals, now)
    activity = calculate_activity_data(signals, now, window_days)
    rank = calculate_rank(
        analytics,
        stars=signals.star_count,
        forks=signals.fork_count,
        watchers=signals.watcher_count,
        pushed_at=signals.repo_pushed_at,
        now=now,
    )
    streak = calculate_streak_stats(activity)

    return RepositoryReport(
        repo_url=repo_url,
        analytics=analytics,
        rank=rank,
        activity=activity,
        streak=streak,
        health_status=health_status(signals.repo_pushed_at, now),
        signals=signals,
        languages=language_breakdown(signals.languages),
        top_contributors=list(signals.contributors[:TOP_CONTRIBUTOR_COUNT]),
        latest_release=signals.releases[0] if signals.releases else None,
    )


async def analyze_repository(
    owner: str,
    repo: str,
    now: datetime | None = None,
    window_days: int = DEFAULT_ACTIVITY_WINDOW_DAYS,
    provider: BaseVCSProvider | None = None,
) -> RepositoryReport:
    """
    Fetch a repository's signals and build its report.

    Args:
        owner: Repository owner.
        repo: Repository name.
        now: Reference instant (defaults to the current UTC time, read once).
        window_days: Length of the activity series in days.
        provider: VCS provider to fetch with (defaults to GitHub).

    Raises:
        ValueError: If credentials are missing or the repository is not found.
        httpx.HTTPError: If the platform API request fails.
    """
    if provider is None:
        provider = get_vcs_provider("github")
    if now is None:
        now = datetime.now(timezone.utc)

    signals = await provider.get_repository_signals(owner, repo)
    return build_report(
        signals,
        now,
        window_days=window_days,
        repo_url=provider.get_repository_url(owner, repo),
    )


def report_to_dict(
    report: RepositoryReport, include_signals: bool = False
) -> dict[str, Any]:
    """Serialize a report into JSON-ready data for renderers."""
    signals = report.signals
    data: dict[str, Any] = {
        "repoUrl": report.repo_url,
        "analytics": analytics_to_dict(report.analytics),
        "rank": {"score": report.rank.score, "tier": report.rank.tier},
        "activity": [
            {"date": day.label, "count": day.count} for day in report.activity
        ],
        "streak": {
            "currentStreak": report.streak.current_streak,
            "longestStreak": report.streak.longest_streak,
            "totalContributions": report.streak.total_contributions,
        },
        "healthStatus": report.health_status,
        "primaryLanguage": signals.primary_language,
        "languages": [
            {"name": lang.name, "bytes": lang.size, "percentage": lang.percentage}
            for lang in report.languages
        ],
        "license": signals.license_spdx_id,
        "topics": list(signals.topics),
        "size": signals.disk_usage_kb,
        "sizeFormatted": format_size(signals.disk_usage_kb),
        "contributors": len(signals.contributors),
        "topContributors": [
            {"login": c.login, "contributions": c.contribution_count}
            for c in report.top_contributors
        ],
        "latestRelease": _release_to_dict(report.latest_release),
    }
    if include_signals:
        data["signals"] = signals_to_dict(report.signals)
    return data


def _release_to_dict(release: ReleaseSignal | None) -> dict[str, Any] | None:
    if release is None:
        return None
    return {
        "name": release.name or release.tag_name,
        "tag": release.tag_name,
        "publishedAt": format_timestamp(release.published_at),
    }
