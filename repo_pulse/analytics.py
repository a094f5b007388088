"""
Analytics calculator.

Combines the individual metric functions into one ``AnalyticsMetrics`` record.
Every field is a pure function of the raw signals and a single ``now``.
"""

from datetime import datetime
from typing import NamedTuple

from repo_pulse.metrics.commit_activity import compute_commit_activity
from repo_pulse.metrics.commit_quality import compute_commit_quality_score
from repo_pulse.metrics.contributors import (
    compute_active_contributors,
    compute_bus_factor,
    compute_contributor_diversity,
)
from repo_pulse.metrics.discussion import compute_discussion_activity
from repo_pulse.metrics.growth import compute_growth_trend, compute_stars_per_day
from repo_pulse.metrics.merge_time import compute_avg_time_to_merge
from repo_pulse.metrics.release_cadence import compute_release_cadence
from repo_pulse.metrics.resolution import (
    compute_issue_close_rate,
    compute_pr_merge_rate,
)
from repo_pulse.metrics.responsiveness import (
    compute_avg_response_time,
    compute_stale_issues_count,
)
from repo_pulse.signals import RawSignals, ensure_utc, normalize_timestamps


class AnalyticsMetrics(NamedTuple):
    """Derived health, quality and popularity metrics for a repository."""

    commit_activity: str = "unknown"  # "unknown", "low", "medium", "high"
    pr_merge_rate: int = 0
    issue_close_rate: int = 0
    avg_time_to_merge: str = "N/A"
    avg_response_time: str = "N/A"
    stale_issues_count: int = 0
    contributor_diversity: str = "0/0"
    bus_factor: str = "Low Risk"  # "Low Risk", "Medium Risk", "High Risk"
    release_cadence: str = "N/A"
    commit_quality_score: int = 0
    growth_trend: str = "Stable"  # "Stable", "Growing", "High Growth"
    stars_per_day: str = "0"
    discussion_activity: str = "0.0"
    active_contributors: int = 0


def calculate_analytics(signals: RawSignals, now: datetime) -> AnalyticsMetrics:
    """
    Compute every analytics metric for one repository.

    Args:
        signals: Raw repository signals.
        now: Reference instant shared by all time-based metrics.

    Returns:
        AnalyticsMetrics with sentinels wherever the input is insufficient.
    """
    now = ensure_utc(now)
    signals = normalize_timestamps(signals)

    return AnalyticsMetrics(
        commit_activity=compute_commit_activity(signals, now),
        pr_merge_rate=compute_pr_merge_rate(signals),
        issue_close_rate=compute_issue_close_rate(signals),
        avg_time_to_merge=compute_avg_time_to_merge(signals),
        avg_response_time=compute_avg_response_time(signals),
        stale_issues_count=compute_stale_issues_count(signals, now),
        contributor_diversity=compute_contributor_diversity(signals),
        bus_factor=compute_bus_factor(signals),
        release_cadence=compute_release_cadence(signals),
        commit_quality_score=compute_commit_quality_score(signals),
        growth_trend=compute_growth_trend(signals, now),
        stars_per_day=compute_stars_per_day(signals, now),
        discussion_activity=compute_discussion_activity(signals),
        active_contributors=compute_active_contributors(signals),
    )


# Keys used when handing metrics to renderers, matching the card data format
_EXPORT_KEYS = {
    "commit_activity": "commitActivity",
    "pr_merge_rate": "prMergeRate",
    "issue_close_rate": "issueCloseRate",
    "avg_time_to_merge": "avgTimeToMerge",
    "avg_response_time": "avgResponseTime",
    "stale_issues_count": "staleIssuesCount",
    "contributor_diversity": "contributorDiversity",
    "bus_factor": "busFactor",
    "release_cadence": "releaseCadence",
    "commit_quality_score": "commitQualityScore",
    "growth_trend": "growthTrend",
    "stars_per_day": "starsPerDay",
    "discussion_activity": "discussionActivity",
    "active_contributors": "activeContributors",
}


def analytics_to_dict(metrics: AnalyticsMetrics) -> dict[str, str | int]:
    """Export metrics with camelCase keys."""
    return {_EXPORT_KEYS[field]: value for field, value in metrics._asdict().items()}
