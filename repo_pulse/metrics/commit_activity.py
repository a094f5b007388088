"""Commit activity metric."""

from datetime import datetime

from repo_pulse.metrics.base import days_before
from repo_pulse.signals import RawSignals

RECENT_COMMIT_WINDOW_DAYS = 30


def compute_commit_activity(signals: RawSignals, now: datetime) -> str:
    """
    Classify commit activity over the last 30 days.

    Levels:
    - unknown: no sampled commits at all
    - low: fewer than 10 recent commits (including none)
    - medium: 10-29 recent commits
    - high: 30 or more recent commits
    """
    if not signals.commits:
        return "unknown"

    cutoff = days_before(now, RECENT_COMMIT_WINDOW_DAYS)
    recent_count = sum(
        1
        for commit in signals.commits
        if commit.committed_at is not None and commit.committed_at > cutoff
    )

    if recent_count < 10:
        return "low"
    if recent_count < 30:
        return "medium"
    return "high"
