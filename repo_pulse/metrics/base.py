"""
Shared constants and helpers for analytics metrics.
"""

import math
from datetime import datetime, timedelta

from repo_pulse.signals import IssueSignal, PullRequestSignal, RawSignals

NOT_AVAILABLE = "N/A"

SECONDS_PER_HOUR = 60 * 60
SECONDS_PER_DAY = 24 * SECONDS_PER_HOUR


def days_before(now: datetime, days: int) -> datetime:
    """Return the instant ``days`` whole days before ``now``."""
    return now - timedelta(days=days)


def floored_percentage(part: int, whole: int) -> int:
    """Floored percentage of ``part`` in ``whole``, capped at 100; 0 if whole is 0."""
    if whole <= 0:
        return 0
    return min(100, math.floor(part / whole * 100))


def discussion_items(
    signals: RawSignals,
) -> list[IssueSignal | PullRequestSignal]:
    """Sampled issues followed by sampled pull requests."""
    return [*signals.issues, *signals.pull_requests]
