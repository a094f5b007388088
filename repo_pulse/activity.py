"""
Daily activity time series.

Buckets commits, pull request creations and issue creations into UTC calendar
days over a trailing window ending at ``now``.
"""

from datetime import datetime, timedelta
from typing import NamedTuple

from repo_pulse.signals import RawSignals, ensure_utc, normalize_timestamps

DEFAULT_ACTIVITY_WINDOW_DAYS = 30


class ActivityDay(NamedTuple):
    """Activity count for one calendar day."""

    label: str
    count: int


def _day_label(offset: int) -> str:
    """Label a day by how many days before ``now`` it is."""
    if offset == 0:
        return "Today"
    if offset == 1:
        return "Yesterday"
    return f"{offset}d ago"


def calculate_activity_data(
    signals: RawSignals,
    now: datetime,
    window_days: int = DEFAULT_ACTIVITY_WINDOW_DAYS,
) -> list[ActivityDay]:
    """
    Build the trailing daily activity series.

    Args:
        signals: Raw repository signals.
        now: Reference instant; its UTC date is "Today".
        window_days: Number of days in the series.

    Returns:
        ``window_days`` entries ordered from oldest to newest.
    """
    today = ensure_utc(now).date()
    signals = normalize_timestamps(signals)

    event_dates = [
        c.committed_at.date() for c in signals.commits if c.committed_at
    ]
    event_dates.extend(
        pr.created_at.date() for pr in signals.pull_requests if pr.created_at
    )
    event_dates.extend(
        issue.created_at.date() for issue in signals.issues if issue.created_at
    )

    activity: list[ActivityDay] = []
    for offset in range(window_days - 1, -1, -1):
        day = today - timedelta(days=offset)
        count = sum(1 for event_date in event_dates if event_date == day)
        activity.append(ActivityDay(label=_day_label(offset), count=count))

    return activity
