"""
Tests for the daily activity time series.
"""

from datetime import datetime, timedelta, timezone

from repo_pulse.activity import ActivityDay, calculate_activity_data
from repo_pulse.signals import (
    CommitSignal,
    IssueSignal,
    PullRequestSignal,
    RawSignals,
)

NOW = datetime(2025, 6, 15, 12, 0, tzinfo=timezone.utc)


class TestActivityData:
    """Test calculate_activity_data."""

    def test_empty_signals(self):
        activity = calculate_activity_data(RawSignals(), NOW)
        assert len(activity) == 30
        assert all(day.count == 0 for day in activity)

    def test_labels(self):
        activity = calculate_activity_data(RawSignals(), NOW)
        assert activity[-1].label == "Today"
        assert activity[-2].label == "Yesterday"
        assert activity[-3].label == "2d ago"
        assert activity[0].label == "29d ago"

    def test_custom_window(self):
        activity = calculate_activity_data(RawSignals(), NOW, window_days=7)
        assert [day.label for day in activity] == [
            "6d ago",
            "5d ago",
            "4d ago",
            "3d ago",
            "2d ago",
            "Yesterday",
            "Today",
        ]

    def test_zero_window(self):
        assert calculate_activity_data(RawSignals(), NOW, window_days=0) == []

    def test_counts_commits_prs_and_issues(self):
        signals = RawSignals(
            commits=(
                CommitSignal(committed_at=NOW - timedelta(hours=2)),
                CommitSignal(committed_at=NOW - timedelta(days=1)),
            ),
            pull_requests=(PullRequestSignal(created_at=NOW - timedelta(hours=11)),),
            issues=(IssueSignal(created_at=NOW - timedelta(days=5)),),
        )
        activity = calculate_activity_data(signals, NOW)
        assert activity[-1] == ActivityDay(label="Today", count=2)
        assert activity[-2] == ActivityDay(label="Yesterday", count=1)
        assert activity[-6] == ActivityDay(label="5d ago", count=1)
        assert sum(day.count for day in activity) == 4

    def test_calendar_day_boundary(self):
        """Time of day is discarded: just after midnight UTC is still today."""
        now = datetime(2025, 6, 15, 0, 5, tzinfo=timezone.utc)
        signals = RawSignals(
            commits=(
                CommitSignal(committed_at=now - timedelta(minutes=4)),
                CommitSignal(committed_at=now - timedelta(minutes=6)),
            )
        )
        activity = calculate_activity_data(signals, now)
        assert activity[-1].count == 1
        assert activity[-2].count == 1

    def test_events_outside_window_are_ignored(self):
        signals = RawSignals(
            commits=(
                CommitSignal(committed_at=NOW - timedelta(days=30)),
                CommitSignal(committed_at=NOW + timedelta(days=2)),
            )
        )
        activity = calculate_activity_data(signals, NOW)
        assert sum(day.count for day in activity) == 0

    def test_missing_timestamps_are_excluded(self):
        """Events without a timestamp never land in any bucket."""
        signals = RawSignals(
            commits=(CommitSignal(committed_at=None),),
            pull_requests=(PullRequestSignal(created_at=None),),
            issues=(IssueSignal(created_at=None),),
        )
        activity = calculate_activity_data(signals, NOW)
        assert sum(day.count for day in activity) == 0

    def test_naive_now_is_treated_as_utc(self):
        signals = RawSignals(commits=(CommitSignal(committed_at=NOW),))
        activity = calculate_activity_data(signals, NOW.replace(tzinfo=None))
        assert activity[-1].count == 1

    def test_string_timestamps(self):
        """ISO strings are parsed and unreadable strings are left out."""
        signals = RawSignals(
            commits=(
                CommitSignal(committed_at="garbage"),
                CommitSignal(committed_at="2025-06-15T09:00:00Z"),
            ),
            issues=(IssueSignal(created_at="2025-06-14T09:00:00Z"),),
        )
        activity = calculate_activity_data(signals, NOW)
        assert activity[-1].count == 1
        assert activity[-2].count == 1
        assert sum(day.count for day in activity) == 2
