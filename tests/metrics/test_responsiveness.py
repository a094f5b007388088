"""
Tests for the avg_response_time and stale_issues_count metrics.
"""

from datetime import datetime, timedelta, timezone

from repo_pulse.metrics.responsiveness import (
    compute_avg_response_time,
    compute_stale_issues_count,
)
from repo_pulse.signals import IssueSignal, PullRequestSignal, RawSignals

NOW = datetime(2025, 6, 15, 12, 0, tzinfo=timezone.utc)


class TestAvgResponseTime:
    """Test the compute_avg_response_time heuristic."""

    def test_empty_sample(self):
        assert compute_avg_response_time(RawSignals()) == "N/A"

    def test_five_commented_items_is_not_enough(self):
        """More than five commented items are required."""
        issues = tuple(IssueSignal(comment_count=1) for _ in range(5))
        assert compute_avg_response_time(RawSignals(issues=issues)) == "N/A"

    def test_six_commented_items_across_issues_and_prs(self):
        issues = tuple(IssueSignal(comment_count=2) for _ in range(3))
        prs = tuple(PullRequestSignal(comment_count=1) for _ in range(3))
        signals = RawSignals(issues=issues, pull_requests=prs)
        assert compute_avg_response_time(signals) == "< 24h"

    def test_uncommented_items_do_not_count(self):
        issues = tuple(IssueSignal(comment_count=0) for _ in range(30))
        prs = tuple(PullRequestSignal(comment_count=3) for _ in range(2))
        signals = RawSignals(issues=issues, pull_requests=prs)
        assert compute_avg_response_time(signals) == "N/A"


class TestStaleIssuesCount:
    """Test the compute_stale_issues_count metric function."""

    def test_empty_sample(self):
        assert compute_stale_issues_count(RawSignals(), NOW) == 0

    def test_counts_only_old_open_issues(self):
        issues = (
            IssueSignal(state="open", created_at=NOW - timedelta(days=120)),
            IssueSignal(state="open", created_at=NOW - timedelta(days=91)),
            IssueSignal(state="open", created_at=NOW - timedelta(days=10)),
            IssueSignal(state="closed", created_at=NOW - timedelta(days=200)),
            IssueSignal(state="open", created_at=None),
        )
        assert compute_stale_issues_count(RawSignals(issues=issues), NOW) == 2

    def test_exactly_ninety_days_is_not_stale(self):
        issues = (IssueSignal(state="open", created_at=NOW - timedelta(days=90)),)
        assert compute_stale_issues_count(RawSignals(issues=issues), NOW) == 0
