"""
Tests for the release_cadence metric.
"""

from datetime import datetime, timedelta, timezone

from repo_pulse.metrics.release_cadence import compute_release_cadence
from repo_pulse.signals import RawSignals, ReleaseSignal

LATEST = datetime(2025, 6, 1, tzinfo=timezone.utc)


def _releases_every(days: float, count: int) -> RawSignals:
    return RawSignals(
        releases=tuple(
            ReleaseSignal(published_at=LATEST - timedelta(days=days * i))
            for i in range(count)
        )
    )


class TestReleaseCadenceMetric:
    """Test the compute_release_cadence metric function."""

    def test_no_releases(self):
        assert compute_release_cadence(RawSignals()) == "N/A"

    def test_single_release(self):
        """One release has no gap to measure."""
        assert compute_release_cadence(_releases_every(7, 1)) == "N/A"

    def test_daily_cadence(self):
        assert compute_release_cadence(_releases_every(5, 4)) == "~5d"

    def test_weekly_cadence(self):
        # 45 days -> 6 weeks
        assert compute_release_cadence(_releases_every(45, 3)) == "~6w"

    def test_monthly_cadence(self):
        # 120 days -> 4 months
        assert compute_release_cadence(_releases_every(120, 2)) == "~4mo"

    def test_only_five_most_recent_releases(self):
        """Older releases beyond the fifth do not stretch the average."""
        releases = tuple(
            ReleaseSignal(published_at=LATEST - timedelta(days=10 * i))
            for i in range(5)
        ) + (ReleaseSignal(published_at=LATEST - timedelta(days=1000)),)
        assert compute_release_cadence(RawSignals(releases=releases)) == "~10d"

    def test_gap_uses_absolute_difference(self):
        """Out-of-order dates still produce a positive gap."""
        releases = (
            ReleaseSignal(published_at=LATEST - timedelta(days=14)),
            ReleaseSignal(published_at=LATEST),
        )
        assert compute_release_cadence(RawSignals(releases=releases)) == "~14d"

    def test_fractional_average_is_floored(self):
        releases = (
            ReleaseSignal(published_at=LATEST),
            ReleaseSignal(published_at=LATEST - timedelta(days=29, hours=23)),
        )
        assert compute_release_cadence(RawSignals(releases=releases)) == "~29d"

    def test_releases_without_date_are_skipped(self):
        releases = (
            ReleaseSignal(published_at=LATEST),
            ReleaseSignal(published_at=None),
        )
        assert compute_release_cadence(RawSignals(releases=releases)) == "N/A"
