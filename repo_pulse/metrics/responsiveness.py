"""Response time and stale issue metrics."""

from datetime import datetime

from repo_pulse.metrics.base import NOT_AVAILABLE, days_before, discussion_items
from repo_pulse.signals import RawSignals

RESPONSE_SAMPLE_SIZE = 20
RESPONSIVE_ITEM_THRESHOLD = 5
STALE_ISSUE_DAYS = 90


def compute_avg_response_time(signals: RawSignals) -> str:
    """
    Coarse responsiveness label.

    Looks at the first 20 sampled issues and pull requests that received at
    least one comment. More than five of them yields ``"< 24h"``; anything
    else is ``"N/A"``. This is a presence heuristic, not a measured latency.
    """
    commented = [item for item in discussion_items(signals) if item.comment_count > 0]
    if len(commented[:RESPONSE_SAMPLE_SIZE]) > RESPONSIVE_ITEM_THRESHOLD:
        return "< 24h"
    return NOT_AVAILABLE


def compute_stale_issues_count(signals: RawSignals, now: datetime) -> int:
    """Count open issues created more than 90 days before ``now``."""
    cutoff = days_before(now, STALE_ISSUE_DAYS)
    return sum(
        1
        for issue in signals.issues
        if issue.state == "open"
        and issue.created_at is not None
        and issue.created_at < cutoff
    )
