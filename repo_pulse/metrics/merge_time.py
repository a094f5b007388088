"""Average time-to-merge metric."""

from repo_pulse.metrics.base import NOT_AVAILABLE, SECONDS_PER_DAY, SECONDS_PER_HOUR
from repo_pulse.signals import RawSignals


def compute_avg_time_to_merge(signals: RawSignals) -> str:
    """
    Mean time from creation to merge over the sampled pull requests.

    Returns ``"{days}d"`` when the mean is at least one day, otherwise
    ``"{hours}h"``. Both parts are floored. ``"N/A"`` when no sampled pull
    request carries both timestamps.
    """
    merge_seconds = [
        (pr.merged_at - pr.created_at).total_seconds()
        for pr in signals.pull_requests
        if pr.merged_at is not None and pr.created_at is not None
    ]
    if not merge_seconds:
        return NOT_AVAILABLE

    average = sum(merge_seconds) / len(merge_seconds)
    days = int(average // SECONDS_PER_DAY)
    if days > 0:
        return f"{days}d"
    hours = int((average % SECONDS_PER_DAY) // SECONDS_PER_HOUR)
    return f"{hours}h"
