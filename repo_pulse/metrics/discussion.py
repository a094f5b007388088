"""Discussion activity metric."""

from repo_pulse.metrics.base import discussion_items
from repo_pulse.signals import RawSignals


def compute_discussion_activity(signals: RawSignals) -> str:
    """Mean comment count across sampled issues and pull requests, one decimal."""
    items = discussion_items(signals)
    if not items:
        return "0.0"
    average = sum(item.comment_count for item in items) / len(items)
    return f"{average:.1f}"
