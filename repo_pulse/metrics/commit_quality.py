"""Commit message quality metric."""

from repo_pulse.metrics.base import floored_percentage
from repo_pulse.signals import RawSignals

MIN_MESSAGE_LENGTH = 20
MAX_MESSAGE_LENGTH = 200
LOW_EFFORT_MESSAGES = frozenset({"fix", "update", "change", "wip"})


def is_quality_message(message: str) -> bool:
    """Whether a commit message has a reasonable length and is not a stock word."""
    if not MIN_MESSAGE_LENGTH <= len(message) <= MAX_MESSAGE_LENGTH:
        return False
    return message.lower() not in LOW_EFFORT_MESSAGES


def compute_commit_quality_score(signals: RawSignals) -> int:
    """Floored percentage of sampled commits with a quality message; 0 when empty."""
    quality = sum(1 for commit in signals.commits if is_quality_message(commit.message))
    return floored_percentage(quality, len(signals.commits))
