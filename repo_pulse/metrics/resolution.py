"""PR merge rate and issue close rate metrics."""

from repo_pulse.metrics.base import floored_percentage
from repo_pulse.signals import RawSignals


def compute_pr_merge_rate(signals: RawSignals) -> int:
    """Share of all pull requests that were merged, as a floored percentage."""
    return floored_percentage(
        signals.merged_pull_request_count, signals.total_pull_requests
    )


def compute_issue_close_rate(signals: RawSignals) -> int:
    """Share of all issues that were closed, as a floored percentage."""
    return floored_percentage(signals.closed_issue_count, signals.total_issues)
