"""Contributor diversity and bus factor metrics."""

from repo_pulse.signals import RawSignals

RECENT_COMMIT_SAMPLE = 50


def recent_commit_authors(signals: RawSignals) -> set[str]:
    """Distinct author logins among the 50 most recent sampled commits."""
    return {
        commit.author_login
        for commit in signals.commits[:RECENT_COMMIT_SAMPLE]
        if commit.author_login
    }


def compute_contributor_diversity(signals: RawSignals) -> str:
    """
    Recent commit authors versus known contributors, as ``"{recent}/{total}"``.

    ``"0/0"`` when the contributor sample is empty.
    """
    contributors = {c.login for c in signals.contributors if c.login}
    if not contributors:
        return "0/0"
    return f"{len(recent_commit_authors(signals))}/{len(contributors)}"


def compute_active_contributors(signals: RawSignals) -> int:
    """Number of distinct authors among the 50 most recent sampled commits."""
    return len(recent_commit_authors(signals))


def compute_bus_factor(signals: RawSignals) -> str:
    """
    Concentration risk from the top contributor's share of contributions.

    Risk levels:
    - High Risk: top contributor above 70%
    - Medium Risk: top contributor above 50%
    - Low Risk: otherwise, or when there is nothing to measure
    """
    if not signals.contributors:
        return "Low Risk"

    total = sum(c.contribution_count for c in signals.contributors)
    if total <= 0:
        return "Low Risk"

    top = max(c.contribution_count for c in signals.contributors)
    percentage = (top / total) * 100

    if percentage > 70:
        return "High Risk"
    if percentage > 50:
        return "Medium Risk"
    return "Low Risk"
