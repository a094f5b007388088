"""Star growth metrics."""

from datetime import datetime

from repo_pulse.metrics.base import SECONDS_PER_DAY
from repo_pulse.signals import RawSignals


def repo_age_in_days(signals: RawSignals, now: datetime) -> int:
    """Whole days since the repository was created; 0 when unknown or in the future."""
    if signals.repo_created_at is None:
        return 0
    age_seconds = (now - signals.repo_created_at).total_seconds()
    return max(0, int(age_seconds // SECONDS_PER_DAY))


def _stars_per_day(signals: RawSignals, now: datetime) -> float:
    return signals.star_count / max(1, repo_age_in_days(signals, now))


def compute_stars_per_day(signals: RawSignals, now: datetime) -> str:
    """Stars per day of repository age with two decimals, ``"0"`` for a zero age."""
    if repo_age_in_days(signals, now) == 0:
        return "0"
    return f"{_stars_per_day(signals, now):.2f}"


def compute_growth_trend(signals: RawSignals, now: datetime) -> str:
    """
    Label star growth.

    - High Growth: more than 1 star per day
    - Growing: more than 0.1 stars per day
    - Stable: otherwise
    """
    rate = _stars_per_day(signals, now)
    if rate > 1:
        return "High Growth"
    if rate > 0.1:
        return "Growing"
    return "Stable"
