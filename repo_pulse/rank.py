"""
Repository rank calculator.

Combines popularity counts and analytics metrics into a composite score on a
0-100 scale and a letter tier.

Scoring system:
- Eleven sub-scores, each normalized to 0-100
- Each sub-score has an integer weight; weights sum to 100
- Composite = Sum(sub_score x weight) / 100, rounded half-up to one decimal
- Tier from inclusive lower bounds: S >= 90, A >= 75, B >= 60, C >= 45, else D
"""

import math
from datetime import datetime
from typing import Any, NamedTuple

from repo_pulse.analytics import AnalyticsMetrics
from repo_pulse.metrics.base import NOT_AVAILABLE, SECONDS_PER_DAY
from repo_pulse.signals import ensure_utc, parse_timestamp


class RankWeights(NamedTuple):
    """Weight of each sub-score in the composite."""

    # Popularity (30)
    stars: int = 15
    forks: int = 8
    watchers: int = 7
    # Activity (30)
    commit_activity: int = 12
    release_cadence: int = 8
    recent_updates: int = 10
    # Community health (40)
    pr_merge_rate: int = 10
    issue_close_rate: int = 10
    contributor_diversity: int = 8
    discussion_activity: int = 7
    code_quality: int = 5


class RankPolicy(NamedTuple):
    """Immutable scoring policy: weights and tier thresholds."""

    weights: RankWeights = RankWeights()
    # (minimum score, tier), checked in order
    tiers: tuple[tuple[float, str], ...] = (
        (90, "S"),
        (75, "A"),
        (60, "B"),
        (45, "C"),
    )
    fallback_tier: str = "D"


DEFAULT_RANK_POLICY = RankPolicy()

COMMIT_ACTIVITY_SCORES = {"high": 100, "medium": 65, "low": 30, "unknown": 0}

# (maximum days since last push, score), checked in order
RECENCY_SCORES = ((30, 100), (90, 80), (180, 60), (365, 40))
STALE_RECENCY_SCORE = 20


class RankResult(NamedTuple):
    """Composite rank of a repository."""

    score: float
    tier: str


def _log_score(count: int, factor: float) -> float:
    return min(100, math.log10(max(1, count)) * factor)


def release_cadence_score(cadence: str) -> float:
    """
    Score a release cadence label such as ``~5d``, ``~3w`` or ``~4mo``.

    Day cadences score 100, week cadences 85, up to three months 70 and
    anything slower 50. ``N/A`` scores 0.
    """
    if not cadence or cadence == NOT_AVAILABLE:
        return 0
    label = cadence.lower()
    if "d" in label:
        return 100
    if "w" in label:
        return 85
    if "mo" in label:
        prefix = label.lstrip("~").split("mo", 1)[0]
        if prefix.isdigit() and int(prefix) <= 3:
            return 70
    return 50


def recency_score(pushed_at: Any, now: datetime) -> float:
    """Score how recently the repository received a push; unknown scores as stale."""
    pushed = parse_timestamp(pushed_at)
    if pushed is None:
        return STALE_RECENCY_SCORE

    days_since_update = math.floor(
        (ensure_utc(now) - pushed).total_seconds() / SECONDS_PER_DAY
    )
    for max_days, score in RECENCY_SCORES:
        if days_since_update <= max_days:
            return score
    return STALE_RECENCY_SCORE


def contributor_diversity_score(diversity: str) -> float:
    """
    Score an ``"{active}/{total}"`` diversity label.

    Twice the active share, capped at 100, with a 1.2x bonus (still capped)
    for teams of ten or more.
    """
    try:
        active_text, total_text = diversity.split("/")
        active, total = int(active_text), int(total_text)
    except (AttributeError, ValueError):
        return 0
    if total <= 0:
        return 0

    score = min(100, (active / total) * 200)
    if total >= 10:
        score = min(100, score * 1.2)
    return score


def discussion_score(discussion_activity: str) -> float:
    """Scale average comments per item so five or more comments score 100."""
    try:
        value = float(discussion_activity)
    except (TypeError, ValueError):
        return 0
    if not math.isfinite(value):
        return 0
    return min(100, max(0.0, value) * 20)


def score_breakdown(
    metrics: AnalyticsMetrics,
    stars: int,
    forks: int,
    watchers: int,
    pushed_at: Any,
    now: datetime,
) -> dict[str, float]:
    """
    Compute every sub-score on a 0-100 scale.

    Returns:
        Dictionary keyed by the ``RankWeights`` field names.
    """
    return {
        "stars": _log_score(stars, 20),
        "forks": _log_score(forks, 25),
        "watchers": _log_score(watchers, 25),
        "commit_activity": COMMIT_ACTIVITY_SCORES.get(metrics.commit_activity, 0),
        "release_cadence": release_cadence_score(metrics.release_cadence),
        "recent_updates": recency_score(pushed_at, now),
        "pr_merge_rate": metrics.pr_merge_rate,
        "issue_close_rate": metrics.issue_close_rate,
        "contributor_diversity": contributor_diversity_score(
            metrics.contributor_diversity
        ),
        "discussion_activity": discussion_score(metrics.discussion_activity),
        "code_quality": metrics.commit_quality_score or 0,
    }


def tier_for_score(score: float, policy: RankPolicy = DEFAULT_RANK_POLICY) -> str:
    for minimum, tier in policy.tiers:
        if score >= minimum:
            return tier
    return policy.fallback_tier


def calculate_rank(
    metrics: AnalyticsMetrics,
    stars: int,
    forks: int,
    watchers: int,
    pushed_at: Any,
    now: datetime,
    policy: RankPolicy = DEFAULT_RANK_POLICY,
) -> RankResult:
    """
    Compute the composite rank score and tier.

    Args:
        metrics: Analytics metrics of the repository.
        stars: Stargazer count.
        forks: Fork count.
        watchers: Watcher count.
        pushed_at: Time of the last push (datetime, ISO string or None).
        now: Reference instant for the recency sub-score.
        policy: Weights and tier thresholds.

    Returns:
        RankResult with the score rounded to one decimal.
    """
    breakdown = score_breakdown(metrics, stars, forks, watchers, pushed_at, now)
    weights = policy.weights._asdict()

    total = 0.0
    for key, sub_score in breakdown.items():
        total += (sub_score * weights[key]) / 100

    score = math.floor(total * 10 + 0.5) / 10
    score = min(100.0, max(0.0, score))
    return RankResult(score=score, tier=tier_for_score(score, policy))
