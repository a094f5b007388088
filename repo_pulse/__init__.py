"""
Repo Pulse: repository health metrics, activity streaks and rank scores
derived from raw repository signals.
"""

from repo_pulse.activity import ActivityDay, calculate_activity_data
from repo_pulse.analytics import AnalyticsMetrics, calculate_analytics
from repo_pulse.rank import RankResult, calculate_rank
from repo_pulse.signals import RawSignals
from repo_pulse.streak import StreakStats, calculate_streak_stats

__version__ = "0.1.0"

__all__ = [
    "ActivityDay",
    "AnalyticsMetrics",
    "RankResult",
    "RawSignals",
    "StreakStats",
    "calculate_activity_data",
    "calculate_analytics",
    "calculate_rank",
    "calculate_streak_stats",
]
