"""Streak statistics over a daily activity series."""

from collections.abc import Sequence
from typing import NamedTuple

from repo_pulse.activity import ActivityDay


class StreakStats(NamedTuple):
    """Streaks of consecutive active days."""

    current_streak: int = 0
    longest_streak: int = 0
    total_contributions: int = 0


def calculate_streak_stats(activity: Sequence[ActivityDay]) -> StreakStats:
    """
    Derive streak statistics from an oldest-to-newest activity series.

    The current streak counts active days backwards from the newest entry and
    stops at the first inactive day. The longest streak is the longest run of
    active days anywhere in the series.
    """
    total_contributions = sum(day.count for day in activity)

    current_streak = 0
    for day in reversed(activity):
        if day.count <= 0:
            break
        current_streak += 1

    longest_streak = 0
    run = 0
    for day in activity:
        if day.count > 0:
            run += 1
            longest_streak = max(longest_streak, run)
        else:
            run = 0

    return StreakStats(
        current_streak=current_streak,
        longest_streak=longest_streak,
        total_contributions=total_contributions,
    )
