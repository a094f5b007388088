"""
Display helpers for report values.
"""

from collections.abc import Sequence
from datetime import datetime
from typing import Any, NamedTuple

from repo_pulse.signals import LanguageSignal, ensure_utc, parse_timestamp

ACTIVE_REPOSITORY_DAYS = 30
TOP_LANGUAGE_COUNT = 5


class LanguageShare(NamedTuple):
    """A language with its share of the repository's code."""

    name: str
    size: int
    percentage: str  # one decimal, e.g. "62.5"


def format_number(num: int | float) -> str:
    """Compact a count: 1234 -> '1.2K', 2500000 -> '2.5M'."""
    if num >= 1_000_000:
        return f"{num / 1_000_000:.1f}M"
    if num >= 1_000:
        return f"{num / 1_000:.1f}K"
    return str(num)


def format_relative_date(value: Any, now: datetime) -> str:
    """
    Describe a timestamp relative to ``now``.

    Returns one of 'just now', 'Nm ago', 'Nh ago', 'yesterday', 'Nd ago',
    'Nw ago', 'Nmo ago', 'Ny ago', or 'Unknown' for a missing timestamp.
    """
    moment = parse_timestamp(value)
    if moment is None:
        return "Unknown"

    diff_seconds = (ensure_utc(now) - moment).total_seconds()
    diff_minutes = int(diff_seconds // 60)
    diff_hours = int(diff_seconds // 3600)
    diff_days = int(diff_seconds // 86400)

    if diff_minutes < 1:
        return "just now"
    if diff_minutes < 60:
        return f"{diff_minutes}m ago"
    if diff_hours < 24:
        return f"{diff_hours}h ago"
    if diff_days == 1:
        return "yesterday"
    if diff_days < 7:
        return f"{diff_days}d ago"
    if diff_days < 30:
        return f"{diff_days // 7}w ago"
    if diff_days < 365:
        return f"{diff_days // 30}mo ago"
    return f"{diff_days // 365}y ago"


def health_status(pushed_at: Any, now: datetime) -> str:
    """'active' when the last push is at most 30 days old, else 'stale'."""
    pushed = parse_timestamp(pushed_at)
    if pushed is None:
        return "stale"
    days_since_update = (ensure_utc(now) - pushed).total_seconds() // 86400
    return "active" if days_since_update <= ACTIVE_REPOSITORY_DAYS else "stale"


def format_size(kilobytes: int) -> str:
    """Human-readable repository size from kilobytes: '512 KB', '1.5 MB', '2.0 GB'."""
    if kilobytes >= 1024 * 1024:
        return f"{kilobytes / (1024 * 1024):.1f} GB"
    if kilobytes >= 1024:
        return f"{kilobytes / 1024:.1f} MB"
    return f"{kilobytes} KB"


def language_breakdown(
    languages: Sequence[LanguageSignal], limit: int = TOP_LANGUAGE_COUNT
) -> list[LanguageShare]:
    """
    The largest languages with their percentage of all sampled code.

    Shares are computed against the total of every sampled language, so the
    returned percentages may add up to less than 100.
    """
    ordered = sorted(languages, key=lambda language: language.size, reverse=True)
    total = sum(language.size for language in ordered)
    return [
        LanguageShare(
            name=language.name,
            size=language.size,
            percentage=f"{language.size / total * 100:.1f}" if total else "0.0",
        )
        for language in ordered[:limit]
    ]
