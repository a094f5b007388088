"""Release cadence metric."""

from repo_pulse.metrics.base import NOT_AVAILABLE, SECONDS_PER_DAY
from repo_pulse.signals import RawSignals

CADENCE_SAMPLE_SIZE = 5


def compute_release_cadence(signals: RawSignals) -> str:
    """
    Average gap between the most recent releases.

    Uses up to the five newest releases with a publish date. The floored mean
    gap in days is reported as ``~Nd`` below 30 days, ``~Nw`` below 90 days and
    ``~Nmo`` (30-day months) beyond that. ``"N/A"`` with fewer than two
    releases.
    """
    published = [
        release.published_at
        for release in signals.releases
        if release.published_at is not None
    ][:CADENCE_SAMPLE_SIZE]
    if len(published) < 2:
        return NOT_AVAILABLE

    total_days = sum(
        abs((newer - older).total_seconds()) / SECONDS_PER_DAY
        for newer, older in zip(published, published[1:])
    )
    avg_days = int(total_days // (len(published) - 1))

    if avg_days < 30:
        return f"~{avg_days}d"
    if avg_days < 90:
        return f"~{avg_days // 7}w"
    return f"~{avg_days // 30}mo"
