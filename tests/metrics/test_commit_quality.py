"""
Tests for the commit_quality_score metric.
"""

from repo_pulse.metrics.commit_quality import (
    compute_commit_quality_score,
    is_quality_message,
)
from repo_pulse.signals import CommitSignal, RawSignals

GOOD_MESSAGE = "Add retry handling to the upload client"


class TestCommitQualityScore:
    """Test the compute_commit_quality_score metric function."""

    def test_empty_sample(self):
        assert compute_commit_quality_score(RawSignals()) == 0

    def test_length_bounds_are_inclusive(self):
        assert is_quality_message("x" * 20)
        assert is_quality_message("x" * 200)
        assert not is_quality_message("x" * 19)
        assert not is_quality_message("x" * 201)

    def test_stock_messages_are_rejected(self):
        assert not is_quality_message("WIP")
        assert not is_quality_message("fix")

    def test_score_is_floored(self):
        commits = (
            CommitSignal(message=GOOD_MESSAGE),
            CommitSignal(message=GOOD_MESSAGE),
            CommitSignal(message="update"),
        )
        assert compute_commit_quality_score(RawSignals(commits=commits)) == 66

    def test_all_quality_commits(self):
        commits = tuple(CommitSignal(message=GOOD_MESSAGE) for _ in range(4))
        assert compute_commit_quality_score(RawSignals(commits=commits)) == 100
