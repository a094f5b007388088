"""
Base interface for VCS providers.
"""

from abc import ABC, abstractmethod

from repo_pulse.signals import RawSignals


class BaseVCSProvider(ABC):
    """Interface every VCS provider implements."""

    @abstractmethod
    def get_platform_name(self) -> str:
        """Return the platform identifier (e.g. 'github')."""

    @abstractmethod
    def validate_credentials(self) -> bool:
        """Return True when the provider has usable credentials."""

    @abstractmethod
    def get_repository_url(self, owner: str, repo: str) -> str:
        """Construct the web URL of a repository."""

    @abstractmethod
    async def get_repository_signals(self, owner: str, repo: str) -> RawSignals:
        """
        Fetch the raw activity signals of a repository.

        Raises:
            ValueError: If the repository cannot be found or accessed.
        """
