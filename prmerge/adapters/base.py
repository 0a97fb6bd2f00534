"""Abstract base for Git platform adapters."""

from abc import ABC, abstractmethod

from prmerge.models import PullRequest


class GitPlatformError(Exception):
    """Raised when a Git platform API call fails."""

    pass


class GitPlatformAdapter(ABC):
    """Abstract interface for Git hosting platforms."""

    @abstractmethod
    def pr_info_url(self, repo: str, pr_number: int) -> str:
        """Return the API URL queried for a PR (used in error messages)."""
        ...

    @abstractmethod
    def get_pr(self, repo: str, pr_number: int) -> PullRequest:
        """Fetch PR by number.

        Raises GitPlatformError if the request fails.
        """
        ...
