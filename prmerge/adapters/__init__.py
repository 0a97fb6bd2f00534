"""Git platform adapters (base and implementations)."""

from prmerge.adapters.base import GitPlatformAdapter, GitPlatformError
from prmerge.adapters.github import GitHubAdapter

__all__ = ["GitPlatformAdapter", "GitPlatformError", "GitHubAdapter"]
