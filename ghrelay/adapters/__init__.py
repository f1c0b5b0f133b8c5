"""Source platform adapters (base and GitHub implementation)."""

from ghrelay.adapters.base import GitPlatformAdapter, GitPlatformError
from ghrelay.adapters.github import GitHubAdapter

__all__ = ["GitPlatformAdapter", "GitPlatformError", "GitHubAdapter"]
