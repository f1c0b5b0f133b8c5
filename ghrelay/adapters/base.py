"""Abstract base for source platform adapters."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List

from ghrelay.models import Comment, Issue

# Upper bound for one page of issues/comments per poll
PAGE_SIZE = 50


class GitPlatformError(Exception):
    """Raised when a source platform API call fails."""

    pass


class GitPlatformAdapter(ABC):
    """Read-only interface to a Git hosting platform."""

    @abstractmethod
    def list_issues_since(self, repo: str, since: datetime) -> List[Issue]:
        """Issues (and PRs, flagged) of any state updated since ``since``, one page."""
        ...

    @abstractmethod
    def list_comments_since(self, repo: str, since: datetime) -> List[Comment]:
        """Issue comments in the repository updated since ``since``, one page."""
        ...

    @abstractmethod
    def get_issue_by_url(self, url: str) -> Issue:
        """Fetch a single issue by its API URL (a comment's ``issue_url``)."""
        ...
