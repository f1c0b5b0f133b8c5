"""Incremental fetch of new issues and comments for one repository.

The source API filters by last update time, so every fetch re-filters on
creation time: only items created strictly after ``since`` are new. Errors
are logged and turned into an empty failure result; nothing is raised.
"""

import logging
from datetime import datetime
from typing import List

from ghrelay.adapters import GitPlatformAdapter
from ghrelay.models import Comment, Issue, Result

LOG = logging.getLogger("ghrelay.fetcher")


class ItemFetcher:
    """Fail-soft wrapper over a GitPlatformAdapter."""

    def __init__(self, adapter: GitPlatformAdapter) -> None:
        self._adapter = adapter

    def fetch_new_issues(self, repo: str, since: datetime) -> Result[List[Issue]]:
        """Issues created after ``since``; pull requests are excluded."""
        try:
            candidates = self._adapter.list_issues_since(repo, since)
        except Exception as e:
            LOG.error("Error fetching issues for %s: %s", repo, e)
            return Result[List[Issue]].failure(str(e), value=[])
        issues = [i for i in candidates if not i.is_pull_request and i.created_at > since]
        LOG.debug("%s: %d issue candidates, %d new", repo, len(candidates), len(issues))
        return Result[List[Issue]].success(issues)

    def fetch_new_comments(self, repo: str, since: datetime) -> Result[List[Comment]]:
        """Comments created after ``since``."""
        try:
            candidates = self._adapter.list_comments_since(repo, since)
        except Exception as e:
            LOG.error("Error fetching comments for %s: %s", repo, e)
            return Result[List[Comment]].failure(str(e), value=[])
        comments = [c for c in candidates if c.created_at > since]
        LOG.debug("%s: %d comment candidates, %d new", repo, len(candidates), len(comments))
        return Result[List[Comment]].success(comments)

    def resolve_parent_issue(self, comment: Comment) -> Issue | None:
        """Look up the issue a comment belongs to; None if unknown or on error."""
        if not comment.issue_url:
            return None
        try:
            return self._adapter.get_issue_by_url(comment.issue_url)
        except Exception as e:
            LOG.warning("Could not resolve parent issue for comment %s: %s", comment.id, e)
            return None
