"""GitHub API adapter."""

from datetime import UTC, datetime
from typing import Any, Dict, List

import requests

from ghrelay.adapters.base import PAGE_SIZE, GitPlatformAdapter, GitPlatformError
from ghrelay.models import Comment, Issue

USER_AGENT = "ghrelay"


def _parse_iso(s: str) -> datetime:
    return datetime.fromisoformat(s.replace("Z", "+00:00"))


def _format_since(since: datetime) -> str:
    """ISO-8601 in UTC with Z suffix, as the API documents for ``since``."""
    return since.astimezone(UTC).strftime("%Y-%m-%dT%H:%M:%SZ")


def _issue_from_api(data: Dict[str, Any]) -> Issue:
    user = data.get("user") or {}
    return Issue(
        id=data["id"],
        number=data["number"],
        title=data.get("title") or "",
        body=data.get("body") or None,
        state=data.get("state", "open"),
        created_at=_parse_iso(data["created_at"]),
        author=user.get("login", ""),
        avatar_url=user.get("avatar_url"),
        html_url=data.get("html_url") or "",
        is_pull_request="pull_request" in data,
    )


def _comment_from_api(data: Dict[str, Any]) -> Comment:
    user = data.get("user") or {}
    return Comment(
        id=data["id"],
        body=data.get("body") or None,
        created_at=_parse_iso(data["created_at"]),
        author=user.get("login", ""),
        avatar_url=user.get("avatar_url"),
        html_url=data.get("html_url") or "",
        issue_url=data.get("issue_url"),
    )


class GitHubAdapter(GitPlatformAdapter):
    """GitHub REST API implementation. The token is optional."""

    def __init__(
        self,
        token: str | None = None,
        api_url: str = "https://api.github.com",
        timeout: float = 30,
    ) -> None:
        self._api_url = api_url.rstrip("/")
        self._timeout = timeout
        self._session = requests.Session()
        self._session.headers["Accept"] = "application/vnd.github.v3+json"
        self._session.headers["User-Agent"] = USER_AGENT
        if token:
            self._session.headers["Authorization"] = f"token {token}"

    def _request(
        self,
        method: str,
        path: str,
        params: Dict[str, Any] | None = None,
    ) -> requests.Response:
        if path.startswith("http://") or path.startswith("https://"):
            url = path
        else:
            url = f"{self._api_url}{path}" if path.startswith("/") else f"{self._api_url}/{path}"
        try:
            resp = self._session.request(method, url, params=params, timeout=self._timeout)
        except requests.RequestException as e:
            raise GitPlatformError(f"{method} {url}: {e}") from e
        if resp.status_code >= 400:
            msg = resp.text or resp.reason or str(resp.status_code)
            try:
                msg = resp.json().get("message", msg)
            except (ValueError, AttributeError):
                pass
            raise GitPlatformError(f"{resp.status_code}: {msg}")
        return resp

    def _json_list(self, resp: requests.Response) -> List[Dict[str, Any]]:
        try:
            data = resp.json()
        except ValueError as e:
            raise GitPlatformError(f"Invalid JSON from {resp.url}: {e}") from e
        if data is None:
            return []
        if not isinstance(data, list):
            raise GitPlatformError(f"Expected a list from {resp.url}, got {type(data).__name__}")
        return data

    def list_issues_since(self, repo: str, since: datetime) -> List[Issue]:
        resp = self._request(
            "GET",
            f"/repos/{repo}/issues",
            params={
                "since": _format_since(since),
                "state": "all",
                "sort": "updated",
                "per_page": PAGE_SIZE,
            },
        )
        return [_issue_from_api(d) for d in self._json_list(resp)]

    def list_comments_since(self, repo: str, since: datetime) -> List[Comment]:
        resp = self._request(
            "GET",
            f"/repos/{repo}/issues/comments",
            params={"since": _format_since(since), "per_page": PAGE_SIZE},
        )
        return [_comment_from_api(d) for d in self._json_list(resp)]

    def get_issue_by_url(self, url: str) -> Issue:
        resp = self._request("GET", url)
        try:
            data = resp.json()
        except ValueError as e:
            raise GitPlatformError(f"Invalid JSON from {url}: {e}") from e
        return _issue_from_api(data)
