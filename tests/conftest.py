"""Shared fixtures: isolated environment and item factories."""

from datetime import UTC, datetime
from typing import Any, Callable

import pytest

from ghrelay.models import Comment, Issue

_ENV_PREFIXES = ("DISCORD_", "GITHUB_", "DEEPL_", "MISSKEY_", "LOGGING_")
_ENV_NAMES = ("CHECK_INTERVAL", "REPOSITORIES", "LAST_CHECK_FILE", "REPOSITORY_PACING_SECONDS")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's shell config out of settings under test."""
    import os

    for key in list(os.environ):
        if key.upper().startswith(_ENV_PREFIXES) or key.upper() in _ENV_NAMES:
            monkeypatch.delenv(key, raising=False)


T0 = datetime(2024, 1, 15, 10, 0, 0, tzinfo=UTC)


@pytest.fixture
def t0() -> datetime:
    return T0


@pytest.fixture
def make_issue() -> Callable[..., Issue]:
    def _make(number: int = 1, created_at: datetime = T0, **overrides: Any) -> Issue:
        data: dict[str, Any] = {
            "id": 1000 + number,
            "number": number,
            "title": f"Issue {number}",
            "body": "Steps to reproduce",
            "state": "open",
            "created_at": created_at,
            "author": "octocat",
            "avatar_url": "https://avatars.example/octocat.png",
            "html_url": f"https://github.com/owner/repo/issues/{number}",
        }
        data.update(overrides)
        return Issue(**data)

    return _make


@pytest.fixture
def make_comment() -> Callable[..., Comment]:
    def _make(comment_id: int = 1, created_at: datetime = T0, **overrides: Any) -> Comment:
        data: dict[str, Any] = {
            "id": comment_id,
            "body": "Looks good to me",
            "created_at": created_at,
            "author": "hubot",
            "avatar_url": "https://avatars.example/hubot.png",
            "html_url": f"https://github.com/owner/repo/issues/1#issuecomment-{comment_id}",
            "issue_url": "https://api.github.com/repos/owner/repo/issues/1",
        }
        data.update(overrides)
        return Comment(**data)

    return _make
