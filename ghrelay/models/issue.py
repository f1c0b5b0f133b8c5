"""GitHub issue model."""

from datetime import datetime

from pydantic import BaseModel


class Issue(BaseModel):
    """GitHub issue as returned by the issues API.

    The issues endpoint also lists pull requests; ``is_pull_request`` marks
    them so the fetcher can drop them.
    """

    model_config = {"frozen": True}

    id: int
    number: int
    title: str
    body: str | None = None
    state: str
    created_at: datetime
    author: str
    avatar_url: str | None = None
    html_url: str
    is_pull_request: bool = False

    @property
    def is_open(self) -> bool:
        return self.state == "open"
