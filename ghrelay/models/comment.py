"""Comment on an issue or PR."""

from datetime import datetime

from pydantic import BaseModel


class Comment(BaseModel):
    """Issue comment. The parent issue is looked up via ``issue_url`` on demand."""

    model_config = {"frozen": True}

    id: int
    body: str | None = None
    created_at: datetime
    author: str
    avatar_url: str | None = None
    html_url: str
    issue_url: str | None = None
