"""Data models for issues, comments, watermarks and notifications (Pydantic)."""

from ghrelay.models.comment import Comment
from ghrelay.models.issue import Issue
from ghrelay.models.notification import Embed, EmbedField, EmbedFooter, EmbedThumbnail, Notification
from ghrelay.models.result import Result, TranslationResult
from ghrelay.models.watermark import Watermark

__all__ = [
    "Comment",
    "Embed",
    "EmbedField",
    "EmbedFooter",
    "EmbedThumbnail",
    "Issue",
    "Notification",
    "Result",
    "TranslationResult",
    "Watermark",
]
