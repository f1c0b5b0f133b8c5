"""Destination payloads built by the formatter."""

from typing import List

from pydantic import BaseModel, Field


class EmbedField(BaseModel):
    name: str
    value: str
    inline: bool = False


class EmbedThumbnail(BaseModel):
    url: str


class EmbedFooter(BaseModel):
    text: str
    icon_url: str | None = None


class Embed(BaseModel):
    """Discord embed object (subset used by notifications)."""

    title: str
    description: str
    url: str | None = None
    color: int
    fields: List[EmbedField] = Field(default_factory=list)
    timestamp: str
    thumbnail: EmbedThumbnail | None = None
    footer: EmbedFooter | None = None


class Notification(BaseModel):
    """One notification rendered for every destination type.

    ``embed`` is the rich form (Discord), ``text`` the plain form (Misskey).
    ``summary`` is a short line for logs.
    """

    embed: Embed
    text: str
    summary: str
