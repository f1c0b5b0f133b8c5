"""Outcome types for fail-soft calls (fetch, send, translate)."""

from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class Result(BaseModel, Generic[T]):
    """Success or failure of one external call.

    On failure ``value`` holds the neutral substitute chosen by the callee
    (e.g. an empty list for fetches) and ``error`` the logged reason.
    """

    value: T | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T | None = None) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: str, value: T | None = None) -> "Result[T]":
        return cls(value=value, error=error)


class TranslationResult(BaseModel):
    """Translated text, or unavailable. Carries no error by construction."""

    model_config = {"frozen": True}

    text: str | None = None

    @property
    def available(self) -> bool:
        return bool(self.text)

    @classmethod
    def unavailable(cls) -> "TranslationResult":
        return cls()
