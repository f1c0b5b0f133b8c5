"""Per-repository progress marker, as stored in last_check.json."""

from datetime import UTC, datetime, timedelta

from pydantic import BaseModel, field_validator

BOOTSTRAP_LOOKBACK = timedelta(hours=1)


class Watermark(BaseModel):
    """Last processed instant per category for one repository."""

    model_config = {"frozen": True, "extra": "ignore"}

    issues: datetime
    comments: datetime

    @field_validator("issues", "comments")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        # Hand-edited files may omit the offset
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value

    @classmethod
    def bootstrap(cls, now: datetime) -> "Watermark":
        """Watermark for a repository with no prior state: one hour before now."""
        start = now - BOOTSTRAP_LOOKBACK
        return cls(issues=start, comments=start)

    def advance(self, now: datetime, issues_found: bool, comments_found: bool) -> "Watermark":
        """Move each category to ``now`` only if something was found in it; never backwards."""
        return Watermark(
            issues=max(self.issues, now) if issues_found else self.issues,
            comments=max(self.comments, now) if comments_found else self.comments,
        )
