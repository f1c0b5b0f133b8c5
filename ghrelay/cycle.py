"""One check cycle: every repository, in configured order, in one pass.

Load watermarks once, then for each repository fetch new issues and comments,
translate and format them, and send each notification to every enabled
sender. Each repository's watermark is updated in memory. Save once at the
end. A failure inside one repository is logged and the cycle moves on.
"""

import logging
import time
from datetime import UTC, datetime, timedelta
from typing import Dict, List, Protocol

from pydantic import BaseModel, Field

from ghrelay.fetcher import ItemFetcher
from ghrelay.formatter import build_comment_notification, build_issue_notification
from ghrelay.models import Notification, TranslationResult, Watermark
from ghrelay.senders import NotificationSender
from ghrelay.store import WatermarkStore

LOG = logging.getLogger("ghrelay.cycle")

# GitHub reports created_at in whole seconds
SOURCE_RESOLUTION = timedelta(seconds=1)


def cycle_snapshot(clock_now: datetime) -> datetime:
    """Watermark instant for a cycle starting at ``clock_now``.

    Truncated to whole seconds and moved back one second, so an item created
    later in the same second (reported with that second as created_at) still
    compares strictly after the watermark next cycle.
    """
    return clock_now.replace(microsecond=0) - SOURCE_RESOLUTION


class Translator(Protocol):
    def translate(self, text: str | None) -> TranslationResult: ...


class RepositoryReport(BaseModel):
    """What happened to one repository during a cycle."""

    repo: str
    issues: int = 0
    comments: int = 0
    sent: int = 0
    failed_sends: int = 0
    error: str | None = None


class CycleReport(BaseModel):
    started_at: datetime
    repositories: List[RepositoryReport] = Field(default_factory=list)
    saved: bool = False

    @property
    def failed_repositories(self) -> List[str]:
        return [r.repo for r in self.repositories if r.error is not None]


class CheckCycle:
    """Runs check cycles over the configured repositories."""

    def __init__(
        self,
        repositories: List[str],
        store: WatermarkStore,
        fetcher: ItemFetcher,
        senders: List[NotificationSender],
        translator: Translator | None = None,
        repository_pacing_seconds: float = 1.0,
    ) -> None:
        self._repositories = list(repositories)
        self._store = store
        self._fetcher = fetcher
        self._senders = list(senders)
        self._translator = translator
        self._repository_pacing = repository_pacing_seconds

    def run(self, now: datetime | None = None) -> CycleReport:
        """Run one cycle; ``now`` is the snapshot watermarks advance to.

        Defaults to cycle_snapshot() of the clock. An explicit ``now`` is
        truncated to whole seconds.
        """
        now = now.replace(microsecond=0) if now else cycle_snapshot(datetime.now(UTC))
        LOG.info("Starting check cycle at %s", now.isoformat())
        report = CycleReport(started_at=now)
        watermarks = self._store.load(now)

        for repo in self._repositories:
            repo_report = RepositoryReport(repo=repo)
            try:
                self.check_repository(repo, watermarks, now, repo_report)
            except Exception as e:
                LOG.exception("Error checking %s: %s", repo, e)
                repo_report.error = str(e) or type(e).__name__
            report.repositories.append(repo_report)
            # Source API rate limit
            time.sleep(self._repository_pacing)

        try:
            self._store.save(watermarks)
            report.saved = True
        except OSError as e:
            LOG.error("Failed to save watermarks to %s: %s", self._store.path, e)

        LOG.info(
            "Check cycle completed: %d repositories, %d failed",
            len(report.repositories),
            len(report.failed_repositories),
        )
        return report

    def check_repository(
        self,
        repo: str,
        watermarks: Dict[str, Watermark],
        now: datetime,
        report: RepositoryReport | None = None,
    ) -> RepositoryReport:
        """Notify new issues and comments of ``repo`` and update its watermark in place."""
        report = report or RepositoryReport(repo=repo)
        LOG.info("Checking %s...", repo)
        current = WatermarkStore.watermark_for(watermarks, repo, now)

        issues = self._fetcher.fetch_new_issues(repo, current.issues).value or []
        for issue in issues:
            notification = build_issue_notification(
                issue,
                repo,
                now,
                title_translation=self._translate(issue.title),
                body_translation=self._translate(issue.body),
            )
            self._deliver(notification, report)
            report.issues += 1

        comments = self._fetcher.fetch_new_comments(repo, current.comments).value or []
        for comment in comments:
            parent = self._fetcher.resolve_parent_issue(comment)
            notification = build_comment_notification(
                comment,
                repo,
                now,
                parent=parent,
                body_translation=self._translate(comment.body),
                parent_title_translation=self._translate(parent.title) if parent else None,
            )
            self._deliver(notification, report)
            report.comments += 1

        watermarks[repo] = current.advance(now, issues_found=bool(issues), comments_found=bool(comments))

        if report.issues or report.comments:
            LOG.info("%s: %d issues, %d comments sent", repo, report.issues, report.comments)
        else:
            LOG.info("%s: No new activity", repo)
        return report

    def _translate(self, text: str | None) -> TranslationResult | None:
        if self._translator is None or not text:
            return None
        return self._translator.translate(text)

    def _deliver(self, notification: Notification, report: RepositoryReport) -> None:
        for sender in self._senders:
            result = sender.send(notification)
            if result.ok:
                report.sent += 1
                LOG.info("Notification sent to %s: %s", sender.name, notification.summary)
            else:
                report.failed_sends += 1
