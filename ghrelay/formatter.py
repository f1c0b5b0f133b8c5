"""Build notification payloads from issues and comments.

Pure functions: the same item, translations and ``now`` always give the same
payload. Every item renders to a Discord embed and a plain-text note.
"""

from datetime import UTC, datetime

from ghrelay.models import (
    Comment,
    Embed,
    EmbedField,
    EmbedFooter,
    EmbedThumbnail,
    Issue,
    Notification,
    TranslationResult,
)

TITLE_LIMIT = 100
BODY_LIMIT = 500
ELLIPSIS = "..."
NO_DESCRIPTION = "_No description provided_"

COLOR_OPEN = 0x28A745
COLOR_CLOSED = 0x6C757D
COLOR_COMMENT = 0x17A2B8
LABEL_OPEN = "🟢 OPENED"
LABEL_CLOSED = "🔴 CLOSED"
COMMENT_TITLE = "💬 New Comment Added"

GITHUB_ICON_URL = "https://github.githubassets.com/images/modules/logos_page/GitHub-Mark.png"


def truncate_text(text: str | None, max_length: int) -> str:
    """Cut ``text`` to ``max_length`` characters plus an ellipsis; None gives ''."""
    if not text:
        return ""
    if len(text) > max_length:
        return text[:max_length] + ELLIPSIS
    return text


def _body_or_placeholder(body: str | None) -> str:
    return truncate_text(body, BODY_LIMIT) if body else NO_DESCRIPTION


def _relative_time(created_at: datetime) -> str:
    # Discord renders <t:epoch:R> as "5 minutes ago" in the reader's locale
    return f"<t:{int(created_at.timestamp())}:R>"


def _timestamp(now: datetime) -> str:
    return now.astimezone(UTC).isoformat()


def _translated_fields(pairs: list[tuple[str, TranslationResult | None, int]]) -> list[EmbedField]:
    fields = []
    for name, result, limit in pairs:
        if result is not None and result.available:
            fields.append(EmbedField(name=f"🌐 {name} (translated)", value=truncate_text(result.text, limit)))
    return fields


def _translated_lines(pairs: list[tuple[str, TranslationResult | None, int]]) -> list[str]:
    return [
        f"🌐 {truncate_text(result.text, limit)}"
        for _, result, limit in pairs
        if result is not None and result.available
    ]


def issue_label(issue: Issue) -> tuple[str, int]:
    """Return (label, color) for an issue's state."""
    if issue.is_open:
        return LABEL_OPEN, COLOR_OPEN
    return LABEL_CLOSED, COLOR_CLOSED


def create_issue_embed(
    issue: Issue,
    repo: str,
    now: datetime,
    title_translation: TranslationResult | None = None,
    body_translation: TranslationResult | None = None,
) -> Embed:
    label, color = issue_label(issue)
    fields = [
        EmbedField(name="📁 Repository", value=f"`{repo}`", inline=True),
        EmbedField(name="👤 Author", value=f"@{issue.author}", inline=True),
        EmbedField(name="🏷️ Issue #", value=f"#{issue.number}", inline=True),
        EmbedField(name="📅 Created", value=_relative_time(issue.created_at), inline=False),
    ]
    fields += _translated_fields(
        [
            ("Title", title_translation, TITLE_LIMIT),
            ("Description", body_translation, BODY_LIMIT),
        ]
    )
    return Embed(
        title=f"{label}: {truncate_text(issue.title, TITLE_LIMIT)}",
        description=_body_or_placeholder(issue.body),
        url=issue.html_url,
        color=color,
        fields=fields,
        timestamp=_timestamp(now),
        thumbnail=EmbedThumbnail(url=issue.avatar_url) if issue.avatar_url else None,
        footer=EmbedFooter(text=f"GitHub Issue • {repo}", icon_url=GITHUB_ICON_URL),
    )


def create_issue_text(
    issue: Issue,
    repo: str,
    title_translation: TranslationResult | None = None,
    body_translation: TranslationResult | None = None,
) -> str:
    label, _ = issue_label(issue)
    lines = [
        f"{label}: {truncate_text(issue.title, TITLE_LIMIT)}",
        f"📁 {repo} #{issue.number} by @{issue.author}",
        "",
        _body_or_placeholder(issue.body),
    ]
    translated = _translated_lines(
        [
            ("Title", title_translation, TITLE_LIMIT),
            ("Description", body_translation, BODY_LIMIT),
        ]
    )
    if translated:
        lines += [""] + translated
    lines += ["", issue.html_url]
    return "\n".join(lines)


def build_issue_notification(
    issue: Issue,
    repo: str,
    now: datetime,
    title_translation: TranslationResult | None = None,
    body_translation: TranslationResult | None = None,
) -> Notification:
    """Render an issue for every destination type."""
    return Notification(
        embed=create_issue_embed(issue, repo, now, title_translation, body_translation),
        text=create_issue_text(issue, repo, title_translation, body_translation),
        summary=f"Issue #{issue.number} - {truncate_text(issue.title, 50)}",
    )


def _parent_reference(parent: Issue | None) -> str | None:
    if parent is None:
        return None
    return f"#{parent.number} {truncate_text(parent.title, TITLE_LIMIT)}"


def create_comment_embed(
    comment: Comment,
    repo: str,
    now: datetime,
    parent: Issue | None = None,
    body_translation: TranslationResult | None = None,
    parent_title_translation: TranslationResult | None = None,
) -> Embed:
    fields = [
        EmbedField(name="📁 Repository", value=f"`{repo}`", inline=True),
        EmbedField(name="👤 Author", value=f"@{comment.author}", inline=True),
    ]
    parent_ref = _parent_reference(parent)
    if parent_ref:
        fields.append(EmbedField(name="🏷️ Issue", value=parent_ref, inline=False))
    fields.append(EmbedField(name="📅 Posted", value=_relative_time(comment.created_at), inline=False))
    fields += _translated_fields(
        [
            ("Comment", body_translation, BODY_LIMIT),
            ("Issue title", parent_title_translation, TITLE_LIMIT),
        ]
    )
    return Embed(
        title=COMMENT_TITLE,
        description=_body_or_placeholder(comment.body),
        url=comment.html_url,
        color=COLOR_COMMENT,
        fields=fields,
        timestamp=_timestamp(now),
        thumbnail=EmbedThumbnail(url=comment.avatar_url) if comment.avatar_url else None,
        footer=EmbedFooter(text=f"GitHub Comment • {repo}", icon_url=GITHUB_ICON_URL),
    )


def create_comment_text(
    comment: Comment,
    repo: str,
    parent: Issue | None = None,
    body_translation: TranslationResult | None = None,
    parent_title_translation: TranslationResult | None = None,
) -> str:
    lines = [COMMENT_TITLE]
    parent_ref = _parent_reference(parent)
    where = f"{repo} {parent_ref}" if parent_ref else repo
    lines += [f"📁 {where} by @{comment.author}", "", _body_or_placeholder(comment.body)]
    translated = _translated_lines(
        [
            ("Comment", body_translation, BODY_LIMIT),
            ("Issue title", parent_title_translation, TITLE_LIMIT),
        ]
    )
    if translated:
        lines += [""] + translated
    lines += ["", comment.html_url]
    return "\n".join(lines)


def build_comment_notification(
    comment: Comment,
    repo: str,
    now: datetime,
    parent: Issue | None = None,
    body_translation: TranslationResult | None = None,
    parent_title_translation: TranslationResult | None = None,
) -> Notification:
    """Render a comment (with its parent issue, when resolved) for every destination type."""
    return Notification(
        embed=create_comment_embed(comment, repo, now, parent, body_translation, parent_title_translation),
        text=create_comment_text(comment, repo, parent, body_translation, parent_title_translation),
        summary=f"Comment {comment.id} from @{comment.author}",
    )
