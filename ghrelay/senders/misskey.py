"""Misskey channel sender (plain-text notes)."""

from ghrelay.config import MisskeyConfig
from ghrelay.models import Notification
from ghrelay.senders.base import NotificationSender


class MisskeySender(NotificationSender):
    """Creates a note in a channel via ``/api/notes/create``.

    Enabled only when instance URL, token and channel id are all set.
    """

    name = "misskey"

    def __init__(self, config: MisskeyConfig, timeout: float = 30) -> None:
        super().__init__(config.pacing_seconds, timeout=timeout)
        self._config = config

    @property
    def enabled(self) -> bool:
        return self._config.is_complete

    def _deliver(self, notification: Notification) -> None:
        url = f"{self._config.url.rstrip('/')}/api/notes/create"
        self._post(
            url,
            {
                "i": self._config.token,
                "text": notification.text,
                "channelId": self._config.channel_id,
            },
        )
