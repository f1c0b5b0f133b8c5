"""Discord webhook sender (rich embeds)."""

from ghrelay.config import DiscordConfig
from ghrelay.models import Notification
from ghrelay.senders.base import NotificationSender


class DiscordSender(NotificationSender):
    """Posts ``{"embeds": [embed]}`` to the configured webhook."""

    name = "discord"

    def __init__(self, config: DiscordConfig, timeout: float = 30) -> None:
        super().__init__(config.pacing_seconds, timeout=timeout)
        self._webhook_url = config.webhook_url

    @property
    def enabled(self) -> bool:
        return bool(self._webhook_url)

    def _deliver(self, notification: Notification) -> None:
        embed = notification.embed.model_dump(mode="json", exclude_none=True)
        self._post(self._webhook_url, {"embeds": [embed]})
