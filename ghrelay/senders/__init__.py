"""Notification senders, one per destination type."""

import logging
from typing import List

from ghrelay.config import AppConfig
from ghrelay.senders.base import DeliveryError, NotificationSender
from ghrelay.senders.discord import DiscordSender
from ghrelay.senders.misskey import MisskeySender

LOG = logging.getLogger("ghrelay.senders")

__all__ = ["DeliveryError", "DiscordSender", "MisskeySender", "NotificationSender", "build_senders"]


def build_senders(config: AppConfig) -> List[NotificationSender]:
    """Enabled senders in delivery order: Discord, then Misskey."""
    senders: List[NotificationSender] = [
        DiscordSender(config.discord),
        MisskeySender(config.misskey),
    ]
    if config.misskey.is_partial:
        LOG.warning("Misskey partially configured (need MISSKEY_URL, MISSKEY_TOKEN, MISSKEY_CHANNEL_ID); disabled")
    return [s for s in senders if s.enabled]
