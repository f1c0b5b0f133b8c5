"""Abstract base for notification senders."""

import logging
import time
from abc import ABC, abstractmethod

import requests

from ghrelay.models import Notification, Result

LOG = logging.getLogger("ghrelay.senders")


class DeliveryError(Exception):
    """Raised by a sender's delivery call when the destination rejects it."""

    pass


class NotificationSender(ABC):
    """Delivers one notification per call, then waits ``pacing_seconds``.

    ``send`` never raises: delivery errors are logged and returned as a
    failure result. No retries.
    """

    name: str = "sender"

    def __init__(self, pacing_seconds: float, timeout: float = 30) -> None:
        self.pacing_seconds = pacing_seconds
        self._timeout = timeout
        self._session = requests.Session()

    @property
    @abstractmethod
    def enabled(self) -> bool:
        """True only when the destination is fully configured."""
        ...

    @abstractmethod
    def _deliver(self, notification: Notification) -> None:
        """Perform the request; raise DeliveryError on failure."""
        ...

    def send(self, notification: Notification) -> Result[None]:
        try:
            self._deliver(notification)
            result: Result[None] = Result.success()
        except Exception as e:
            LOG.error("Error sending %s notification (%s): %s", self.name, notification.summary, e)
            result = Result.failure(str(e))
        # Destination rate limits apply to failed calls too
        time.sleep(self.pacing_seconds)
        return result

    def _post(self, url: str, payload: dict) -> requests.Response:
        try:
            resp = self._session.post(url, json=payload, timeout=self._timeout)
        except requests.RequestException as e:
            raise DeliveryError(str(e)) from e
        if resp.status_code >= 400:
            raise DeliveryError(f"{resp.status_code}: {resp.text or resp.reason}")
        return resp
