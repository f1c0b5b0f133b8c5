"""Scheduler: run a check cycle now, then every interval until stopped.

Cycles run start-to-start on a fixed interval in the calling thread; ticks
missed by a long cycle are skipped, never queued. SIGINT/SIGTERM disarm the
timer and exit immediately, without waiting for an in-flight cycle.
"""

import logging
import signal
import threading
import time
from typing import Any

from ghrelay.cycle import CheckCycle

LOG = logging.getLogger("ghrelay.scheduler")


class Scheduler:
    """Drives CheckCycle.run on a fixed interval."""

    def __init__(self, cycle: CheckCycle, interval_seconds: float) -> None:
        self._cycle = cycle
        self._interval = interval_seconds
        self._stopped = threading.Event()

    @property
    def armed(self) -> bool:
        return not self._stopped.is_set()

    def stop(self) -> None:
        """Disarm: no further cycle starts."""
        self._stopped.set()

    def run_once(self) -> None:
        try:
            self._cycle.run()
        except Exception as e:
            LOG.exception("Error during check cycle: %s", e)

    def run_forever(self) -> None:
        """First cycle immediately, then one per interval while armed."""
        next_run = time.monotonic()
        while self.armed:
            self.run_once()
            next_run += self._interval
            now = time.monotonic()
            if next_run < now:
                next_run = self._next_tick(next_run, now)
            self._stopped.wait(next_run - now)

    def _next_tick(self, missed: float, now: float) -> float:
        """First tick after ``now`` on the grid that ``missed`` belongs to."""
        if self._interval <= 0:
            return now
        LOG.warning("Check cycle overran the %.0fs interval; skipping missed ticks", self._interval)
        return now + self._interval - (now - missed) % self._interval

    def install_signal_handlers(self) -> None:
        """Stop and exit with code 0 on SIGINT or SIGTERM (main thread only)."""
        signal.signal(signal.SIGINT, self._on_signal)
        signal.signal(signal.SIGTERM, self._on_signal)

    def _on_signal(self, signum: int, frame: Any) -> None:
        LOG.info("Shutting down (%s)...", signal.Signals(signum).name)
        self.stop()
        raise SystemExit(0)
