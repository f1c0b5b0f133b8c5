"""Watermark storage in a JSON file (last_check.json by default).

Format: {"owner/repo": {"issues": "<ISO-8601>", "comments": "<ISO-8601>"}}.
Read once at cycle start, written once at cycle end.
"""

import json
import logging
import os
import tempfile
from datetime import datetime
from pathlib import Path
from typing import Dict, List

from pydantic import ValidationError

from ghrelay.models import Watermark

LOG = logging.getLogger("ghrelay.store")


class WatermarkStore:
    """Loads and saves per-repository watermarks."""

    def __init__(self, path: Path, repositories: List[str]) -> None:
        self.path = Path(path)
        self._repositories = list(repositories)

    def defaults(self, now: datetime) -> Dict[str, Watermark]:
        """Every configured repository bootstrapped to one hour before ``now``."""
        return {repo: Watermark.bootstrap(now) for repo in self._repositories}

    def load(self, now: datetime) -> Dict[str, Watermark]:
        """Read persisted watermarks; on any failure return defaults()."""
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
            if not isinstance(raw, dict):
                raise ValueError(f"expected an object, got {type(raw).__name__}")
            return {repo: Watermark.model_validate(value) for repo, value in raw.items()}
        except FileNotFoundError:
            LOG.info("No watermark file at %s, starting one hour back", self.path)
        except (OSError, ValueError, ValidationError) as e:
            LOG.warning("Failed to load watermarks from %s, starting one hour back: %s", self.path, e)
        return self.defaults(now)

    @staticmethod
    def watermark_for(watermarks: Dict[str, Watermark], repo: str, now: datetime) -> Watermark:
        """Entry for ``repo``, bootstrapped if the repository is new to the file."""
        existing = watermarks.get(repo)
        if existing is not None:
            return existing
        LOG.info("%s has no watermark yet, starting one hour back", repo)
        return Watermark.bootstrap(now)

    def save(self, watermarks: Dict[str, Watermark]) -> Path:
        """Replace the file with ``watermarks`` (temp file + rename)."""
        payload = {repo: wm.model_dump(mode="json") for repo, wm in watermarks.items()}
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{self.path.name}.", dir=self.path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        LOG.debug("Saved watermarks for %d repositories to %s", len(payload), self.path)
        return self.path
