"""Tests for WatermarkStore (last_check.json)."""

import json
from datetime import UTC, datetime, timedelta
from pathlib import Path

from ghrelay.models import Watermark
from ghrelay.store import WatermarkStore

NOW = datetime(2024, 1, 15, 12, 0, 0, tzinfo=UTC)


def test_missing_file_bootstraps_configured_repos(tmp_path: Path) -> None:
    """No state: every configured repo starts one hour before now, both categories."""
    store = WatermarkStore(tmp_path / "last_check.json", ["owner/a", "owner/b"])
    watermarks = store.load(NOW)

    assert list(watermarks) == ["owner/a", "owner/b"]
    for wm in watermarks.values():
        assert wm.issues == NOW - timedelta(hours=1)
        assert wm.comments == NOW - timedelta(hours=1)


def test_corrupt_file_bootstraps(tmp_path: Path) -> None:
    """Invalid JSON or shape falls back to defaults."""
    path = tmp_path / "last_check.json"
    store = WatermarkStore(path, ["owner/a"])
    for content in ("{not json", "[1, 2]", '{"owner/a": {"issues": "yesterday"}}'):
        path.write_text(content, encoding="utf-8")
        assert store.load(NOW) == {"owner/a": Watermark.bootstrap(NOW)}


def test_save_then_load_keeps_iso_format(tmp_path: Path) -> None:
    """Saved file is a JSON object of ISO-8601 instants."""
    path = tmp_path / "state" / "last_check.json"
    store = WatermarkStore(path, ["owner/a"])
    wm = Watermark(issues=NOW, comments=NOW - timedelta(minutes=5))
    store.save({"owner/a": wm})

    raw = json.loads(path.read_text(encoding="utf-8"))
    assert raw == {"owner/a": {"issues": "2024-01-15T12:00:00Z", "comments": "2024-01-15T11:55:00Z"}}
    assert store.load(NOW) == {"owner/a": wm}
    assert [p.name for p in path.parent.iterdir()] == ["last_check.json"]


def test_existing_file_keeps_unknown_repos_and_misses_new_ones(tmp_path: Path) -> None:
    """Loaded map is the file as-is; repos added later get defaulted at first use."""
    path = tmp_path / "last_check.json"
    path.write_text(
        json.dumps({"owner/a": {"issues": "2024-01-15T08:00:00Z", "comments": "2024-01-15T09:00:00Z"}}),
        encoding="utf-8",
    )
    store = WatermarkStore(path, ["owner/a", "owner/new"])
    watermarks = store.load(NOW)

    assert "owner/new" not in watermarks
    assert WatermarkStore.watermark_for(watermarks, "owner/new", NOW) == Watermark.bootstrap(NOW)
    assert WatermarkStore.watermark_for(watermarks, "owner/a", NOW).issues == datetime(2024, 1, 15, 8, tzinfo=UTC)


def test_naive_timestamps_are_utc(tmp_path: Path) -> None:
    path = tmp_path / "last_check.json"
    path.write_text('{"o/r": {"issues": "2024-01-15T08:00:00", "comments": "2024-01-15T08:00:00"}}')
    wm = WatermarkStore(path, ["o/r"]).load(NOW)["o/r"]
    assert wm.issues.tzinfo is not None


class TestWatermarkAdvance:
    """Watermark.advance moves a category only when something was found."""

    def test_advance_only_found_categories(self) -> None:
        wm = Watermark.bootstrap(NOW)
        later = NOW + timedelta(minutes=5)
        assert wm.advance(later, issues_found=True, comments_found=False) == Watermark(
            issues=later, comments=wm.comments
        )

    def test_no_activity_is_noop(self) -> None:
        wm = Watermark.bootstrap(NOW)
        assert wm.advance(NOW, issues_found=False, comments_found=False) == wm

    def test_never_regresses(self) -> None:
        wm = Watermark(issues=NOW, comments=NOW)
        earlier = NOW - timedelta(minutes=1)
        assert wm.advance(earlier, issues_found=True, comments_found=True) == wm
