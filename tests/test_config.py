"""Tests for ghrelay.config (env + YAML loading, required values)."""

from pathlib import Path

import pytest

from ghrelay.config import (
    AppConfig,
    ConfigurationError,
    DeepLConfig,
    MisskeyConfig,
    PollingConfig,
    load_config,
)


def test_defaults_without_env_or_file(tmp_path: Path) -> None:
    """Missing YAML file gives defaults: 5 minute interval, no destinations."""
    config = load_config(tmp_path / "missing.yaml")
    assert config.polling.check_interval == 300000
    assert config.polling.interval_seconds == 300
    assert config.polling.last_check_file == "last_check.json"
    assert config.discord.webhook_url is None
    assert config.github.token is None
    assert config.deepl.enabled is False
    assert config.misskey.is_complete is False


def test_env_values_are_loaded(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Documented environment variables populate every section."""
    monkeypatch.setenv("DISCORD_WEBHOOK_URL", "https://discord.example/hook")
    monkeypatch.setenv("GITHUB_TOKEN", "ghp_x")
    monkeypatch.setenv("CHECK_INTERVAL", "60000")
    monkeypatch.setenv("REPOSITORIES", " owner/a , owner/b ,, ")
    monkeypatch.setenv("DEEPL_API_KEY", "key:fx")
    monkeypatch.setenv("MISSKEY_URL", "https://misskey.example")
    monkeypatch.setenv("MISSKEY_TOKEN", "mk")
    monkeypatch.setenv("MISSKEY_CHANNEL_ID", "chan")

    config = load_config(tmp_path / "missing.yaml")

    assert config.discord.webhook_url == "https://discord.example/hook"
    assert config.github.token == "ghp_x"
    assert config.polling.interval_seconds == 60
    assert config.polling.repository_list == ["owner/a", "owner/b"]
    assert config.deepl.enabled is True
    assert config.misskey.is_complete is True
    config.validate_required()


def test_yaml_values_with_env_override(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """YAML provides values; environment variables win over them."""
    path = tmp_path / "config.yaml"
    path.write_text(
        "discord:\n"
        "  webhook_url: https://discord.example/from-yaml\n"
        "polling:\n"
        "  check_interval: 120000\n"
        "  repositories:\n"
        "    - owner/a\n"
        "    - owner/b\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("CHECK_INTERVAL", "90000")

    config = load_config(path)

    assert config.discord.webhook_url == "https://discord.example/from-yaml"
    assert config.polling.repository_list == ["owner/a", "owner/b"]
    assert config.polling.check_interval == 90000


def test_yaml_placeholders_resolve_from_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """${VAR} is substituted; an unset placeholder leaves the field unset."""
    path = tmp_path / "config.yaml"
    path.write_text(
        "discord:\n  webhook_url: ${HOOK}\nmisskey:\n  url: ${NOT_SET_ANYWHERE}\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("HOOK", "https://discord.example/hook")
    monkeypatch.delenv("NOT_SET_ANYWHERE", raising=False)

    config = load_config(path)

    assert config.discord.webhook_url == "https://discord.example/hook"
    assert config.misskey.url is None


def test_token_from_secret_file(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """GITHUB_TOKEN_FILE and DEEPL_API_KEY_FILE are read when the plain vars are unset."""
    (tmp_path / "gh").write_text("ghp_file\n", encoding="utf-8")
    (tmp_path / "deepl").write_text("deepl-key\n", encoding="utf-8")
    monkeypatch.setenv("GITHUB_TOKEN_FILE", str(tmp_path / "gh"))
    monkeypatch.setenv("DEEPL_API_KEY_FILE", str(tmp_path / "deepl"))

    config = load_config(tmp_path / "missing.yaml")

    assert config.github.token == "ghp_file"
    assert config.deepl.api_key == "deepl-key"


def test_unreadable_secret_file_is_configuration_error(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """A secret file path that does not exist fails at startup."""
    monkeypatch.setenv("GITHUB_TOKEN_FILE", str(tmp_path / "nope"))
    with pytest.raises(ConfigurationError, match="GITHUB_TOKEN_FILE"):
        load_config(tmp_path / "missing.yaml")


def test_invalid_interval_is_configuration_error(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Non-numeric CHECK_INTERVAL raises ConfigurationError, not ValidationError."""
    monkeypatch.setenv("CHECK_INTERVAL", "soon")
    with pytest.raises(ConfigurationError):
        load_config(tmp_path / "missing.yaml")


@pytest.mark.parametrize("value", ["0", "-5000"])
def test_non_positive_interval_is_configuration_error(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, value: str
) -> None:
    monkeypatch.setenv("CHECK_INTERVAL", value)
    with pytest.raises(ConfigurationError):
        load_config(tmp_path / "missing.yaml")


def test_short_positive_interval_is_accepted(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("CHECK_INTERVAL", "500")
    assert load_config(tmp_path / "missing.yaml").polling.interval_seconds == 0.5


def test_empty_env_values_are_ignored(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """An empty CHECK_INTERVAL falls back to the default."""
    monkeypatch.setenv("CHECK_INTERVAL", "")
    config = load_config(tmp_path / "missing.yaml")
    assert config.polling.check_interval == 300000


def test_invalid_yaml_is_configuration_error(tmp_path: Path) -> None:
    """Broken YAML raises ConfigurationError."""
    path = tmp_path / "config.yaml"
    path.write_text("discord: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_config(path)


class TestValidateRequired:
    """AppConfig.validate_required enforces webhook URL and repositories."""

    def test_missing_webhook(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("REPOSITORIES", "owner/repo")
        with pytest.raises(ConfigurationError, match="DISCORD_WEBHOOK_URL"):
            AppConfig().validate_required()

    def test_blank_repository_list(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DISCORD_WEBHOOK_URL", "https://discord.example/hook")
        monkeypatch.setenv("REPOSITORIES", " , ,")
        with pytest.raises(ConfigurationError, match="REPOSITORIES"):
            AppConfig().validate_required()


class TestSections:
    """Per-section helpers."""

    def test_repository_order_is_preserved(self) -> None:
        polling = PollingConfig(repositories="z/z,a/a,m/m")
        assert polling.repository_list == ["z/z", "a/a", "m/m"]

    def test_misskey_partial_is_not_complete(self) -> None:
        partial = MisskeyConfig(url="https://misskey.example", token="t")
        assert partial.is_complete is False
        assert partial.is_partial is True
        assert MisskeyConfig().is_partial is False

    def test_deepl_endpoint_from_key(self) -> None:
        assert DeepLConfig(api_key="abc:fx").resolved_api_url == "https://api-free.deepl.com"
        assert DeepLConfig(api_key="abc").resolved_api_url == "https://api.deepl.com"
        assert DeepLConfig(api_key="abc", api_url="http://local/").resolved_api_url == "http://local"
