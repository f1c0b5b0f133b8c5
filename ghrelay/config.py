"""Configuration loading from environment and an optional YAML file.

Secrets (tokens, API keys) are taken from environment variables or from files
(Docker secrets). Never put real tokens in config files committed to the
repo. Environment variables win over YAML values.
"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

DEFAULT_CHECK_INTERVAL_MS = 300_000


class ConfigurationError(Exception):
    """Raised when required configuration is missing or invalid at startup."""

    pass


class _EnvFirstSettings(BaseSettings):
    """Settings section where environment variables override YAML values."""

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return env_settings, init_settings, dotenv_settings, file_secret_settings


class DiscordConfig(_EnvFirstSettings):
    """Discord webhook destination (rich embeds)."""

    model_config = SettingsConfigDict(env_prefix="DISCORD_", extra="ignore", frozen=True, env_ignore_empty=True)

    webhook_url: str | None = Field(default=None, description="Incoming webhook URL (required)")
    pacing_seconds: float = Field(default=0.2, ge=0, description="Delay after every webhook call")


class GitHubConfig(_EnvFirstSettings):
    """GitHub API settings."""

    model_config = SettingsConfigDict(env_prefix="GITHUB_", extra="ignore", frozen=True, env_ignore_empty=True)

    token: str | None = Field(default=None, description="PAT; optional, anonymous calls are rate limited")
    api_url: str = Field(default="https://api.github.com", description="API base URL")
    timeout: float = Field(default=30, gt=0, description="Transport timeout in seconds")


class PollingConfig(_EnvFirstSettings):
    """Polling settings: what to watch and how often."""

    model_config = SettingsConfigDict(env_prefix="", extra="ignore", frozen=True, env_ignore_empty=True)

    # Milliseconds, as in CHECK_INTERVAL=300000
    check_interval: int = Field(default=DEFAULT_CHECK_INTERVAL_MS, gt=0, description="Poll interval in ms, positive")
    repositories: str = Field(default="", description="Comma-separated owner/name list")
    last_check_file: str = Field(default="last_check.json", description="Watermark state file")
    repository_pacing_seconds: float = Field(default=1.0, ge=0, description="Delay after each repository")

    @field_validator("repositories", mode="before")
    @classmethod
    def _join_list(cls, value: Any) -> Any:
        # YAML may list repositories instead of a comma-separated string
        if isinstance(value, (list, tuple)):
            return ",".join(str(v) for v in value)
        return value

    @property
    def repository_list(self) -> list[str]:
        """Configured repositories in order, trimmed, empty entries dropped."""
        return [r.strip() for r in self.repositories.split(",") if r.strip()]

    @property
    def interval_seconds(self) -> float:
        return self.check_interval / 1000


class DeepLConfig(_EnvFirstSettings):
    """DeepL translation backend (optional)."""

    model_config = SettingsConfigDict(env_prefix="DEEPL_", extra="ignore", frozen=True, env_ignore_empty=True)

    api_key: str | None = Field(default=None, description="DeepL auth key; translation disabled when unset")
    target_lang: str = Field(default="JA", description="Target language code")
    api_url: str | None = Field(default=None, description="Override API base URL")
    timeout: float = Field(default=30, gt=0, description="Transport timeout in seconds")

    @property
    def enabled(self) -> bool:
        return bool(self.api_key)

    @property
    def resolved_api_url(self) -> str:
        """Explicit URL, else free endpoint for ``:fx`` keys, else the pro endpoint."""
        if self.api_url:
            return self.api_url.rstrip("/")
        if self.api_key and self.api_key.endswith(":fx"):
            return "https://api-free.deepl.com"
        return "https://api.deepl.com"


class MisskeyConfig(_EnvFirstSettings):
    """Misskey channel destination (plain text, all-or-nothing)."""

    model_config = SettingsConfigDict(env_prefix="MISSKEY_", extra="ignore", frozen=True, env_ignore_empty=True)

    url: str | None = Field(default=None, description="Instance URL, e.g. https://misskey.io")
    token: str | None = Field(default=None, description="API token")
    channel_id: str | None = Field(default=None, description="Target channel id")
    pacing_seconds: float = Field(default=1.0, ge=0, description="Delay after every notes/create call")

    @property
    def is_complete(self) -> bool:
        return bool(self.url and self.token and self.channel_id)

    @property
    def is_partial(self) -> bool:
        return not self.is_complete and any((self.url, self.token, self.channel_id))


class LoggingConfig(_EnvFirstSettings):
    """Logging settings."""

    model_config = SettingsConfigDict(env_prefix="LOGGING_", extra="ignore", frozen=True, env_ignore_empty=True)

    level: str = Field(default="INFO", description="Log level")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log format",
    )


class AppConfig(BaseSettings):
    """Root application config from YAML + env."""

    model_config = SettingsConfigDict(extra="ignore", frozen=True, env_ignore_empty=True)

    discord: DiscordConfig = Field(default_factory=DiscordConfig)
    github: GitHubConfig = Field(default_factory=GitHubConfig)
    polling: PollingConfig = Field(default_factory=PollingConfig)
    deepl: DeepLConfig = Field(default_factory=DeepLConfig)
    misskey: MisskeyConfig = Field(default_factory=MisskeyConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    def validate_required(self) -> None:
        """Raise ConfigurationError unless the webhook URL and a repository are set."""
        if not self.discord.webhook_url:
            raise ConfigurationError("DISCORD_WEBHOOK_URL is required")
        if not self.polling.repository_list:
            raise ConfigurationError("No repositories specified in REPOSITORIES")


def _clean_secret(value: str | None) -> str | None:
    """Treat empty values and unresolved ${VAR} placeholders as unset."""
    if not value:
        return None
    value = value.strip()
    if not value or value.startswith("${"):
        return None
    return value


def _read_secret_file(env: dict[str, str], file_env_key: str) -> str | None:
    """Read secret from the file path in env (e.g. Docker secrets)."""
    file_path = env.get(file_env_key)
    if not file_path:
        return None
    try:
        return _clean_secret(Path(file_path).read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigurationError(f"Cannot read {file_env_key} ({file_path}): {e}") from e


def _substitute_env(value: Any, env: dict[str, str]) -> Any:
    """Replace ${VAR} and $VAR in strings with values from env; unset gives None."""
    if isinstance(value, str):
        if value.startswith("${") and value.endswith("}"):
            key = value[2:-1].strip()
            return env.get(key)
        if value.startswith("$") and not value.startswith("${"):
            key = value[1:].strip()
            return env.get(key)
        return value
    if isinstance(value, dict):
        return {k: _substitute_env(v, env) for k, v in value.items()}
    if isinstance(value, list):
        return [_substitute_env(v, env) for v in value]
    return value


def _section(raw: dict[str, Any], name: str) -> dict[str, Any]:
    """YAML section with unset (None) values dropped so field defaults apply."""
    section = raw.get(name) or {}
    if not isinstance(section, dict):
        raise ConfigurationError(f"Config section '{name}' must be a mapping")
    return {k: v for k, v in section.items() if v is not None}


def _read_yaml(path: Path | None, env: dict[str, str]) -> dict[str, Any]:
    if path is None or not path.is_file():
        return {}
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Cannot read config file {path}: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigurationError(f"Config file {path} must contain a mapping")
    return _substitute_env(raw, env)


def load_config(config_path: Path | None = None) -> AppConfig:
    """Load config from an optional YAML file and the environment.

    Secrets: GITHUB_TOKEN or GITHUB_TOKEN_FILE, DEEPL_API_KEY or DEEPL_API_KEY_FILE.
    Raises ConfigurationError on unreadable files or invalid values; required
    values are checked separately by AppConfig.validate_required().
    """
    env = dict(os.environ)
    raw = _read_yaml(config_path, env)

    try:
        discord = DiscordConfig(**_section(raw, "discord"))
        github = GitHubConfig(**_section(raw, "github"))
        polling = PollingConfig(**_section(raw, "polling"))
        deepl = DeepLConfig(**_section(raw, "deepl"))
        misskey = MisskeyConfig(**_section(raw, "misskey"))
        logging = LoggingConfig(**_section(raw, "logging"))
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e

    token = _clean_secret(github.token) or _read_secret_file(env, "GITHUB_TOKEN_FILE")
    github = github.model_copy(update={"token": token})
    api_key = _clean_secret(deepl.api_key) or _read_secret_file(env, "DEEPL_API_KEY_FILE")
    deepl = deepl.model_copy(update={"api_key": api_key})

    return AppConfig(
        discord=discord,
        github=github,
        polling=polling,
        deepl=deepl,
        misskey=misskey,
        logging=logging,
    )
