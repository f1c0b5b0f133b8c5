"""ghrelay entry point.

Polls GitHub repositories for new issues and comments and relays them to
Discord (and optionally Misskey). Usage: ghrelay [--config PATH] [--check] [--once].
"""

import argparse
import logging
import sys
from pathlib import Path

from ghrelay.adapters import GitHubAdapter
from ghrelay.config import AppConfig, ConfigurationError, load_config
from ghrelay.cycle import CheckCycle
from ghrelay.fetcher import ItemFetcher
from ghrelay.logging import RelayLogging
from ghrelay.scheduler import Scheduler
from ghrelay.senders import build_senders
from ghrelay.store import WatermarkStore
from ghrelay.translator import DeepLTranslator

LOG = logging.getLogger("ghrelay")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments."""
    parser = argparse.ArgumentParser(
        prog="ghrelay",
        description="Relay new GitHub issues and comments to Discord and Misskey",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=Path("config.yaml"),
        help="Path to optional YAML config file (env vars take precedence)",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Only load and validate config, then exit",
    )
    parser.add_argument(
        "--once",
        action="store_true",
        help="Run a single check cycle, then exit",
    )
    return parser.parse_args(argv)


def build_cycle(config: AppConfig) -> CheckCycle:
    """Wire the check cycle from config."""
    repositories = config.polling.repository_list
    adapter = GitHubAdapter(
        token=config.github.token,
        api_url=config.github.api_url,
        timeout=config.github.timeout,
    )
    return CheckCycle(
        repositories=repositories,
        store=WatermarkStore(Path(config.polling.last_check_file), repositories),
        fetcher=ItemFetcher(adapter),
        senders=build_senders(config),
        translator=DeepLTranslator(config.deepl),
        repository_pacing_seconds=config.polling.repository_pacing_seconds,
    )


def log_startup(config: AppConfig) -> None:
    LOG.info("ghrelay started")
    LOG.info("Monitoring repositories: %s", ", ".join(config.polling.repository_list))
    LOG.info("Check interval: %s seconds", config.polling.interval_seconds)
    LOG.info("GitHub token: %s", "configured" if config.github.token else "not configured (rate limited)")
    LOG.info("Discord webhook: %s", "configured" if config.discord.webhook_url else "not configured")
    LOG.info("DeepL translation: %s", config.deepl.target_lang if config.deepl.enabled else "disabled")
    LOG.info("Misskey: %s", "configured" if config.misskey.is_complete else "disabled")


def main(argv: list[str] | None = None) -> int:
    """Entry point: validate config, then run cycles until a signal arrives."""
    args = parse_args(argv)
    config_path = args.config
    if not config_path.is_file() and config_path == Path("config.yaml"):
        if Path("config.example.yaml").is_file():
            config_path = Path("config.example.yaml")
            logging.basicConfig(level=logging.INFO)
            LOG.warning("config.yaml not found, using config.example.yaml")

    try:
        config = load_config(config_path)
        RelayLogging(config.logging).setup()
        config.validate_required()
    except ConfigurationError as e:
        logging.basicConfig(level=logging.INFO)
        LOG.error("Configuration error: %s", e)
        return 1

    if args.check:
        print("Config OK:", ", ".join(config.polling.repository_list))
        return 0

    log_startup(config)
    scheduler = Scheduler(build_cycle(config), config.polling.interval_seconds)
    try:
        if args.once:
            scheduler.run_once()
            return 0
        scheduler.install_signal_handlers()
        scheduler.run_forever()
    except KeyboardInterrupt:
        return 0
    except Exception as e:
        LOG.exception("Fatal error: %s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
