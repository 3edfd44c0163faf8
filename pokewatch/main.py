"""Command-line Entry Point.

Loads configuration, makes sure a usable webhook URL is available, and
runs the scan and feed-refresh timers until interrupted. It's a thin
wrapper around the orchestrator.
"""

import argparse
import logging
import os
import sys
from typing import Callable, Sequence

from pokewatch.core.config import Config, is_valid_webhook_url, validate_config
from pokewatch.orchestrator import Orchestrator
from pokewatch.shell.config_loader import load_config, load_config_from_env
from pokewatch.shell.scheduler import IntervalScheduler


logger = logging.getLogger(__name__)


LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class StartupError(Exception):
    """Raised when the monitor cannot start with the given configuration."""


def configure_logging(level_name: str | None = None) -> None:
    """Configure root logging once for the process."""
    level_name = (level_name or os.environ.get("LOG_LEVEL", "INFO")).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format=LOG_FORMAT,
    )


def _get_config(config_path: str | None = None) -> Config:
    """Load configuration from file or environment."""
    config_path = config_path or os.environ.get("CONFIG_PATH")

    if config_path:
        return load_config(config_path)
    elif os.environ.get("SCAN_LOCATION"):
        # Simple env-based config
        return load_config_from_env()
    else:
        # Try default config path
        return load_config()


def obtain_webhook_url(
    config: Config,
    prompt: Callable[[str], str] = input,
    interactive: bool | None = None,
) -> str:
    """Return a valid webhook URL, asking the user once if needed.

    Args:
        config: Loaded configuration
        prompt: Function used to ask for the URL
        interactive: Whether asking is possible (defaults to stdin being a TTY)

    Returns:
        A webhook URL that matches the Slack incoming webhook shape

    Raises:
        StartupError: If no valid URL could be obtained
    """
    if is_valid_webhook_url(config.webhook_url):
        logger.info("Using configured Slack webhook URL")
        return config.webhook_url

    if interactive is None:
        interactive = sys.stdin.isatty()

    if interactive:
        url = prompt("Please enter your Slack webhook URL: ").strip()
        if is_valid_webhook_url(url):
            return url

    raise StartupError("Slack webhook URL is invalid or missing")


def prepare_config(config: Config, prompt: Callable[[str], str] = input) -> Config:
    """Validate configuration and resolve the webhook URL.

    Raises:
        StartupError: If the configuration has errors or no webhook URL
    """
    validation = validate_config(config)
    for warning in validation.warnings:
        if warning.field != "webhook_url":
            logger.warning("Config %s: %s", warning.field, warning.message)

    if not validation.valid:
        details = "; ".join(f"{e.field}: {e.message}" for e in validation.critical_errors)
        raise StartupError(f"Invalid configuration: {details}")

    config.webhook_url = obtain_webhook_url(config, prompt=prompt)
    return config


def build_scheduler(
    orchestrator: Orchestrator,
    scheduler: IntervalScheduler | None = None,
) -> IntervalScheduler:
    """Register the scan and feed-refresh jobs.

    The scan runs immediately and then every scan interval; the refresh
    first runs after one refresh interval. The two are independent.
    """
    config = orchestrator.config
    scheduler = scheduler or IntervalScheduler()

    if config.effective_refresh_interval != config.refresh_interval_seconds:
        logger.warning(
            "Refresh interval raised from %ds to %ds",
            config.refresh_interval_seconds,
            config.effective_refresh_interval,
        )

    scheduler.add_job(
        "scan",
        config.scan_interval_seconds,
        lambda: logger.info("Completed: %s", orchestrator.process().summary),
        run_immediately=True,
    )
    scheduler.add_job(
        "feed-refresh",
        config.effective_refresh_interval,
        orchestrator.refresh_feed,
    )
    return scheduler


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Post nearby Pokémon sightings to a Slack webhook",
    )
    parser.add_argument(
        "--config",
        help="Path to YAML config file (default: $CONFIG_PATH or config/config.yaml)",
    )
    parser.add_argument(
        "--once",
        action="store_true",
        help="Run a single scan cycle and exit (the first cycle only seeds, it never alerts)",
    )
    parser.add_argument(
        "--log-level",
        help="Logging level (default: $LOG_LEVEL or INFO)",
    )
    return parser.parse_args(argv)


def run(argv: Sequence[str] | None = None) -> int:
    """Run the monitor.

    Returns:
        Process exit status
    """
    args = parse_args(argv)
    configure_logging(args.log_level)

    try:
        config = prepare_config(_get_config(args.config))
    except StartupError as e:
        logger.error("%s. Terminating.", e)
        return 1

    orchestrator = Orchestrator(config)

    if args.once:
        result = orchestrator.process()
        print(result.summary)
        return 0 if result.success else 1

    scheduler = build_scheduler(orchestrator)
    try:
        scheduler.run_forever()
    except KeyboardInterrupt:
        logger.info("Monitor interrupted by user")
    return 0


def main() -> None:
    sys.exit(run())


if __name__ == "__main__":
    main()
