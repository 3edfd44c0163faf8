"""Configuration Loader - Imperative Shell.

This module handles loading configuration from YAML files and
environment variables. All I/O is contained here.

Models (Config, MessageConfig) are defined in pokewatch/core/config.py
to avoid information leakage between layers.
"""

import logging
import os
from pathlib import Path
from typing import Any, Optional

import yaml

from pokewatch.core.config import DEFAULT_FEED_BASE_URL, Config, MessageConfig
from pokewatch.core.formatter import DEFAULT_MAP_URL_TEMPLATE
from pokewatch.core.geo import ReferenceLocation
from pokewatch.core.health import DEFAULT_FAILURE_THRESHOLD
from pokewatch.shell.secret_manager_client import SecretManagerClient, SecretManagerConfig


logger = logging.getLogger(__name__)


DEFAULT_CONFIG_PATH = "config/config.yaml"


def _get_secret_manager_client() -> Optional[SecretManagerClient]:
    """Get a Secret Manager client.

    Returns None if GCP_PROJECT is not set (e.g., local development).
    """
    project_id = os.environ.get("GCP_PROJECT")
    if project_id:
        return SecretManagerClient(SecretManagerConfig(project_id=project_id))
    return None


def _resolve_value(value: Any, secret_client: Optional[SecretManagerClient] = None) -> Any:
    """Resolve a value that may contain secret or env var placeholders.

    Args:
        value: Value to resolve (may contain ${...} placeholders)
        secret_client: Client for resolving secrets

    Returns:
        Resolved value
    """
    if not isinstance(value, str):
        return value

    if secret_client:
        return secret_client.resolve(value)

    # No secret client - only handle env vars
    if value.startswith("${") and value.endswith("}"):
        var_spec = value[2:-1]
        if not var_spec.startswith("secret:"):
            env_value = os.environ.get(var_spec)
            if env_value:
                return env_value
            logger.warning("Environment variable %s not set", var_spec)

    return value


def _parse_location(data: Any) -> ReferenceLocation:
    """Parse the scan location from {latitude, longitude} or "lat,lon"."""
    if isinstance(data, str):
        parts = [p.strip() for p in data.split(",")]
        if len(parts) != 2:
            raise ValueError(f"Scan location must be 'latitude,longitude', got {data!r}")
        return ReferenceLocation(latitude=float(parts[0]), longitude=float(parts[1]))

    return ReferenceLocation(
        latitude=float(data["latitude"]),
        longitude=float(data["longitude"]),
    )


def _parse_species(data: dict[Any, Any]) -> dict[int, str]:
    """Parse species overrides, keyed by Pokédex number."""
    return {int(number): str(name) for number, name in data.items()}


def _parse_messages(data: dict[str, Any]) -> MessageConfig:
    """Parse health transition texts."""
    defaults = MessageConfig()
    return MessageConfig(
        source_down=data.get("source_down", defaults.source_down),
        source_up=data.get("source_up", defaults.source_up),
    )


def _parse_species_list(value: Any) -> tuple[str, ...]:
    """Parse ignored species from a list or a comma-separated string."""
    if isinstance(value, str):
        value = value.split(",")
    return tuple(name.strip() for name in value if name and name.strip())


def load_config_from_dict(data: dict[str, Any]) -> Config:
    """Load configuration from a dictionary.

    This is a pure-ish function (only secret and env var expansion has
    side effects).

    Args:
        data: Configuration dictionary

    Returns:
        Parsed Config object

    Raises:
        KeyError, ValueError: If a present value cannot be parsed
    """
    secret_client = _get_secret_manager_client()

    scan_location = None
    if data.get("scan_location") is not None:
        scan_location = _parse_location(data["scan_location"])

    return Config(
        scan_location=scan_location,
        max_distance_meters=int(data.get("max_distance_meters", 1000)),
        ignored_species=_parse_species_list(data.get("ignored_species", [])),
        scan_interval_seconds=int(data.get("scan_interval_seconds", 30)),
        refresh_interval_seconds=int(data.get("refresh_interval_seconds", 120)),
        failure_threshold=int(data.get("failure_threshold", DEFAULT_FAILURE_THRESHOLD)),
        webhook_url=_resolve_value(data.get("webhook_url", ""), secret_client) or "",
        feed_base_url=data.get("feed_base_url", DEFAULT_FEED_BASE_URL),
        map_url_template=data.get("map_url_template", DEFAULT_MAP_URL_TEMPLATE),
        request_timeout_seconds=int(data.get("request_timeout_seconds", 10)),
        forget_expired_sightings=bool(data.get("forget_expired_sightings", False)),
        species=_parse_species(data.get("species") or {}),
        messages=_parse_messages(data.get("messages") or {}),
    )


def load_config(config_path: str | Path | None = None) -> Config:
    """Load configuration from a YAML file.

    This method performs file I/O.

    Args:
        config_path: Path to YAML config file.
                    If None, uses CONFIG_PATH env var or default.

    Returns:
        Parsed Config object

    Raises:
        yaml.YAMLError: If config file is invalid YAML
    """
    if config_path is None:
        config_path = os.environ.get("CONFIG_PATH", DEFAULT_CONFIG_PATH)

    path = Path(config_path)

    logger.info("Loading configuration from %s", path)

    if not path.exists():
        logger.warning("Config file not found: %s, using defaults", path)
        return Config()

    with open(path, "r") as f:
        data = yaml.safe_load(f)

    if data is None:
        logger.warning("Config file is empty, using defaults")
        return Config()

    config = load_config_from_dict(data)

    logger.info(
        "Loaded config: max distance %dm, %d ignored species, failure threshold %d",
        config.max_distance_meters,
        len(config.ignored_species),
        config.failure_threshold,
    )

    return config


def load_config_from_env() -> Config:
    """Load configuration from environment variables.

    Useful for simple deployments without a YAML file.

    Environment variables:
        SCAN_LOCATION: "latitude,longitude" of the scan location
        SLACK_WEBHOOK_URL: Webhook URL for alerts
        SLACK_WEBHOOK_SECRET: Secret name in Secret Manager (alternative to SLACK_WEBHOOK_URL)
        MAX_DISTANCE_METERS: Distance threshold
        IGNORED_SPECIES: Comma-separated species names
        SCAN_INTERVAL_SECONDS: Poll period
        REFRESH_INTERVAL_SECONDS: Feed rescan period
        FAILURE_THRESHOLD: Consecutive failures before an outage alert

    Returns:
        Config object from environment
    """
    secret_client = _get_secret_manager_client()
    webhook_url = None

    secret_name = os.environ.get("SLACK_WEBHOOK_SECRET")
    if secret_client and secret_name:
        webhook_url = secret_client.get_secret(secret_name)
        if webhook_url:
            logger.info("Using Slack webhook from Secret Manager")

    # Fall back to environment variable
    if not webhook_url:
        webhook_url = os.environ.get("SLACK_WEBHOOK_URL", "")

    scan_location = None
    location_str = os.environ.get("SCAN_LOCATION")
    if location_str:
        scan_location = _parse_location(location_str)

    return Config(
        scan_location=scan_location,
        max_distance_meters=int(os.environ.get("MAX_DISTANCE_METERS", "1000")),
        ignored_species=_parse_species_list(os.environ.get("IGNORED_SPECIES", "")),
        scan_interval_seconds=int(os.environ.get("SCAN_INTERVAL_SECONDS", "30")),
        refresh_interval_seconds=int(os.environ.get("REFRESH_INTERVAL_SECONDS", "120")),
        failure_threshold=int(os.environ.get("FAILURE_THRESHOLD", str(DEFAULT_FAILURE_THRESHOLD))),
        webhook_url=webhook_url,
    )
