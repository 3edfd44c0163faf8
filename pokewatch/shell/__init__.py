"""Imperative Shell - I/O and side effects.

This module contains all code that interacts with external systems:
- Map-data feed client (HTTP)
- Slack webhook client (HTTP)
- Secret Manager client
- Configuration loading (environment/files)
- Interval scheduler (timers)

Keep this layer thin and simple. All business logic should be in core.
"""

from pokewatch.shell.feed_client import FeedClient, FeedSnapshot, ScanResponse
from pokewatch.shell.slack_client import SlackClient, SlackResponse
from pokewatch.shell.config_loader import load_config, load_config_from_env
from pokewatch.shell.scheduler import IntervalScheduler

__all__ = [
    "FeedClient",
    "FeedSnapshot",
    "ScanResponse",
    "SlackClient",
    "SlackResponse",
    "load_config",
    "load_config_from_env",
    "IntervalScheduler",
]
