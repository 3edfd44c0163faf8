"""Orchestrator - Wires Functional Core and Imperative Shell.

This module coordinates the flow of data between the pure functional
core and the I/O-performing shell components. It owns the only state
that lives across scan cycles: the novelty set, the feed health and the
first-run flag.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from functools import partial
from typing import Callable

import requests

from pokewatch.core.config import Config
from pokewatch.core.dedup import NoveltyTracker
from pokewatch.core.formatter import (
    format_batch_message,
    format_health_message,
    sort_by_distance,
)
from pokewatch.core.health import HealthEvent, HealthState, observe_signal
from pokewatch.core.rules import SkipReason, is_notify_worthy
from pokewatch.core.sighting import SightingRecord, build_record, parse_sighting
from pokewatch.core.species import build_pokedex
from pokewatch.shell.feed_client import FeedClient, FeedSnapshot
from pokewatch.shell.slack_client import SlackClient, SlackResponse


logger = logging.getLogger(__name__)


def _local_now() -> datetime:
    return datetime.now().astimezone()


def _log_skip(record: SightingRecord, reason: SkipReason) -> None:
    if reason is SkipReason.DISTANCE:
        logger.debug("Skipping (distance) - %s - %dm", record.fingerprint, record.distance_meters)
    else:
        logger.debug("Skipping (%s) - %s", reason.value, record.fingerprint)


@dataclass
class MonitorState:
    """Mutable state carried from one scan cycle to the next.

    Attributes:
        seen: Fingerprints of sightings already accepted
        health: Upstream feed health
        first_run: True until the first scan cycle has completed
    """
    seen: NoveltyTracker = field(default_factory=NoveltyTracker)
    health: HealthState = field(default_factory=HealthState)
    first_run: bool = True


@dataclass
class ProcessingResult:
    """Result of a single scan cycle.

    Attributes:
        sightings_fetched: Entries in the feed snapshot
        sightings_malformed: Entries skipped because they could not be parsed
        accepted: Accepted sightings, nearest first
        message_sent: Whether an alert was delivered to Slack
        first_run: Whether this was the silent seeding cycle
        health_event: Health transition caused by this cycle's fetch
        errors: Any errors that occurred
    """
    sightings_fetched: int
    sightings_malformed: int
    accepted: list[SightingRecord]
    message_sent: bool
    first_run: bool = False
    health_event: HealthEvent | None = None
    errors: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        """Returns True if no errors occurred."""
        return len(self.errors) == 0

    @property
    def summary(self) -> str:
        """Human-readable summary of the processing result."""
        return (
            f"Fetched {self.sightings_fetched} sightings, "
            f"{self.sightings_malformed} malformed, "
            f"{len(self.accepted)} new, "
            f"alert {'sent' if self.message_sent else 'not sent'}"
        )


class Orchestrator:
    """Coordinates sighting monitoring and alerting.

    This class wires together:
    - Feed client (fetches sightings, triggers rescans)
    - Core functions (parsing, filtering, formatting, health transitions)
    - Slack client (sending notifications)
    """

    def __init__(
        self,
        config: Config,
        feed_client: FeedClient | None = None,
        slack_client: SlackClient | None = None,
        state: MonitorState | None = None,
        now: Callable[[], datetime] = _local_now,
    ) -> None:
        """Initialize orchestrator with configuration.

        Args:
            config: Application configuration (scan_location required)
            feed_client: Feed client (created if not provided)
            slack_client: Slack client (created if not provided)
            state: Cross-cycle state (fresh if not provided)
            now: Source of the current local time
        """
        if config.scan_location is None:
            raise ValueError("Config has no scan_location")

        self.config = config
        self.feed_client = feed_client or FeedClient(
            config.scan_location,
            base_url=config.feed_base_url,
            timeout=config.request_timeout_seconds,
        )
        self.slack_client = slack_client or SlackClient()
        self.state = state or MonitorState()
        self.now = now
        self.rule = config.rule
        self.pokedex = build_pokedex(config.species)

    def _send(self, text: str) -> SlackResponse:
        """Send a message to the configured webhook, best effort."""
        response = self.slack_client.send_text(self.config.webhook_url, text)
        if not response.success:
            logger.error("Failed to send Slack notification: %s", response.error)
        return response

    def record_health_signal(self, success: bool) -> HealthEvent | None:
        """Feed one health signal into the health state machine.

        Sends the down/up notification when a transition fires.

        Args:
            success: True if the feed response carried no failure marker

        Returns:
            The transition that fired, if any
        """
        threshold = self.config.failure_threshold
        self.state.health, event = observe_signal(self.state.health, success, threshold)

        if not success:
            logger.info(
                "Feed failure %d (threshold %d)",
                self.state.health.consecutive_failures,
                threshold,
            )

        if event is HealthEvent.DOWN:
            logger.warning("Feed is down after %d consecutive failures", threshold)
        elif event is HealthEvent.UP:
            logger.info("Feed is back up")

        if event is not None:
            self._send(format_health_message(
                event,
                down_message=self.config.messages.source_down,
                up_message=self.config.messages.source_up,
            ))

        return event

    def _select_sightings(self, snapshot: FeedSnapshot) -> tuple[list[SightingRecord], int]:
        """Build records from a snapshot and keep the notify-worthy ones.

        Accepted fingerprints are added to the novelty set immediately.

        Returns:
            Tuple of (accepted records in feed order, malformed entry count)
        """
        accepted: list[SightingRecord] = []
        malformed = 0

        for entry in snapshot.sightings:
            raw = parse_sighting(entry)
            if raw is None:
                malformed += 1
                logger.warning("Skipping (malformed) - %r", entry)
                continue

            record = build_record(raw, self.config.scan_location, self.pokedex)

            if not is_notify_worthy(
                record,
                self.rule,
                self.state.seen,
                on_skip=partial(_log_skip, record),
            ):
                continue

            accepted.append(record)
            logger.info("Accepted - %s - %dm", record.fingerprint, record.distance_meters)

        return accepted, malformed

    def process(self) -> ProcessingResult:
        """Run a single scan cycle.

        This is the main entry point that:
        1. Fetches the current sighting snapshot
        2. Reports the fetch outcome to the health state machine
        3. Filters sightings by species, distance and novelty
        4. Sorts accepted sightings nearest first
        5. Sends them as one message, except on the first cycle

        The first cycle only seeds the novelty set so a fresh process does
        not announce every sighting already on the map.

        Returns:
            ProcessingResult with details of what happened
        """
        first_run = self.state.first_run
        logger.info("Starting scan cycle%s", " (first run)" if first_run else "")

        try:
            return self._process(first_run)
        finally:
            self.state.first_run = False

    def _process(self, first_run: bool) -> ProcessingResult:
        now = self.now()

        # Step 1-2: Fetch and classify
        try:
            snapshot = self.feed_client.fetch_snapshot()
        except (requests.RequestException, ValueError) as e:
            error_msg = f"Failed to fetch sightings: {e}"
            logger.error(error_msg)
            return ProcessingResult(
                sightings_fetched=0,
                sightings_malformed=0,
                accepted=[],
                message_sent=False,
                first_run=first_run,
                health_event=self.record_health_signal(False),
                errors=[error_msg],
            )

        health_event = self.record_health_signal(snapshot.is_healthy)

        if self.config.forget_expired_sightings:
            forgotten = self.state.seen.forget_expired(now.timestamp())
            if forgotten:
                logger.debug("Forgot %d expired sightings", len(forgotten))

        # Step 3-4: Filter and sort
        accepted, malformed = self._select_sightings(snapshot)
        accepted = sort_by_distance(accepted)

        result = ProcessingResult(
            sightings_fetched=len(snapshot.sightings),
            sightings_malformed=malformed,
            accepted=accepted,
            message_sent=False,
            first_run=first_run,
            health_event=health_event,
        )

        if first_run:
            if accepted:
                logger.info("First run: %d sightings marked as seen without alerting", len(accepted))
            return result

        # Step 5: Send
        message = format_batch_message(accepted, now, self.config.map_url_template)
        if message is None:
            return result

        logger.info("Alerting %d sightings:\n%s", len(accepted), message)
        response = self._send(message)
        result.message_sent = response.success
        if not response.success:
            result.errors.append(f"Failed to send alert: {response.error}")

        return result

    def refresh_feed(self) -> bool:
        """Ask the feed to regenerate its sightings.

        The outcome is logged only; refresh responses are not health
        signals.

        Returns:
            True if the request completed
        """
        try:
            response = self.feed_client.request_scan()
        except (requests.RequestException, ValueError) as e:
            logger.warning("Feed refresh failed: %s", e)
            return False

        if response.job_status:
            logger.warning("Feed refresh reported job status %s", response.job_status)
        return True
