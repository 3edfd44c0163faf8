"""Upstream health state machine - Pure functions.

This module tracks consecutive failure signals from the map-data feed and
decides when the feed should be announced as down or recovered. All
functions are pure with no side effects.
"""

from dataclasses import dataclass
from enum import Enum


# Consecutive failures before the feed is announced as down
DEFAULT_FAILURE_THRESHOLD = 50


class HealthEvent(Enum):
    """Edge-triggered transitions worth announcing."""
    DOWN = "down"
    UP = "up"


@dataclass(frozen=True)
class HealthState:
    """Health of the upstream feed.

    Attributes:
        consecutive_failures: Failure signals since the last success
        is_down: True once the failure threshold was reached, until the
            next success
    """
    consecutive_failures: int = 0
    is_down: bool = False


def observe_signal(
    state: HealthState,
    success: bool,
    threshold: int = DEFAULT_FAILURE_THRESHOLD,
) -> tuple[HealthState, HealthEvent | None]:
    """Apply one health signal and return the new state.

    Pure function - returns new state without modifying input.

    A failure increments the counter; the DOWN event fires only when the
    counter lands exactly on the threshold, so a longer outage is announced
    once. A success resets the counter and fires UP only if the feed was
    down.

    Args:
        state: Current health state
        success: True if the response carried no failure marker
        threshold: Consecutive failures that mark the feed as down

    Returns:
        Tuple of (new state, event or None)
    """
    if success:
        event = HealthEvent.UP if state.is_down else None
        return HealthState(), event

    failures = state.consecutive_failures + 1
    if failures == threshold:
        return HealthState(consecutive_failures=failures, is_down=True), HealthEvent.DOWN

    return HealthState(consecutive_failures=failures, is_down=state.is_down), None
