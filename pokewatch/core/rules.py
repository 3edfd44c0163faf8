"""Sighting filter rules - Pure evaluation.

This module decides which sightings are worth a notification based on
species, distance and novelty.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable

from pokewatch.core.dedup import NoveltyTracker
from pokewatch.core.sighting import SightingRecord


class SkipReason(Enum):
    """Why a sighting was not accepted, in evaluation order."""
    IGNORED = "ignored"
    DISTANCE = "distance"
    ALREADY_SEEN = "already seen"


@dataclass(frozen=True)
class SightingRule:
    """Configuration for which sightings trigger alerts.

    Attributes:
        ignored_species: Species names that never trigger alerts
        max_distance_meters: Sightings further than this are skipped
    """
    ignored_species: frozenset[str] = field(default_factory=frozenset)
    max_distance_meters: int = 1000


def check_sighting(
    record: SightingRecord,
    rule: SightingRule,
    seen: NoveltyTracker,
) -> SkipReason | None:
    """Evaluate a sighting against the rule and the novelty set.

    Pure function. Checks run in a fixed order and stop at the first
    failing one, so the returned reason is the first that applies.

    Args:
        record: Sighting to evaluate
        rule: Species and distance rule
        seen: Fingerprints accepted so far

    Returns:
        The reason the sighting is skipped, or None if it is accepted
    """
    if record.species_name in rule.ignored_species:
        return SkipReason.IGNORED

    if record.distance_meters > rule.max_distance_meters:
        return SkipReason.DISTANCE

    if record.fingerprint in seen:
        return SkipReason.ALREADY_SEEN

    return None


def is_notify_worthy(
    record: SightingRecord,
    rule: SightingRule,
    seen: NoveltyTracker,
    on_skip: Callable[[SkipReason], None] | None = None,
) -> bool:
    """Accept or reject a sighting, marking accepted ones as seen.

    Not pure: an accepted fingerprint is added to `seen` immediately, so
    the same sighting is never offered again in a later cycle.

    Args:
        record: Sighting to evaluate
        rule: Species and distance rule
        seen: Novelty set, updated on acceptance
        on_skip: Called with the reason when the sighting is rejected

    Returns:
        True if the sighting should be notified
    """
    reason = check_sighting(record, rule, seen)
    if reason is not None:
        if on_skip is not None:
            on_skip(reason)
        return False
    seen.add(record)
    return True
