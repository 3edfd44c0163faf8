"""Functional Core - Pure functions with no side effects.

This module contains all business logic:
- Sighting parsing and fingerprints
- Geo/distance calculations
- Sighting filter rules
- Message formatting
- Feed health transitions

Apart from the in-memory novelty set, everything here is deterministic and
has no I/O.
"""

from pokewatch.core.dedup import NoveltyTracker
from pokewatch.core.formatter import format_batch_message, format_health_message, sort_by_distance
from pokewatch.core.geo import ReferenceLocation, calculate_distance
from pokewatch.core.health import HealthEvent, HealthState, observe_signal
from pokewatch.core.rules import SightingRule, SkipReason, check_sighting, is_notify_worthy
from pokewatch.core.sighting import SightingRecord, build_record, parse_sighting

__all__ = [
    # Sighting
    "SightingRecord",
    "parse_sighting",
    "build_record",
    # Geo
    "ReferenceLocation",
    "calculate_distance",
    # Dedup
    "NoveltyTracker",
    # Rules
    "SightingRule",
    "SkipReason",
    "check_sighting",
    "is_notify_worthy",
    # Formatter
    "format_batch_message",
    "format_health_message",
    "sort_by_distance",
    # Health
    "HealthEvent",
    "HealthState",
    "observe_signal",
]
