"""Message formatting - Pure functions.

This module formats accepted sightings and health transitions into the
plain-text messages posted to Slack. All functions are pure with no side
effects.
"""

from datetime import datetime
from typing import Sequence

from pokewatch.core.health import HealthEvent
from pokewatch.core.sighting import SightingRecord, seconds_remaining


# Link to the sighting on the map, filled with the reported coordinate text
DEFAULT_MAP_URL_TEMPLATE = "https://pokevision.com/#/@{latitude},{longitude}"

DEFAULT_SOURCE_DOWN_MESSAGE = (
    "PokeVision is down :crying_cat_face: Check https://twitter.com/pokevisiongo"
)
DEFAULT_SOURCE_UP_MESSAGE = "PokeVision is back up. Go catch 'em all! :smiley_cat:"

FIELD_SEPARATOR = "  —  "


def format_clock_time(moment: datetime) -> str:
    """Format a time as a compact 12-hour clock, e.g. "12:30:00pm".

    Pure function.
    """
    hour = moment.hour % 12 or 12
    suffix = "am" if moment.hour < 12 else "pm"
    return f"{hour}:{moment.minute:02d}:{moment.second:02d}{suffix}"


def format_time_left(seconds: int) -> str:
    """Format a duration as minutes and zero-padded seconds, e.g. "4:05".

    Pure function.
    """
    minutes, seconds = divmod(max(0, seconds), 60)
    return f"{minutes}:{seconds:02d}"


def sort_by_distance(records: Sequence[SightingRecord]) -> list[SightingRecord]:
    """Sort sightings nearest first.

    Pure function. The sort is stable: equal distances keep input order.
    """
    return sorted(records, key=lambda r: r.distance_meters)


def format_sighting_line(
    record: SightingRecord,
    now: datetime,
    map_url_template: str = DEFAULT_MAP_URL_TEMPLATE,
) -> str:
    """Format one sighting as a Slack mrkdwn line.

    Pure function.

    Args:
        record: Accepted sighting
        now: Current local time (used for the clock and time left)
        map_url_template: Map link with {latitude} and {longitude} fields

    Returns:
        e.g. "12:30:00pm  —  *<https://...|Dratini>*  —  310m away  —  4:05 left"
    """
    url = map_url_template.format(
        latitude=record.latitude_text,
        longitude=record.longitude_text,
    )
    remaining = seconds_remaining(record, now.timestamp())

    items = [
        format_clock_time(now),
        f"*<{url}|{record.species_name}>*",
        f"{record.distance_meters}m away",
        f"{format_time_left(remaining)} left",
    ]
    return FIELD_SEPARATOR.join(items)


def format_batch_message(
    records: Sequence[SightingRecord],
    now: datetime,
    map_url_template: str = DEFAULT_MAP_URL_TEMPLATE,
) -> str | None:
    """Format a batch of sightings, one line each.

    Pure function. Records are rendered in the order given; callers pass
    them already sorted by distance.

    Args:
        records: Accepted sightings
        now: Current local time
        map_url_template: Map link template

    Returns:
        Message text, or None for an empty batch (nothing should be sent)
    """
    if not records:
        return None

    lines = [format_sighting_line(r, now, map_url_template) for r in records]
    return "\n".join(lines)


def format_health_message(
    event: HealthEvent,
    down_message: str = DEFAULT_SOURCE_DOWN_MESSAGE,
    up_message: str = DEFAULT_SOURCE_UP_MESSAGE,
) -> str:
    """Get the text announcing a health transition.

    Pure function.
    """
    if event is HealthEvent.DOWN:
        return down_message
    return up_message
