"""Sighting data models and parsing - Pure functions.

This module turns raw map-data entries into typed SightingRecord objects.
All functions are pure with no side effects.
"""

import math
from dataclasses import dataclass
from typing import Any, Mapping

from pokewatch.core.geo import ReferenceLocation, distance_from_reference
from pokewatch.core.species import POKEDEX, get_species_name


@dataclass(frozen=True)
class RawSighting:
    """One map-data entry reduced to the fields the monitor uses.

    Coordinates are kept as the text the source sent, so identity checks
    match the source's precision exactly.

    Attributes:
        species_id: National Pokédex number
        latitude_text: Latitude exactly as reported
        longitude_text: Longitude exactly as reported
        expires_at: Despawn time (unix seconds)
    """
    species_id: int
    latitude_text: str
    longitude_text: str
    expires_at: int


@dataclass(frozen=True)
class SightingRecord:
    """Immutable, fully resolved sighting.

    Attributes:
        species_name: Resolved species name
        latitude: Sighting latitude
        longitude: Sighting longitude
        latitude_text: Latitude as reported by the source
        longitude_text: Longitude as reported by the source
        distance_meters: Distance from the scan location
        expires_at: Despawn time (unix seconds)
        fingerprint: Identity key used for deduplication
    """
    species_name: str
    latitude: float
    longitude: float
    latitude_text: str
    longitude_text: str
    distance_meters: int
    expires_at: int
    fingerprint: str

    @property
    def coordinates(self) -> tuple[float, float]:
        """Return (latitude, longitude) tuple."""
        return (self.latitude, self.longitude)


def make_fingerprint(species_name: str, latitude_text: str, longitude_text: str) -> str:
    """Build the identity key of a sighting.

    Pure function. Two sightings are the same iff species and the raw
    coordinate text match exactly.
    """
    return ",".join([species_name, latitude_text, longitude_text])


def coordinate_text(value: Any) -> str:
    """Normalize a reported coordinate to its textual form.

    Pure function.

    Args:
        value: Coordinate as decoded from the feed (text or number)

    Returns:
        The coordinate text

    Raises:
        ValueError: If the value is not a finite number
        TypeError: If the value is not text or a number
    """
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise TypeError(f"Coordinate must be text or a number, got {type(value).__name__}")

    text = value.strip() if isinstance(value, str) else repr(value)
    if not math.isfinite(float(text)):
        raise ValueError(f"Coordinate is not finite: {text}")
    return text


def parse_sighting(entry: Mapping[str, Any]) -> RawSighting | None:
    """Parse a single map-data entry.

    Pure function: takes raw dict, returns RawSighting or None if invalid.

    Args:
        entry: Sighting dict from the feed, e.g.
            {"pokemonId": 96, "latitude": "51.506187611511",
             "longitude": "-0.13159736525735", "expiration_time": 1469651613}

    Returns:
        RawSighting or None if a required field is missing or malformed
    """
    try:
        species_id = entry.get("pokemonId")
        expiration = entry.get("expiration_time")
        if species_id is None or expiration is None:
            return None

        return RawSighting(
            species_id=int(species_id),
            latitude_text=coordinate_text(entry["latitude"]),
            longitude_text=coordinate_text(entry["longitude"]),
            expires_at=int(float(expiration)),
        )
    except (AttributeError, KeyError, OverflowError, TypeError, ValueError):
        return None


def build_record(
    raw: RawSighting,
    reference: ReferenceLocation,
    pokedex: Mapping[int, str] = POKEDEX,
) -> SightingRecord:
    """Resolve a RawSighting into a SightingRecord.

    Pure function.

    Args:
        raw: Parsed map-data entry
        reference: Scan location distances are measured from
        pokedex: Species id -> name lookup

    Returns:
        SightingRecord with distance and fingerprint computed
    """
    species_name = get_species_name(raw.species_id, pokedex)
    latitude = float(raw.latitude_text)
    longitude = float(raw.longitude_text)

    return SightingRecord(
        species_name=species_name,
        latitude=latitude,
        longitude=longitude,
        latitude_text=raw.latitude_text,
        longitude_text=raw.longitude_text,
        distance_meters=distance_from_reference(reference, latitude, longitude),
        expires_at=raw.expires_at,
        fingerprint=make_fingerprint(species_name, raw.latitude_text, raw.longitude_text),
    )


def seconds_remaining(record: SightingRecord, now_unix: float) -> int:
    """Whole seconds until the sighting despawns, never negative.

    Pure function.
    """
    return max(0, math.floor(record.expires_at - now_unix))
