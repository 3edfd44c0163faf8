"""Deduplication state - In-memory novelty tracking.

This module remembers which sightings have already been accepted so each
unique sighting is announced at most once per process. Nothing here does
I/O; the set lives only as long as the process.
"""

from typing import Iterator

from pokewatch.core.sighting import SightingRecord


class NoveltyTracker:
    """Insertion-ordered set of accepted sighting fingerprints.

    Append-only unless forget_expired() is called. Each fingerprint is
    stored with the despawn time of the sighting that introduced it.
    """

    def __init__(self) -> None:
        self._expiry_by_fingerprint: dict[str, int] = {}

    def __contains__(self, fingerprint: object) -> bool:
        return fingerprint in self._expiry_by_fingerprint

    def __len__(self) -> int:
        return len(self._expiry_by_fingerprint)

    def __iter__(self) -> Iterator[str]:
        return iter(self._expiry_by_fingerprint)

    def add(self, record: SightingRecord) -> bool:
        """Record a sighting as seen.

        Args:
            record: Accepted sighting

        Returns:
            True if the fingerprint was new, False if it was already present
        """
        if record.fingerprint in self._expiry_by_fingerprint:
            return False
        self._expiry_by_fingerprint[record.fingerprint] = record.expires_at
        return True

    def forget_expired(self, now_unix: float) -> list[str]:
        """Drop fingerprints whose sighting despawned before now.

        Args:
            now_unix: Current time (unix seconds)

        Returns:
            Fingerprints that were removed, oldest first
        """
        expired = [
            fingerprint
            for fingerprint, expires_at in self._expiry_by_fingerprint.items()
            if expires_at < now_unix
        ]
        for fingerprint in expired:
            del self._expiry_by_fingerprint[fingerprint]
        return expired
