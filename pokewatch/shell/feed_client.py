"""Map-data Feed Client - Imperative Shell.

This module handles HTTP communication with the PokeVision-style map API.
All I/O is contained here; parsing and filtering are in the core module.
"""

import logging
from dataclasses import dataclass, field
from typing import Any

import requests

from pokewatch.core.config import DEFAULT_FEED_BASE_URL
from pokewatch.core.geo import ReferenceLocation


logger = logging.getLogger(__name__)


# Default timeout for API requests (seconds)
DEFAULT_TIMEOUT = 10


@dataclass
class FeedSnapshot:
    """Sightings currently exposed by the feed.

    Attributes:
        sightings: Raw sighting entries, in feed order
        job_status: In-band status marker ("in_progress", "failure",
            "unknown"); its presence means the sighting list is not
            currently available
    """
    sightings: list[dict[str, Any]] = field(default_factory=list)
    job_status: str | None = None

    @property
    def is_healthy(self) -> bool:
        """True if the response carried no failure marker."""
        return not self.job_status


@dataclass
class ScanResponse:
    """Answer to a rescan request.

    Attributes:
        job_id: Scan job id to read later snapshots from, if any
        job_status: In-band status marker, logged only
    """
    job_id: str | None = None
    job_status: str | None = None


class FeedClient:
    """Client for the map-data API around a fixed scan location.

    This is part of the imperative shell - it handles HTTP I/O.
    """

    def __init__(
        self,
        location: ReferenceLocation,
        base_url: str = DEFAULT_FEED_BASE_URL,
        timeout: int = DEFAULT_TIMEOUT,
    ) -> None:
        """Initialize feed client.

        Args:
            location: Scan location requested from the feed
            base_url: Map API base URL
            timeout: Request timeout in seconds
        """
        self.location = location
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.job_id: str | None = None

    def _location_path(self) -> str:
        return f"{self.location.latitude!r}/{self.location.longitude!r}"

    def _get_json(self, url: str) -> dict[str, Any]:
        """GET a URL and decode its JSON object body.

        Floats are decoded as their source text so coordinates keep the
        precision the feed reported.

        Raises:
            requests.RequestException: If the request fails
            ValueError: If the body is not a JSON object
        """
        response = requests.get(url, timeout=self.timeout)
        response.raise_for_status()

        data = response.json(parse_float=str)
        if not isinstance(data, dict):
            raise ValueError(f"Expected a JSON object from {url}, got {type(data).__name__}")
        return data

    def data_url(self) -> str:
        """URL of the current sighting snapshot."""
        url = f"{self.base_url}/map/data/{self._location_path()}"
        if self.job_id:
            url = f"{url}/{self.job_id}"
        return url

    def scan_url(self) -> str:
        """URL that asks the feed to regenerate its sightings."""
        return f"{self.base_url}/map/scan/{self._location_path()}"

    def fetch_snapshot(self) -> FeedSnapshot:
        """Fetch the sightings currently exposed by the feed.

        This method performs HTTP I/O. An empty list is a valid snapshot.

        Returns:
            FeedSnapshot with raw sighting entries and any status marker

        Raises:
            requests.RequestException: If the request fails
            ValueError: If the response is not a usable JSON object
        """
        data = self._get_json(self.data_url())

        sightings = data.get("pokemon") or []
        if not isinstance(sightings, list):
            raise ValueError(f"Expected a list of sightings, got {type(sightings).__name__}")

        job_status = data.get("jobStatus") or None

        logger.info(
            "Fetched %d sightings from feed%s",
            len(sightings),
            f" (job status: {job_status})" if job_status else "",
        )

        return FeedSnapshot(sightings=sightings, job_status=job_status)

    def request_scan(self) -> ScanResponse:
        """Ask the feed to regenerate sightings around the scan location.

        This method performs HTTP I/O. The job id returned by the feed, if
        any, is used by later snapshot fetches.

        Returns:
            ScanResponse with the job id and any status marker

        Raises:
            requests.RequestException: If the request fails
            ValueError: If the response is not a JSON object
        """
        logger.info("Requesting feed scan at %s", self.scan_url())

        data = self._get_json(self.scan_url())
        job_status = data.get("jobStatus") or None

        job_id = data.get("jobId")
        if not job_id:
            logger.info("Feed scan returned no job id")
            return ScanResponse(job_status=job_status)

        self.job_id = str(job_id)
        logger.info("Feed scan job started: %s", self.job_id)
        return ScanResponse(job_id=self.job_id, job_status=job_status)
