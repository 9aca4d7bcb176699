"""HTTP client resolving free-text addresses to coordinates."""

from __future__ import annotations

import logging
import time
from typing import Optional, Protocol

import httpx

from ..config import settings
from ..models.domain import Coordinate

logger = logging.getLogger(__name__)


class GeocodingError(Exception):
    """Raised when an address cannot be resolved."""

    def __init__(self, message: str, *, retryable: bool = False) -> None:
        super().__init__(message)
        self.retryable = retryable


class Geocoder(Protocol):
    def geocode(self, address: str) -> Coordinate: ...


class GoogleGeocoder:
    """Client for the Google Geocoding JSON API."""

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        region: str | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
        backoff_seconds: float | None = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.api_key = api_key or settings.geocoding_api_key
        if not self.api_key:
            raise ValueError("Geocoding API key is not configured.")
        self.base_url = base_url or settings.geocoding_base_url
        self.region = region or settings.geocoding_region
        self.timeout = timeout if timeout is not None else settings.geocoding_timeout_seconds
        self.max_retries = max_retries if max_retries is not None else settings.geocoding_max_retries
        self.backoff_seconds = backoff_seconds if backoff_seconds is not None else settings.geocoding_backoff_seconds
        self._transport = transport

    def _get_client(self) -> httpx.Client:
        return httpx.Client(timeout=httpx.Timeout(self.timeout, connect=5.0), transport=self._transport)

    def geocode(self, address: str) -> Coordinate:
        query = address.strip()
        if not query:
            raise GeocodingError("Address must not be empty.")

        params = {"address": query, "region": self.region, "key": self.api_key}
        client = self._get_client()
        try:
            attempt = 0
            while True:
                try:
                    response = client.get(self.base_url, params=params)
                    response.raise_for_status()
                    return self._parse(query, response.json())
                except GeocodingError as error:
                    if not error.retryable:
                        raise
                    attempt += 1
                    if attempt > self.max_retries:
                        raise
                    logger.warning(f"Geocoding quota hit, retrying (attempt {attempt}/{self.max_retries})")
                    time.sleep(self.backoff_seconds * (2 ** (attempt - 1)))
                except (httpx.TimeoutException, httpx.NetworkError) as e:
                    attempt += 1
                    if attempt > self.max_retries:
                        raise ConnectionError(f"Geocoding service at {self.base_url} is not reachable: {e}") from e
                    wait_time = self.backoff_seconds * (2 ** (attempt - 1))
                    logger.debug(f"Geocoding network error, retrying in {wait_time:.1f}s (attempt {attempt}/{self.max_retries})")
                    time.sleep(wait_time)
                except httpx.HTTPStatusError as e:
                    raise ConnectionError(
                        f"Geocoding service returned HTTP {e.response.status_code}"
                    ) from e
        finally:
            client.close()

    @staticmethod
    def _parse(address: str, data: dict) -> Coordinate:
        status = data.get("status")
        if status == "OK" and data.get("results"):
            location = data["results"][0]["geometry"]["location"]
            coordinate = Coordinate(float(location["lat"]), float(location["lng"]))
            logger.debug(f"Geocoded '{address}' to {coordinate.as_tuple()}")
            return coordinate
        if status == "ZERO_RESULTS":
            raise GeocodingError(f"Address not found: '{address}'.")
        if status == "REQUEST_DENIED":
            raise GeocodingError(f"Geocoding request denied: {data.get('error_message', 'check API key')}")
        if status == "OVER_QUERY_LIMIT":
            raise GeocodingError("Geocoding quota exceeded.", retryable=True)
        raise GeocodingError(f"Geocoding failed with status {status}.")
