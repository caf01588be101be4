from __future__ import annotations

import hashlib
import logging
from collections.abc import Sequence
from typing import Any

import httpx
from django.conf import settings
from django.core.cache import cache

from route_generator.exceptions import ExternalServiceError
from route_generator.services.types import Coordinate

logger = logging.getLogger(__name__)

MAX_DESTINATIONS_PER_REQUEST = 25
TRAVEL_MODES = ("driving", "walking", "bicycling")


class DistanceMatrixClient:
    """Road distances from one origin to many destinations.

    Destinations are sent in batches of 25, the per-request limit of the
    Distance Matrix API when a single origin is used.
    """

    def __init__(self) -> None:
        self.base_url = settings.DISTANCE_MATRIX_BASE_URL
        self.api_key = settings.GOOGLE_MAPS_API_KEY
        self.timeout = settings.DIRECTIONS_TIMEOUT_SECONDS

    def distances_from_origin(
        self,
        origin: Coordinate,
        destinations: Sequence[Coordinate],
        *,
        mode: str = "driving",
        traffic_aware: bool = False,
    ) -> dict[str, float | None]:
        """Map each ``"lat,lon"`` destination key to kilometers, or ``None`` when unreachable."""
        if mode not in TRAVEL_MODES:
            raise ValueError(f"Unsupported travel mode: {mode}")

        results: dict[str, float | None] = {}
        for start in range(0, len(destinations), MAX_DESTINATIONS_PER_REQUEST):
            chunk = destinations[start : start + MAX_DESTINATIONS_PER_REQUEST]
            payload = self._fetch_payload(origin, chunk, mode, traffic_aware)
            results.update(parse_distances(payload, chunk))
        return results

    def _fetch_payload(
        self,
        origin: Coordinate,
        destinations: Sequence[Coordinate],
        mode: str,
        traffic_aware: bool,
    ) -> dict[str, Any]:
        if not self.api_key:
            raise ExternalServiceError("Distance Matrix API key is not configured")

        params = {
            "origins": format_point(origin),
            "destinations": "|".join(format_point(point) for point in destinations),
            "mode": mode,
            "units": "metric",
            "key": self.api_key,
        }
        # Live traffic changes between calls, so those requests are not cached.
        if traffic_aware and mode == "driving":
            params["departure_time"] = "now"
        else:
            cache_key = self._cache_key(params["origins"], params["destinations"], mode)
            cached = cache.get(cache_key)
            if cached:
                logger.debug("Distance matrix cache hit for %s", cache_key)
                return cached

        logger.debug(
            "Requesting distance matrix from %s to %d destinations",
            params["origins"],
            len(destinations),
        )
        try:
            response = httpx.get(self.base_url, params=params, timeout=self.timeout)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPError as exc:
            logger.warning("Distance matrix request failed: %s", exc)
            raise ExternalServiceError("Distance matrix request failed") from exc
        except ValueError as exc:
            raise ExternalServiceError("Distance matrix response is not valid JSON") from exc

        if "departure_time" not in params and isinstance(payload, dict):
            if payload.get("status") == "OK":
                cache.set(cache_key, payload, timeout=settings.ROUTE_CACHE_TTL_SECONDS)
        return payload

    @staticmethod
    def _cache_key(origins: str, destinations: str, mode: str) -> str:
        digest = hashlib.sha256(f"{origins}|{destinations}|{mode}".encode()).hexdigest()
        return f"distance-matrix:{digest}"


def parse_distances(
    payload: Any, destinations: Sequence[Coordinate]
) -> dict[str, float | None]:
    if not isinstance(payload, dict):
        raise ExternalServiceError("Invalid distance matrix response")

    status = payload.get("status")
    if status != "OK":
        message = payload.get("error_message") or status
        logger.warning("Distance Matrix API returned status %s", status)
        raise ExternalServiceError(f"Distance Matrix API error: {message}")

    keys = [format_point(point) for point in destinations]
    rows = payload.get("rows") or []
    if not rows:
        return dict.fromkeys(keys)

    try:
        elements = rows[0].get("elements") or []
        return {
            key: _element_kilometers(elements[index] if index < len(elements) else {})
            for index, key in enumerate(keys)
        }
    except (AttributeError, TypeError) as exc:
        raise ExternalServiceError("Invalid distance matrix response") from exc


def _element_kilometers(element: dict[str, Any]) -> float | None:
    if element.get("status") != "OK":
        return None

    meters = (element.get("distance") or {}).get("value")
    if meters is None:
        return None
    try:
        return float(meters) / 1000.0
    except (TypeError, ValueError) as exc:
        raise ExternalServiceError("Invalid distance matrix element") from exc


def format_point(point: Coordinate) -> str:
    return f"{point.latitude:.6f},{point.longitude:.6f}"
