from __future__ import annotations

import hashlib
import logging
from typing import Any

import httpx
from django.conf import settings
from django.core.cache import cache

from route_generator.exceptions import ExternalServiceError, NoRoutesError
from route_generator.services.types import Coordinate, Leg, Route, Step

logger = logging.getLogger(__name__)

NO_ROUTE_STATUSES = frozenset({"ZERO_RESULTS", "NOT_FOUND"})


class DirectionsClient:
    def __init__(self) -> None:
        self.base_url = settings.DIRECTIONS_BASE_URL
        self.api_key = settings.GOOGLE_MAPS_API_KEY
        self.travel_mode = settings.DIRECTIONS_TRAVEL_MODE
        self.timeout = settings.DIRECTIONS_TIMEOUT_SECONDS

    def fetch_routes(self, origin: Coordinate, destination: Coordinate) -> list[Route]:
        return parse_routes(self.fetch_payload(origin, destination))

    def fetch_payload(self, origin: Coordinate, destination: Coordinate) -> dict[str, Any]:
        if not self.api_key:
            raise ExternalServiceError("Directions API key is not configured")

        cache_key = self._cache_key(origin, destination, self.travel_mode)
        cached = cache.get(cache_key)
        if cached:
            logger.debug("Directions cache hit for %s", cache_key)
            return cached

        params = {
            "origin": _format_point(origin),
            "destination": _format_point(destination),
            "mode": self.travel_mode,
            "alternatives": "true",
            "key": self.api_key,
        }

        logger.debug(
            "Requesting directions %s -> %s", params["origin"], params["destination"]
        )
        try:
            response = httpx.get(self.base_url, params=params, timeout=self.timeout)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPError as exc:
            logger.warning("Directions request failed: %s", exc)
            raise ExternalServiceError("Directions request failed") from exc
        except ValueError as exc:
            raise ExternalServiceError("Directions response is not valid JSON") from exc

        if isinstance(payload, dict) and payload.get("status") == "OK":
            cache.set(cache_key, payload, timeout=settings.ROUTE_CACHE_TTL_SECONDS)
        return payload

    @staticmethod
    def _cache_key(origin: Coordinate, destination: Coordinate, travel_mode: str) -> str:
        encoded = f"{_format_point(origin)}|{_format_point(destination)}|{travel_mode}".encode()
        digest = hashlib.sha256(encoded).hexdigest()
        return f"directions:{digest}"


def parse_routes(payload: Any) -> list[Route]:
    if not isinstance(payload, dict):
        raise ExternalServiceError("Invalid directions response")

    status = payload.get("status", "OK")
    if status in NO_ROUTE_STATUSES:
        raise NoRoutesError("Could not compute route")
    if status != "OK":
        message = payload.get("error_message") or status
        logger.warning("Directions API returned status %s", status)
        raise ExternalServiceError(f"Directions API error: {message}")

    routes = payload.get("routes") or []
    if not routes:
        raise NoRoutesError("Directions API returned no routes")

    try:
        return [_parse_route(route) for route in routes]
    except (AttributeError, TypeError, ValueError) as exc:
        raise ExternalServiceError("Invalid directions response") from exc


def _parse_route(route: dict[str, Any]) -> Route:
    legs = route.get("legs")
    overview = route.get("overview_polyline") or {}
    return Route(
        legs=None if legs is None else tuple(_parse_leg(leg) for leg in legs),
        overview_polyline=_polyline_points(overview),
    )


def _parse_leg(leg: dict[str, Any]) -> Leg:
    return Leg(
        steps=tuple(_parse_step(step) for step in leg.get("steps") or []),
        distance_meters=_value(leg, "distance"),
        duration_seconds=_value(leg, "duration"),
        duration_in_traffic_seconds=_value(leg, "duration_in_traffic"),
    )


def _parse_step(step: dict[str, Any]) -> Step:
    polyline = step.get("polyline") or {}
    return Step(
        polyline=_polyline_points(polyline),
        distance_meters=_value(step, "distance"),
        duration_seconds=_value(step, "duration"),
        duration_in_traffic_seconds=_value(step, "duration_in_traffic"),
    )


def _value(container: dict[str, Any], field: str) -> float | None:
    value = (container.get(field) or {}).get("value")
    if value is None:
        return None
    return float(value)


def _format_point(point: Coordinate) -> str:
    return f"{point.latitude:.6f},{point.longitude:.6f}"


def _polyline_points(container: dict[str, Any]) -> str | None:
    points = container.get("points")
    if points is not None and not isinstance(points, str):
        raise ExternalServiceError("Invalid polyline in directions response")
    return points
