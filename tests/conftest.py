from __future__ import annotations

from collections.abc import Callable, Sequence

import pytest
from django.core.cache import cache
from django.test import Client

from route_generator.services.types import Coordinate, Leg, Route, Step


def encode_polyline(points: Sequence[Coordinate]) -> str:
    encoded: list[str] = []
    prev_lat = 0
    prev_lng = 0

    for point in points:
        lat_int = int(round(point.latitude * 1e5))
        lng_int = int(round(point.longitude * 1e5))

        encoded.extend(_encode_value(lat_int - prev_lat))
        encoded.extend(_encode_value(lng_int - prev_lng))

        prev_lat = lat_int
        prev_lng = lng_int

    return "".join(encoded)


def _encode_value(value: int) -> list[str]:
    value = ~(value << 1) if value < 0 else (value << 1)

    chunks = []
    while value >= 0x20:
        chunks.append(chr((0x20 | (value & 0x1F)) + 63))
        value >>= 5

    chunks.append(chr(value + 63))
    return chunks


def _points(*pairs: tuple[float, float]) -> list[Coordinate]:
    return [Coordinate(latitude=lat, longitude=lon) for lat, lon in pairs]


@pytest.fixture(autouse=True)
def clear_cache() -> None:
    cache.clear()


@pytest.fixture
def api_client() -> Client:
    return Client()


@pytest.fixture
def encode() -> Callable[[Sequence[Coordinate]], str]:
    return encode_polyline


@pytest.fixture
def equator_route() -> Route:
    """Single leg along the equator split into two steps sharing a junction point."""
    return Route(
        legs=(
            Leg(
                steps=(
                    Step(
                        polyline=encode_polyline(_points((0.0, 0.0), (0.0, 0.005))),
                        distance_meters=556.0,
                        duration_seconds=40.0,
                    ),
                    Step(
                        polyline=encode_polyline(_points((0.0, 0.005), (0.0, 0.01))),
                        distance_meters=556.0,
                        duration_seconds=60.0,
                    ),
                ),
                distance_meters=1112.0,
                duration_seconds=100.0,
            ),
        ),
        overview_polyline=encode_polyline(_points((0.0, 0.0), (0.0, 0.01))),
    )
