from __future__ import annotations

import math
from collections.abc import Iterable, Sequence

from route_generator.services.types import Coordinate

EARTH_RADIUS_METERS = 6_371_000.0
COORDINATE_TOLERANCE = 1e-9


def haversine_meters(a: Coordinate, b: Coordinate) -> float:
    lat1_rad = math.radians(a.latitude)
    lat2_rad = math.radians(b.latitude)

    dlat = math.radians(b.latitude - a.latitude)
    dlon = math.radians(b.longitude - a.longitude)

    h = (
        math.sin(dlat / 2.0) ** 2
        + math.cos(lat1_rad) * math.cos(lat2_rad) * math.sin(dlon / 2.0) ** 2
    )
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))
    return EARTH_RADIUS_METERS * c


def initial_bearing(a: Coordinate, b: Coordinate) -> float:
    """Forward azimuth from ``a`` towards ``b`` in degrees, within [0, 360)."""
    lat1_rad = math.radians(a.latitude)
    lat2_rad = math.radians(b.latitude)
    dlon = math.radians(b.longitude - a.longitude)

    y = math.sin(dlon) * math.cos(lat2_rad)
    x = math.cos(lat1_rad) * math.sin(lat2_rad) - math.sin(lat1_rad) * math.cos(
        lat2_rad
    ) * math.cos(dlon)
    theta = math.degrees(math.atan2(y, x))
    return (theta + 360.0) % 360.0


def destination_point(
    origin: Coordinate, bearing_degrees: float, distance_meters: float
) -> Coordinate:
    """Point reached from ``origin`` after travelling along a great circle."""
    angular_distance = distance_meters / EARTH_RADIUS_METERS
    bearing_rad = math.radians(bearing_degrees)
    lat1_rad = math.radians(origin.latitude)
    lon1_rad = math.radians(origin.longitude)

    lat2_rad = math.asin(
        math.sin(lat1_rad) * math.cos(angular_distance)
        + math.cos(lat1_rad) * math.sin(angular_distance) * math.cos(bearing_rad)
    )
    lon2_rad = lon1_rad + math.atan2(
        math.sin(bearing_rad) * math.sin(angular_distance) * math.cos(lat1_rad),
        math.cos(angular_distance) - math.sin(lat1_rad) * math.sin(lat2_rad),
    )

    longitude = ((math.degrees(lon2_rad) + 540.0) % 360.0) - 180.0
    return Coordinate(latitude=math.degrees(lat2_rad), longitude=longitude)


def polyline_length_meters(points: Sequence[Coordinate]) -> float:
    total = 0.0
    for index in range(1, len(points)):
        total += haversine_meters(points[index - 1], points[index])
    return total


def same_point(a: Coordinate, b: Coordinate) -> bool:
    return (
        abs(a.latitude - b.latitude) <= COORDINATE_TOLERANCE
        and abs(a.longitude - b.longitude) <= COORDINATE_TOLERANCE
    )


def dedupe_adjacent(points: Iterable[Coordinate]) -> list[Coordinate]:
    deduped: list[Coordinate] = []
    for point in points:
        if deduped and same_point(deduped[-1], point):
            continue
        deduped.append(point)
    return deduped
