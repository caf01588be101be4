from __future__ import annotations

import math

import pytest

from route_generator.exceptions import InvalidIntervalError
from route_generator.services.densify import densify
from route_generator.services.geo import haversine_meters
from route_generator.services.types import Coordinate

START = Coordinate(latitude=0.0, longitude=0.0)
END = Coordinate(latitude=0.0, longitude=0.01)


def test_equator_segment_at_500_meters() -> None:
    segment_meters = haversine_meters(START, END)

    result = densify([START, END], 500.0)

    assert segment_meters == pytest.approx(1111.95, abs=0.01)
    assert len(result) == 4
    assert result[0] == START
    assert result[-1] == END
    assert haversine_meters(START, result[1]) == pytest.approx(500.0, rel=1e-9)
    assert haversine_meters(START, result[2]) == pytest.approx(1000.0, rel=1e-9)
    assert all(point.latitude == pytest.approx(0.0, abs=1e-12) for point in result)


def test_density_matches_interval_count() -> None:
    a = Coordinate(latitude=23.038765, longitude=72.610756)
    b = Coordinate(latitude=23.070000, longitude=72.620000)
    interval = 37.0
    distance = haversine_meters(a, b)

    result = densify([a, b], interval)

    assert len(result) == math.floor(distance / interval) + 2
    spacings = [haversine_meters(result[i], result[i + 1]) for i in range(len(result) - 1)]
    for spacing in spacings[:-1]:
        assert spacing == pytest.approx(interval, rel=1e-6)
    assert 0 < spacings[-1] <= interval + 1e-6


def test_synthetic_points_move_away_from_segment_start() -> None:
    a = Coordinate(latitude=51.5007, longitude=-0.1246)
    b = Coordinate(latitude=51.5033, longitude=-0.1195)

    result = densify([a, b], 25.0)

    offsets = [haversine_meters(a, point) for point in result]
    assert offsets == sorted(offsets)
    assert all(offset < offsets[-1] for offset in offsets[:-1])


def test_exact_multiple_of_interval_skips_point_on_segment_end() -> None:
    a = Coordinate(latitude=0.0, longitude=0.0)
    b = Coordinate(latitude=0.02, longitude=0.0)
    distance = haversine_meters(a, b)
    interval = distance / 4

    result = densify([a, b], interval)

    assert distance / interval == 4.0
    assert len(result) == math.floor(distance / interval) + 1
    assert result[-1] == b
    assert haversine_meters(result[-2], b) == pytest.approx(interval, rel=1e-9)


def test_input_vertices_are_preserved_in_order() -> None:
    path = [
        Coordinate(0.0, 0.0),
        Coordinate(0.0, 0.003),
        Coordinate(0.002, 0.003),
        Coordinate(0.002, 0.0031),
    ]

    result = densify(path, 100.0)

    positions = [result.index(vertex) for vertex in path]
    assert positions == sorted(positions)
    assert positions[0] == 0
    assert positions[-1] == len(result) - 1


def test_interval_larger_than_every_segment_returns_deduplicated_input() -> None:
    path = [Coordinate(0.0, 0.0), Coordinate(0.0, 0.0), Coordinate(0.0, 0.001)]

    assert densify(path, 10_000.0) == [Coordinate(0.0, 0.0), Coordinate(0.0, 0.001)]


def test_zero_length_segments_do_not_create_points() -> None:
    path = [Coordinate(1.0, 1.0), Coordinate(1.0, 1.0)]

    assert densify(path, 1.0) == [Coordinate(1.0, 1.0)]


def test_single_point_is_returned_unchanged() -> None:
    assert densify([START], 10.0) == [START]


def test_empty_input_returns_empty_list() -> None:
    assert densify([], 10.0) == []


@pytest.mark.parametrize("interval", [0.0, -5.0, math.inf, math.nan])
def test_invalid_interval_raises(interval: float) -> None:
    with pytest.raises(InvalidIntervalError):
        densify([START, END], interval)
