from __future__ import annotations

import pytest

from route_generator.services.speeds import compute_segment_speeds, compute_speed_mps
from route_generator.services.types import Leg, Route, Step


def test_leg_and_step_speeds_are_listed_in_order() -> None:
    route = Route(
        legs=(
            Leg(
                steps=(
                    Step(distance_meters=400.0, duration_seconds=50.0),
                    Step(distance_meters=600.0),
                ),
                distance_meters=1000.0,
                duration_seconds=100.0,
            ),
            Leg(distance_meters=300.0, duration_seconds=30.0),
        )
    )

    speeds = compute_segment_speeds(route)

    assert [speed.id for speed in speeds] == [
        "leg-0",
        "leg-0-step-0",
        "leg-0-step-1",
        "leg-1",
    ]
    assert speeds[0].meters_per_second == pytest.approx(10.0)
    assert speeds[0].kilometers_per_hour == pytest.approx(36.0)
    assert speeds[1].meters_per_second == pytest.approx(8.0)
    assert speeds[2].duration_seconds == pytest.approx(60.0)
    assert speeds[2].meters_per_second == pytest.approx(10.0)
    assert speeds[3].meters_per_second == pytest.approx(10.0)


def test_duration_in_traffic_is_preferred_for_legs_and_steps() -> None:
    route = Route(
        legs=(
            Leg(
                steps=(
                    Step(
                        distance_meters=100.0,
                        duration_seconds=10.0,
                        duration_in_traffic_seconds=20.0,
                    ),
                ),
                distance_meters=100.0,
                duration_seconds=10.0,
                duration_in_traffic_seconds=25.0,
            ),
        )
    )

    speeds = compute_segment_speeds(route)

    assert speeds[0].duration_seconds == pytest.approx(25.0)
    assert speeds[0].meters_per_second == pytest.approx(4.0)
    assert speeds[1].duration_seconds == pytest.approx(20.0)
    assert speeds[1].meters_per_second == pytest.approx(5.0)


def test_missing_data_yields_zero_speed() -> None:
    route = Route(legs=(Leg(steps=(Step(distance_meters=50.0),)),))

    speeds = compute_segment_speeds(route)

    assert [(s.distance_meters, s.duration_seconds, s.meters_per_second) for s in speeds] == [
        (0.0, 0.0, 0.0),
        (50.0, 0.0, 0.0),
    ]


def test_speed_is_zero_for_non_positive_duration() -> None:
    assert compute_speed_mps(100.0, 0.0) == 0.0
    assert compute_speed_mps(100.0, -1.0) == 0.0
    assert compute_speed_mps(100.0, 20.0) == pytest.approx(5.0)


def test_route_without_legs_has_no_speeds() -> None:
    assert compute_segment_speeds(Route()) == []
