from __future__ import annotations

from route_generator.services.types import Leg, Route, SegmentSpeed, Step


def compute_speed_mps(distance_meters: float, duration_seconds: float) -> float:
    if duration_seconds <= 0.0:
        return 0.0
    return distance_meters / duration_seconds


def compute_segment_speeds(route: Route) -> list[SegmentSpeed]:
    """Average speed of every leg, each followed by the speeds of its steps.

    Steps without a duration get a share of the leg duration proportional to
    their share of the leg distance.
    """
    speeds: list[SegmentSpeed] = []
    for leg_index, leg in enumerate(route.legs or ()):
        leg_distance = leg.distance_meters or 0.0
        leg_duration = _preferred_duration(leg) or 0.0
        speeds.append(
            SegmentSpeed(
                id=f"leg-{leg_index}",
                meters_per_second=compute_speed_mps(leg_distance, leg_duration),
                distance_meters=leg_distance,
                duration_seconds=leg_duration,
            )
        )

        for step_index, step in enumerate(leg.steps):
            step_distance = step.distance_meters or 0.0
            step_duration = _preferred_duration(step)
            if step_duration is None:
                step_duration = (
                    step_distance / leg_distance * leg_duration if leg_distance > 0.0 else 0.0
                )

            speeds.append(
                SegmentSpeed(
                    id=f"leg-{leg_index}-step-{step_index}",
                    meters_per_second=compute_speed_mps(step_distance, step_duration),
                    distance_meters=step_distance,
                    duration_seconds=step_duration,
                )
            )

    return speeds


def _preferred_duration(segment: Leg | Step) -> float | None:
    if segment.duration_in_traffic_seconds is not None:
        return segment.duration_in_traffic_seconds
    return segment.duration_seconds
