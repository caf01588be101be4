from __future__ import annotations

import math
from collections.abc import Sequence

from route_generator.exceptions import InvalidIntervalError
from route_generator.services.geo import (
    dedupe_adjacent,
    destination_point,
    haversine_meters,
    initial_bearing,
)
from route_generator.services.types import Coordinate


def densify(points: Sequence[Coordinate], interval_meters: float) -> list[Coordinate]:
    """Insert great-circle points so consecutive points are at most ``interval_meters`` apart.

    Every input vertex is kept. Synthetic points sit at whole multiples of the
    interval from the start of their segment and never on or past its end.
    """
    if not math.isfinite(interval_meters) or interval_meters <= 0:
        raise InvalidIntervalError("Interval must be a positive number of meters")
    if not points:
        return []

    densified = [points[0]]
    for index in range(len(points) - 1):
        start = points[index]
        end = points[index + 1]

        segment_meters = haversine_meters(start, end)
        if segment_meters <= 0:
            densified.append(end)
            continue

        bearing = initial_bearing(start, end)
        step_count = math.floor(segment_meters / interval_meters)
        for step in range(1, step_count + 1):
            offset_meters = step * interval_meters
            if offset_meters >= segment_meters:
                break
            densified.append(destination_point(start, bearing, offset_meters))

        densified.append(end)

    return dedupe_adjacent(densified)
