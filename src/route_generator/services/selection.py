from __future__ import annotations

import math
from collections.abc import Sequence

from route_generator.exceptions import NoRoutesError
from route_generator.services.geo import polyline_length_meters
from route_generator.services.polyline import decode_polyline
from route_generator.services.types import Route, RouteMetrics

UNKNOWN_DURATION = -1.0


def route_distance_meters(route: Route) -> float:
    """Total route distance from leg metadata, else from the overview polyline.

    Returns ``math.inf`` when neither source is available, so the route
    can never be chosen as the shortest.
    """
    if route.legs is not None:
        leg_distances = [leg.distance_meters for leg in route.legs]
        if all(distance is not None for distance in leg_distances):
            return float(sum(leg_distances))

    if route.overview_polyline:
        return polyline_length_meters(decode_polyline(route.overview_polyline))

    return math.inf


def route_duration_seconds(route: Route) -> float:
    if route.legs is None:
        return UNKNOWN_DURATION

    total = 0.0
    for leg in route.legs:
        if leg.duration_in_traffic_seconds is not None:
            total += leg.duration_in_traffic_seconds
        elif leg.duration_seconds is not None:
            total += leg.duration_seconds
        else:
            return UNKNOWN_DURATION
    return total


def route_metrics(route: Route, route_index: int) -> RouteMetrics:
    return RouteMetrics(
        distance_meters=route_distance_meters(route),
        duration_seconds=route_duration_seconds(route),
        route_index=route_index,
    )


def select_best(routes: Sequence[Route]) -> tuple[int, list[RouteMetrics]]:
    if not routes:
        raise NoRoutesError("No candidate routes to compare")

    metrics = [route_metrics(route, index) for index, route in enumerate(routes)]

    best_index = 0
    best_distance = math.inf
    for item in metrics:
        if item.distance_meters < best_distance:
            best_distance = item.distance_meters
            best_index = item.route_index

    return best_index, metrics
