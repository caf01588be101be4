from __future__ import annotations

from route_generator.exceptions import GeometryError
from route_generator.services.geo import dedupe_adjacent, same_point
from route_generator.services.polyline import decode_polyline
from route_generator.services.types import Coordinate, Route


def extract_route_points(route: Route) -> list[Coordinate]:
    """Stitch the step polylines of every leg into one continuous path.

    A step whose first point repeats the previous step's last point joins
    without the duplicated junction.
    """
    points: list[Coordinate] = []
    for leg in route.legs or ():
        for step in leg.steps:
            if not step.polyline:
                continue

            step_points = decode_polyline(step.polyline)
            if points and step_points and same_point(points[-1], step_points[0]):
                points.extend(step_points[1:])
            else:
                points.extend(step_points)

    return dedupe_adjacent(points)


def require_route_points(route: Route) -> list[Coordinate]:
    points = extract_route_points(route)
    if len(points) < 2:
        raise GeometryError("Route geometry is too short to densify")
    return points
