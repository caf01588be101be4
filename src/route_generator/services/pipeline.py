from __future__ import annotations

import logging
import math
from collections.abc import Sequence

from django.conf import settings

from route_generator.schemas import (
    LatLon,
    RouteComparisonResponse,
    RouteMetricsResponse,
    RoutePointResponse,
    RoutePointsRequest,
    RoutePointsResponse,
    RouteRequest,
    RouteSpeedsResponse,
    SegmentSpeedResponse,
)
from route_generator.services.densify import densify
from route_generator.services.directions import DirectionsClient
from route_generator.services.extraction import require_route_points
from route_generator.services.selection import select_best
from route_generator.services.speeds import compute_segment_speeds
from route_generator.services.types import (
    Coordinate,
    Route,
    RouteComparison,
    RouteMetrics,
    SegmentSpeed,
)

logger = logging.getLogger(__name__)


def densify_route_geometry(route: Route, interval_meters: float) -> list[Coordinate]:
    return densify(require_route_points(route), interval_meters)


def compare_routes(routes: Sequence[Route]) -> RouteComparison:
    chosen_index, metrics = select_best(routes)
    return RouteComparison(routes=tuple(metrics), chosen_index=chosen_index)


def shortest_route_metrics(routes: Sequence[Route]) -> RouteMetrics:
    return compare_routes(routes).chosen


def generate_route_points(routes: Sequence[Route], interval_meters: float) -> list[Coordinate]:
    chosen_index, _ = select_best(routes)
    return densify_route_geometry(routes[chosen_index], interval_meters)


class RouteGeneratorService:
    def __init__(self, directions_client: DirectionsClient | None = None) -> None:
        self.directions_client = directions_client or DirectionsClient()

    def route_points(self, request: RoutePointsRequest) -> RoutePointsResponse:
        interval_meters = request.interval_meters or float(settings.DEFAULT_INTERVAL_METERS)
        routes = self._fetch(request.start, request.finish)
        comparison = self._compare(routes)

        points = densify_route_geometry(routes[comparison.chosen_index], interval_meters)
        logger.info(
            "Densified route %d into %d points at %.1f m",
            comparison.chosen_index,
            len(points),
            interval_meters,
        )

        return RoutePointsResponse(
            chosen_index=comparison.chosen_index,
            interval_meters=interval_meters,
            point_count=len(points),
            points=[
                RoutePointResponse(lat=round(point.latitude, 6), lon=round(point.longitude, 6))
                for point in points
            ],
        )

    def route_metrics(self, request: RouteRequest) -> RouteComparisonResponse:
        comparison = self._compare(self._fetch(request.start, request.finish))
        return RouteComparisonResponse(
            total_routes=comparison.total_routes,
            chosen_index=comparison.chosen_index,
            routes=[
                RouteMetricsResponse(
                    route_index=item.route_index,
                    distance_meters=(
                        round(item.distance_meters, 1)
                        if math.isfinite(item.distance_meters)
                        else None
                    ),
                    duration_seconds=round(item.duration_seconds, 1),
                )
                for item in comparison.routes
            ],
        )

    def route_speeds(self, request: RouteRequest) -> RouteSpeedsResponse:
        routes = self._fetch(request.start, request.finish)
        comparison = self._compare(routes)
        speeds = compute_segment_speeds(routes[comparison.chosen_index])
        return RouteSpeedsResponse(
            chosen_index=comparison.chosen_index,
            segments=[_speed_response(speed) for speed in speeds],
        )

    def _fetch(self, start: LatLon, finish: LatLon) -> list[Route]:
        return self.directions_client.fetch_routes(
            Coordinate(latitude=start.latitude, longitude=start.longitude),
            Coordinate(latitude=finish.latitude, longitude=finish.longitude),
        )

    @staticmethod
    def _compare(routes: Sequence[Route]) -> RouteComparison:
        comparison = compare_routes(routes)
        for item in comparison.routes:
            logger.info("Route %d distance=%.1f m", item.route_index, item.distance_meters)
        logger.info(
            "Selected route index %d (distance=%.1f m)",
            comparison.chosen_index,
            comparison.chosen.distance_meters,
        )
        return comparison


def _speed_response(speed: SegmentSpeed) -> SegmentSpeedResponse:
    return SegmentSpeedResponse(
        id=speed.id,
        meters_per_second=round(speed.meters_per_second, 3),
        kilometers_per_hour=round(speed.kilometers_per_hour, 2),
        distance_meters=round(speed.distance_meters, 1),
        duration_seconds=round(speed.duration_seconds, 1),
    )
