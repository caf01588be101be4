from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class Coordinate:
    latitude: float
    longitude: float


@dataclass(slots=True, frozen=True)
class Step:
    polyline: str | None = None
    distance_meters: float | None = None
    duration_seconds: float | None = None
    duration_in_traffic_seconds: float | None = None


@dataclass(slots=True, frozen=True)
class Leg:
    steps: tuple[Step, ...] = ()
    distance_meters: float | None = None
    duration_seconds: float | None = None
    duration_in_traffic_seconds: float | None = None


@dataclass(slots=True, frozen=True)
class Route:
    legs: tuple[Leg, ...] | None = None
    overview_polyline: str | None = None


@dataclass(slots=True, frozen=True)
class RouteMetrics:
    distance_meters: float
    duration_seconds: float
    route_index: int


@dataclass(slots=True, frozen=True)
class RouteComparison:
    routes: tuple[RouteMetrics, ...]
    chosen_index: int

    @property
    def total_routes(self) -> int:
        return len(self.routes)

    @property
    def chosen(self) -> RouteMetrics:
        return self.routes[self.chosen_index]


@dataclass(slots=True, frozen=True)
class SegmentSpeed:
    id: str
    meters_per_second: float
    distance_meters: float
    duration_seconds: float

    @property
    def kilometers_per_hour(self) -> float:
        return self.meters_per_second * 3.6
