from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class LatLon(BaseModel):
    model_config = ConfigDict(extra="forbid")

    latitude: float = Field(ge=-90.0, le=90.0)
    longitude: float = Field(ge=-180.0, le=180.0)


class RouteRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    start: LatLon
    finish: LatLon


class RoutePointsRequest(RouteRequest):
    interval_meters: float | None = Field(default=None, gt=0.0, le=10_000.0)


class RoutePointResponse(BaseModel):
    lat: float
    lon: float


class RoutePointsResponse(BaseModel):
    chosen_index: int
    interval_meters: float
    point_count: int
    points: list[RoutePointResponse]


class RouteMetricsResponse(BaseModel):
    route_index: int
    distance_meters: float | None
    duration_seconds: float


class RouteComparisonResponse(BaseModel):
    total_routes: int
    chosen_index: int
    routes: list[RouteMetricsResponse]


class SegmentSpeedResponse(BaseModel):
    id: str
    meters_per_second: float
    kilometers_per_hour: float
    distance_meters: float
    duration_seconds: float


class RouteSpeedsResponse(BaseModel):
    chosen_index: int
    segments: list[SegmentSpeedResponse]
