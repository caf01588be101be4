from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

from django.conf import settings
from django.http import HttpRequest, HttpResponse, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_POST
from pydantic import BaseModel, ValidationError

from route_generator.exceptions import (
    DecodeError,
    ExternalServiceError,
    GeometryError,
    InvalidIntervalError,
    NoRoutesError,
)
from route_generator.schemas import RoutePointsRequest, RouteRequest
from route_generator.services.pipeline import RouteGeneratorService

_generator_service: RouteGeneratorService | None = None


def get_route_generator() -> RouteGeneratorService:
    global _generator_service
    if _generator_service is None:
        _generator_service = RouteGeneratorService()
    return _generator_service


@require_GET
def health_view(_: HttpRequest) -> HttpResponse:
    return JsonResponse(
        {
            "status": "ok",
            "default_interval_meters": float(settings.DEFAULT_INTERVAL_METERS),
        }
    )


@csrf_exempt
@require_POST
def route_points_view(request: HttpRequest) -> HttpResponse:
    return _handle(
        request,
        RoutePointsRequest,
        lambda route_request: get_route_generator().route_points(route_request),
    )


@csrf_exempt
@require_POST
def route_metrics_view(request: HttpRequest) -> HttpResponse:
    return _handle(
        request,
        RouteRequest,
        lambda route_request: get_route_generator().route_metrics(route_request),
    )


@csrf_exempt
@require_POST
def route_speeds_view(request: HttpRequest) -> HttpResponse:
    return _handle(
        request,
        RouteRequest,
        lambda route_request: get_route_generator().route_speeds(route_request),
    )


def _handle(
    request: HttpRequest,
    schema: type[BaseModel],
    operation: Callable[[Any], BaseModel],
) -> HttpResponse:
    payload = _parse_json_payload(request)
    if isinstance(payload, JsonResponse):
        return payload

    try:
        route_request = schema.model_validate(payload)
    except ValidationError as exc:
        return JsonResponse(
            {
                "error": {
                    "code": "validation_error",
                    "message": "Invalid request payload",
                    "details": exc.errors(include_url=False, include_context=False),
                }
            },
            status=400,
        )

    try:
        response = operation(route_request)
    except NoRoutesError as exc:
        return _error_response("no_route", str(exc), status=404)
    except GeometryError as exc:
        return _error_response("geometry_too_short", str(exc), status=422)
    except InvalidIntervalError as exc:
        return _error_response("invalid_interval", str(exc), status=422)
    except DecodeError as exc:
        return _error_response("invalid_polyline", str(exc), status=502)
    except ExternalServiceError as exc:
        return _error_response("upstream_error", str(exc), status=502)

    return JsonResponse(response.model_dump(mode="json"), status=200)


def _parse_json_payload(request: HttpRequest) -> dict[str, Any] | JsonResponse:
    if not request.body:
        return {}

    try:
        payload = json.loads(request.body)
    except json.JSONDecodeError:
        return _error_response("invalid_json", "Request body must be valid JSON", status=400)

    if not isinstance(payload, dict):
        return _error_response("invalid_json", "JSON body must be an object", status=400)

    return payload


def _error_response(code: str, message: str, status: int) -> JsonResponse:
    return JsonResponse({"error": {"code": code, "message": message}}, status=status)
