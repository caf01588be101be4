from __future__ import annotations

from django.core.management.base import CommandError

from route_generator.services.types import Coordinate


def parse_lat_lon(value: str) -> Coordinate:
    parts = value.split(",")
    if len(parts) != 2:
        raise CommandError(f"Expected lat,lon pair but got: {value}")

    try:
        latitude = float(parts[0].strip())
        longitude = float(parts[1].strip())
    except ValueError as exc:
        raise CommandError(f"Expected lat,lon pair but got: {value}") from exc

    if not -90.0 <= latitude <= 90.0 or not -180.0 <= longitude <= 180.0:
        raise CommandError(f"Coordinate out of range: {value}")

    return Coordinate(latitude=latitude, longitude=longitude)
