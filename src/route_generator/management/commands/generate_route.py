from __future__ import annotations

import json
from typing import Any

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from route_generator.exceptions import RouteGeneratorError
from route_generator.management.arguments import parse_lat_lon
from route_generator.services.directions import DirectionsClient
from route_generator.services.pipeline import compare_routes, densify_route_geometry
from route_generator.services.speeds import compute_segment_speeds


class Command(BaseCommand):
    help = "Print densified points of the shortest driving route between two coordinates."

    def add_arguments(self, parser: Any) -> None:
        parser.add_argument(
            "start", help="Start coordinate as lat,lon (put -- before negative values)"
        )
        parser.add_argument("finish", help="Finish coordinate as lat,lon")
        parser.add_argument(
            "--interval",
            type=float,
            default=float(settings.DEFAULT_INTERVAL_METERS),
            help="Spacing between generated points in meters",
        )
        parser.add_argument(
            "--speeds",
            action="store_true",
            help="Also write per-leg and per-step average speeds to stderr",
        )

    def handle(self, *_: Any, **options: Any) -> None:
        start = parse_lat_lon(options["start"])
        finish = parse_lat_lon(options["finish"])
        interval = options["interval"]

        try:
            routes = DirectionsClient().fetch_routes(start, finish)
            comparison = compare_routes(routes)
            chosen_route = routes[comparison.chosen_index]
            points = densify_route_geometry(chosen_route, interval)
        except RouteGeneratorError as exc:
            raise CommandError(str(exc)) from exc

        self.stdout.write(
            json.dumps(
                [
                    {"lat": round(point.latitude, 6), "lon": round(point.longitude, 6)}
                    for point in points
                ],
                indent=2,
            )
        )

        if options["speeds"]:
            for speed in compute_segment_speeds(chosen_route):
                self.stderr.write(
                    f"{speed.id}: {speed.meters_per_second:.3f} m/s "
                    f"({speed.kilometers_per_hour:.2f} km/h) | "
                    f"distance={int(speed.distance_meters)}m | "
                    f"duration={int(speed.duration_seconds)}s"
                )

        self.stderr.write(
            f"Generated {len(points)} points from route {comparison.chosen_index} "
            f"(interval {interval:.1f} m)"
        )
