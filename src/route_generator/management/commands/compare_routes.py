from __future__ import annotations

from typing import Any

from django.core.management.base import BaseCommand, CommandError

from route_generator.exceptions import RouteGeneratorError
from route_generator.management.arguments import parse_lat_lon
from route_generator.services.directions import DirectionsClient
from route_generator.services.pipeline import compare_routes


class Command(BaseCommand):
    help = "Print distance and duration of every route alternative and the chosen shortest one."

    def add_arguments(self, parser: Any) -> None:
        parser.add_argument(
            "start", help="Start coordinate as lat,lon (put -- before negative values)"
        )
        parser.add_argument("finish", help="Finish coordinate as lat,lon")

    def handle(self, *_: Any, **options: Any) -> None:
        start = parse_lat_lon(options["start"])
        finish = parse_lat_lon(options["finish"])

        try:
            comparison = compare_routes(DirectionsClient().fetch_routes(start, finish))
        except RouteGeneratorError as exc:
            raise CommandError(str(exc)) from exc

        self.stdout.write(f"Total routes returned: {comparison.total_routes}")
        for metrics in comparison.routes:
            self.stdout.write(
                f"Route {metrics.route_index} -> distance={metrics.distance_meters:.1f} m, "
                f"duration={metrics.duration_seconds:.1f} s"
            )

        chosen = comparison.chosen
        self.stdout.write(
            self.style.SUCCESS(
                f"Chosen (shortest) route index={comparison.chosen_index} "
                f"distance={chosen.distance_meters:.1f} m "
                f"duration={chosen.duration_seconds:.1f} s"
            )
        )
