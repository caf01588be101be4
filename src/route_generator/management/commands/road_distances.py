from __future__ import annotations

from typing import Any

from django.core.management.base import BaseCommand, CommandError

from route_generator.exceptions import RouteGeneratorError
from route_generator.management.arguments import parse_lat_lon
from route_generator.services.distance_matrix import TRAVEL_MODES, DistanceMatrixClient


class Command(BaseCommand):
    help = "Print road distances in kilometers from one origin to each destination."

    def add_arguments(self, parser: Any) -> None:
        parser.add_argument(
            "origin", help="Origin coordinate as lat,lon (put -- before negative values)"
        )
        parser.add_argument("destinations", nargs="+", help="Destination coordinates as lat,lon")
        parser.add_argument("--mode", choices=TRAVEL_MODES, default="driving")
        parser.add_argument(
            "--traffic",
            action="store_true",
            help="Use live traffic (driving only, never cached)",
        )

    def handle(self, *_: Any, **options: Any) -> None:
        origin = parse_lat_lon(options["origin"])
        destinations = [parse_lat_lon(value) for value in options["destinations"]]

        try:
            distances = DistanceMatrixClient().distances_from_origin(
                origin,
                destinations,
                mode=options["mode"],
                traffic_aware=options["traffic"],
            )
        except RouteGeneratorError as exc:
            raise CommandError(str(exc)) from exc

        for key, kilometers in distances.items():
            if kilometers is None:
                self.stdout.write(f"{key} => unreachable / no route")
            else:
                self.stdout.write(f"{key} => {kilometers:.3f} km")
