"""Decoding for the encoded polyline format used by the directions API.

Each coordinate is stored as a latitude delta then a longitude delta from the
previous point, scaled by 1e5, zig-zag encoded and split into 5-bit chunks
offset by 63. A set 0x20 bit marks that another chunk follows.
"""

from __future__ import annotations

from route_generator.exceptions import DecodeError
from route_generator.services.types import Coordinate

POLYLINE_PRECISION = 1e5
CHUNK_MASK = 0x1F
CONTINUATION_BIT = 0x20
CHARACTER_OFFSET = 63


def decode_polyline(encoded: str) -> list[Coordinate]:
    coordinates: list[Coordinate] = []
    index = 0
    latitude = 0
    longitude = 0

    while index < len(encoded):
        delta_latitude, index = _decode_value(encoded, index)
        if index >= len(encoded):
            raise DecodeError(f"Latitude at offset {index} has no matching longitude")
        delta_longitude, index = _decode_value(encoded, index)

        latitude += delta_latitude
        longitude += delta_longitude
        coordinates.append(
            Coordinate(
                latitude=latitude / POLYLINE_PRECISION,
                longitude=longitude / POLYLINE_PRECISION,
            )
        )

    return coordinates


def _decode_value(encoded: str, index: int) -> tuple[int, int]:
    result = 0
    shift = 0
    while True:
        if index >= len(encoded):
            raise DecodeError("Polyline ends inside a continuation sequence")

        value = ord(encoded[index]) - CHARACTER_OFFSET
        if value < 0 or value > 0x3F:
            raise DecodeError(f"Invalid polyline character {encoded[index]!r} at offset {index}")
        index += 1

        result |= (value & CHUNK_MASK) << shift
        shift += 5
        if value < CONTINUATION_BIT:
            break

    delta = ~(result >> 1) if result & 1 else result >> 1
    return delta, index
