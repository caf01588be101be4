from __future__ import annotations

import pytest

from route_generator.exceptions import DecodeError
from route_generator.services.polyline import decode_polyline
from route_generator.services.types import Coordinate


def test_decodes_canonical_example() -> None:
    decoded = decode_polyline("_p~iF~ps|U_ulLnnqC_mqNvxq`@")

    assert [(round(p.latitude, 3), round(p.longitude, 3)) for p in decoded] == [
        (38.5, -120.2),
        (40.7, -120.95),
        (43.252, -126.453),
    ]


def test_empty_string_decodes_to_no_points() -> None:
    assert decode_polyline("") == []


def test_decoding_is_restartable() -> None:
    encoded = "_p~iF~ps|U_ulLnnqC_mqNvxq`@"

    assert decode_polyline(encoded) == decode_polyline(encoded)


def test_round_trip_reproduces_rounded_coordinates(encode) -> None:
    original = [
        Coordinate(latitude=23.03877, longitude=72.61076),
        Coordinate(latitude=23.04112, longitude=72.61203),
        Coordinate(latitude=-33.86785, longitude=151.20732),
        Coordinate(latitude=0.0, longitude=-0.00001),
        Coordinate(latitude=89.99999, longitude=-179.99999),
    ]

    decoded = decode_polyline(encode(original))

    assert len(decoded) == len(original)
    for got, expected in zip(decoded, original):
        assert got.latitude == pytest.approx(expected.latitude, abs=1e-9)
        assert got.longitude == pytest.approx(expected.longitude, abs=1e-9)


def test_truncated_continuation_raises_decode_error() -> None:
    with pytest.raises(DecodeError):
        decode_polyline("_p~iF~ps|")


def test_latitude_without_longitude_raises_decode_error() -> None:
    with pytest.raises(DecodeError):
        decode_polyline("_p~iF")


def test_character_outside_alphabet_raises_decode_error() -> None:
    with pytest.raises(DecodeError):
        decode_polyline("_p~iF ps|U")
