"""Unit tests for the haversine helpers and coordinate formatting."""

from __future__ import annotations

import math

import pytest

from grid_inventory.utils.geo import (
    EARTH_RADIUS_KM,
    format_coordinate,
    haversine_distance_km,
    within_radius,
)

pytestmark = pytest.mark.unit

TIMES_SQUARE = (40.7580, -73.9855)
LOWER_MANHATTAN = (40.7128, -74.0060)


def test_distance_is_symmetric() -> None:
    there = haversine_distance_km(TIMES_SQUARE, LOWER_MANHATTAN)
    back = haversine_distance_km(LOWER_MANHATTAN, TIMES_SQUARE)

    assert there == pytest.approx(back, abs=1e-9)


def test_distance_to_self_is_zero() -> None:
    assert haversine_distance_km(TIMES_SQUARE, TIMES_SQUARE) == pytest.approx(0.0, abs=1e-9)


def test_times_square_to_lower_manhattan() -> None:
    distance = haversine_distance_km(LOWER_MANHATTAN, TIMES_SQUARE)

    assert distance == pytest.approx(5.31, abs=0.05)
    assert within_radius(LOWER_MANHATTAN, TIMES_SQUARE, 10)
    assert not within_radius(LOWER_MANHATTAN, TIMES_SQUARE, 5)


def test_radius_boundary_is_inclusive() -> None:
    distance = haversine_distance_km(LOWER_MANHATTAN, TIMES_SQUARE)

    assert within_radius(LOWER_MANHATTAN, TIMES_SQUARE, distance)


def test_antipodal_points_do_not_blow_up() -> None:
    distance = haversine_distance_km((0.0, 0.0), (0.0, 180.0))

    assert distance == pytest.approx(math.pi * EARTH_RADIUS_KM, rel=1e-9)


def test_one_degree_of_latitude() -> None:
    assert haversine_distance_km((0.0, 0.0), (1.0, 0.0)) == pytest.approx(111.195, abs=0.01)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("40.7580", "40.7580000"),
        (-73.9855, "-73.9855000"),
        ("  12.123456789 ", "12.1234568"),
        (0, "0.0000000"),
        ("-0.00000005", "-0.0000001"),
    ],
)
def test_format_coordinate_uses_seven_fraction_digits(raw, expected) -> None:
    assert format_coordinate(raw) == expected


@pytest.mark.parametrize("raw", ["north", "", "nan", "inf", True, None])
def test_format_coordinate_rejects_non_numbers(raw) -> None:
    with pytest.raises(ValueError):
        format_coordinate(raw)
