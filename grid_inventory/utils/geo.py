"""Geospatial helpers shared by the in-memory and SQL search paths."""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from sqlalchemy import Float, cast, func, literal
from sqlalchemy.sql.elements import ColumnElement

LatLng = tuple[float, float]

EARTH_RADIUS_KM = 6371.0
COORDINATE_SCALE = Decimal("0.0000001")  # 7 fractional digits, NUMERIC(10, 7)


def haversine_distance_km(
    point_a: LatLng, point_b: LatLng, *, radius_km: float = EARTH_RADIUS_KM
) -> float:
    """Compute the great-circle distance between two points in kilometres.

    ``d = R * 2 * atan2(sqrt(a), sqrt(1 - a))`` with
    ``a = sin²(Δφ/2) + cos φ1 · cos φ2 · sin²(Δλ/2)``. ``a`` is clamped to
    [0, 1] so rounding near antipodal points never feeds a negative value to
    ``sqrt``. :func:`haversine_distance_sql` builds the same expression for
    the database.
    """

    lat1, lng1 = point_a
    lat2, lng2 = point_b

    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlambda = math.radians(lng2 - lng1)

    a = math.sin(dphi / 2.0) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2.0) ** 2
    a = min(1.0, max(0.0, a))
    c = 2.0 * math.atan2(math.sqrt(a), math.sqrt(1.0 - a))
    return radius_km * c


def within_radius(origin: LatLng, point: LatLng, radius_km: float) -> bool:
    # Inclusive boundary: a point exactly radius_km away is a match
    return haversine_distance_km(origin, point) <= radius_km


def haversine_distance_sql(
    lat_column: ColumnElement, lng_column: ColumnElement, origin: LatLng
) -> ColumnElement:
    """SQL twin of :func:`haversine_distance_km` for a coordinate column pair."""

    lat0, lng0 = float(origin[0]), float(origin[1])

    lat_rad = func.radians(cast(lat_column, Float))
    lng_rad = func.radians(cast(lng_column, Float))
    lat0_rad = func.radians(literal(lat0, Float))
    lng0_rad = func.radians(literal(lng0, Float))

    a = func.pow(func.sin((lat_rad - lat0_rad) / 2.0), 2) + func.cos(lat0_rad) * func.cos(
        lat_rad
    ) * func.pow(func.sin((lng_rad - lng0_rad) / 2.0), 2)
    a = func.greatest(0.0, func.least(1.0, a))
    c = 2.0 * func.atan2(func.sqrt(a), func.sqrt(1.0 - a))
    return EARTH_RADIUS_KM * c


def format_coordinate(value: object) -> str:
    """Render a coordinate as the fixed 7-digit decimal string used at rest.

    Raises ``ValueError`` for anything that is not a finite number.
    """

    if isinstance(value, bool):
        raise ValueError("coordinate must be a number")
    try:
        dec = Decimal(str(value).strip())
    except (InvalidOperation, ValueError) as exc:
        raise ValueError(f"invalid coordinate: {value!r}") from exc
    if not dec.is_finite():
        raise ValueError(f"invalid coordinate: {value!r}")
    try:
        quantized = dec.quantize(COORDINATE_SCALE, rounding=ROUND_HALF_UP)
    except InvalidOperation as exc:
        raise ValueError(f"invalid coordinate: {value!r}") from exc
    # "f" keeps zero as 0.0000000 instead of 0E-7
    return format(quantized, "f")


def parse_coordinate(value: str | float | Decimal) -> float:
    return float(value)


__all__ = [
    "EARTH_RADIUS_KM",
    "LatLng",
    "format_coordinate",
    "haversine_distance_km",
    "haversine_distance_sql",
    "parse_coordinate",
    "within_radius",
]
