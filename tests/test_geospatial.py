import math

import pytest

from adminmap.models.domain import Boundary, Layer, Office, Point
from adminmap.services.geospatial import (
    EARTH_RADIUS_KM,
    InvalidGeometryError,
    circles_overlap,
    distance_km,
    is_within_circle,
    locate_boundary,
    mean_point,
    same_location,
    validate_boundaries,
    validate_offices,
)

KM_PER_DEGREE = EARTH_RADIUS_KM * math.pi / 180
ORIGIN = Point(16.05, 108.2)


def _north(km: float, origin: Point = ORIGIN) -> Point:
    return Point(origin.lat + km / KM_PER_DEGREE, origin.lng)


@pytest.mark.parametrize(
    "point",
    [Point(0.0, 0.0), ORIGIN, Point(-33.9, 151.2), Point(89.9, -179.9)],
)
def test_distance_to_self_is_zero(point):
    assert distance_km(point, point) == 0


def test_distance_is_symmetric():
    a = Point(16.0544, 108.2022)
    b = Point(15.8801, 108.3380)

    assert distance_km(a, b) == pytest.approx(distance_km(b, a), abs=1e-12)


def test_one_kilometre_along_meridian_near_equator():
    start = Point(0.0, 30.0)
    end = _north(1.0, start)

    assert distance_km(start, end) == pytest.approx(1.0, rel=0.01)


def test_distance_between_da_nang_and_hoi_an():
    da_nang = Point(16.0544, 108.2022)
    hoi_an = Point(15.8801, 108.3380)

    assert 23.0 < distance_km(da_nang, hoi_an) < 25.0


def test_antipodal_points_do_not_produce_nan():
    result = distance_km(Point(0.0, 0.0), Point(0.0, 180.0))

    assert not math.isnan(result)
    assert result == pytest.approx(math.pi * EARTH_RADIUS_KM, rel=1e-9)


@pytest.mark.parametrize("radius", [0.0, 0.5, 7.0])
def test_center_is_within_its_own_circle(radius):
    assert is_within_circle(ORIGIN, ORIGIN, radius)


def test_within_circle_is_inclusive_and_bounded():
    point = _north(3.0)
    distance = distance_km(point, ORIGIN)

    assert is_within_circle(point, ORIGIN, distance)
    assert not is_within_circle(point, ORIGIN, distance - 1e-9)


@pytest.mark.parametrize("radius", [0.0, 2.5, 15.0])
def test_identical_centers_always_overlap(radius):
    assert circles_overlap(ORIGIN, radius, ORIGIN, radius)


def test_tangent_circles_overlap_and_separated_ones_do_not():
    other = _north(10.0)
    gap = distance_km(ORIGIN, other)

    assert circles_overlap(ORIGIN, gap / 2, other, gap / 2)
    assert not circles_overlap(ORIGIN, gap / 2, other, gap / 2 - 1e-9)


def test_ten_km_apart_with_seven_km_radii_overlap():
    assert circles_overlap(ORIGIN, 7.0, _north(10.0), 7.0)
    assert not circles_overlap(ORIGIN, 4.0, _north(10.0), 4.0)


def test_mean_point_of_nothing_is_origin():
    assert mean_point([]) == Point(0.0, 0.0)
    assert mean_point([Point(1.0, 2.0), Point(3.0, 6.0)]) == Point(2.0, 4.0)


def test_same_location_uses_tolerance():
    assert same_location(ORIGIN, Point(ORIGIN.lat + 0.0009, ORIGIN.lng - 0.0009))
    assert not same_location(ORIGIN, Point(ORIGIN.lat + 0.002, ORIGIN.lng))
    assert same_location(ORIGIN, Point(ORIGIN.lat + 0.002, ORIGIN.lng), tolerance=0.01)


def test_locate_boundary_checks_every_ring():
    square = (Point(16.0, 108.0), Point(16.0, 108.1), Point(16.1, 108.1), Point(16.1, 108.0))
    island = (Point(16.5, 108.5), Point(16.5, 108.6), Point(16.6, 108.6), Point(16.6, 108.5))
    boundaries = [
        Boundary(name="Hải Châu", rings=(square,)),
        Boundary(name="Hoàng Sa", rings=(square[:2], island)),
    ]

    assert locate_boundary(Point(16.05, 108.05), boundaries).name == "Hải Châu"
    assert locate_boundary(Point(16.55, 108.55), boundaries).name == "Hoàng Sa"
    assert locate_boundary(Point(17.0, 109.0), boundaries) is None


def test_validate_offices_rejects_non_finite_input():
    good = Office(id="a", name="A", location=ORIGIN, layer=Layer.A, radius=5.0)
    bad_location = Office(id="b", name="B", location=Point(float("nan"), 108.0), layer=Layer.B, radius=5.0)
    bad_radius = Office(id="c", name="C", location=ORIGIN, layer=Layer.C, radius=float("inf"))

    validate_offices([good])
    with pytest.raises(InvalidGeometryError):
        validate_offices([good, bad_location])
    with pytest.raises(InvalidGeometryError):
        validate_offices([bad_radius])


def test_validate_boundaries_rejects_non_finite_vertex():
    broken = Boundary(name="broken", rings=((Point(16.0, float("inf")),),))

    validate_boundaries([Boundary(name="empty", rings=())])
    with pytest.raises(InvalidGeometryError):
        validate_boundaries([broken])
