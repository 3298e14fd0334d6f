"""Geospatial helper functions."""

from __future__ import annotations

import math
from typing import Iterable, Optional, Sequence

from shapely.geometry import Point as ShapelyPoint, Polygon

from ..models.domain import Boundary, Office, Point

EARTH_RADIUS_KM = 6371.0
# About 100 m at Da Nang's latitude.
LOCATION_TOLERANCE_DEGREES = 0.001


class InvalidGeometryError(ValueError):
    """Raised at the service boundary when coordinates or radii are unusable."""


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Compute distance between two coordinates using the Haversine formula."""

    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def distance_km(a: Point, b: Point) -> float:
    return haversine_km(a.lat, a.lng, b.lat, b.lng)


def is_within_circle(point: Point, center: Point, radius_km: float) -> bool:
    """Return True if ``point`` lies inside or on the circle around ``center``."""

    return distance_km(point, center) <= radius_km


def circles_overlap(center1: Point, radius1: float, center2: Point, radius2: float) -> bool:
    """Return True if two coverage circles intersect; tangent circles count."""

    return distance_km(center1, center2) <= radius1 + radius2


def mean_point(points: Sequence[Point]) -> Point:
    """Arithmetic mean of the points, or (0, 0) when there are none."""

    if not points:
        return Point(0.0, 0.0)
    lat_sum = sum(point.lat for point in points)
    lng_sum = sum(point.lng for point in points)
    return Point(lat_sum / len(points), lng_sum / len(points))


def same_location(a: Point, b: Point, tolerance: float = LOCATION_TOLERANCE_DEGREES) -> bool:
    return abs(a.lat - b.lat) <= tolerance and abs(a.lng - b.lng) <= tolerance


def point_in_polygon(lat: float, lon: float, polygon_coords: Sequence[tuple[float, float]]) -> bool:
    """Return True if the point is inside the polygon denoted by (lat, lon) pairs."""

    if len(polygon_coords) < 3:
        return False
    polygon = Polygon([(lng, lat) for lat, lng in polygon_coords])
    return polygon.contains(ShapelyPoint(lon, lat))


def locate_boundary(point: Point, boundaries: Iterable[Boundary]) -> Optional[Boundary]:
    """Return the first boundary with a ring containing ``point``."""

    for boundary in boundaries:
        for ring in boundary.rings:
            if point_in_polygon(point.lat, point.lng, [(vertex.lat, vertex.lng) for vertex in ring]):
                return boundary
    return None


def _is_finite_point(point: Point) -> bool:
    return math.isfinite(point.lat) and math.isfinite(point.lng)


def validate_offices(offices: Iterable[Office]) -> None:
    """Reject offices whose location or radii cannot be used in distance math."""

    for office in offices:
        if not _is_finite_point(office.location):
            raise InvalidGeometryError(f"Office '{office.id}' has a non-finite location.")
        for radius in (office.radius, office.reception_radius, office.management_radius):
            if radius is None:
                continue
            if not math.isfinite(radius) or radius < 0:
                raise InvalidGeometryError(f"Office '{office.id}' has an invalid radius {radius!r}.")


def validate_boundaries(boundaries: Iterable[Boundary]) -> None:
    for boundary in boundaries:
        if not all(_is_finite_point(vertex) for vertex in boundary.vertices()):
            raise InvalidGeometryError(f"Boundary '{boundary.name}' has a non-finite vertex.")
