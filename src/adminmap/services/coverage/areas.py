"""Which ward boundaries an office's coverage circle reaches."""

from __future__ import annotations

from typing import Sequence

from ...models.domain import Boundary, Office, Point, RadiusPolicy
from ..geospatial import is_within_circle, mean_point
from .radius import governing_radius


def boundary_centroid(boundary: Boundary) -> Point:
    """Vertex average across every ring.

    This is not the area centroid; for concave or multi-ring wards it may fall
    outside the boundary.
    """

    return mean_point(boundary.vertices())


def centroid_or_vertex_heuristic(center: Point, radius_km: float, boundary: Boundary) -> bool:
    """Treat the boundary as covered if its centroid or any vertex is in the circle.

    Circles that clip an edge without reaching the centroid or a vertex are
    not detected.
    """

    vertices = boundary.vertices()
    if vertices and is_within_circle(boundary_centroid(boundary), center, radius_km):
        return True
    return any(is_within_circle(vertex, center, radius_km) for vertex in vertices)


def covered_areas(
    office: Office,
    boundaries: Sequence[Boundary],
    policy: RadiusPolicy = RadiusPolicy.RECEPTION,
) -> list[str]:
    """Names of the boundaries covered by ``office``, in input order."""

    radius = governing_radius(office, policy)
    return [
        boundary.name
        for boundary in boundaries
        if centroid_or_vertex_heuristic(office.location, radius, boundary)
    ]
