"""Ward boundary loader for GeoJSON and the viewer's native ward list."""

from __future__ import annotations

import functools
import json
import logging
from pathlib import Path
from typing import Any, Iterable, Optional

from shapely.errors import ShapelyError
from shapely.geometry import MultiPolygon, Polygon, shape

from ..config import settings
from ..models.domain import Boundary, Point
from .errors import ReferenceDataError

logger = logging.getLogger(__name__)


def _rings_from_geometry(geometry: dict) -> tuple[tuple[Point, ...], ...]:
    try:
        geom = shape(geometry)
    except (ShapelyError, KeyError, TypeError, ValueError) as exc:
        raise ReferenceDataError(f"Malformed boundary geometry: {exc}") from exc
    if isinstance(geom, Polygon):
        polygons = [geom]
    elif isinstance(geom, MultiPolygon):
        polygons = list(geom.geoms)
    else:
        raise ReferenceDataError(f"Unsupported boundary geometry '{geom.geom_type}'.")

    rings: list[tuple[Point, ...]] = []
    for polygon in polygons:
        for ring in (polygon.exterior, *polygon.interiors):
            # GeoJSON is (lng, lat); shapely rings repeat the first vertex at the end.
            coords = list(ring.coords)[:-1]
            rings.append(tuple(Point(lat, lng) for lng, lat, *_ in coords))
    return tuple(rings)


def _boundaries_from_features(features: Iterable[dict]) -> list[Boundary]:
    boundaries: list[Boundary] = []
    for index, feature in enumerate(features):
        properties = feature.get("properties") or {}
        name = properties.get("ward") or properties.get("name")
        geometry = feature.get("geometry")
        if not name or not geometry:
            logger.warning(f"Skipping boundary feature {index} without a name or geometry")
            continue
        boundaries.append(Boundary(name=str(name), rings=_rings_from_geometry(geometry)))
    return boundaries


def _ring_from_points(points: Iterable[dict]) -> tuple[Point, ...]:
    return tuple(Point(float(point["lat"]), float(point["lng"])) for point in points)


def _boundaries_from_ward_list(records: Iterable[dict]) -> list[Boundary]:
    boundaries: list[Boundary] = []
    for index, record in enumerate(records):
        name = record.get("ward")
        if not name:
            logger.warning(f"Skipping ward record {index} without a name")
            continue
        if record.get("polygons"):
            rings = tuple(_ring_from_points(ring) for ring in record["polygons"])
        else:
            rings = (_ring_from_points(record.get("polygon") or []),)
        boundaries.append(Boundary(name=str(name), rings=rings))
    return boundaries


def parse_boundaries(payload: Any) -> tuple[Boundary, ...]:
    if isinstance(payload, dict) and payload.get("type") == "FeatureCollection":
        return tuple(_boundaries_from_features(payload.get("features") or []))
    if isinstance(payload, list):
        return tuple(_boundaries_from_ward_list(payload))
    raise ReferenceDataError("Boundary data must be a GeoJSON FeatureCollection or a list of ward records.")


@functools.lru_cache(maxsize=1)
def load_boundaries(source: Optional[Path] = None) -> tuple[Boundary, ...]:
    """Load ward boundaries from the configured file."""

    boundaries_path = source or settings.boundaries_file
    if not boundaries_path.exists():
        raise FileNotFoundError(f"Boundary file not found: {boundaries_path}")

    with boundaries_path.open(mode="r", encoding="utf-8") as handle:
        try:
            payload = json.load(handle)
        except json.JSONDecodeError as exc:
            raise ReferenceDataError(f"Boundary file '{boundaries_path}' is not valid JSON: {exc}") from exc
    boundaries = parse_boundaries(payload)
    logger.info(f"Loaded {len(boundaries)} ward boundaries from {boundaries_path.name}")
    return boundaries


def clear_boundary_cache() -> None:
    load_boundaries.cache_clear()
