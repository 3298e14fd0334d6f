"""Data access helpers for loading administrative offices from layer fixtures."""

from __future__ import annotations

import functools
import json
import logging
from pathlib import Path
from typing import Any, Iterable, Optional, Sequence

from ..config import settings
from ..models.domain import Layer, Office, Point
from .errors import ReferenceDataError

logger = logging.getLogger(__name__)

DEFAULT_REGION = "Đà Nẵng"
AREA_TYPES = ("urban", "suburban")


def _fixture_path(layer: Layer) -> Path:
    return {
        Layer.A: settings.layer_a_file,
        Layer.B: settings.layer_b_file,
        Layer.C: settings.layer_c_file,
    }[layer]


def _coerce_location(value: Any) -> Optional[Point]:
    if not isinstance(value, dict):
        return None
    try:
        lat = float(value["lat"])
        lng = float(value["lng"])
    except (KeyError, TypeError, ValueError):
        return None
    # Fixture rows use 0 as a "not geocoded" placeholder.
    if not lat or not lng:
        return None
    return Point(lat, lng)


def _clean(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _layer_radii(layer: Layer, area_type: Optional[str]) -> dict[str, Optional[float]]:
    if layer is Layer.A:
        suburban = area_type == "suburban"
        reception = (
            settings.layer_a_suburban_reception_radius_km
            if suburban
            else settings.layer_a_urban_reception_radius_km
        )
        management = (
            settings.layer_a_suburban_management_radius_km
            if suburban
            else settings.layer_a_urban_management_radius_km
        )
        return {"radius": reception, "reception_radius": reception, "management_radius": management}
    if layer is Layer.B:
        return {"radius": settings.layer_b_radius_km}
    return {"radius": settings.layer_c_radius_km}


def parse_office_records(layer: Layer, records: Iterable[dict]) -> tuple[Office, ...]:
    """Build offices for one layer; records without a usable location are skipped."""

    offices: list[Office] = []
    skipped = 0
    for record in records:
        location = _coerce_location(record.get("location"))
        if location is None:
            skipped += 1
            continue
        area_type = _clean(record.get("type"))
        if area_type not in AREA_TYPES:
            area_type = None
        offices.append(
            Office(
                id=f"layer-{layer.value.lower()}-{len(offices)}",
                name=_clean(record.get("name")) or "",
                location=location,
                layer=layer,
                area_type=area_type,
                address=_clean(record.get("address")),
                region=_clean(record.get("province")) or DEFAULT_REGION,
                phone=_clean(record.get("phone")),
                postid=_clean(record.get("postid")),
                **_layer_radii(layer, area_type),
            )
        )
    if skipped:
        logger.warning(f"Skipped {skipped} layer {layer.value} records without a location")
    return tuple(offices)


@functools.lru_cache(maxsize=8)
def load_layer_offices(layer: Layer, source: Optional[Path] = None) -> tuple[Office, ...]:
    """Load one layer's offices from its JSON fixture."""

    json_path = source or _fixture_path(layer)
    if not json_path.exists():
        raise FileNotFoundError(f"Layer {layer.value} fixture not found: {json_path}")

    with json_path.open(mode="r", encoding="utf-8") as handle:
        try:
            payload = json.load(handle)
        except json.JSONDecodeError as exc:
            raise ReferenceDataError(f"Layer {layer.value} fixture '{json_path}' is not valid JSON: {exc}") from exc
    if not isinstance(payload, list):
        raise ReferenceDataError(f"Layer {layer.value} fixture '{json_path}' must contain a JSON list.")

    offices = parse_office_records(layer, payload)
    logger.info(f"Loaded {len(offices)} layer {layer.value} offices from {json_path.name}")
    return offices


def load_all_offices(layers: Optional[Iterable[Layer]] = None) -> tuple[Office, ...]:
    """Offices of the requested layers (all by default), layer A first."""

    wanted = set(layers) if layers is not None else set(Layer)
    offices: list[Office] = []
    for layer in Layer:
        if layer in wanted:
            offices.extend(load_layer_offices(layer))
    return tuple(offices)


def apply_office_edits(
    base: Sequence[Office],
    *,
    overrides: Sequence[Office] = (),
    excluded_ids: Iterable[str] = (),
) -> tuple[Office, ...]:
    """Return a new office set with edits applied.

    Excluded ids are dropped, overrides replace the base office with the same
    id, and overrides with unknown ids are appended as custom offices.
    """

    excluded = set(excluded_ids)
    replacements = {office.id: office for office in overrides}
    result: list[Office] = []
    for office in base:
        if office.id in excluded:
            continue
        result.append(replacements.pop(office.id, office))
    result.extend(office for office in replacements.values() if office.id not in excluded)
    return tuple(result)


def find_office(offices: Iterable[Office], office_id: str) -> Office:
    for office in offices:
        if office.id == office_id:
            return office
    raise KeyError(office_id)


def clear_office_cache() -> None:
    load_layer_offices.cache_clear()
