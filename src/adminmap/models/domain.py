"""Domain models for offices, ward boundaries and coverage results."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class Layer(str, Enum):
    """Office categories: district branches, new ward centres, post offices."""

    A = "A"
    B = "B"
    C = "C"


class RadiusPolicy(str, Enum):
    """Selects which of a Layer A office's two radii governs a computation."""

    RECEPTION = "reception"
    MANAGEMENT = "management"


class OverlapType(str, Enum):
    PARTIAL = "partial"
    # Reserved, never produced by the current clustering.
    COMPLETE = "complete"


@dataclass(frozen=True, slots=True)
class Point:
    """A latitude/longitude pair in decimal degrees."""

    lat: float
    lng: float


@dataclass(frozen=True, slots=True)
class Office:
    """An administrative office with its service radius."""

    id: str
    name: str
    location: Point
    layer: Layer
    radius: float
    reception_radius: Optional[float] = None
    management_radius: Optional[float] = None
    area_type: Optional[str] = None
    address: Optional[str] = None
    region: Optional[str] = None
    phone: Optional[str] = None
    postid: Optional[str] = None


@dataclass(frozen=True, slots=True)
class Boundary:
    """An administrative boundary (ward/commune) made of one or more rings."""

    name: str
    rings: tuple[tuple[Point, ...], ...]

    def vertices(self) -> tuple[Point, ...]:
        return tuple(vertex for ring in self.rings for vertex in ring)


@dataclass(frozen=True, slots=True)
class CoverageOverlap:
    """A group of offices whose coverage circles intersect."""

    id: str
    layers: tuple[Layer, ...]
    offices: tuple[Office, ...]
    overlap_center: Point
    covered_areas: tuple[str, ...]
    overlap_type: OverlapType = OverlapType.PARTIAL


@dataclass(frozen=True, slots=True)
class CoverageAnalysis:
    """Overlap clusters plus the deduplicated covered areas of each layer."""

    overlaps: tuple[CoverageOverlap, ...] = ()
    layer_a: tuple[str, ...] = ()
    layer_b: tuple[str, ...] = ()
    layer_c: tuple[str, ...] = ()

    def coverage_for(self, layer: Layer) -> tuple[str, ...]:
        return {Layer.A: self.layer_a, Layer.B: self.layer_b, Layer.C: self.layer_c}[layer]


@dataclass(frozen=True, slots=True)
class Containment:
    """Result of checking whether an office sits inside another layer's circles."""

    is_within: bool
    containing_office: Optional[Office] = None
    distance_km: Optional[float] = None


@dataclass(frozen=True, slots=True)
class ContainedOffice:
    office: Office
    containing_office: Office
    distance_km: float


@dataclass(slots=True)
class LayerBCategories:
    within_layer_a: list[ContainedOffice] = field(default_factory=list)
    outside_layer_a: list[Office] = field(default_factory=list)


@dataclass(slots=True)
class LayerCCategories:
    colocated: list[ContainedOffice] = field(default_factory=list)
    within_layer_a: list[ContainedOffice] = field(default_factory=list)
    within_layer_b: list[ContainedOffice] = field(default_factory=list)
    outside_both: list[Office] = field(default_factory=list)
