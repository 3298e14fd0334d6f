"""Coverage aggregation across all offices and ward boundaries."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from ...models.domain import Boundary, CoverageAnalysis, Layer, Office, RadiusPolicy
from ..geospatial import circles_overlap
from .areas import covered_areas
from .clustering import ClusteringStrategy, GreedyOverlapClustering
from .radius import governing_radius


@dataclass(frozen=True, slots=True)
class OfficeCoverage:
    office: Office
    covered_areas: tuple[str, ...]
    overlapping_offices: tuple[Office, ...]


def analyze_coverage(
    offices: Sequence[Office],
    boundaries: Sequence[Boundary],
    *,
    policy: RadiusPolicy = RadiusPolicy.RECEPTION,
    strategy: ClusteringStrategy | None = None,
) -> CoverageAnalysis:
    """Compute per-layer covered areas and overlap clusters.

    Per-layer lists are deduplicated in first-seen order. Clustering defaults
    to the greedy first-match strategy.
    """

    per_layer: dict[Layer, dict[str, None]] = {layer: {} for layer in Layer}
    for office in offices:
        for name in covered_areas(office, boundaries, policy):
            per_layer[office.layer].setdefault(name)

    clustering = strategy or GreedyOverlapClustering()
    overlaps = clustering.cluster(offices, boundaries, policy)

    return CoverageAnalysis(
        overlaps=tuple(overlaps),
        layer_a=tuple(per_layer[Layer.A]),
        layer_b=tuple(per_layer[Layer.B]),
        layer_c=tuple(per_layer[Layer.C]),
    )


def office_coverage(
    office: Office,
    offices: Sequence[Office],
    boundaries: Sequence[Boundary],
    policy: RadiusPolicy = RadiusPolicy.RECEPTION,
) -> OfficeCoverage:
    """Covered areas of one office and every other office whose circle meets it."""

    radius = governing_radius(office, policy)
    overlapping = tuple(
        other
        for other in offices
        if other.id != office.id
        and circles_overlap(office.location, radius, other.location, governing_radius(other, policy))
    )
    return OfficeCoverage(
        office=office,
        covered_areas=tuple(covered_areas(office, boundaries, policy)),
        overlapping_offices=overlapping,
    )
