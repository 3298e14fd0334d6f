"""Grouping of offices whose coverage circles overlap."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from ...models.domain import Boundary, CoverageOverlap, Layer, Office, OverlapType, RadiusPolicy
from ..geospatial import circles_overlap, mean_point
from .areas import covered_areas
from .radius import governing_radius


def _overlap_id(first: Office, second: Office) -> str:
    return f"overlap-{first.id}-{second.id}"


def _union_covered_areas(
    offices: Sequence[Office],
    boundaries: Sequence[Boundary],
    policy: RadiusPolicy,
) -> tuple[str, ...]:
    names: dict[str, None] = {}
    for office in offices:
        for name in covered_areas(office, boundaries, policy):
            names.setdefault(name)
    return tuple(names)


def _layers_of(offices: Sequence[Office]) -> tuple[Layer, ...]:
    return tuple(dict.fromkeys(office.layer for office in offices))


def _overlapping_pairs(offices: Sequence[Office], policy: RadiusPolicy):
    """Yield every overlapping (i, j) index pair with i < j in input order."""

    radii = [governing_radius(office, policy) for office in offices]
    for i, first in enumerate(offices):
        for j in range(i + 1, len(offices)):
            second = offices[j]
            if circles_overlap(first.location, radii[i], second.location, radii[j]):
                yield i, j


class _OverlapGroup:
    """Mutable working state for one cluster while the pair scan runs."""

    def __init__(self, cluster_id: str, offices: Sequence[Office]) -> None:
        self.id = cluster_id
        self.offices: list[Office] = list(offices)
        self.member_ids = {office.id for office in offices}
        self.layers: list[Layer] = list(_layers_of(offices))
        self.center = mean_point([office.location for office in offices])
        self.covered_areas: tuple[str, ...] = ()

    def contains(self, office: Office) -> bool:
        return office.id in self.member_ids

    def add(self, office: Office) -> None:
        self.offices.append(office)
        self.member_ids.add(office.id)
        if office.layer not in self.layers:
            self.layers.append(office.layer)

    def refresh(self, boundaries: Sequence[Boundary], policy: RadiusPolicy) -> None:
        self.covered_areas = _union_covered_areas(self.offices, boundaries, policy)
        self.center = mean_point([office.location for office in self.offices])

    def freeze(self) -> CoverageOverlap:
        return CoverageOverlap(
            id=self.id,
            layers=tuple(self.layers),
            offices=tuple(self.offices),
            overlap_center=self.center,
            covered_areas=self.covered_areas,
            overlap_type=OverlapType.PARTIAL,
        )


class ClusteringStrategy(ABC):
    """Contract for overlap clustering implementations."""

    name: str

    @abstractmethod
    def cluster(
        self,
        offices: Sequence[Office],
        boundaries: Sequence[Boundary],
        policy: RadiusPolicy = RadiusPolicy.RECEPTION,
    ) -> list[CoverageOverlap]:
        raise NotImplementedError


class GreedyOverlapClustering(ClusteringStrategy):
    """First-match pairwise merging.

    Each overlapping pair joins the earliest-created cluster that already holds
    either office, otherwise it starts a new cluster. An office already placed
    in some cluster is never added to a second one, and clusters are never
    merged with each other, so an office bridging two existing clusters leaves
    them split.

    The map viewer's own analysis adds such an office to the matched cluster
    anyway, so it can show one office in two clusters. Here it stays in the
    cluster it joined first.
    """

    name = "greedy"

    def cluster(
        self,
        offices: Sequence[Office],
        boundaries: Sequence[Boundary],
        policy: RadiusPolicy = RadiusPolicy.RECEPTION,
    ) -> list[CoverageOverlap]:
        groups: list[_OverlapGroup] = []
        for i, j in _overlapping_pairs(offices, policy):
            first, second = offices[i], offices[j]
            existing = next(
                (group for group in groups if group.contains(first) or group.contains(second)),
                None,
            )
            if existing is None:
                group = _OverlapGroup(_overlap_id(first, second), (first, second))
                group.refresh(boundaries, policy)
                groups.append(group)
                continue

            for office in (first, second):
                if any(group.contains(office) for group in groups):
                    continue
                existing.add(office)
            existing.refresh(boundaries, policy)

        return [group.freeze() for group in groups]


class ConnectedComponentsClustering(ClusteringStrategy):
    """Connected components of the overlap graph (union-find).

    Offices linked by any chain of overlaps end up in one cluster. Clusters are
    ordered by their earliest member; members keep input order.
    """

    name = "components"

    def cluster(
        self,
        offices: Sequence[Office],
        boundaries: Sequence[Boundary],
        policy: RadiusPolicy = RadiusPolicy.RECEPTION,
    ) -> list[CoverageOverlap]:
        parent = list(range(len(offices)))

        def find(index: int) -> int:
            while parent[index] != index:
                parent[index] = parent[parent[index]]
                index = parent[index]
            return index

        pairs = list(_overlapping_pairs(offices, policy))
        for i, j in pairs:
            root_i, root_j = find(i), find(j)
            if root_i != root_j:
                parent[max(root_i, root_j)] = min(root_i, root_j)

        first_pair: dict[int, tuple[int, int]] = {}
        for i, j in pairs:
            first_pair.setdefault(find(i), (i, j))

        members: dict[int, list[int]] = {}
        for index in range(len(offices)):
            root = find(index)
            if root in first_pair:
                members.setdefault(root, []).append(index)

        overlaps: list[CoverageOverlap] = []
        for root in sorted(members):
            i, j = first_pair[root]
            group = _OverlapGroup(
                _overlap_id(offices[i], offices[j]),
                [offices[index] for index in members[root]],
            )
            group.refresh(boundaries, policy)
            overlaps.append(group.freeze())
        return overlaps


def get_clustering_strategy(method: str) -> ClusteringStrategy:
    match method:
        case "greedy":
            return GreedyOverlapClustering()
        case "components":
            return ConnectedComponentsClustering()
        case _:
            raise ValueError(f"Unknown clustering method '{method}'.")
