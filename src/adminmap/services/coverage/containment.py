"""Checks for offices that sit inside another layer's coverage circles."""

from __future__ import annotations

from typing import Sequence

from ...models.domain import (
    ContainedOffice,
    Containment,
    LayerBCategories,
    LayerCCategories,
    Office,
    RadiusPolicy,
)
from ..geospatial import LOCATION_TOLERANCE_DEGREES, distance_km, same_location
from .radius import governing_radius


def _first_containing(office: Office, candidates: Sequence[Office], policy: RadiusPolicy) -> Containment:
    for candidate in candidates:
        distance = distance_km(office.location, candidate.location)
        if distance <= governing_radius(candidate, policy):
            return Containment(is_within=True, containing_office=candidate, distance_km=distance)
    return Containment(is_within=False)


def is_within_any_layer_a(
    office_b: Office,
    layer_a_offices: Sequence[Office],
    policy: RadiusPolicy = RadiusPolicy.RECEPTION,
) -> Containment:
    """Return the first Layer A office (input order) whose governing circle holds ``office_b``."""

    return _first_containing(office_b, layer_a_offices, policy)


def categorize_layer_b_offices(
    layer_b_offices: Sequence[Office],
    layer_a_offices: Sequence[Office],
    policy: RadiusPolicy = RadiusPolicy.RECEPTION,
) -> LayerBCategories:
    result = LayerBCategories()
    for office in layer_b_offices:
        containment = is_within_any_layer_a(office, layer_a_offices, policy)
        if containment.is_within:
            result.within_layer_a.append(
                ContainedOffice(office, containment.containing_office, containment.distance_km)
            )
        else:
            result.outside_layer_a.append(office)
    return result


def categorize_layer_c_offices(
    layer_c_offices: Sequence[Office],
    layer_a_offices: Sequence[Office],
    layer_b_offices: Sequence[Office],
    policy: RadiusPolicy = RadiusPolicy.RECEPTION,
    tolerance: float = LOCATION_TOLERANCE_DEGREES,
) -> LayerCCategories:
    """Sort Layer C offices into exactly one bucket each.

    Buckets are checked in order: sharing premises with an A or B office,
    inside an A circle, inside a B circle, outside both.
    """

    result = LayerCCategories()
    higher_layers = [*layer_a_offices, *layer_b_offices]
    for office in layer_c_offices:
        twin = next(
            (other for other in higher_layers if same_location(office.location, other.location, tolerance)),
            None,
        )
        if twin is not None:
            result.colocated.append(
                ContainedOffice(office, twin, distance_km(office.location, twin.location))
            )
            continue

        within_a = _first_containing(office, layer_a_offices, policy)
        if within_a.is_within:
            result.within_layer_a.append(
                ContainedOffice(office, within_a.containing_office, within_a.distance_km)
            )
            continue

        within_b = _first_containing(office, layer_b_offices, policy)
        if within_b.is_within:
            result.within_layer_b.append(
                ContainedOffice(office, within_b.containing_office, within_b.distance_km)
            )
            continue

        result.outside_both.append(office)
    return result
