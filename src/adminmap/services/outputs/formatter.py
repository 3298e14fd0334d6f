"""Utilities to serialize coverage results into API response models."""

from __future__ import annotations

from typing import Sequence

from ...models.domain import (
    ContainedOffice,
    CoverageAnalysis,
    CoverageOverlap,
    LayerBCategories,
    LayerCCategories,
    Office,
    Point,
    RadiusPolicy,
)
from ...schemas.coverage import (
    ContainedOfficeModel,
    CoverageAnalysisResponse,
    CoverageOverlapModel,
    LayerBContainmentResponse,
    LayerCContainmentResponse,
    OfficeCoverageResponse,
    OfficeModel,
    PointModel,
    TotalCoverageModel,
)
from ..coverage import OfficeCoverage


def point_to_model(point: Point) -> PointModel:
    return PointModel(lat=point.lat, lng=point.lng)


def office_to_model(office: Office) -> OfficeModel:
    return OfficeModel(
        id=office.id,
        name=office.name,
        location=point_to_model(office.location),
        layer=office.layer.value,
        radius=office.radius,
        receptionRadius=office.reception_radius,
        managementRadius=office.management_radius,
        type=office.area_type,
        address=office.address,
        region=office.region,
        phone=office.phone,
        postid=office.postid,
    )


def offices_to_models(offices: Sequence[Office]) -> list[OfficeModel]:
    return [office_to_model(office) for office in offices]


def overlap_to_model(overlap: CoverageOverlap) -> CoverageOverlapModel:
    return CoverageOverlapModel(
        id=overlap.id,
        layers=[layer.value for layer in overlap.layers],
        offices=offices_to_models(overlap.offices),
        overlapCenter=point_to_model(overlap.overlap_center),
        coveredAreas=list(overlap.covered_areas),
        overlapType=overlap.overlap_type.value,
    )


def coverage_analysis_to_response(analysis: CoverageAnalysis, metadata: dict | None = None) -> CoverageAnalysisResponse:
    return CoverageAnalysisResponse(
        overlaps=[overlap_to_model(overlap) for overlap in analysis.overlaps],
        totalCoverage=TotalCoverageModel(
            layerA=list(analysis.layer_a),
            layerB=list(analysis.layer_b),
            layerC=list(analysis.layer_c),
        ),
        metadata=metadata or {},
    )


def office_coverage_to_response(coverage: OfficeCoverage) -> OfficeCoverageResponse:
    return OfficeCoverageResponse(
        office=office_to_model(coverage.office),
        coveredAreas=list(coverage.covered_areas),
        overlappingOffices=offices_to_models(coverage.overlapping_offices),
    )


def _contained_to_models(entries: Sequence[ContainedOffice]) -> list[ContainedOfficeModel]:
    return [
        ContainedOfficeModel(
            office=office_to_model(entry.office),
            containingOffice=office_to_model(entry.containing_office),
            distanceKm=round(entry.distance_km, 3),
        )
        for entry in entries
    ]


def layer_b_categories_to_response(
    categories: LayerBCategories, policy: RadiusPolicy
) -> LayerBContainmentResponse:
    return LayerBContainmentResponse(
        policy=policy.value,
        withinLayerA=_contained_to_models(categories.within_layer_a),
        outsideLayerA=offices_to_models(categories.outside_layer_a),
    )


def layer_c_categories_to_response(
    categories: LayerCCategories, policy: RadiusPolicy
) -> LayerCContainmentResponse:
    return LayerCContainmentResponse(
        policy=policy.value,
        colocated=_contained_to_models(categories.colocated),
        withinLayerA=_contained_to_models(categories.within_layer_a),
        withinLayerB=_contained_to_models(categories.within_layer_b),
        outsideBoth=offices_to_models(categories.outside_both),
    )
