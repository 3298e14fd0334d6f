"""High-level orchestration for coverage requests."""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from ...config import settings
from ...data.boundaries_repository import load_boundaries
from ...data.offices_repository import apply_office_edits, find_office, load_all_offices, load_layer_offices
from ...models.domain import Boundary, Layer, LayerBCategories, LayerCCategories, Office, RadiusPolicy
from ...schemas.coverage import CoverageAnalysisResponse, CoverageRequest, OfficeCoverageResponse
from ..geospatial import validate_boundaries, validate_offices
from ..outputs.formatter import coverage_analysis_to_response, office_coverage_to_response
from .analysis import analyze_coverage, office_coverage
from .clustering import get_clustering_strategy
from .containment import categorize_layer_b_offices, categorize_layer_c_offices

logger = logging.getLogger(__name__)


def resolve_policy(value: Optional[str]) -> RadiusPolicy:
    return RadiusPolicy(value or settings.default_radius_policy)


def _resolve_offices(payload: CoverageRequest) -> tuple[Office, ...]:
    layers = [Layer(layer) for layer in payload.layers] if payload.layers is not None else None
    if payload.offices is not None:
        base = tuple(office.to_domain() for office in payload.offices)
    else:
        base = load_all_offices(layers)

    overrides = [office.to_domain() for office in payload.overrides]
    if layers is not None:
        # Edits to hidden layers must not leak back in as custom offices.
        overrides = [office for office in overrides if office.layer in layers]
    return apply_office_edits(
        base,
        overrides=overrides,
        excluded_ids=payload.excludedOfficeIds,
    )


def _resolve_boundaries(payload: CoverageRequest) -> tuple[Boundary, ...]:
    if payload.boundaries is not None:
        return tuple(boundary.to_domain() for boundary in payload.boundaries)
    return load_boundaries()


def process_coverage_request(payload: CoverageRequest) -> CoverageAnalysisResponse:
    offices = _resolve_offices(payload)
    boundaries = _resolve_boundaries(payload)
    validate_offices(offices)
    validate_boundaries(boundaries)

    policy = resolve_policy(payload.policy)
    method = payload.clustering or settings.default_clustering_method
    strategy = get_clustering_strategy(method)

    logger.info(
        f"Analyzing coverage for {len(offices)} offices over {len(boundaries)} boundaries "
        f"(policy={policy.value}, clustering={strategy.name})"
    )
    analysis = analyze_coverage(offices, boundaries, policy=policy, strategy=strategy)
    logger.info(f"Found {len(analysis.overlaps)} overlap clusters")

    metadata = {
        "policy": policy.value,
        "clustering": strategy.name,
        "office_count": len(offices),
        "boundary_count": len(boundaries),
        "office_counts_by_layer": {
            layer.value: sum(1 for office in offices if office.layer is layer) for layer in Layer
        },
    }
    return coverage_analysis_to_response(analysis, metadata)


def process_office_coverage(office_id: str, policy: Optional[str] = None) -> OfficeCoverageResponse:
    offices = load_all_offices()
    office = find_office(offices, office_id)
    coverage = office_coverage(office, offices, load_boundaries(), resolve_policy(policy))
    return office_coverage_to_response(coverage)


def categorize_fixture_layer_b(policy: RadiusPolicy) -> LayerBCategories:
    return categorize_layer_b_offices(
        load_layer_offices(Layer.B),
        load_layer_offices(Layer.A),
        policy,
    )


def categorize_fixture_layer_c(policy: RadiusPolicy) -> LayerCCategories:
    return categorize_layer_c_offices(
        load_layer_offices(Layer.C),
        load_layer_offices(Layer.A),
        load_layer_offices(Layer.B),
        policy,
        tolerance=settings.location_tolerance_degrees,
    )


def list_offices(layer: Optional[str] = None) -> Sequence[Office]:
    if layer is None:
        return load_all_offices()
    return load_layer_offices(Layer(layer))
