"""Office listing, per-office coverage and layer containment endpoints."""

from __future__ import annotations

import logging
from typing import Literal, Optional

from fastapi import APIRouter, HTTPException, Query, status

from ...data.errors import ReferenceDataError
from ...schemas.coverage import (
    LayerBContainmentResponse,
    LayerCContainmentResponse,
    OfficeCoverageResponse,
    OfficeModel,
)
from ...services.coverage.service import (
    categorize_fixture_layer_b,
    categorize_fixture_layer_c,
    list_offices,
    process_office_coverage,
    resolve_policy,
)
from ...services.outputs.formatter import (
    layer_b_categories_to_response,
    layer_c_categories_to_response,
    offices_to_models,
)

router = APIRouter(prefix="/offices", tags=["offices"])


def _data_unavailable(exc: Exception) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail=f"Reference data unavailable: {exc}",
    )


@router.get("", response_model=list[OfficeModel])
def get_offices(
    layer: Optional[Literal["A", "B", "C"]] = Query(default=None, description="Only offices of this layer"),
) -> list[OfficeModel]:
    try:
        return offices_to_models(list_offices(layer))
    except (FileNotFoundError, ReferenceDataError) as exc:
        raise _data_unavailable(exc) from exc


@router.get("/containment/layer-b", response_model=LayerBContainmentResponse)
def layer_b_containment(
    policy: Optional[Literal["reception", "management"]] = Query(default=None),
) -> LayerBContainmentResponse:
    """Layer B offices that fall inside a Layer A circle, and those that do not."""
    resolved = resolve_policy(policy)
    try:
        return layer_b_categories_to_response(categorize_fixture_layer_b(resolved), resolved)
    except (FileNotFoundError, ReferenceDataError) as exc:
        raise _data_unavailable(exc) from exc


@router.get("/containment/layer-c", response_model=LayerCContainmentResponse)
def layer_c_containment(
    policy: Optional[Literal["reception", "management"]] = Query(default=None),
) -> LayerCContainmentResponse:
    resolved = resolve_policy(policy)
    try:
        return layer_c_categories_to_response(categorize_fixture_layer_c(resolved), resolved)
    except (FileNotFoundError, ReferenceDataError) as exc:
        raise _data_unavailable(exc) from exc


@router.get("/{office_id}/coverage", response_model=OfficeCoverageResponse)
def get_office_coverage(
    office_id: str,
    policy: Optional[Literal["reception", "management"]] = Query(default=None),
) -> OfficeCoverageResponse:
    """Wards covered by one office and the offices whose circles overlap it."""
    try:
        return process_office_coverage(office_id, policy)
    except KeyError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Office '{office_id}' not found.",
        ) from exc
    except (FileNotFoundError, ReferenceDataError) as exc:
        raise _data_unavailable(exc) from exc
    except Exception as exc:
        logging.exception(f"Error computing coverage for office {office_id}: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to compute office coverage: {str(exc)}",
        ) from exc
