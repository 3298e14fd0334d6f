"""API routes for coverage analysis."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status

from ...data.errors import ReferenceDataError
from ...schemas.coverage import CoverageAnalysisResponse, CoverageRequest
from ...services.coverage.service import process_coverage_request

router = APIRouter(prefix="/coverage", tags=["coverage"])


@router.post("/analyze", response_model=CoverageAnalysisResponse, status_code=status.HTTP_200_OK)
def analyze(payload: CoverageRequest) -> CoverageAnalysisResponse:
    """Compute covered wards per layer and the overlap clusters of the office set.

    Offices and boundaries missing from the payload are loaded from the
    configured fixtures; overrides and exclusions are applied on top.
    """
    try:
        return process_coverage_request(payload)
    except (FileNotFoundError, ReferenceDataError) as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"Reference data unavailable: {exc}",
        ) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logging.exception(f"Error analyzing coverage: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to analyze coverage: {str(exc)}",
        ) from exc
