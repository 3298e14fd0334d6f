"""Ward boundary endpoints."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query, status

from ...data.boundaries_repository import load_boundaries
from ...data.errors import ReferenceDataError
from ...models.domain import Point
from ...schemas.coverage import BoundaryLocateResponse, PointModel
from ...services.geospatial import locate_boundary

router = APIRouter(prefix="/boundaries", tags=["boundaries"])


@router.get("", status_code=status.HTTP_200_OK)
def list_boundaries() -> dict:
    try:
        boundaries = load_boundaries()
    except (FileNotFoundError, ReferenceDataError) as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
    return {
        "count": len(boundaries),
        "wards": [boundary.name for boundary in boundaries],
    }


@router.get("/locate", response_model=BoundaryLocateResponse)
def locate(
    lat: float = Query(..., ge=-90.0, le=90.0),
    lng: float = Query(..., ge=-180.0, le=180.0),
) -> BoundaryLocateResponse:
    """Return the ward containing the given point."""
    try:
        boundaries = load_boundaries()
    except (FileNotFoundError, ReferenceDataError) as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc

    boundary = locate_boundary(Point(lat, lng), boundaries)
    if boundary is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No ward contains ({lat}, {lng}).",
        )
    return BoundaryLocateResponse(ward=boundary.name, location=PointModel(lat=lat, lng=lng))
