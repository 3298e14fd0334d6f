"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

from ...config import settings
from ...models.domain import Layer

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


def _get_loaders():
    """Lazy import to avoid startup failures."""
    from ...data.boundaries_repository import load_boundaries
    from ...data.offices_repository import load_layer_offices

    return load_layer_offices, load_boundaries


@router.get("/health/data", status_code=status.HTTP_200_OK)
def check_data() -> dict:
    """Report which reference fixtures load and how many records they hold."""
    load_layer_offices, load_boundaries = _get_loaders()

    report: dict[str, dict] = {}
    for layer in Layer:
        try:
            report[f"layer_{layer.value.lower()}"] = {"available": True, "count": len(load_layer_offices(layer))}
        except (FileNotFoundError, ValueError) as exc:
            report[f"layer_{layer.value.lower()}"] = {"available": False, "error": str(exc)}
    try:
        report["boundaries"] = {"available": True, "count": len(load_boundaries())}
    except (FileNotFoundError, ValueError) as exc:
        report["boundaries"] = {"available": False, "error": str(exc)}

    return {
        "healthy": all(entry["available"] for entry in report.values()),
        "data_root": str(settings.data_root),
        "sources": report,
    }
