"""Application configuration and settings management."""

from pathlib import Path
from typing import Any, Literal

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="ADMINMAP_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Da Nang Administrative Coverage API"
    api_prefix: str = "/api"
    log_level: str = Field(default="INFO", description="Root logger level.")
    data_root: Path = Field(default=Path("data"), description="Root directory for static data files.")
    layer_a_file: Path = Field(
        default=Path("data/layers/layer-a.json"),
        description="Layer A fixture (district-level branch offices).",
    )
    layer_b_file: Path = Field(
        default=Path("data/layers/layer-b.json"),
        description="Layer B fixture (new commune/ward administrative centres).",
    )
    layer_c_file: Path = Field(
        default=Path("data/layers/layer-c.json"),
        description="Layer C fixture (post office reception points).",
    )
    boundaries_file: Path = Field(
        default=Path("data/boundaries/danang-wards.geojson"),
        description="Ward boundaries as GeoJSON or the viewer's native ward list.",
    )
    layer_a_urban_reception_radius_km: float = Field(default=2.5, ge=0.0)
    layer_a_suburban_reception_radius_km: float = Field(default=5.0, ge=0.0)
    layer_a_urban_management_radius_km: float = Field(default=5.0, ge=0.0)
    layer_a_suburban_management_radius_km: float = Field(default=10.0, ge=0.0)
    layer_b_radius_km: float = Field(default=5.0, ge=0.0)
    layer_c_radius_km: float = Field(default=5.0, ge=0.0)
    default_radius_policy: Literal["reception", "management"] = Field(
        default="reception",
        description="Which Layer A radius governs coverage when a request does not say.",
    )
    default_clustering_method: Literal["greedy", "components"] = Field(
        default="greedy",
        description="Overlap clustering used when a request does not say.",
    )
    location_tolerance_degrees: float = Field(
        default=0.001,
        ge=0.0,
        description="Two offices closer than this in both lat and lng are treated as the same place.",
    )
    frontend_allowed_origins: tuple[str, ...] = Field(
        default=(
            "http://localhost:5173",
            "http://127.0.0.1:5173",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    @field_validator("data_root", "layer_a_file", "layer_b_file", "layer_c_file", "boundaries_file", mode="before")
    @classmethod
    def _expand_path(cls, value: Any) -> Path:
        path_value = value if isinstance(value, Path) else Path(str(value))
        return path_value.expanduser().resolve()

    @field_validator("frontend_allowed_origins", mode="before")
    @classmethod
    def _parse_str_tuple_from_env(cls, value: Any) -> tuple[str, ...]:
        """Parse string tuple from environment variable (comma-separated or JSON array)."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(str(item) for item in value)
        if isinstance(value, str):
            try:
                parsed = json.loads(value)
                if isinstance(parsed, list):
                    return tuple(str(item) for item in parsed)
            except (json.JSONDecodeError, TypeError):
                pass
            if "," in value:
                return tuple(item.strip() for item in value.split(",") if item.strip())
            if value.strip():
                return (value.strip(),)
        return tuple()


settings = Settings()
