"""Pydantic request/response models for coverage endpoints."""

from __future__ import annotations

from typing import Literal, Optional, Sequence

from pydantic import BaseModel, Field

from ..models.domain import Boundary, Layer, Office, Point

LayerName = Literal["A", "B", "C"]
PolicyName = Literal["reception", "management"]
ClusteringName = Literal["greedy", "components"]


class PointModel(BaseModel):
    lat: float
    lng: float

    def to_domain(self) -> Point:
        return Point(self.lat, self.lng)


class OfficeModel(BaseModel):
    id: str
    name: str
    location: PointModel
    layer: LayerName
    radius: float = Field(..., ge=0.0, description="Primary service radius in kilometres.")
    receptionRadius: Optional[float] = Field(default=None, ge=0.0, description="Layer A only.")
    managementRadius: Optional[float] = Field(default=None, ge=0.0, description="Layer A only.")
    type: Optional[Literal["urban", "suburban"]] = None
    address: Optional[str] = None
    region: Optional[str] = None
    phone: Optional[str] = None
    postid: Optional[str] = None

    def to_domain(self) -> Office:
        return Office(
            id=self.id,
            name=self.name,
            location=self.location.to_domain(),
            layer=Layer(self.layer),
            radius=self.radius,
            reception_radius=self.receptionRadius,
            management_radius=self.managementRadius,
            area_type=self.type,
            address=self.address,
            region=self.region,
            phone=self.phone,
            postid=self.postid,
        )


class BoundaryModel(BaseModel):
    name: str
    rings: Sequence[Sequence[PointModel]] = Field(
        default_factory=list,
        description="One or more closed rings of the ward boundary.",
    )

    def to_domain(self) -> Boundary:
        return Boundary(
            name=self.name,
            rings=tuple(tuple(point.to_domain() for point in ring) for ring in self.rings),
        )


class CoverageRequest(BaseModel):
    offices: Optional[Sequence[OfficeModel]] = Field(
        default=None,
        description="Explicit office set. Loaded from the layer fixtures when omitted.",
    )
    boundaries: Optional[Sequence[BoundaryModel]] = Field(
        default=None,
        description="Explicit ward boundaries. Loaded from the boundary file when omitted.",
    )
    layers: Optional[Sequence[LayerName]] = Field(
        default=None,
        description="Restrict fixture offices to these layers.",
    )
    overrides: Sequence[OfficeModel] = Field(
        default_factory=list,
        description="Edited or custom offices replacing/extending the office set.",
    )
    excludedOfficeIds: Sequence[str] = Field(default_factory=list, description="Offices hidden from the analysis.")
    policy: Optional[PolicyName] = Field(default=None, description="Governing radius for Layer A offices.")
    clustering: Optional[ClusteringName] = Field(default=None, description="Overlap clustering method.")


class CoverageOverlapModel(BaseModel):
    id: str
    layers: list[LayerName]
    offices: list[OfficeModel]
    overlapCenter: PointModel
    coveredAreas: list[str]
    overlapType: Literal["partial", "complete"]


class TotalCoverageModel(BaseModel):
    layerA: list[str]
    layerB: list[str]
    layerC: list[str]


class CoverageAnalysisResponse(BaseModel):
    overlaps: list[CoverageOverlapModel]
    totalCoverage: TotalCoverageModel
    metadata: dict


class OfficeCoverageResponse(BaseModel):
    office: OfficeModel
    coveredAreas: list[str]
    overlappingOffices: list[OfficeModel]


class ContainedOfficeModel(BaseModel):
    office: OfficeModel
    containingOffice: OfficeModel
    distanceKm: float


class LayerBContainmentResponse(BaseModel):
    policy: PolicyName
    withinLayerA: list[ContainedOfficeModel]
    outsideLayerA: list[OfficeModel]


class LayerCContainmentResponse(BaseModel):
    policy: PolicyName
    colocated: list[ContainedOfficeModel]
    withinLayerA: list[ContainedOfficeModel]
    withinLayerB: list[ContainedOfficeModel]
    outsideBoth: list[OfficeModel]


class BoundaryLocateResponse(BaseModel):
    ward: str
    location: PointModel
