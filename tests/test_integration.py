import math

import pytest
from fastapi.testclient import TestClient

from adminmap.data.errors import ReferenceDataError
from adminmap.main import create_app
from adminmap.models.domain import Boundary, Layer, Office, Point
from adminmap.schemas.coverage import CoverageRequest
from adminmap.services.geospatial import EARTH_RADIUS_KM, InvalidGeometryError

KM_PER_DEGREE = EARTH_RADIUS_KM * math.pi / 180
ORIGIN = Point(16.05, 108.2)


def _north(km: float) -> Point:
    return Point(ORIGIN.lat + km / KM_PER_DEGREE, ORIGIN.lng)


def _office(office_id: str, layer: Layer, north_km: float, radius: float, **kwargs) -> Office:
    return Office(
        id=office_id,
        name=f"Office {office_id}",
        location=_north(north_km),
        layer=layer,
        radius=radius,
        **kwargs,
    )


def _ward(name: str, north_km: float) -> Boundary:
    ring = (_north(north_km - 0.2), _north(north_km + 0.2), Point(_north(north_km).lat, ORIGIN.lng + 0.002))
    return Boundary(name=name, rings=(ring,))


def _office_payload(office: Office) -> dict:
    return {
        "id": office.id,
        "name": office.name,
        "location": {"lat": office.location.lat, "lng": office.location.lng},
        "layer": office.layer.value,
        "radius": office.radius,
        "receptionRadius": office.reception_radius,
        "managementRadius": office.management_radius,
    }


def _ward_payload(boundary: Boundary) -> dict:
    return {
        "name": boundary.name,
        "rings": [[{"lat": p.lat, "lng": p.lng} for p in ring] for ring in boundary.rings],
    }


FIXTURE_OFFICES = (
    _office("layer-a-0", Layer.A, 0.0, 2.5, reception_radius=2.5, management_radius=5.0),
    _office("layer-b-0", Layer.B, 4.0, 5.0),
    _office("layer-b-1", Layer.B, 30.0, 5.0),
    _office("layer-c-0", Layer.C, 1.0, 5.0),
)
FIXTURE_WARDS = (_ward("Hải Châu", 0.0), _ward("Thanh Khê", 4.0), _ward("Liên Chiểu", 30.0))


@pytest.fixture
def api_client() -> TestClient:
    return TestClient(create_app())


@pytest.fixture
def fixture_data(monkeypatch: pytest.MonkeyPatch):
    from adminmap.api.routes import boundaries as boundaries_routes
    from adminmap.services.coverage import service as coverage_service

    calls: dict[str, object] = {}

    def fake_load_all_offices(layers=None):
        calls["layers"] = layers
        if layers is None:
            return FIXTURE_OFFICES
        return tuple(office for office in FIXTURE_OFFICES if office.layer in set(layers))

    def fake_load_layer_offices(layer, source=None):
        return tuple(office for office in FIXTURE_OFFICES if office.layer is layer)

    monkeypatch.setattr(coverage_service, "load_all_offices", fake_load_all_offices)
    monkeypatch.setattr(coverage_service, "load_layer_offices", fake_load_layer_offices)
    monkeypatch.setattr(coverage_service, "load_boundaries", lambda: FIXTURE_WARDS)
    monkeypatch.setattr(boundaries_routes, "load_boundaries", lambda: FIXTURE_WARDS)
    return calls


def test_health(api_client: TestClient):
    response = api_client.get("/api/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_analyze_with_explicit_offices_and_boundaries(api_client: TestClient):
    offices = [_office("a1", Layer.A, 0.0, 7.0), _office("a2", Layer.A, 10.0, 7.0)]
    wards = [_ward("Hải Châu", 0.0), _ward("Sơn Trà", 10.0)]

    response = api_client.post(
        "/api/coverage/analyze",
        json={
            "offices": [_office_payload(office) for office in offices],
            "boundaries": [_ward_payload(ward) for ward in wards],
        },
    )

    assert response.status_code == 200
    payload = response.json()
    assert len(payload["overlaps"]) == 1
    overlap = payload["overlaps"][0]
    assert overlap["id"] == "overlap-a1-a2"
    assert overlap["layers"] == ["A"]
    assert [office["id"] for office in overlap["offices"]] == ["a1", "a2"]
    assert overlap["overlapType"] == "partial"
    assert overlap["coveredAreas"] == ["Hải Châu", "Sơn Trà"]
    assert set(overlap["overlapCenter"]) == {"lat", "lng"}
    assert payload["totalCoverage"] == {"layerA": ["Hải Châu", "Sơn Trà"], "layerB": [], "layerC": []}
    assert payload["metadata"]["policy"] == "reception"
    assert payload["metadata"]["clustering"] == "greedy"
    assert payload["metadata"]["office_count"] == 2


def test_analyze_with_empty_offices(api_client: TestClient):
    response = api_client.post(
        "/api/coverage/analyze",
        json={"offices": [], "boundaries": [_ward_payload(_ward("Hải Châu", 0.0))]},
    )

    assert response.status_code == 200
    payload = response.json()
    assert payload["overlaps"] == []
    assert payload["totalCoverage"] == {"layerA": [], "layerB": [], "layerC": []}


def test_analyze_loads_fixtures_and_applies_edits(api_client: TestClient, fixture_data):
    response = api_client.post(
        "/api/coverage/analyze",
        json={
            "layers": ["A", "B"],
            "excludedOfficeIds": ["layer-b-1"],
            "overrides": [_office_payload(_office("custom-1", Layer.B, 31.0, 2.0))],
            "policy": "management",
            "clustering": "components",
        },
    )

    assert response.status_code == 200
    payload = response.json()
    assert fixture_data["layers"] == [Layer.A, Layer.B]
    assert payload["metadata"]["office_count"] == 3
    assert payload["metadata"]["office_counts_by_layer"] == {"A": 1, "B": 2, "C": 0}
    assert payload["metadata"]["clustering"] == "components"
    assert [[office["id"] for office in overlap["offices"]] for overlap in payload["overlaps"]] == [
        ["layer-a-0", "layer-b-0"]
    ]
    assert payload["totalCoverage"]["layerB"] == ["Hải Châu", "Thanh Khê", "Liên Chiểu"]


def test_analyze_ignores_overrides_for_hidden_layers(api_client: TestClient, fixture_data):
    response = api_client.post(
        "/api/coverage/analyze",
        json={
            "layers": ["A"],
            "boundaries": [],
            "overrides": [
                _office_payload(_office("layer-c-0", Layer.C, 0.5, 5.0)),
                _office_payload(_office("custom-b", Layer.B, 0.2, 5.0)),
            ],
        },
    )

    assert response.status_code == 200
    payload = response.json()
    assert payload["metadata"]["office_counts_by_layer"] == {"A": 1, "B": 0, "C": 0}
    assert payload["overlaps"] == []


def test_analyze_reports_missing_reference_data(api_client: TestClient, monkeypatch: pytest.MonkeyPatch):
    from adminmap.services.coverage import service as coverage_service

    def missing(*args, **kwargs):
        raise FileNotFoundError("data/boundaries/danang-wards.geojson")

    monkeypatch.setattr(coverage_service, "load_boundaries", missing)

    response = api_client.post("/api/coverage/analyze", json={"offices": []})

    assert response.status_code == 503


def test_analyze_reports_broken_reference_data_as_unavailable(
    api_client: TestClient, monkeypatch: pytest.MonkeyPatch
):
    from adminmap.api.routes import boundaries as boundaries_routes
    from adminmap.services.coverage import service as coverage_service

    def broken(*args, **kwargs):
        raise ReferenceDataError("Unsupported boundary geometry 'Point'.")

    monkeypatch.setattr(coverage_service, "load_boundaries", broken)
    monkeypatch.setattr(boundaries_routes, "load_boundaries", broken)

    assert api_client.post("/api/coverage/analyze", json={"offices": []}).status_code == 503
    assert api_client.get("/api/boundaries").status_code == 503


def test_analyze_rejects_negative_radius(api_client: TestClient):
    office = _office_payload(_office("a1", Layer.A, 0.0, 1.0))
    office["radius"] = -1

    response = api_client.post("/api/coverage/analyze", json={"offices": [office], "boundaries": []})

    assert response.status_code == 422


def test_process_coverage_request_rejects_non_finite_coordinates():
    from adminmap.services.coverage.service import process_coverage_request

    payload = CoverageRequest(
        offices=[
            {
                "id": "a1",
                "name": "Broken",
                "location": {"lat": float("nan"), "lng": 108.2},
                "layer": "A",
                "radius": 5.0,
            }
        ],
        boundaries=[],
    )

    with pytest.raises(InvalidGeometryError):
        process_coverage_request(payload)


def test_list_offices_by_layer(api_client: TestClient, fixture_data):
    response = api_client.get("/api/offices", params={"layer": "B"})

    assert response.status_code == 200
    assert [office["id"] for office in response.json()] == ["layer-b-0", "layer-b-1"]


def test_office_coverage_endpoint(api_client: TestClient, fixture_data):
    response = api_client.get("/api/offices/layer-a-0/coverage")

    assert response.status_code == 200
    payload = response.json()
    assert payload["office"]["id"] == "layer-a-0"
    assert payload["coveredAreas"] == ["Hải Châu"]
    assert [office["id"] for office in payload["overlappingOffices"]] == ["layer-b-0", "layer-c-0"]


def test_office_coverage_unknown_office(api_client: TestClient, fixture_data):
    response = api_client.get("/api/offices/nope/coverage")

    assert response.status_code == 404


def test_layer_b_containment_endpoint(api_client: TestClient, fixture_data):
    reception = api_client.get("/api/offices/containment/layer-b").json()
    management = api_client.get("/api/offices/containment/layer-b", params={"policy": "management"}).json()

    assert reception["policy"] == "reception"
    assert reception["withinLayerA"] == []
    assert [entry["office"]["id"] for entry in management["withinLayerA"]] == ["layer-b-0"]
    assert management["withinLayerA"][0]["containingOffice"]["id"] == "layer-a-0"
    assert [office["id"] for office in management["outsideLayerA"]] == ["layer-b-1"]


def test_layer_c_containment_endpoint(api_client: TestClient, fixture_data):
    response = api_client.get("/api/offices/containment/layer-c")

    assert response.status_code == 200
    payload = response.json()
    assert [entry["office"]["id"] for entry in payload["withinLayerA"]] == ["layer-c-0"]
    assert payload["colocated"] == []
    assert payload["outsideBoth"] == []


def test_locate_boundary_endpoint(api_client: TestClient, fixture_data):
    inside = _north(4.0)

    found = api_client.get("/api/boundaries/locate", params={"lat": inside.lat, "lng": inside.lng + 0.0005})
    missing = api_client.get("/api/boundaries/locate", params={"lat": 10.0, "lng": 100.0})

    assert found.status_code == 200
    assert found.json()["ward"] == "Thanh Khê"
    assert missing.status_code == 404


def test_list_boundaries_endpoint(api_client: TestClient, fixture_data):
    response = api_client.get("/api/boundaries")

    assert response.json() == {"count": 3, "wards": ["Hải Châu", "Thanh Khê", "Liên Chiểu"]}
