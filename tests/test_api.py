"""HTTP-level tests for the FastAPI routes."""

import pytest
from fastapi.testclient import TestClient

from data_store import DataLoadError
from main import app


@pytest.fixture()
def client(store):
    app.state.store = store
    yield TestClient(app)
    del app.state.store


def test_health_reports_counts(client, store):
    response = client.get("/api/health")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert body["ready"] is True
    assert body["dataLoaded"] == store.counts()


def test_health_before_load_reports_not_ready():
    response = TestClient(app).get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"status": "loading", "ready": False, "dataLoaded": {}}


def test_data_routes_unavailable_before_load():
    assert TestClient(app).get("/api/migration-flows").status_code == 503


def test_migration_flows_defaults(client):
    flows = client.get("/api/migration-flows").json()
    assert len(flows) == 100
    values = [flow["value"] for flow in flows]
    assert values == sorted(values, reverse=True)


def test_migration_flows_filters(client):
    params = {"demographic": "White", "ageGroup": "65+", "gender": "female", "minFlow": "1000"}
    flows = client.get("/api/migration-flows", params=params).json()
    assert flows
    for flow in flows:
        assert (flow["demographic"], flow["ageGroup"], flow["gender"]) == ("White", "65+", "female")
        assert flow["value"] >= 1000


def test_malformed_threshold_uses_default(client):
    baseline = client.get("/api/migration-flows").json()
    assert client.get("/api/migration-flows", params={"minFlow": "lots"}).json() == baseline

    policies = client.get("/api/policies", params={"minStringency": "strict"}).json()
    assert len(policies) == 1000


def test_policies_min_stringency(client):
    policies = client.get("/api/policies", params={"state": "Texas", "minStringency": "70"}).json()
    for policy in policies:
        assert policy["state"] == "Texas"
        assert policy["lockdownLevel"] == "strict"
        assert policy["schoolClosure"] is True


@pytest.mark.parametrize("route", ["/api/infodemic", "/api/resilience", "/api/emotions"])
def test_category_routes_filter_by_state_and_quarter(client, route):
    records = client.get(route, params={"state": "Maine", "quarter": "2020-Q3"}).json()
    assert len(records) == 1
    assert (records[0]["state"], records[0]["quarter"]) == ("Maine", "2020-Q3")

    assert client.get(route, params={"state": "Atlantis"}).json() == []


def test_state_summary_route(client):
    summary = client.get("/api/state-summary", params={"demographic": "White"}).json()
    assert len(summary) == 50
    assert summary["Utah"]["abbr"] == "UT"

    assert client.get("/api/state-summary", params={"occupation": "Astronauts"}).json() == {}


def test_time_series_route_placeholder(client):
    body = client.get("/api/time-series", params={"demographic": "Unknown", "ageGroup": "0-9"}).json()
    assert body == {"demographic": "Unknown", "ageGroup": "0-9", "occupation": "All Occupations", "data": []}


def test_demographics_route(client):
    body = client.get("/api/demographics").json()
    assert set(body) == {"byDemographic", "byAge", "byOccupation", "byGender"}
    assert set(body["byGender"]) == {"male", "female"}


def test_network_routes(client):
    network = client.get("/api/3d-network").json()
    assert len(network["nodes"]) == 50
    assert len(network["edges"]) <= 150

    causality = client.get("/api/causality-network").json()
    assert set(causality) == {"events", "migrationSurges", "links"}


def test_static_reads(client):
    assert len(client.get("/api/states").json()) == 50
    quarters = client.get("/api/quarters").json()
    assert quarters[0] == "2019-Q1" and quarters[-1] == "2023-Q4"


def test_startup_loads_store_from_data_dir(data_dir, monkeypatch):
    monkeypatch.setenv("MIGRATION_DATA_DIR", str(data_dir))
    with TestClient(app) as client:
        assert client.get("/api/health").json()["ready"] is True
    del app.state.store


def test_startup_fails_without_artifacts(tmp_path, monkeypatch):
    monkeypatch.setenv("MIGRATION_DATA_DIR", str(tmp_path))
    with pytest.raises(DataLoadError):
        with TestClient(app):
            pass
