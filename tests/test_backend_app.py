from pathlib import Path

import pytest
from fastapi.testclient import TestClient

import backend_app


@pytest.fixture
def client(store, monkeypatch):
    monkeypatch.setattr(backend_app, "STORE", store)
    return TestClient(backend_app.app)


def test_index_without_static_file(tmp_path, monkeypatch, client):
    monkeypatch.setattr(backend_app, "STATIC_PATH", Path(tmp_path) / "web")
    r = client.get("/")
    assert r.status_code == 200
    assert r.json()["ok"] is True


def test_index_serves_file(tmp_path, monkeypatch, client):
    webdir = Path(tmp_path) / "web"
    webdir.mkdir()
    (webdir / "index.html").write_text("<html><body>ok</body></html>", encoding="utf-8")
    monkeypatch.setattr(backend_app, "STATIC_PATH", webdir)
    r = client.get("/")
    assert r.status_code == 200
    assert b"ok" in r.content


def test_project_analytics(client):
    r = client.get("/api/projects/p1/analytics")
    assert r.status_code == 200
    data = r.json()
    assert data["project"]["name"] == "Ganga Basin"
    assert data["sampleCount"] == 3
    values = {d["name"]: d["value"] for d in data["riskChartData"]}
    assert values == {"Safe": 0, "Low Risk": 2, "Moderate Risk": 0, "High Risk": 0, "Very High Risk": 1}
    assert data["metalChartData"] == [
        {"name": "Lead", "count": 2, "avgHMPI": 15.5},
        {"name": "Arsenic", "count": 1, "avgHMPI": 120.0},
    ]
    assert data["timeSeriesData"] == [
        {"date": "2025-01-01", "hmpi": 120.0},
        {"date": "2025-01-15", "hmpi": 10.0},
        {"date": "2025-02-01", "hmpi": 21.0},
    ]


def test_project_analytics_not_found(client):
    r = client.get("/api/projects/missing/analytics")
    assert r.status_code == 404
    assert r.json()["message"] == "Project not found"


def test_analytics_when_samples_fail_to_load(client, store):
    store.failing.add("samples")
    r = client.get("/api/projects/p1/analytics")
    assert r.status_code == 200
    assert r.json()["sampleCount"] == 0


def test_list_endpoints(client):
    assert len(client.get("/api/projects").json()["projects"]) == 2
    assert len(client.get("/api/samples").json()["samples"]) == 4
    assert [s["id"] for s in client.get("/api/samples?project_id=p2").json()["samples"]] == ["s4"]
    assert client.get("/api/alerts").json()["alerts"][0]["id"] == "a1"
    assert client.get("/api/policies").json()["policies"][0]["name"] == "Lead limit"


def test_missing_numbers_serialize_as_null(client, store):
    store.tables["samples"].append(
        {"id": "s5", "projectId": "p2", "metal": "Lead", "Si": None, "Ii": None, "Mi": 0.5,
         "latitude": None, "date": "2025-03-01"}
    )
    store.tables["policies"].append({"id": "pol2", "name": "Zinc limit", "metal": "Zinc", "threshold": None})

    r = client.get("/api/samples?project_id=p2")
    assert r.status_code == 200
    s5 = r.json()["samples"][-1]
    assert s5["Si"] is None and s5["Ii"] is None and s5["latitude"] is None

    r = client.get("/api/policies")
    assert r.status_code == 200
    assert r.json()["policies"][-1]["threshold"] is None

    r = client.get("/api/projects/p2/analytics")
    assert r.status_code == 200
    assert {"date": "2025-03-01", "hmpi": None} in r.json()["timeSeriesData"]


def test_reads_degrade_to_empty(client, store):
    store.failing.add("projects")
    r = client.get("/api/projects")
    assert r.status_code == 200
    assert r.json() == {"projects": []}


def test_create_endpoints(client):
    r = client.post("/api/projects", json={"name": "Hindon", "policyMakerThresholds": {"HMPI": 40}})
    assert r.status_code == 201
    assert r.json()["id"]

    r = client.post("/api/samples", json={"projectId": "p2", "metal": "Lead", "Si": 0.1, "Ii": 0.3, "Mi": 0.7})
    assert r.status_code == 201
    assert r.json()["metal"] == "Lead"

    r = client.post("/api/policies", json={"name": "As", "metal": "Arsenic", "threshold": 0.01})
    assert r.status_code == 201
    assert r.json()["threshold"] == 0.01


def test_write_error_is_502(client, store):
    store.failing.add("policies")
    r = client.post("/api/policies", json={"name": "As"})
    assert r.status_code == 502
    assert r.json()["ok"] is False
    assert r.json()["code"] == "PGRST000"


def test_acknowledge_alert_twice(client):
    first = client.post("/api/alerts/a1/acknowledge")
    second = client.post("/api/alerts/a1/acknowledge")
    assert first.status_code == 200 and second.status_code == 200
    assert second.json()["acknowledged"] is True
    assert client.post("/api/alerts/zzz/acknowledge").status_code == 404


def test_update_thresholds(client):
    r = client.put("/api/projects/p1/thresholds", json={"HMPI": 90})
    assert r.status_code == 200
    assert r.json()["policyMakerThresholds"] == {"HMPI": 90}
    assert client.put("/api/projects/nope/thresholds", json={"HMPI": 1}).status_code == 404


def test_evaluate_alerts(client, store):
    r = client.post("/api/projects/p1/alerts/evaluate")
    assert r.status_code == 200
    data = r.json()
    assert data["persisted"] is False
    # s2 ya tiene la alerta abierta a1
    assert [a["sampleId"] for a in data["alerts"]] == ["s1"]
    assert len(store.tables["alerts"]) == 1

    r = client.post("/api/projects/p1/alerts/evaluate?persist=true")
    assert r.status_code == 200
    assert all(a["id"] for a in r.json()["alerts"])
    assert len(store.tables["alerts"]) == 2


def test_evaluate_alerts_persist_is_idempotent(client, store):
    client.post("/api/projects/p1/alerts/evaluate?persist=true")
    r = client.post("/api/projects/p1/alerts/evaluate?persist=true")
    assert r.json()["alerts"] == []
    assert len(store.tables["alerts"]) == 2

    # una alerta reconocida deja de bloquear la siguiente evaluación
    client.post("/api/alerts/a1/acknowledge")
    r = client.post("/api/projects/p1/alerts/evaluate")
    assert [a["sampleId"] for a in r.json()["alerts"]] == ["s2"]


def test_template(client):
    data = client.get("/api/template").json()
    assert len(data["headers"]) == 11
    assert data["sampleData"][1][6] == "Arsenic"
