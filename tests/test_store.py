import json

import pytest
import requests

from hmpi_dashboard.core.config import Settings
from hmpi_dashboard.data.repository import load_projects
from hmpi_dashboard.data.store import StoreError, SupabaseStore


class StubResponse:
    def __init__(self, status_code=200, body=None):
        self.status_code = status_code
        self.content = b"" if body is None else json.dumps(body).encode("utf-8")
        self._body = body

    def json(self):
        if self._body is None:
            raise ValueError("no body")
        return self._body


class StubSession:
    def __init__(self, response=None, exc=None):
        self.headers = {}
        self.calls = []
        self.response = response or StubResponse(200, [])
        self.exc = exc

    def request(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        if self.exc is not None:
            raise self.exc
        return self.response


def test_select_builds_postgrest_request():
    session = StubSession(StubResponse(200, [{"id": "p1"}]))
    store = SupabaseStore("https://demo.supabase.co/", "secret", timeout=5.0, session=session)
    rows = store.select("projects")
    assert rows == [{"id": "p1"}]
    method, url, kwargs = session.calls[0]
    assert method == "GET"
    assert url == "https://demo.supabase.co/rest/v1/projects"
    assert kwargs["params"] == {"select": "*"}
    assert kwargs["timeout"] == 5.0
    assert session.headers["apikey"] == "secret"
    assert session.headers["Authorization"] == "Bearer secret"


def test_insert_requests_representation():
    session = StubSession(StubResponse(201, [{"id": "s9", "metal": "Lead"}]))
    store = SupabaseStore("https://demo.supabase.co", "k", session=session)
    rows = store.insert("samples", {"metal": "Lead"})
    assert rows[0]["id"] == "s9"
    method, _, kwargs = session.calls[0]
    assert method == "POST"
    assert kwargs["json"] == [{"metal": "Lead"}]
    assert kwargs["headers"] == {"Prefer": "return=representation"}


def test_update_filters_by_equality():
    session = StubSession(StubResponse(200, [{"id": "a1", "acknowledged": True}]))
    store = SupabaseStore("https://demo.supabase.co", "k", session=session)
    store.update("alerts", {"acknowledged": True}, {"id": "a1"})
    method, _, kwargs = session.calls[0]
    assert method == "PATCH"
    assert kwargs["params"] == {"id": "eq.a1"}
    assert kwargs["json"] == {"acknowledged": True}


def test_http_error_becomes_store_error():
    body = {"message": "duplicate key", "code": "23505", "details": "Key (id) exists"}
    store = SupabaseStore("https://demo.supabase.co", "k", session=StubSession(StubResponse(409, body)))
    with pytest.raises(StoreError) as excinfo:
        store.insert("projects", {"id": "p1"})
    assert excinfo.value.message == "duplicate key"
    assert excinfo.value.code == "23505"
    assert excinfo.value.status == 409


def test_transport_error_becomes_store_error():
    session = StubSession(exc=requests.ConnectionError("boom"))
    store = SupabaseStore("https://demo.supabase.co", "k", session=session)
    with pytest.raises(StoreError) as excinfo:
        store.select("alerts")
    assert excinfo.value.status is None


def test_empty_body_returns_empty_list():
    store = SupabaseStore("https://demo.supabase.co", "k", session=StubSession(StubResponse(204)))
    assert store.update("alerts", {"acknowledged": True}, {"id": "x"}) == []


def test_from_settings_requires_credentials():
    with pytest.raises(RuntimeError):
        SupabaseStore.from_settings(Settings(supabase_url="", supabase_key=""))


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("SUPABASE_URL", "https://demo.supabase.co")
    monkeypatch.setenv("SUPABASE_KEY", "abc")
    monkeypatch.setenv("STORE_TIMEOUT", "3.5")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    settings = Settings.from_env()
    assert settings.supabase_url == "https://demo.supabase.co"
    assert settings.store_timeout == 3.5
    assert settings.log_level == "DEBUG"


class TextResponse:
    def __init__(self, status_code, text):
        self.status_code = status_code
        self.content = text.encode("utf-8")

    def json(self):
        raise ValueError("Expecting value")


def test_non_json_success_body_becomes_store_error():
    store = SupabaseStore("https://demo.supabase.co", "k", session=StubSession(TextResponse(200, "<html>proxy</html>")))
    with pytest.raises(StoreError) as excinfo:
        store.select("projects")
    assert excinfo.value.status == 200


def test_non_json_success_body_degrades_reads():
    store = SupabaseStore("https://demo.supabase.co", "k", session=StubSession(TextResponse(200, "oops")))
    result = load_projects(store)
    assert not result.ok
    assert result.records == []
