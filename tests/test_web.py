from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from railey_listings.config import Settings
from railey_listings.repositories import MemoryStore
from railey_listings.services import (
    ChatResponder,
    DownstreamServiceError,
    ExtractionMalformed,
    ListingCache,
    get_fallback,
)
from railey_listings.web import main

from .conftest import FakeClock, FakeExtractor, FakeSource, raw


def _client(monkeypatch: pytest.MonkeyPatch, *results: object) -> tuple[TestClient, MemoryStore]:
    cache = ListingCache(FakeSource(), FakeExtractor(*results), clock=FakeClock())
    store = MemoryStore(cache)
    monkeypatch.setattr(main, "store", store)
    monkeypatch.setattr(main, "responder", ChatResponder(Settings(openai_api_key=None)))
    return TestClient(main.app), store


def test_properties_endpoint_serves_fallback_on_failure(monkeypatch: pytest.MonkeyPatch) -> None:
    client, _ = _client(monkeypatch, ExtractionMalformed("bad"))
    resp = client.get("/api/properties")
    assert resp.status_code == 200
    data = resp.json()
    assert len(data) == len(get_fallback())
    assert all(p["imageUrl"] for p in data)
    assert {"id", "title", "address", "price", "bedrooms", "bathrooms", "createdAt"} <= set(data[0])


def test_search_and_get_by_id(monkeypatch: pytest.MonkeyPatch) -> None:
    client, _ = _client(monkeypatch, ExtractionMalformed("bad"))
    resp = client.get("/api/properties/search", params={"q": "lake", "maxPrice": "400000"})
    ids = sorted(p["id"] for p in resp.json())
    assert ids == ["SAMPLE004"]

    assert client.get("/api/properties/search", params={"q": "lake", "maxPrice": ""}).status_code == 200
    assert client.get("/api/properties/SAMPLE001").json()["address"].startswith("123 Deep Creek")
    assert client.get("/api/properties/nope").status_code == 404


def test_scrape_success_replaces_store(monkeypatch: pytest.MonkeyPatch) -> None:
    client, store = _client(monkeypatch, [raw(mls_number="A")], [raw(mls_number="B"), raw(mls_number="C")])
    client.get("/api/properties")
    resp = client.post("/api/scrape-railey")
    body = resp.json()
    assert resp.status_code == 200
    assert body["success"] is True
    assert body["properties_count"] == 2
    assert "error" not in body
    assert sorted(p.id for p in store.list_properties()) == ["B", "C"]

    status = client.get("/api/scraper-status").json()
    assert status["cached_properties_count"] == 2
    assert status["is_recent"] is True
    assert status["last_scrape_time"] > 0
    assert status["last_scrape_formatted"] != "Never"


def test_scrape_downstream_error_is_reported(monkeypatch: pytest.MonkeyPatch) -> None:
    client, _ = _client(monkeypatch, DownstreamServiceError("insufficient_quota", status_code=429))
    resp = client.post("/api/scrape-railey")
    assert resp.status_code == 503
    body = resp.json()
    assert body["success"] is False
    assert "insufficient_quota" in body["error"]

    assert len(client.get("/api/properties").json()) == len(get_fallback())


def test_scrape_other_error_keeps_cached_data(monkeypatch: pytest.MonkeyPatch) -> None:
    client, _ = _client(monkeypatch, ExtractionMalformed("bad shape"))
    resp = client.post("/api/scrape-railey")
    assert resp.status_code == 200
    assert resp.json()["success"] is False
    assert resp.json()["error"] == "bad shape"


def test_scrape_unexpected_error_is_reported(monkeypatch: pytest.MonkeyPatch) -> None:
    client, store = _client(monkeypatch, [raw(mls_number="A")], RuntimeError("bug"))
    client.get("/api/properties")
    resp = client.post("/api/scrape-railey")
    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is False
    assert "bug" in body["error"]
    assert [p.id for p in store.list_properties()] == ["A"]


def test_status_before_any_scrape(monkeypatch: pytest.MonkeyPatch) -> None:
    client, _ = _client(monkeypatch, [])
    assert client.get("/api/scraper-status").json() == {
        "last_scrape_time": 0,
        "last_scrape_formatted": "Never",
        "cached_properties_count": 0,
        "is_recent": False,
    }


def test_leads(monkeypatch: pytest.MonkeyPatch) -> None:
    client, _ = _client(monkeypatch, [])
    resp = client.post("/api/leads", json={"name": "Ada", "email": "ada@example.com", "interests": "lakefront"})
    assert resp.status_code == 201
    assert resp.json()["interests"] == "lakefront"
    assert client.post("/api/leads", json={"name": "Ada", "email": "nope"}).status_code == 400
    assert len(client.get("/api/leads").json()) == 1


def test_chat_round_trip(monkeypatch: pytest.MonkeyPatch) -> None:
    client, _ = _client(monkeypatch, [raw(mls_number="A")])
    assert client.post("/api/chat", json={"sessionId": "s1"}).status_code == 400

    first = client.post("/api/chat", json={"sessionId": "s1", "message": "Tell me about Wisp"}).json()
    assert [m["isUser"] for m in first["messages"]] == [True, False]
    assert "Wisp Resort" in first["messages"][1]["content"]

    second = client.post("/api/chat", json={"sessionId": "s1", "message": "thanks"}).json()
    assert len(second["messages"]) == 4
    assert client.get("/api/chat/s1").json()["sessionId"] == "s1"
    assert client.get("/api/chat/unknown").status_code == 404
