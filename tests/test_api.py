"""HTTP API tests using FastAPI's TestClient against a temporary database."""

from __future__ import annotations

import sqlite3
import sys
from pathlib import Path
from typing import Dict

import pytest
from fastapi.testclient import TestClient

sys.path.append(str(Path(__file__).resolve().parents[1]))

from server.api import CORRELATION_HEADER, create_app
from stylist_app.app import WardrobeStylistApp
from stylist_app.config import AppConfig
from tools.seed_wardrobe import seed_wardrobe


def _item(**overrides) -> Dict[str, object]:
    payload: Dict[str, object] = {
        "name": "Grey Sweater",
        "category": "top",
        "color": "grey",
        "tags": ["casual", "comfortable"],
    }
    payload.update(overrides)
    return payload


def _request(**overrides) -> Dict[str, object]:
    payload: Dict[str, object] = {
        "occasion": "Office",
        "style": "smart",
        "formality": "business-casual",
        "comfort": 7,
        "budget": "medium",
    }
    payload.update(overrides)
    return payload


@pytest.fixture()
def stylist(tmp_path: Path) -> WardrobeStylistApp:
    config = AppConfig(database_path=str(tmp_path / "wardrobe.db"), port=4010)
    return WardrobeStylistApp(config=config)


@pytest.fixture()
def client(stylist: WardrobeStylistApp) -> TestClient:
    return TestClient(create_app(stylist=stylist))


def test_health_reports_connected_database(client: TestClient) -> None:
    for path in ("/health", "/api/health"):
        response = client.get(path)
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "ok"
        assert body["database"] == "connected"
        assert body["port"] == 4010
        assert body["timestamp"]


def test_health_reports_database_failure(
    client: TestClient, stylist: WardrobeStylistApp, monkeypatch: pytest.MonkeyPatch
) -> None:
    def _broken_ping() -> bool:
        raise sqlite3.OperationalError("unable to open database file")

    monkeypatch.setattr(stylist.wardrobe_store, "ping", _broken_ping)
    response = client.get("/api/health")

    assert response.status_code == 503
    assert response.json()["status"] == "error"
    assert response.json()["database"] == "disconnected"
    assert response.json()["error"] == "Database connection failed"


def test_item_crud_cycle(client: TestClient) -> None:
    created = client.post("/api/wardrobe/items", json=_item())
    assert created.status_code == 201
    item = created.json()
    item_id = item["item_id"]
    assert item["category"] == "top"

    assert client.get(f"/api/wardrobe/items/{item_id}").json()["name"] == "Grey Sweater"
    assert [entry["item_id"] for entry in client.get("/api/wardrobe/items").json()] == [item_id]

    replaced = client.put(f"/api/wardrobe/items/{item_id}", json=_item(name="Charcoal Sweater", warmth=4))
    assert replaced.status_code == 200
    assert replaced.json()["name"] == "Charcoal Sweater"
    assert replaced.json()["item_id"] == item_id
    assert replaced.json()["created_at"] == item["created_at"]

    deleted = client.delete(f"/api/wardrobe/items/{item_id}")
    assert deleted.status_code == 204
    assert client.get("/api/wardrobe/items").json() == []


@pytest.mark.parametrize(
    "method, path",
    [
        ("get", "/api/wardrobe/items/missing"),
        ("put", "/api/wardrobe/items/missing"),
        ("delete", "/api/wardrobe/items/missing"),
    ],
)
def test_missing_item_returns_404(client: TestClient, method: str, path: str) -> None:
    kwargs = {"json": _item()} if method == "put" else {}
    response = client.request(method.upper(), path, **kwargs)

    assert response.status_code == 404
    assert response.json() == {"error": "Item not found"}


@pytest.mark.parametrize(
    "payload",
    [
        {"category": "top", "color": "grey"},
        _item(category="hat"),
        _item(warmth=7),
        _item(price=-5),
    ],
)
def test_invalid_item_returns_400(client: TestClient, payload: Dict[str, object]) -> None:
    response = client.post("/api/wardrobe/items", json=payload)

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid data"
    assert response.json()["details"]
    assert client.get("/api/wardrobe/items").json() == []


def test_recommendations_return_outfits_and_request_id(client: TestClient, stylist: WardrobeStylistApp) -> None:
    seed_wardrobe(stylist.wardrobe_store)

    response = client.post("/api/recommendations", json=_request())

    assert response.status_code == 200
    body = response.json()
    assert set(body) == {"outfits", "request_id"}
    assert [outfit["score"] for outfit in body["outfits"]] == [100, 75, 70]
    for outfit in body["outfits"]:
        assert outfit["request_id"] == body["request_id"]
        assert outfit["rationale"].startswith("This outfit combines ")
        assert 2 <= len(outfit["items"]) <= 3


def test_recommendations_with_empty_wardrobe(client: TestClient) -> None:
    response = client.post("/api/recommendations", json=_request())

    assert response.status_code == 200
    assert response.json()["outfits"] == []
    assert response.json()["request_id"]


@pytest.mark.parametrize(
    "overrides",
    [{"comfort": 0}, {"comfort": 11}, {"formality": "black-tie"}, {"budget": "cheap"}],
)
def test_invalid_recommendation_request_returns_400(client: TestClient, overrides: dict) -> None:
    response = client.post("/api/recommendations", json=_request(**overrides))

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid data"
    assert client.get("/api/recommendations/history").json() == []


def test_feedback_flow(client: TestClient, stylist: WardrobeStylistApp) -> None:
    seed_wardrobe(stylist.wardrobe_store)
    recommendation = client.post("/api/recommendations", json=_request()).json()
    outfit_id = recommendation["outfits"][0]["outfit_id"]

    created = client.post(
        "/api/feedback",
        json={"request_id": recommendation["request_id"], "outfit_id": outfit_id, "rating": 5, "selected": True},
    )
    assert created.status_code == 201
    assert created.json()["rating"] == 5

    listed = client.get("/api/feedback").json()
    assert [entry["feedback_id"] for entry in listed] == [created.json()["feedback_id"]]
    assert listed[0]["outfit"]["outfit_id"] == outfit_id

    history = client.get("/api/recommendations/history").json()
    assert history[0]["request_id"] == recommendation["request_id"]
    assert history[0]["feedbacks"][0]["feedback_id"] == created.json()["feedback_id"]


def test_feedback_errors(client: TestClient, stylist: WardrobeStylistApp) -> None:
    seed_wardrobe(stylist.wardrobe_store)
    first = client.post("/api/recommendations", json=_request()).json()
    second = client.post("/api/recommendations", json=_request()).json()

    unknown = client.post("/api/feedback", json={"request_id": "nope", "outfit_id": "nope", "rating": 3})
    assert unknown.status_code == 404
    assert unknown.json()["error"] == "Recommendation request not found"

    mismatched = client.post(
        "/api/feedback",
        json={"request_id": first["request_id"], "outfit_id": second["outfits"][0]["outfit_id"], "rating": 3},
    )
    assert mismatched.status_code == 400
    assert mismatched.json()["error"] == "Outfit does not belong to this request"

    invalid = client.post(
        "/api/feedback",
        json={"request_id": first["request_id"], "outfit_id": first["outfits"][0]["outfit_id"], "rating": 9},
    )
    assert invalid.status_code == 400
    assert invalid.json()["error"] == "Invalid data"


def test_correlation_id_is_echoed_or_generated(client: TestClient) -> None:
    echoed = client.get("/api/health", headers={CORRELATION_HEADER: "trace-123"})
    assert echoed.headers[CORRELATION_HEADER] == "trace-123"

    generated = client.get("/api/health")
    assert generated.headers[CORRELATION_HEADER]


def test_created_at_is_identical_across_routes(client: TestClient) -> None:
    """Create, fetch by id and list all render the same timestamp string."""

    created = client.post("/api/wardrobe/items", json=_item()).json()
    fetched = client.get(f"/api/wardrobe/items/{created['item_id']}").json()
    (listed,) = client.get("/api/wardrobe/items").json()
    replaced = client.put(f"/api/wardrobe/items/{created['item_id']}", json=_item(color="black")).json()

    assert created["created_at"] == fetched["created_at"] == listed["created_at"] == replaced["created_at"]
    assert created["created_at"].endswith("+00:00")


def test_recommendation_timestamps_match_history(client: TestClient, stylist: WardrobeStylistApp) -> None:
    seed_wardrobe(stylist.wardrobe_store)
    outfit = client.post("/api/recommendations", json=_request()).json()["outfits"][0]
    (entry,) = client.get("/api/recommendations/history").json()

    assert entry["outfits"][0]["created_at"] == outfit["created_at"]
    assert entry["outfits"][0]["items"][0]["created_at"] == outfit["items"][0]["created_at"]
