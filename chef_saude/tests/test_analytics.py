from __future__ import annotations

from unittest.mock import MagicMock

from fastapi.testclient import TestClient

from chef_saude.analytics.aggregator import compute_analytics
from chef_saude.analytics.store import clear_events, get_events, record_event
from chef_saude.app import app, get_recipe_model
from chef_saude.recipes.models import Recipe, RecipeListOutput

client = TestClient(app)


def _fake_model(*titles: str) -> MagicMock:
    fake = MagicMock()
    fake.generate.return_value = RecipeListOutput(recipes=[
        Recipe(title=t, ingredients=["água"], instructions="Misture.", sourceUrl="https://example.com")
        for t in titles
    ])
    return fake


def test_analytics_returns_empty_initially():
    clear_events()
    resp = client.get("/analytics")
    assert resp.status_code == 200
    body = resp.json()
    assert body["total_searches"] == 0
    assert body["total_generations"] == 0
    assert body["avg_search_time_ms"] == 0.0


def test_analytics_tracks_requests():
    clear_events()
    app.dependency_overrides[get_recipe_model] = lambda: _fake_model("Sopa")
    try:
        client.post("/recipes/generate", json={"restrictions": ["Vegano"], "dishType": "doce"})
        client.post("/recipes/generate", json={"restrictions": ["Vegano", "Gota"]})
        TestClient(app).post("/recipes/search", json={"restrictions": ["Gota"]})
    finally:
        app.dependency_overrides.pop(get_recipe_model, None)

    body = client.get("/analytics").json()
    assert body["total_generations"] == 2
    assert body["total_searches"] == 1
    assert {"name": "Gota", "count": 2} in body["top_restrictions"]
    assert {"name": "Vegano", "count": 2} in body["top_restrictions"]
    assert body["dish_type_usage"] == {"doce": 1, "any": 2}


def test_analytics_tracks_failures():
    clear_events()
    failing = MagicMock()
    failing.generate.side_effect = RuntimeError("boom")
    app.dependency_overrides[get_recipe_model] = lambda: failing
    try:
        client.post("/recipes/generate", json={"restrictions": ["Vegano"]})
    finally:
        app.dependency_overrides.pop(get_recipe_model, None)

    assert len(get_events("failure")) == 1
    assert client.get("/analytics").json()["total_failures"] == 1


def test_compute_analytics_retry_stats():
    clear_events()
    record_event("search", {"restrictions": ["Vegano"], "attempts": 1, "unique": True, "results_returned": 2})
    record_event("search", {"restrictions": ["Vegano"], "attempts": 3, "unique": True, "results_returned": 2})
    record_event("search", {"restrictions": ["Vegano"], "attempts": 5, "unique": False, "results_returned": 0})

    stats = compute_analytics(get_events())

    assert stats["search_retries"] == {"retried": 2, "exhausted": 1, "total_attempts": 9}
    assert stats["empty_results"] == 1
