"""Tests for the FastAPI server endpoints."""

import uuid

import pytest
from asgi_lifespan import LifespanManager
from httpx import ASGITransport, AsyncClient

from mincare.api.server import app
from mincare.config import get_settings
from mincare.signals.stress import INTERVENTION_PROMPT


@pytest.fixture
async def client():
    """Async test client with lifespan (startup / shutdown) fully executed."""
    async with LifespanManager(app) as manager:
        transport = ASGITransport(app=manager.app)
        async with AsyncClient(transport=transport, base_url="http://test") as c:
            yield c


@pytest.fixture
def user_id() -> str:
    return f"user-{uuid.uuid4().hex[:8]}"


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    resp = await client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "tracking_ready": True, "community_ready": True}
    assert resp.headers["X-Request-ID"]


@pytest.mark.asyncio
async def test_mood_journal(client: AsyncClient, user_id: str):
    resp = await client.post(
        f"/mood/{user_id}",
        json={"mood_type": "sad", "entry_text": "sad and worried about work"},
    )
    assert resp.status_code == 201
    entry = resp.json()
    assert entry["sentiment_score"] == -0.2
    assert entry["ai_insights"]

    resp = await client.get(f"/mood/{user_id}")
    assert [e["id"] for e in resp.json()] == [entry["id"]]


@pytest.mark.asyncio
async def test_unknown_mood_rejected(client: AsyncClient, user_id: str):
    resp = await client.post(f"/mood/{user_id}", json={"mood_type": "bored"})
    assert resp.status_code == 422
    assert resp.json()["code"] == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_stress_snap(client: AsyncClient, user_id: str):
    resp = await client.post(f"/stress/{user_id}", json={"heart_rate": 92, "data_source": "watch"})
    assert resp.status_code == 201
    body = resp.json()
    assert body["reading"]["stress_level"] == 8
    assert body["label"] == "High"
    assert body["intervention_prompt"] == INTERVENTION_PROMPT

    resp = await client.post(f"/stress/{user_id}", json={"heart_rate": 62})
    assert resp.json()["intervention_prompt"] is None

    resp = await client.get(f"/stress/{user_id}")
    overview = resp.json()
    assert overview["avg_stress"] == 6
    assert overview["label"] == "Moderate"


@pytest.mark.asyncio
async def test_stress_heart_rate_bounds(client: AsyncClient, user_id: str):
    resp = await client.post(f"/stress/{user_id}", json={"heart_rate": 250})
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_sleep_log_and_overview(client: AsyncClient, user_id: str):
    resp = await client.post(
        f"/sleep/{user_id}",
        json={
            "sleep_start": "2026-10-01T22:00:00Z",
            "sleep_end": "2026-10-02T06:00:00Z",
            "quality_score": 8,
        },
    )
    assert resp.status_code == 201
    assert resp.json()["duration_minutes"] == 480

    resp = await client.get(f"/sleep/{user_id}")
    assert resp.json()["avg_hours"] == 8.0

    resp = await client.get(f"/sleep/{user_id}/tips")
    assert len(resp.json()) == 3


@pytest.mark.asyncio
async def test_sleep_end_before_start(client: AsyncClient, user_id: str):
    resp = await client.post(
        f"/sleep/{user_id}",
        json={"sleep_start": "2026-10-02T06:00:00", "sleep_end": "2026-10-01T22:00:00"},
    )
    assert resp.status_code == 422
    assert resp.json()["code"] == "INVALID_OBSERVATION"

    resp = await client.get(f"/sleep/{user_id}")
    assert resp.json()["sessions"] == []


@pytest.mark.asyncio
async def test_mindgym_flow(client: AsyncClient, user_id: str):
    resp = await client.get("/mindgym/exercises", params={"type": "breathing"})
    exercises = resp.json()
    assert exercises
    assert {e["type"] for e in exercises} == {"breathing"}

    resp = await client.post(
        f"/mindgym/{user_id}/complete",
        json={"exercise_id": exercises[0]["id"], "score": 90},
    )
    assert resp.status_code == 201
    assert resp.json()["streak_count"] == 1

    resp = await client.get(f"/mindgym/{user_id}/progress")
    assert resp.json() == {"streak_count": 1, "fitness_level": 2, "total_completed": 1}


@pytest.mark.asyncio
async def test_complete_unknown_exercise(client: AsyncClient, user_id: str):
    resp = await client.post(f"/mindgym/{user_id}/complete", json={"exercise_id": "nope"})
    assert resp.status_code == 404
    assert resp.json()["code"] == "NOT_FOUND"


@pytest.mark.asyncio
async def test_dashboard(client: AsyncClient, user_id: str):
    resp = await client.get(f"/dashboard/{user_id}")
    body = resp.json()
    assert body["snapshot"]["score"] == 0
    assert body["quick_insights"] == [
        "Start tracking your mood to unlock personalized insights!"
    ]

    await client.post(f"/mood/{user_id}", json={"mood_type": "calm"})
    await client.post(f"/stress/{user_id}", json={"heart_rate": 58})

    resp = await client.get(f"/dashboard/{user_id}")
    body = resp.json()
    assert body["snapshot"]["score"] == 40
    assert body["snapshot"]["label"] == "Fair"
    assert body["balance_report"].startswith("Let's work on")

    resp = await client.get(f"/dashboard/{user_id}/daily-flow")
    assert len(resp.json()["tasks"]) == 4


@pytest.mark.asyncio
async def test_calm_circle(client: AsyncClient, user_id: str):
    groups = (await client.get("/circles")).json()
    assert len(groups) == 5
    group = groups[0]

    resp = await client.post(f"/circles/{group['id']}/posts", json={"user_id": user_id, "content": "hi"})
    assert resp.status_code == 403

    resp = await client.post(f"/circles/{group['id']}/join", json={"user_id": user_id})
    assert resp.status_code == 201
    assert resp.json()["member_count"] == group["member_count"] + 1

    resp = await client.post(f"/circles/{group['id']}/join", json={"user_id": user_id})
    assert resp.status_code == 409

    resp = await client.post(
        f"/circles/{group['id']}/posts",
        json={"user_id": user_id, "content": "Box breathing before meetings helps me."},
    )
    assert resp.status_code == 201
    post_id = resp.json()["id"]

    posts = (await client.get(f"/circles/{group['id']}/posts")).json()
    assert posts[0]["id"] == post_id
    assert "user_id" not in posts[0]

    resp = await client.get(f"/circles/memberships/{user_id}")
    assert resp.json()["group_ids"] == [group["id"]]


@pytest.mark.asyncio
async def test_blank_post_rejected(client: AsyncClient, user_id: str):
    groups = (await client.get("/circles")).json()
    resp = await client.post(
        f"/circles/{groups[0]['id']}/posts", json={"user_id": user_id, "content": "   "}
    )
    assert resp.status_code == 422


# ── API key ──────────────────────────────────────────────────


@pytest.fixture
def api_secret(monkeypatch):
    """Enable the API key check for one test."""
    monkeypatch.setenv("MINCARE_API_SECRET_KEY", "s3cret")
    get_settings.cache_clear()
    yield "s3cret"
    get_settings.cache_clear()


@pytest.mark.asyncio
async def test_api_key_required_when_configured(api_secret, client: AsyncClient, user_id: str):
    resp = await client.get(f"/mood/{user_id}")
    assert resp.status_code == 401
    assert resp.json()["code"] == "UNAUTHORIZED"

    resp = await client.get(f"/mood/{user_id}", headers={"X-API-Key": "wrong"})
    assert resp.status_code == 401

    resp = await client.get(f"/mood/{user_id}", headers={"Authorization": f"Bearer {api_secret}"})
    assert resp.status_code == 200

    resp = await client.get(f"/mood/{user_id}", headers={"X-API-Key": api_secret})
    assert resp.status_code == 200


@pytest.mark.asyncio
async def test_health_stays_public(api_secret, client: AsyncClient):
    resp = await client.get("/health")
    assert resp.status_code == 200


@pytest.mark.asyncio
async def test_cors_preflight_skips_api_key(api_secret, client: AsyncClient, user_id: str):
    resp = await client.options(
        f"/mood/{user_id}",
        headers={
            "Origin": "http://app.example",
            "Access-Control-Request-Method": "POST",
        },
    )
    assert resp.status_code == 200
    assert resp.headers["access-control-allow-origin"] == "http://app.example"
    assert "POST" in resp.headers["access-control-allow-methods"]
