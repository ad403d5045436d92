"""Integration smoke tests for REST API (using an in-memory UoW via dependency override)."""
from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from socialapi.api.deps import get_uow
from socialapi.api.v1.routers import health
from socialapi.app import create_app
from socialapi.application.exceptions import ConflictError
from tests.conftest import FakeUoW, make_like

BASE = "/api/v1/channel-messages"


@pytest.fixture
def app_with_uow():
    app = create_app()
    uow = FakeUoW()

    async def _override():
        yield uow

    app.dependency_overrides[get_uow] = _override
    return app, uow


@pytest.fixture
def client(app_with_uow):
    app, _ = app_with_uow
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def uow(app_with_uow):
    _, uow = app_with_uow
    return uow


def _create(client: TestClient, body: str = "hello", **extra) -> dict:
    payload = {"body": body, "type": "post", "account_id": 1, "initial_channel_id": 10, **extra}
    resp = client.post(BASE, json=payload)
    assert resp.status_code == 201
    return resp.json()


def test_healthz(client):
    resp = client.get("/healthz")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


def test_request_id_is_echoed(client):
    resp = client.get("/healthz", headers={"X-Request-ID": "abc123"})
    assert resp.headers["X-Request-ID"] == "abc123"


def test_create_message(client, uow):
    uow.channel_messages.next_id = 42

    data = _create(client)

    assert data["id"] == 42
    assert data["body"] == "hello"
    assert data["type"] == "post"
    assert data["created_at"] is not None
    assert uow._committed is True


def test_create_rejects_unknown_type(client):
    resp = client.post(
        BASE,
        json={"body": "x", "type": "shout", "account_id": 1, "initial_channel_id": 10},
    )
    assert resp.status_code == 422


def test_create_conflict_maps_to_409(client, uow):
    uow.channel_messages.error = ConflictError("create channel_message: constraint violation")

    resp = client.post(
        BASE,
        json={"body": "x", "type": "post", "account_id": 1, "initial_channel_id": 10},
    )

    assert resp.status_code == 409
    assert "constraint" in resp.json()["detail"]


def test_get_missing_message(client):
    resp = client.get(f"{BASE}/999")
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Channel message not found"


def test_patch_updates_body_only(client):
    created = _create(client)

    resp = client.patch(
        f"{BASE}/{created['id']}",
        json={"body": "edited", "type": "leave", "account_id": 5},
    )

    assert resp.status_code == 200
    data = resp.json()
    assert data["body"] == "edited"
    assert data["type"] == "post"
    assert data["account_id"] == 1


def test_delete_message(client):
    created = _create(client)

    resp = client.delete(f"{BASE}/{created['id']}")
    assert resp.status_code == 204

    assert client.get(f"{BASE}/{created['id']}").status_code == 404
    assert client.delete(f"{BASE}/{created['id']}").status_code == 404


def test_fetch_by_ids(client):
    a = _create(client, "a")
    b = _create(client, "b")

    resp = client.get(BASE, params=[("ids", b["id"]), ("ids", a["id"])])

    assert resp.status_code == 200
    assert [m["body"] for m in resp.json()] == ["b", "a"]


def test_fetch_by_ids_without_ids(client, uow):
    resp = client.get(BASE)

    assert resp.status_code == 200
    assert resp.json() == []
    assert uow.channel_messages.calls == []


def test_relatives(client, uow):
    created = _create(client)
    uow.interactions._interactions.extend([make_like(created["id"], 5), make_like(created["id"], 6)])

    resp = client.get(f"{BASE}/{created['id']}/relatives")

    assert resp.status_code == 200
    data = resp.json()
    assert data["message"]["id"] == created["id"]
    assert data["interactions"] == {"like": {"actors": [5, 6], "is_interacted": True}}


def test_relatives_for_unknown_message(client):
    resp = client.get(f"{BASE}/12345/relatives")
    assert resp.status_code == 404


def test_create_requires_type(client):
    resp = client.post(BASE, json={"body": "x", "account_id": 1, "initial_channel_id": 10})

    assert resp.status_code == 422
    assert any(err["loc"][-1] == "type" for err in resp.json()["detail"])


class _FakeSession:
    def __init__(self, error: Exception | None = None) -> None:
        self.error = error

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc) -> None:
        return None

    async def execute(self, stmt):
        if self.error is not None:
            raise self.error


class _FakeRedis:
    def __init__(self, error: Exception | None = None) -> None:
        self.error = error

    async def ping(self) -> bool:
        if self.error is not None:
            raise self.error
        return True


def test_readyz_when_dependencies_answer(app_with_uow, monkeypatch):
    app, _ = app_with_uow
    monkeypatch.setattr(health, "AsyncSessionLocal", lambda: _FakeSession())
    app.state.redis = _FakeRedis()

    resp = TestClient(app).get("/readyz")

    assert resp.status_code == 200
    assert resp.json() == {"status": "ready"}


def test_readyz_reports_each_unreachable_dependency(app_with_uow, monkeypatch):
    app, _ = app_with_uow
    monkeypatch.setattr(health, "AsyncSessionLocal", lambda: _FakeSession(OSError("db down")))
    app.state.redis = _FakeRedis(ConnectionError("redis down"))

    resp = TestClient(app).get("/readyz")

    assert resp.status_code == 503
    assert resp.json() == {
        "status": "unavailable",
        "errors": ["postgres: db down", "redis: redis down"],
    }
