# tests/integration/api/test_api.py
"""
HTTP API 的集成测试：通过 httpx.ASGITransport 直接驱动 FastAPI 应用。
"""

from __future__ import annotations

from typing import AsyncGenerator
from unittest.mock import AsyncMock

import httpx
import pytest
import pytest_asyncio

from transflow.application.coordinator import WorkflowCoordinator
from transflow.core.exceptions import DatabaseError
from transflow.core.types import PermissionLevel
from transflow.presentation.api import create_app

pytestmark = [pytest.mark.db, pytest.mark.integration]


@pytest_asyncio.fixture
async def client(app_container) -> AsyncGenerator[httpx.AsyncClient, None]:
    app = create_app(app_container)
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


async def _token(coordinator, email: str, level=PermissionLevel.CONTRIBUTOR) -> dict:
    _user, token = await coordinator.register_user(email, email.split("@")[0], level)
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture
async def admin_headers(coordinator):
    return await _token(coordinator, "admin@example.com", PermissionLevel.ADMIN)


@pytest_asyncio.fixture
async def translator_headers(coordinator):
    return await _token(coordinator, "alice@example.com")


@pytest_asyncio.fixture
async def reviewer_headers(coordinator):
    return await _token(coordinator, "rita@example.com")


async def _create_document(client, headers) -> dict:
    resp = await client.post(
        "/api/documents",
        json={
            "title": "Guide",
            "original_url": "https://example.com/guide",
            "source_lang": "en",
            "target_lang": "ja",
        },
        headers=headers,
    )
    assert resp.status_code == 201, resp.text
    return resp.json()


@pytest.mark.asyncio
async def test_health_is_public(client):
    resp = await client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "headers", [{}, {"Authorization": "Bearer wrong"}, {"Authorization": "Basic abc"}]
)
async def test_authentication_required(client, headers):
    resp = await client.get("/api/documents", headers=headers)
    assert resp.status_code == 401
    assert resp.json()["error"] == "unauthenticated"
    assert resp.headers["WWW-Authenticate"] == "Bearer"


@pytest.mark.asyncio
async def test_contributor_cannot_create_document(client, translator_headers):
    resp = await client.post(
        "/api/documents",
        json={"title": "x", "original_url": "https://e.x", "source_lang": "en", "target_lang": "fr"},
        headers=translator_headers,
    )
    assert resp.status_code == 403
    assert resp.json()["error"] == "forbidden"


@pytest.mark.asyncio
async def test_status_cannot_be_set_through_update(client, admin_headers):
    doc = await _create_document(client, admin_headers)
    resp = await client.put(
        f"/api/documents/{doc['id']}", json={"status": "PUBLISHED"}, headers=admin_headers
    )
    assert resp.status_code == 422

    resp = await client.put(
        f"/api/documents/{doc['id']}", json={"title": "Guide v2"}, headers=admin_headers
    )
    assert resp.status_code == 200
    assert resp.json()["title"] == "Guide v2"
    assert resp.json()["status"] == "DRAFT"


@pytest.mark.asyncio
async def test_unknown_resources_are_404(client, admin_headers):
    resp = await client.get("/api/documents/nope", headers=admin_headers)
    assert resp.status_code == 404
    assert resp.json()["error"] == "not_found"
    resp = await client.get("/api/documents/nope/versions/current", headers=admin_headers)
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_full_workflow_over_http(
    client, admin_headers, translator_headers, reviewer_headers
):
    doc = await _create_document(client, admin_headers)
    doc_id = doc["id"]
    versions_url = f"/api/documents/{doc_id}/versions"

    for vtype, content in (("ORIGINAL", "Hello"), ("AI_DRAFT", "こんにちは")):
        resp = await client.post(
            versions_url, json={"version_type": vtype, "content": content}, headers=admin_headers
        )
        assert resp.status_code == 201

    resp = await client.post("/api/tasks", json={"document_id": doc_id}, headers=translator_headers)
    assert resp.status_code == 201
    task_id = resp.json()["id"]

    resp = await client.post("/api/tasks", json={"document_id": doc_id}, headers=translator_headers)
    assert resp.status_code == 409
    assert resp.json()["error"] == "conflict"

    resp = await client.post(f"/api/tasks/{task_id}/start", headers=reviewer_headers)
    assert resp.status_code == 403

    resp = await client.post(f"/api/tasks/{task_id}/start", headers=translator_headers)
    assert resp.status_code == 200
    assert resp.json()["status"] == "IN_PROGRESS"

    resp = await client.post(
        versions_url,
        json={"version_type": "MANUAL_TRANSLATION", "content": "こんにちは！"},
        headers=translator_headers,
    )
    assert resp.status_code == 201
    manual = resp.json()
    assert manual["version_number"] == 2

    resp = await client.post(f"/api/tasks/{task_id}/submit", headers=translator_headers)
    assert resp.json()["status"] == "SUBMITTED"

    resp = await client.get("/api/tasks/mine", headers=translator_headers)
    assert [t["id"] for t in resp.json()] == [task_id]

    resp = await client.post(
        "/api/reviews",
        json={
            "document_id": doc_id,
            "version_id": manual["id"],
            "checklist": {"terminology": True},
            "is_complete": True,
        },
        headers=reviewer_headers,
    )
    assert resp.status_code == 201
    review_id = resp.json()["id"]

    resp = await client.post(f"/api/reviews/{review_id}/publish", headers=reviewer_headers)
    assert resp.status_code == 400
    assert resp.json()["error"] == "invalid_state"

    resp = await client.post(f"/api/reviews/{review_id}/approve", headers=reviewer_headers)
    assert resp.status_code == 200

    resp = await client.get(f"{versions_url}/final", headers=translator_headers)
    assert resp.json()["id"] == manual["id"]
    resp = await client.get(f"/api/documents/{doc_id}", headers=translator_headers)
    assert resp.json()["status"] == "APPROVED"
    assert resp.json()["current_version_id"] == manual["id"]

    resp = await client.post(f"/api/reviews/{review_id}/publish", headers=reviewer_headers)
    assert resp.status_code == 200
    assert resp.json()["published_at"] is not None

    resp = await client.get(
        "/api/documents", params={"status": "PUBLISHED"}, headers=translator_headers
    )
    assert [d["id"] for d in resp.json()] == [doc_id]


@pytest.mark.asyncio
async def test_version_reads(client, admin_headers):
    doc = await _create_document(client, admin_headers)
    url = f"/api/documents/{doc['id']}/versions"
    created = []
    for vtype in ("ORIGINAL", "AI_DRAFT", "MANUAL_TRANSLATION"):
        resp = await client.post(
            url, json={"version_type": vtype, "content": vtype}, headers=admin_headers
        )
        created.append(resp.json())

    resp = await client.put(
        f"{url}/{created[0]['id']}/set-current", headers=admin_headers
    )
    assert resp.status_code == 200

    resp = await client.get(f"{url}/current", headers=admin_headers)
    assert resp.json()["id"] == created[0]["id"]
    resp = await client.get(f"{url}/latest", headers=admin_headers)
    assert resp.json()["id"] == created[2]["id"]
    resp = await client.get(f"{url}/number/1", headers=admin_headers)
    assert resp.json()["version_type"] == "AI_DRAFT"
    resp = await client.get(f"{url}/{created[1]['id']}", headers=admin_headers)
    assert resp.json()["content"] == "AI_DRAFT"
    resp = await client.get(url, headers=admin_headers)
    assert [v["version_number"] for v in resp.json()] == [0, 1, 2]

    resp = await client.post(
        url, json={"version_type": "SUMMARY", "content": "x"}, headers=admin_headers
    )
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_terms_and_admin_routes(client, coordinator, admin_headers, translator_headers):
    body = {
        "source_term": "glossary",
        "target_term": "用語集",
        "source_lang": "en",
        "target_lang": "ja",
    }
    resp = await client.post("/api/terms", json=body, headers=admin_headers)
    assert resp.status_code == 201
    term_id = resp.json()["id"]
    resp = await client.post("/api/terms", json=body, headers=admin_headers)
    assert resp.status_code == 409

    resp = await client.get(
        "/api/terms/search",
        params={"source_term": "glossary", "source_lang": "en", "target_lang": "ja"},
        headers=translator_headers,
    )
    assert resp.json()["id"] == term_id

    resp = await client.delete(f"/api/terms/{term_id}", headers=translator_headers)
    assert resp.status_code == 403
    resp = await client.delete(f"/api/terms/{term_id}", headers=admin_headers)
    assert resp.status_code == 204

    resp = await client.put(
        "/api/admin/users/email/alice@example.com/role",
        json={"role_level": 2},
        headers=admin_headers,
    )
    assert resp.status_code == 200
    assert resp.json()["permission_level"] == "ADMIN"

    # 提升后的令牌立即获得管理员能力
    resp = await client.post("/api/terms", json=body, headers=translator_headers)
    assert resp.status_code == 201


@pytest.mark.asyncio
async def test_user_lookup_routes(client, admin_headers, translator_headers):
    resp = await client.get("/api/users/me", headers=translator_headers)
    assert resp.status_code == 200
    me = resp.json()
    assert me["email"] == "alice@example.com"
    assert me["permission_level"] == "CONTRIBUTOR"
    assert "api_token_sha256" not in me

    resp = await client.get(f"/api/users/{me['id']}", headers=admin_headers)
    assert resp.status_code == 200
    assert resp.json()["id"] == me["id"]

    resp = await client.get("/api/users/no-such-user", headers=admin_headers)
    assert resp.status_code == 404
    assert resp.json()["error"] == "not_found"

    for path in ("/api/users/me", f"/api/users/{me['id']}"):
        resp = await client.get(path)
        assert resp.status_code == 401


@pytest.mark.asyncio
async def test_internal_errors_are_500_with_generic_detail(
    client, admin_headers, monkeypatch
):
    failing = AsyncMock(side_effect=DatabaseError("disk I/O error on documents"))
    monkeypatch.setattr(WorkflowCoordinator, "get_document", failing)

    resp = await client.get("/api/documents/any-id", headers=admin_headers)

    assert resp.status_code == 500
    body = resp.json()
    assert body["error"] == "internal_error"
    assert body["error"] != "invalid_state"
    assert "disk I/O" not in body["detail"]
    failing.assert_awaited_once()
