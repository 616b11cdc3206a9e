"""
HTTP tests for /run-assessment and /generate-document.

The ASGI app runs in-process; the store, gateway and token check are
replaced through FastAPI dependency overrides.
"""
from __future__ import annotations

import httpx
import pytest
import pytest_asyncio
from sqlalchemy import select

from governance_engine.core.auth import verify_token
from governance_engine.main import app
from governance_engine.models.database import get_db
from governance_engine.models.records import Task
from governance_engine.services.llm_gateway import get_gateway

from conftest import USER_ID, ScriptedGateway, model_reply

MISSING_ID = "7d1c7d1e-0000-4000-8000-000000000000"


@pytest_asyncio.fixture
async def api(session_factory):
    """Returns (client, gateway); set gateway.reply / gateway.error per test."""
    gateway = ScriptedGateway()

    async def _db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = _db
    app.dependency_overrides[get_gateway] = lambda: gateway
    app.dependency_overrides[verify_token] = lambda: {"sub": USER_ID}
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client, gateway
    app.dependency_overrides.clear()


class TestRunAssessmentEndpoint:

    @pytest.mark.asyncio
    async def test_success(self, api, system, db):
        client, gateway = api
        gateway.reply = model_reply({
            "risk_level": "critical",
            "eu_ai_act_category": "Annex III",
            "recommended_actions": ["A", "B"],
        })

        resp = await client.post("/run-assessment", json={"systemId": system.id, "template": "eu_ai_act"})

        assert resp.status_code == 200
        body = resp.json()["assessment"]
        assert body["ai_system_id"] == system.id
        assert body["template"] == "eu_ai_act"
        assert body["risk_level"] == "critical"
        assert body["recommended_actions"] == ["A", "B"]
        assert body["created_by"] == USER_ID

        tasks = (await db.execute(select(Task))).scalars().all()
        assert len(tasks) == 2
        assert {t.priority for t in tasks} == {"high"}

    @pytest.mark.asyncio
    async def test_unknown_system_is_404(self, api):
        client, gateway = api
        gateway.reply = model_reply({"risk_level": "low", "nist_score": 90})

        resp = await client.post("/run-assessment", json={"systemId": MISSING_ID, "template": "nist_ai_rmf"})

        assert resp.status_code == 404
        assert MISSING_ID in resp.json()["error"]
        assert gateway.calls == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("payload", [
        {"systemId": "not-a-uuid", "template": "eu_ai_act"},
        {"systemId": MISSING_ID, "template": "gdpr"},
        {"template": "eu_ai_act"},
    ])
    async def test_invalid_body_is_400(self, api, payload):
        client, _ = api

        resp = await client.post("/run-assessment", json=payload)

        assert resp.status_code == 400
        body = resp.json()
        assert body["error"] == "Invalid request parameters"
        assert body["details"]

    @pytest.mark.asyncio
    async def test_unparseable_reply_is_generic_500(self, api, system):
        client, gateway = api
        gateway.reply = "I'd rather not answer in JSON."

        resp = await client.post("/run-assessment", json={"systemId": system.id, "template": "iso_42001"})

        assert resp.status_code == 500
        assert resp.json() == {"error": "Model response could not be parsed"}

    @pytest.mark.asyncio
    async def test_gateway_failure_hides_upstream_detail(self, api, system):
        from governance_engine.core.errors import GatewayError

        client, gateway = api
        gateway.error = GatewayError("LLM gateway returned HTTP 402: payment required for org 42")

        resp = await client.post("/run-assessment", json={"systemId": system.id, "template": "iso_42001"})

        assert resp.status_code == 500
        assert "402" not in resp.json()["error"]

    @pytest.mark.asyncio
    async def test_unexpected_error_is_json_500(self, api, system):
        client, gateway = api
        gateway.error = RuntimeError("connection pool exhausted")

        resp = await client.post("/run-assessment", json={"systemId": system.id, "template": "nist_ai_rmf"})

        assert resp.status_code == 500
        assert resp.json() == {"error": "Failed to run assessment"}


class TestGenerateDocumentEndpoint:

    @pytest.mark.asyncio
    async def test_system_card(self, api, system):
        client, gateway = api
        gateway.reply = "# System Card\n..."

        resp = await client.post("/generate-document", json={"systemId": system.id, "type": "system_card"})

        assert resp.status_code == 200
        assert resp.json() == {"content": "# System Card\n..."}
        assert "NIST Score" not in gateway.last_user_prompt

    @pytest.mark.asyncio
    async def test_missing_system_is_404(self, api):
        client, gateway = api

        resp = await client.post("/generate-document", json={"systemId": MISSING_ID, "type": "risk_summary"})

        assert resp.status_code == 404
        assert gateway.calls == []

    @pytest.mark.asyncio
    async def test_missing_assessment_is_404(self, api, system):
        client, _ = api

        resp = await client.post(
            "/generate-document",
            json={"systemId": system.id, "assessmentId": MISSING_ID, "type": "risk_summary"},
        )

        assert resp.status_code == 404

    @pytest.mark.asyncio
    async def test_unknown_type_is_400(self, api, system):
        client, _ = api

        resp = await client.post("/generate-document", json={"systemId": system.id, "type": "press_release"})

        assert resp.status_code == 400
        assert resp.json()["error"] == "Invalid request parameters"

    @pytest.mark.asyncio
    async def test_unexpected_error_is_json_500(self, api, system):
        client, gateway = api
        gateway.error = RuntimeError("connection pool exhausted")

        resp = await client.post("/generate-document", json={"systemId": system.id, "type": "acceptable_use_policy"})

        assert resp.status_code == 500
        assert resp.json() == {"error": "An error occurred generating your document"}


@pytest.mark.asyncio
async def test_health():
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        resp = await client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"
