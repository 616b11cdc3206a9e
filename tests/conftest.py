"""
Shared fixtures: in-memory SQLite store and a scripted LLM gateway.
"""
from __future__ import annotations

import json

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from governance_engine.core.errors import GatewayError
from governance_engine.models.records import AISystem, Base

USER_ID = "11111111-1111-1111-1111-111111111111"


class ScriptedGateway:
    """Stands in for GatewayClient: returns canned text and records prompts."""

    def __init__(self, reply: str = "", error: Exception | None = None):
        self.reply = reply
        self.error = error
        self.calls: list[tuple[str, str]] = []

    async def send(self, system_prompt: str, user_prompt: str) -> str:
        self.calls.append((system_prompt, user_prompt))
        if self.error is not None:
            raise self.error
        return self.reply

    @property
    def last_user_prompt(self) -> str:
        return self.calls[-1][1]


def make_system(**overrides) -> AISystem:
    """Baseline credit-scoring system, override specific fields."""
    fields = {
        "name": "Loan Default Predictor",
        "description": "Scores retail loan applications for default risk",
        "owner": "Jordan Lee",
        "business_unit": "Retail Lending",
        "geography": "EU",
        "data_type": "Personal financial data",
        "model_type": "Gradient boosted trees",
        "training_source": "Internal loan book 2015-2024",
        "deployment_environment": "Production (AWS eu-central-1)",
        "created_by": USER_ID,
    }
    fields.update(overrides)
    return AISystem(**fields)


def model_reply(payload: dict, fenced: bool = False) -> str:
    text = json.dumps(payload)
    return f"```json\n{text}\n```" if fenced else text


@pytest_asyncio.fixture
async def session_factory():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(engine, expire_on_commit=False)
    await engine.dispose()


@pytest_asyncio.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def system(db) -> AISystem:
    s = make_system()
    db.add(s)
    await db.commit()
    return s


@pytest.fixture
def failing_gateway() -> ScriptedGateway:
    return ScriptedGateway(error=GatewayError("LLM gateway returned HTTP 502"))
