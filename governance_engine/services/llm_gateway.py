"""
LLM Gateway Client

One outbound POST per call to an OpenAI-compatible chat-completion endpoint:

    {"model": <model>, "messages": [{"role": "system", ...}, {"role": "user", ...}]}
    → choices[0].message.content

Configuration is injected at construction. No retry, no streaming.
Upstream error bodies are logged and never surfaced to callers.
"""
from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Optional

import httpx
import structlog

from governance_engine.core.config import Settings, get_settings
from governance_engine.core.errors import ConfigurationError, GatewayError
from governance_engine.core.metrics import GATEWAY_CALLS, GATEWAY_LATENCY

logger = structlog.get_logger()

# Upstream error bodies are truncated to this many characters in the log
MAX_LOGGED_BODY = 500


@dataclass(frozen=True)
class GatewayConfig:
    url: str
    model: str
    api_key: Optional[str]
    timeout_seconds: float = 60.0

    @classmethod
    def from_settings(cls, settings: Settings) -> "GatewayConfig":
        return cls(
            url=settings.llm_gateway_url,
            model=settings.llm_model,
            api_key=settings.llm_api_key,
            timeout_seconds=settings.llm_timeout_seconds,
        )


class GatewayClient:
    def __init__(self, config: GatewayConfig):
        self.config = config

    async def send(self, system_prompt: str, user_prompt: str) -> str:
        """Return the assistant message text for a (system, user) prompt pair."""
        if not self.config.api_key:
            logger.error("llm_gateway_not_configured", url=self.config.url)
            raise ConfigurationError("LLM gateway API key not configured")

        body = {
            "model": self.config.model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
        }
        headers = {
            "Authorization": f"Bearer {self.config.api_key}",
            "Content-Type": "application/json",
        }

        t0 = time.perf_counter()
        try:
            async with httpx.AsyncClient(timeout=self.config.timeout_seconds) as client:
                resp = await client.post(self.config.url, json=body, headers=headers)
        except httpx.HTTPError as e:
            GATEWAY_CALLS.labels(outcome="transport_error").inc()
            logger.error("llm_gateway_transport_error", error=str(e), error_type=type(e).__name__)
            raise GatewayError(f"LLM gateway request failed: {e}") from e
        finally:
            GATEWAY_LATENCY.observe(time.perf_counter() - t0)

        if not resp.is_success:
            GATEWAY_CALLS.labels(outcome="http_error").inc()
            logger.error(
                "llm_gateway_error",
                status_code=resp.status_code,
                body=resp.text[:MAX_LOGGED_BODY],
            )
            raise GatewayError(f"LLM gateway returned HTTP {resp.status_code}")

        try:
            content = resp.json()["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            GATEWAY_CALLS.labels(outcome="bad_payload").inc()
            logger.error("llm_gateway_bad_payload", error=str(e), body=resp.text[:MAX_LOGGED_BODY])
            raise GatewayError("LLM gateway returned an unexpected payload") from e

        if not isinstance(content, str):
            GATEWAY_CALLS.labels(outcome="bad_payload").inc()
            logger.error("llm_gateway_bad_payload", error="content is not a string")
            raise GatewayError("LLM gateway returned an unexpected payload")

        GATEWAY_CALLS.labels(outcome="success").inc()
        logger.info(
            "llm_gateway_call_complete",
            model=self.config.model,
            elapsed_ms=int((time.perf_counter() - t0) * 1000),
            response_chars=len(content),
        )
        return content


def get_gateway() -> GatewayClient:
    """FastAPI dependency: a client built from the process settings."""
    return GatewayClient(GatewayConfig.from_settings(get_settings()))
