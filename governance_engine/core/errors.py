"""
Error taxonomy for the assessment / document pipeline.

Every pipeline failure is a GovernanceError carrying the HTTP status it maps
to. 5xx errors never expose their message to callers: the detail goes to the
log, the caller gets `public_message`.
"""
from __future__ import annotations

from typing import Any, Optional


class GovernanceError(Exception):
    """Base class for all pipeline errors."""

    status_code: int = 500
    expose: bool = False
    default_message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None, details: Optional[Any] = None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message
        self.details = details

    @property
    def public_message(self) -> str:
        return self.message if self.expose else self.default_message


class ValidationError(GovernanceError):
    """Malformed input: bad UUID, unknown template or document type."""

    status_code = 400
    expose = True
    default_message = "Invalid request parameters"


class NotFoundError(GovernanceError):
    """Referenced AI system or assessment does not exist."""

    status_code = 404
    expose = True
    default_message = "Resource not found"


class ConfigurationError(GovernanceError):
    """Operator-fixable setup problem, e.g. missing LLM API key."""

    default_message = "Service is not configured correctly"


class GatewayError(GovernanceError):
    """The LLM gateway call failed."""

    default_message = "Upstream model call failed"


class ParseError(GovernanceError):
    """The model answer could not be decoded into the expected shape."""

    default_message = "Model response could not be parsed"
