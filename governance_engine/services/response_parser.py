"""
Response Parser

The model is asked for bare JSON but often wraps it in a markdown fence.
Two tiers:
  1. json.loads on the whole text
  2. the first ```json fenced block, then the first generic ``` block
Anything else is a ParseError.
"""
from __future__ import annotations

import json
import re
from typing import Any, Union

import structlog
from pydantic import ValidationError as PydanticValidationError

from governance_engine.core.errors import ParseError
from governance_engine.schemas.assessment_result import AssessmentResult
from governance_engine.schemas.requests import AssessmentTemplate

logger = structlog.get_logger()

JSON_FENCE = re.compile(r"```json[ \t]*\r?\n(.*?)\r?\n?```", re.DOTALL | re.IGNORECASE)
GENERIC_FENCE = re.compile(r"```[ \t]*\r?\n(.*?)\r?\n?```", re.DOTALL)


def _loads_object(text: str) -> dict[str, Any]:
    value = json.loads(text)
    if not isinstance(value, dict):
        raise ParseError(f"Expected a JSON object, got {type(value).__name__}")
    return value


def parse_json_response(text: str) -> dict[str, Any]:
    """Extract the JSON object from a model answer."""
    try:
        return _loads_object(text)
    except json.JSONDecodeError:
        pass

    for fence in (JSON_FENCE, GENERIC_FENCE):
        match = fence.search(text)
        if match is None:
            continue
        try:
            return _loads_object(match.group(1))
        except json.JSONDecodeError as e:
            logger.warning("fenced_json_invalid", error=str(e))
            raise ParseError("Fenced block in model response is not valid JSON") from e

    logger.warning("model_response_not_json", preview=text[:200])
    raise ParseError("Model response contains no JSON object")


def decode_assessment_result(
    text: str, template: Union[str, AssessmentTemplate]
) -> AssessmentResult:
    """Parse + validate an assessment answer against the strict result schema."""
    template = AssessmentTemplate(template)
    payload = parse_json_response(text)
    try:
        return AssessmentResult.for_template(payload, template)
    except (PydanticValidationError, ValueError) as e:
        logger.warning("assessment_result_invalid", template=template.value, error=str(e))
        raise ParseError("Model response does not match the assessment schema", details=str(e)) from e
