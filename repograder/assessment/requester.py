"""Assessment requester: one text-generation round trip per profile."""

from __future__ import annotations

import logging

from pydantic import ValidationError

from repograder.assessment.extract import extract_json_object
from repograder.assessment.models import Assessment
from repograder.assessment.prompts import PromptTemplate
from repograder.errors import GenerationError
from repograder.llm.base import LLMProvider
from repograder.llm.models import EmptyResponseError, LLMError
from repograder.profile.models import QualityProfile

logger = logging.getLogger(__name__)

SCHEMA_MISMATCH = "schema mismatch"


async def request_assessment(
    profile: QualityProfile,
    llm: LLMProvider,
    *,
    max_tokens: int | None = None,
) -> Assessment:
    """Ask the text service to assess ``profile`` and parse its reply.

    Sends a single request, with no retry. Raises GenerationError when the
    call fails, the reply holds no JSON object, or the object does not match
    the Assessment schema.
    """
    system, user = PromptTemplate().render(profile)

    try:
        response = await llm.generate(system=system, user=user, max_tokens=max_tokens)
    except LLMError as e:
        logger.error("Text generation failed: %s", e)
        raise GenerationError(_failure_reason(e)) from e

    logger.debug("Raw model reply (%d chars): %s", len(response.content), response.content)
    payload = extract_json_object(response.content)
    try:
        assessment = Assessment.model_validate(payload)
    except ValidationError as e:
        logger.error("Model reply does not match the assessment schema: %s", e)
        raise GenerationError(SCHEMA_MISMATCH) from e

    logger.info(
        "Assessment parsed: %s (confidence %d)", assessment.level.value, assessment.confidence
    )
    return assessment


def _failure_reason(error: LLMError) -> str:
    if isinstance(error.__cause__, EmptyResponseError):
        return "empty response"
    if error.status_code is not None:
        return f"service returned status {error.status_code}"
    return "transport failure"
