"""Request-to-script pipeline.

normalize -> classify -> match template -> extract values -> build script

Every failure point returns the no-match sentinel result with an explanation; the pipeline never
raises for malformed requests or templates.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from src.intent.classifier import classify_intent
from src.intent.extractor import extract_values, missing_values
from src.intent.normalize import normalize_request
from src.intent.schema import GenerationResult
from src.sql.builder import build_script
from src.sql.library import match_template

logger = logging.getLogger(__name__)


def generate_script(
        request: str,
        library: Sequence[str],
        *,
        word_boundaries: bool = False,
) -> GenerationResult:
    """Turn a free-text mutation request into a reviewed-draft SQL script."""

    text = normalize_request(request)
    logger.debug("normalized request=%r", text)

    intent = classify_intent(text, word_boundaries=word_boundaries)
    if intent is None:
        logger.info("no intent request=%r", text)
        return GenerationResult.no_match("could not determine update type")

    template = match_template(library, intent.type)
    if template is None:
        logger.info("no template type=%s templates=%d", intent.type, len(library))
        return GenerationResult.no_match(f"no matching template for {intent.type}")

    values = extract_values(text, intent)
    logger.debug("extracted type=%s values=%s", intent.type, values)
    missing = missing_values(values, intent.type)
    if missing:
        logger.info("unparsed values type=%s missing=%s", intent.type, ",".join(missing))
        return GenerationResult.no_match(f"could not parse values for {intent.type}")

    script = build_script(template, intent.type, values)
    logger.info("generated type=%s user_id=%s", intent.type, values.user_id)
    return GenerationResult(
        script=script,
        explanation=f"updates {intent.type} for a user (review before committing)",
    )
