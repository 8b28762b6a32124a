"""Shared text generation call used by the summarizer and the quiz generator."""

import asyncio
import logging

from edu_echo.exceptions import GenerationError
from edu_echo.infrastructure.interfaces import TextGenerator

logger = logging.getLogger(__name__)


async def generate_text(
    generator: TextGenerator, prompt: str, timeout_seconds: float
) -> str:
    """
    Runs one generation request with a client-side timeout.

    Raises:
        GenerationError: If the backend fails, times out or returns nothing.
    """
    try:
        text = await asyncio.wait_for(generator.generate(prompt), timeout_seconds)
    except asyncio.TimeoutError as e:
        logger.error("Generation timed out", extra={"timeout_seconds": timeout_seconds})
        raise GenerationError(
            f"Generation did not complete within {timeout_seconds:.0f}s", cause=e
        ) from e

    if not text or not text.strip():
        raise GenerationError("Generation backend returned an empty response")
    return text.strip()
