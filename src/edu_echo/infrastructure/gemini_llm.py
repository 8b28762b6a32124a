"""Gemini implementation of the TextGenerator interface."""

import logging

from google import genai

from edu_echo.exceptions import GenerationError
from edu_echo.infrastructure.interfaces import TextGenerator

logger = logging.getLogger(__name__)


class GeminiTextGenerator(TextGenerator):
    """Text generation using Google Gemini."""

    def __init__(
        self,
        client: genai.Client,
        model_name: str,
        temperature: float = 0.3,
        max_output_tokens: int = 1000,
    ):
        self._client = client
        self._model_name = model_name
        self._temperature = temperature
        self._max_output_tokens = max_output_tokens

    async def generate(self, prompt: str) -> str:
        """
        Sends a prompt to Gemini and returns the response text.

        Raises:
            GenerationError: If the Gemini API call fails or returns no text.
        """
        try:
            response = await self._client.aio.models.generate_content(
                model=self._model_name,
                contents=prompt,
                config={
                    "temperature": self._temperature,
                    "max_output_tokens": self._max_output_tokens,
                },
            )
        except Exception as e:
            logger.exception(
                "Gemini API call failed", extra={"model": self._model_name}
            )
            raise GenerationError(f"Gemini generation failed: {e}", cause=e) from e

        if not response.text:
            logger.error(
                "Gemini returned empty response", extra={"model": self._model_name}
            )
            raise GenerationError("Gemini returned empty response")

        logger.info(
            "Gemini generation completed",
            extra={"model": self._model_name, "response_chars": len(response.text)},
        )
        return response.text
