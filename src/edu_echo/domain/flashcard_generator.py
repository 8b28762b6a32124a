"""Term and definition flashcards from study material."""

import logging

from edu_echo.domain.generation import generate_text
from edu_echo.domain.models import Flashcard
from edu_echo.domain.report_parser import parse_flashcards
from edu_echo.domain.text_chunker import split
from edu_echo.exceptions import MissingMaterialError
from edu_echo.infrastructure.interfaces import TextGenerator

logger = logging.getLogger(__name__)

FLASHCARD_PROMPT_TEMPLATE = (
    "Analyze the following educational text to identify key concepts and their "
    "explanations. For each important term, create a flashcard with the format:\n\n"
    "Term: [Key Term]\nDefinition: [Explanation of the Key Term]\n\n"
    "Text:\n{segment}"
)


class FlashcardGenerator:
    """Generates flashcards with one generation request per text segment."""

    def __init__(
        self,
        generator: TextGenerator,
        segment_chars: int = 4000,
        timeout_seconds: float = 120.0,
    ):
        self._generator = generator
        self._segment_chars = segment_chars
        self._timeout_seconds = timeout_seconds

    async def generate(self, material: str) -> list[Flashcard]:
        """
        Generates flashcards for every segment of material, in order.

        Raises:
            MissingMaterialError: If material is empty or whitespace.
            GenerationError: If a segment's reply is empty, times out or
                holds no flashcard.
        """
        material = material.strip()
        if not material:
            raise MissingMaterialError()

        flashcards: list[Flashcard] = []
        segments = list(split(material, self._segment_chars))
        for segment in segments:
            prompt = FLASHCARD_PROMPT_TEMPLATE.format(segment=segment)
            text = await generate_text(self._generator, prompt, self._timeout_seconds)
            flashcards.extend(parse_flashcards(text))

        logger.info(
            "Flashcards generated",
            extra={"flashcard_count": len(flashcards), "segment_count": len(segments)},
        )
        return flashcards
