"""Multiple-choice quiz generation from study material."""

import logging

from edu_echo.domain.generation import generate_text
from edu_echo.domain.models import QuizQuestion
from edu_echo.domain.report_parser import parse_quiz_question
from edu_echo.domain.text_chunker import split_by_tokens
from edu_echo.exceptions import InsufficientContentError
from edu_echo.infrastructure.interfaces import TextGenerator

logger = logging.getLogger(__name__)

MIN_CONTENT_LENGTH = 100

QUIZ_PROMPT_TEMPLATE = (
    "Based on the following content, create a '{difficulty}' level quiz question "
    "with four multiple-choice options labeled A, B, C, and D, and indicate the "
    "correct answer.\n"
    "Use exactly this layout:\n"
    "Question: <question>\nA. <option>\nB. <option>\nC. <option>\nD. <option>\n"
    "Answer: <letter>\n"
    'Content: "{content}"\n'
)


class QuizGenerator:
    """Generates quiz questions, one generation request per question."""

    def __init__(
        self,
        generator: TextGenerator,
        token_budget: int = 1000,
        timeout_seconds: float = 120.0,
    ):
        self._generator = generator
        self._token_budget = token_budget
        self._timeout_seconds = timeout_seconds

    async def generate(
        self, content: str, difficulty: str = "medium", count: int = 10
    ) -> list[QuizQuestion]:
        """
        Generates count questions spread over the chunks of content.

        Raises:
            InsufficientContentError: If content is shorter than MIN_CONTENT_LENGTH.
            GenerationError: If a question cannot be generated or parsed.
        """
        content = content.strip()
        if len(content) < MIN_CONTENT_LENGTH:
            raise InsufficientContentError(len(content), MIN_CONTENT_LENGTH)

        chunks = list(split_by_tokens(content, self._token_budget))
        questions = []
        for index in range(count):
            chunk = chunks[index % len(chunks)]
            prompt = QUIZ_PROMPT_TEMPLATE.format(difficulty=difficulty, content=chunk)
            text = await generate_text(self._generator, prompt, self._timeout_seconds)
            questions.append(parse_quiz_question(text))

        logger.info(
            "Quiz generated",
            extra={"question_count": len(questions), "chunk_count": len(chunks)},
        )
        return questions
