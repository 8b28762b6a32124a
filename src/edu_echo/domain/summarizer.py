"""Core business logic for lecture summarization."""

import logging

from edu_echo.domain.generation import generate_text
from edu_echo.domain.models import ChunkSummary, SummaryReport
from edu_echo.domain.report_parser import parse_chunk_summary
from edu_echo.domain.text_chunker import split_by_tokens
from edu_echo.exceptions import EmptyTranscriptError
from edu_echo.infrastructure.interfaces import TextGenerator

logger = logging.getLogger(__name__)

UNINTELLIGIBLE_MARKER = "unintelligible"

PROMPT_TEMPLATE = (
    'Given a class lecture transcription, summarize the key content. '
    'The transcription is: "{chunk}".\n\n'
    "{duration_line}"
    "Here's what I need:\n"
    "- A short and clear topic title.\n"
    "- The most important points discussed, formatted as 'Title: Explanation'. "
    "Each point should start with a dash and be on a new line.\n"
    "- A coherent summary that ties together the main points, placed under the "
    "heading 'Summary:'.\n\n"
    "The summary should be clear, concise, and reflect only the content covered "
    "in the lecture.\n"
)


def build_prompt(chunk: str, duration: float | None = None) -> str:
    duration_line = ""
    if duration:
        minutes = max(1, round(duration / 60))
        duration_line = f"The full recording is about {minutes} minutes long.\n\n"
    return PROMPT_TEMPLATE.format(chunk=chunk, duration_line=duration_line)


class SummarizationEngine:
    """Summarizes transcripts chunk by chunk with a text generation backend."""

    def __init__(
        self,
        generator: TextGenerator,
        token_budget: int = 1000,
        timeout_seconds: float = 120.0,
    ):
        self._generator = generator
        self._token_budget = token_budget
        self._timeout_seconds = timeout_seconds

    async def summarize(
        self, transcript: str, duration: float | None = None
    ) -> SummaryReport:
        """
        Summarizes a transcript into one report.

        Chunks are summarized sequentially in document order. The first failing
        chunk aborts the call; no partial report is returned.

        Args:
            transcript: Full transcript text.
            duration: Audio duration in seconds, if known.

        Returns:
            SummaryReport with one ChunkSummary per chunk.

        Raises:
            EmptyTranscriptError: If there is nothing to summarize.
            GenerationError: If any chunk fails to generate or parse.
        """
        if not transcript.strip() or UNINTELLIGIBLE_MARKER in transcript.lower():
            raise EmptyTranscriptError()

        chunks: list[ChunkSummary] = []
        for index, chunk in enumerate(split_by_tokens(transcript, self._token_budget)):
            text = await generate_text(
                self._generator, build_prompt(chunk, duration), self._timeout_seconds
            )
            chunks.append(parse_chunk_summary(text))
            logger.info(
                "Chunk summarized",
                extra={"chunk_index": index, "chunk_chars": len(chunk)},
            )

        logger.info("Transcript summarized", extra={"chunk_count": len(chunks)})
        return SummaryReport(chunks=chunks)
