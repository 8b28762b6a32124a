"""Tests for the summarization engine."""

import asyncio

import pytest

from conftest import SUMMARY_REPLY, FakeTextGenerator
from edu_echo.domain.models import SUMMARY_SEPARATOR
from edu_echo.domain.report_parser import parse_chunk_summary
from edu_echo.domain.summarizer import SummarizationEngine, build_prompt
from edu_echo.exceptions import EmptyTranscriptError, GenerationError
from edu_echo.infrastructure.interfaces import TextGenerator

FIRST = " ".join(["alpha"] * 100) + "."
SECOND = " ".join(["beta"] * 100) + "."


class SlowGenerator(TextGenerator):
    async def generate(self, prompt):
        await asyncio.sleep(1)
        return "too late"


class TestSummarizationEngine:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("transcript", ["", "   \n", "[Unintelligible] noise"])
    async def test_unusable_transcript_skips_generation(self, transcript):
        generator = FakeTextGenerator()
        with pytest.raises(EmptyTranscriptError):
            await SummarizationEngine(generator).summarize(transcript)
        assert generator.prompts == []

    @pytest.mark.asyncio
    async def test_chunks_are_summarized_in_order(self):
        replies = [
            SUMMARY_REPLY.format(topic="Alpha"),
            SUMMARY_REPLY.format(topic="Beta"),
        ]
        generator = FakeTextGenerator(replies)

        report = await SummarizationEngine(generator).summarize(f"{FIRST} {SECOND}")

        assert len(generator.prompts) == 2
        assert "alpha" in generator.prompts[0] and "beta" not in generator.prompts[0]
        assert "beta" in generator.prompts[1]
        expected = (
            parse_chunk_summary(replies[0]).render()
            + SUMMARY_SEPARATOR
            + parse_chunk_summary(replies[1]).render()
        )
        assert report.text == expected
        assert report.topic == "Alpha"
        assert len(report.points) == 2

    @pytest.mark.asyncio
    async def test_failed_chunk_aborts_remaining_chunks(self):
        third = " ".join(["gamma"] * 100) + "."
        generator = FakeTextGenerator(
            [SUMMARY_REPLY.format(topic="Alpha"), "", SUMMARY_REPLY.format(topic="C")]
        )

        with pytest.raises(GenerationError):
            await SummarizationEngine(generator).summarize(f"{FIRST} {SECOND} {third}")

        assert len(generator.prompts) == 2

    @pytest.mark.asyncio
    async def test_backend_error_propagates(self):
        generator = FakeTextGenerator([GenerationError("quota exceeded")])
        with pytest.raises(GenerationError, match="quota exceeded"):
            await SummarizationEngine(generator).summarize("A short lecture.")

    @pytest.mark.asyncio
    async def test_generation_timeout_raises(self):
        engine = SummarizationEngine(SlowGenerator(), timeout_seconds=0.01)
        with pytest.raises(GenerationError, match="did not complete"):
            await engine.summarize("A short lecture.")


class TestBuildPrompt:
    def test_includes_chunk_and_duration(self):
        prompt = build_prompt("Newton's laws.", duration=300)
        assert '"Newton\'s laws."' in prompt
        assert "about 5 minutes long" in prompt
        assert "Summary:" in prompt

    def test_omits_duration_when_unknown(self):
        assert "minutes long" not in build_prompt("Newton's laws.")
