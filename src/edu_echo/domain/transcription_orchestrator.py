"""Runs long-running speech recognition jobs and assembles transcripts."""

import asyncio
import logging

from edu_echo.domain.models import (
    JobStatus,
    RecognitionConfig,
    RecognitionJob,
    RecognitionSegment,
    StorageLocation,
)
from edu_echo.exceptions import RecognitionError
from edu_echo.infrastructure.interfaces import TranscriptionService

logger = logging.getLogger(__name__)


class TranscriptionOrchestrator:
    """Submits a recognition job for a stored object and waits for its transcript."""

    def __init__(
        self,
        service: TranscriptionService,
        poll_interval_seconds: float = 5.0,
        timeout_seconds: float = 1800.0,
    ):
        self._service = service
        self._poll_interval_seconds = poll_interval_seconds
        self._timeout_seconds = timeout_seconds

    async def transcribe(
        self, location: StorageLocation, config: RecognitionConfig = RecognitionConfig()
    ) -> str:
        """
        Transcribes a stored audio object.

        Args:
            location: Where the WAV file lives in the object store.
            config: Recognition settings.

        Returns:
            Top alternatives of each segment joined by newlines. Empty when no
            speech was recognized.

        Raises:
            RecognitionError: If the job fails, errors, or does not complete
                within the timeout.
        """
        try:
            job_id = await self._service.submit(location, config)
            logger.info(
                "Recognition job submitted",
                extra={"job_id": job_id, "uri": location.uri},
            )
            job = await asyncio.wait_for(
                self._wait_for_completion(job_id), self._timeout_seconds
            )
        except asyncio.TimeoutError as e:
            logger.error(
                "Recognition job timed out",
                extra={"uri": location.uri, "timeout_seconds": self._timeout_seconds},
            )
            raise RecognitionError(
                location.uri,
                f"job did not complete within {self._timeout_seconds:.0f}s",
                cause=e,
            ) from e
        except RecognitionError:
            raise
        except Exception as e:
            logger.exception("Recognition request failed", extra={"uri": location.uri})
            raise RecognitionError(location.uri, str(e), cause=e) from e

        if job.status == JobStatus.ERROR:
            raise RecognitionError(location.uri, job.error or "recognition job failed")

        transcript = assemble_transcript(job.segments)
        logger.info(
            "Recognition job completed",
            extra={
                "job_id": job.job_id,
                "segment_count": len(job.segments),
                "transcript_chars": len(transcript),
            },
        )
        return transcript

    async def _wait_for_completion(self, job_id: str) -> RecognitionJob:
        while True:
            job = await self._service.poll(job_id)
            if job.finished:
                return job
            await asyncio.sleep(self._poll_interval_seconds)


def assemble_transcript(segments: list[RecognitionSegment]) -> str:
    """Joins the best alternative of each segment, skipping empty segments."""
    return "\n".join(
        segment.alternatives[0]
        for segment in segments
        if segment.alternatives and segment.alternatives[0]
    )
