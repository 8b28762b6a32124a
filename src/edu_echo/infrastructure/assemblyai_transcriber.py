"""AssemblyAI implementation of the TranscriptionService interface."""

import asyncio
import logging

import assemblyai as aai

from edu_echo.domain.models import (
    JobStatus,
    RecognitionConfig,
    RecognitionJob,
    RecognitionSegment,
    StorageLocation,
)
from edu_echo.exceptions import RecognitionError
from edu_echo.infrastructure.interfaces import StorageClient, TranscriptionService

logger = logging.getLogger(__name__)

_STATUS_MAP = {
    aai.TranscriptStatus.queued: JobStatus.QUEUED,
    aai.TranscriptStatus.processing: JobStatus.PROCESSING,
    aai.TranscriptStatus.completed: JobStatus.COMPLETED,
    aai.TranscriptStatus.error: JobStatus.ERROR,
}


class AssemblyAITranscriber(TranscriptionService):
    """Handles long-running transcription jobs using AssemblyAI."""

    def __init__(
        self,
        transcriber: aai.Transcriber,
        storage: StorageClient,
        speaker_labels: bool = False,
    ):
        self._transcriber = transcriber
        self._storage = storage
        self._speaker_labels = speaker_labels

    async def submit(self, location: StorageLocation, config: RecognitionConfig) -> str:
        """
        Queues a transcription job for a stored object.

        AssemblyAI fetches the audio itself, so the object is handed over as a
        presigned URL. Encoding and sample rate are read from the WAV header by
        the service; only the language is passed on.
        """
        try:
            audio_url = await self._storage.presigned_url(location)
            transcript = await asyncio.to_thread(
                self._transcriber.submit,
                audio_url,
                config=aai.TranscriptionConfig(
                    language_code=_language_code(config.language_code),
                    speaker_labels=self._speaker_labels,
                ),
            )
        except Exception as e:
            logger.exception(
                "AssemblyAI submission failed", extra={"uri": location.uri}
            )
            raise RecognitionError(
                location.uri, "job submission failed", cause=e
            ) from e

        logger.info(
            "AssemblyAI job queued",
            extra={"uri": location.uri, "transcript_id": transcript.id},
        )
        return transcript.id

    async def poll(self, job_id: str) -> RecognitionJob:
        try:
            transcript = await asyncio.to_thread(aai.Transcript.get_by_id, job_id)
        except Exception as e:
            logger.exception("AssemblyAI poll failed", extra={"transcript_id": job_id})
            raise RecognitionError(job_id, "job status unavailable", cause=e) from e

        status = _STATUS_MAP.get(transcript.status, JobStatus.PROCESSING)
        if status != JobStatus.COMPLETED:
            return RecognitionJob(job_id=job_id, status=status, error=transcript.error)

        return RecognitionJob(
            job_id=job_id,
            status=status,
            segments=_segments(transcript),
        )


def _language_code(language_code: str) -> str:
    """Converts a BCP-47 tag such as en-US to AssemblyAI's en_us form."""
    return language_code.replace("-", "_").lower()


def _segments(transcript: aai.Transcript) -> list[RecognitionSegment]:
    if transcript.utterances:
        return [
            RecognitionSegment(alternatives=[u.text]) for u in transcript.utterances
        ]
    if transcript.text:
        return [RecognitionSegment(alternatives=[transcript.text])]
    return []
