"""Handler driving an audio upload through transcription and summarization."""

import asyncio
import logging
import uuid
from uuid import UUID

from edu_echo.config import PipelineConfig
from edu_echo.domain.audio_transcoder import AudioTranscoder
from edu_echo.domain.duration_prober import DurationProber
from edu_echo.domain.models import (
    PipelineStage,
    StorageLocation,
    SummaryReport,
    TranscriptionOutcome,
    UploadResult,
)
from edu_echo.domain.summarizer import SummarizationEngine
from edu_echo.domain.transcription_orchestrator import TranscriptionOrchestrator
from edu_echo.exceptions import (
    DurationExceededError,
    ExistenceTimeoutError,
    UploadError,
    UploadTooLargeError,
    UserNotFoundError,
)
from edu_echo.infrastructure.interfaces import CacheService, Notifier, StorageClient
from edu_echo.repositories import AudioRepository, SummaryRepository, UserRepository

logger = logging.getLogger(__name__)

WAV_CONTENT_TYPE = "audio/wav"

UPLOAD_SUCCEEDED = "Audio uploaded successfully and saved to database."
UPLOAD_FAILED = "Error during audio upload."
TRANSCRIPTION_SUCCEEDED = "Transcription and summarization successful."
TRANSCRIPTION_FAILED = "Error during transcription process."


def normalize_audio_id(audio_id: str) -> str:
    """Strips dashes and lower-cases an audio id so UUID forms resolve alike."""
    return audio_id.replace("-", "").strip().lower()


def object_name_for(audio_id: str) -> str:
    return f"audio-{audio_id}.wav"


class AudioPipeline:
    """
    Runs the two halves of the audio-to-summary pipeline.

    upload() transcodes and stores a new recording. transcribe() later turns
    a stored recording into a persisted summary for one user. Every stage is
    awaited in order and the first failure aborts the run. Observers are told
    about the outcome of both halves.
    """

    def __init__(
        self,
        storage: StorageClient,
        transcoder: AudioTranscoder,
        prober: DurationProber,
        orchestrator: TranscriptionOrchestrator,
        summarizer: SummarizationEngine,
        audio_repository: AudioRepository,
        user_repository: UserRepository,
        summary_repository: SummaryRepository,
        notifier: Notifier,
        cache: CacheService | None = None,
        config: PipelineConfig = PipelineConfig(),
    ):
        self._storage = storage
        self._transcoder = transcoder
        self._prober = prober
        self._orchestrator = orchestrator
        self._summarizer = summarizer
        self._audio_repository = audio_repository
        self._user_repository = user_repository
        self._summary_repository = summary_repository
        self._notifier = notifier
        self._cache = cache
        self._config = config

    async def upload(
        self, data: bytes | None, file_name: str | None = None
    ) -> UploadResult:
        """
        Transcodes an upload to WAV, stores it and records the asset.

        Args:
            data: Raw bytes of the uploaded file.
            file_name: Original file name, used for its extension.

        Returns:
            UploadResult with the new audio id and its storage location.

        Raises:
            UploadError: If no data was sent.
            UploadTooLargeError: If the data exceeds the upload limit.
            TranscodeError: If conversion to WAV fails.
            StorageWriteError: If the object store rejects the file.
            PersistenceError: If the asset cannot be recorded.
        """
        if not data:
            raise UploadError("Audio file is required")
        if len(data) > self._config.max_upload_bytes:
            raise UploadTooLargeError(len(data), self._config.max_upload_bytes)

        stage = PipelineStage.UPLOADING
        logger.info(
            "Processing upload",
            extra={"file_name": file_name, "size": len(data), "stage": stage.value},
        )
        try:
            wav_data = await self._transcoder.transcode(data, file_name)
            audio_id = uuid.uuid4().hex
            location = await self._storage.upload(
                wav_data, object_name_for(audio_id), WAV_CONTENT_TYPE
            )
            await asyncio.to_thread(
                self._audio_repository.save, audio_id, location.uri, WAV_CONTENT_TYPE
            )
        except Exception as e:
            self._log_failure(stage, e, file_name=file_name)
            await self._notify(UPLOAD_FAILED)
            raise

        stage = PipelineStage.UPLOADED
        logger.info(
            "Upload stored",
            extra={"audio_id": audio_id, "uri": location.uri, "stage": stage.value},
        )
        await self._notify(UPLOAD_SUCCEEDED)
        return UploadResult(audio_id=audio_id, location=location)

    async def transcribe(self, audio_id: str, user_id: UUID) -> TranscriptionOutcome:
        """
        Transcribes a stored recording and saves its summary for a user.

        Args:
            audio_id: Id returned by upload(), with or without dashes.
            user_id: Owner of the resulting summary.

        Returns:
            TranscriptionOutcome with the report, the saved record and the
            audio duration.

        Raises:
            UserNotFoundError: If the user does not exist.
            ExistenceTimeoutError: If the object never became visible.
            StorageReadError: If the object cannot be read.
            DecodeError: If the WAV header cannot be decoded.
            DurationExceededError: If the audio is too long.
            RecognitionError: If speech recognition fails.
            EmptyTranscriptError: If no usable speech was recognized.
            GenerationError: If summarization fails.
            PersistenceError: If the summary cannot be saved.
        """
        audio_id = normalize_audio_id(audio_id)
        location = self._storage.location_for(object_name_for(audio_id))
        stage = PipelineStage.UPLOADED
        logger.info(
            "Processing transcription",
            extra={"audio_id": audio_id, "user_id": str(user_id), "uri": location.uri},
        )

        try:
            if not await asyncio.to_thread(self._user_repository.exists, user_id):
                raise UserNotFoundError(user_id)

            found = await self._storage.exists(
                location,
                attempts=self._config.existence_attempts,
                delay_seconds=self._config.existence_delay_seconds,
            )
            if not found:
                raise ExistenceTimeoutError(
                    location.uri, self._config.existence_attempts
                )

            wav_data = await self._storage.download(location)
            stage = PipelineStage.TRANSCRIBED
            logger.info(
                "Audio downloaded",
                extra={
                    "audio_id": audio_id,
                    "size": len(wav_data),
                    "stage": stage.value,
                },
            )

            stage = PipelineStage.VALIDATING_DURATION
            duration = await self._prober.compute_duration(wav_data)
            if duration > self._config.max_duration_seconds:
                raise DurationExceededError(duration, self._config.max_duration_seconds)

            stage = PipelineStage.RECOGNIZING
            transcript = await self._recognize(audio_id, location)

            stage = PipelineStage.SUMMARIZING
            report = await self._summarizer.summarize(transcript, duration)

            stage = PipelineStage.PERSISTING
            record = await asyncio.to_thread(
                self._summary_repository.save_generated,
                user_id,
                report.topic,
                report.points,
            )
        except Exception as e:
            self._log_failure(stage, e, audio_id=audio_id)
            await self._notify(TRANSCRIPTION_FAILED)
            raise

        stage = PipelineStage.DONE
        logger.info(
            "Transcription processed",
            extra={
                "audio_id": audio_id,
                "summary_id": str(record.id),
                "chunk_count": len(report.chunks),
                "duration_seconds": duration,
                "stage": stage.value,
            },
        )
        await self._notify(TRANSCRIPTION_SUCCEEDED)
        return TranscriptionOutcome(
            report=report, record=record, duration_seconds=duration
        )

    async def summarize_text(
        self, transcript: str, duration: float | None = None
    ) -> SummaryReport:
        """Runs the summarization stage alone on a ready transcript."""
        return await self._summarizer.summarize(transcript, duration)

    async def _recognize(self, audio_id: str, location: StorageLocation) -> str:
        cache_key = f"transcript:{audio_id}"
        if self._cache:
            cached = await self._cache.get(cache_key)
            if cached:
                logger.info(
                    "Transcript retrieved from cache", extra={"audio_id": audio_id}
                )
                return cached

        transcript = await self._orchestrator.transcribe(location)

        if self._cache and transcript:
            await self._cache.set(cache_key, transcript)
        return transcript

    async def _notify(self, message: str) -> None:
        try:
            await self._notifier.broadcast(message)
        except Exception:
            logger.exception(
                "Failed to notify observers", extra={"notification": message}
            )

    def _log_failure(self, stage: PipelineStage, error: Exception, **context) -> None:
        logger.error(
            "Pipeline stage failed",
            extra={
                "stage": PipelineStage.FAILED.value,
                "failed_stage": stage.value,
                "error_type": type(error).__name__,
                "error": str(error),
                **context,
            },
        )
