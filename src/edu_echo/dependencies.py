"""Service construction and FastAPI dependency getters."""

import logging
from dataclasses import dataclass
from typing import Optional
from uuid import UUID

import assemblyai as aai
import redis
from fastapi import Header, HTTPException
from fastapi.requests import HTTPConnection
from google import genai
from minio import Minio

from edu_echo.config import AppConfig
from edu_echo.database import get_engine, init_db, make_session_factory
from edu_echo.domain.audio_transcoder import AudioTranscoder
from edu_echo.domain.duration_prober import DurationProber
from edu_echo.domain.flashcard_generator import FlashcardGenerator
from edu_echo.domain.quiz_generator import QuizGenerator
from edu_echo.domain.summarizer import SummarizationEngine
from edu_echo.domain.transcription_orchestrator import TranscriptionOrchestrator
from edu_echo.handlers import AudioPipeline
from edu_echo.infrastructure import (
    AssemblyAITranscriber,
    GeminiTextGenerator,
    MinioStorageClient,
    ObserverRegistry,
    RedisCacheService,
)
from edu_echo.infrastructure.interfaces import StorageClient
from edu_echo.repositories import AudioRepository, SummaryRepository, UserRepository

logger = logging.getLogger(__name__)


@dataclass
class Services:
    """Everything the routes need, built once per process."""

    pipeline: AudioPipeline
    storage: StorageClient
    quiz_generator: QuizGenerator
    flashcard_generator: FlashcardGenerator
    audio_repository: AudioRepository
    user_repository: UserRepository
    summary_repository: SummaryRepository
    notifier: ObserverRegistry


def build_services(config: AppConfig) -> Services:
    """Connects to every backing service and composes the pipeline."""
    # MinIO storage
    minio_client = Minio(
        endpoint=config.minio.endpoint,
        access_key=config.minio.user,
        secret_key=config.minio.password,
        secure=config.minio.secure,
    )
    storage = MinioStorageClient(minio_client, config.minio.bucket_name)
    storage.ensure_bucket_exists()

    # Redis transcript cache
    redis_client = redis.Redis(
        host=config.redis.host,
        port=config.redis.port,
        decode_responses=True,
    )
    if not redis_client.ping():
        logger.error("Redis connection failed", extra={"host": config.redis.host})
        raise ConnectionError("Redis connection failed")
    cache = RedisCacheService(redis_client, config.redis.cache_ttl_seconds)

    # Gemini text generation
    gemini_client = genai.Client(api_key=config.gemini.api_key)
    generator = GeminiTextGenerator(
        gemini_client,
        config.gemini.model_name,
        temperature=config.gemini.temperature,
        max_output_tokens=config.gemini.max_output_tokens,
    )

    # AssemblyAI speech recognition
    aai.settings.api_key = config.assemblyai.api_key
    transcription_service = AssemblyAITranscriber(
        aai.Transcriber(), storage, speaker_labels=config.assemblyai.speaker_labels
    )
    orchestrator = TranscriptionOrchestrator(
        transcription_service,
        poll_interval_seconds=config.assemblyai.poll_interval_seconds,
        timeout_seconds=config.assemblyai.timeout_seconds,
    )

    # PostgreSQL database
    engine = get_engine(config.database.url)
    init_db(engine)
    logger.info("Database initialized", extra={"host": config.database.host})
    session_factory = make_session_factory(engine)

    audio_repository = AudioRepository(session_factory)
    user_repository = UserRepository(session_factory)
    summary_repository = SummaryRepository(session_factory)

    # Service composition
    notifier = ObserverRegistry()
    summarizer = SummarizationEngine(
        generator,
        token_budget=config.pipeline.token_budget,
        timeout_seconds=config.gemini.timeout_seconds,
    )
    pipeline = AudioPipeline(
        storage=storage,
        transcoder=AudioTranscoder(),
        prober=DurationProber(),
        orchestrator=orchestrator,
        summarizer=summarizer,
        audio_repository=audio_repository,
        user_repository=user_repository,
        summary_repository=summary_repository,
        notifier=notifier,
        cache=cache,
        config=config.pipeline,
    )
    return Services(
        pipeline=pipeline,
        storage=storage,
        quiz_generator=QuizGenerator(
            generator,
            token_budget=config.pipeline.token_budget,
            timeout_seconds=config.gemini.timeout_seconds,
        ),
        flashcard_generator=FlashcardGenerator(
            generator, timeout_seconds=config.gemini.timeout_seconds
        ),
        audio_repository=audio_repository,
        user_repository=user_repository,
        summary_repository=summary_repository,
        notifier=notifier,
    )


def get_services(connection: HTTPConnection) -> Services:
    return connection.app.state.services


def get_pipeline(connection: HTTPConnection) -> AudioPipeline:
    return get_services(connection).pipeline


def get_storage(connection: HTTPConnection) -> StorageClient:
    return get_services(connection).storage


def get_quiz_generator(connection: HTTPConnection) -> QuizGenerator:
    return get_services(connection).quiz_generator


def get_flashcard_generator(connection: HTTPConnection) -> FlashcardGenerator:
    return get_services(connection).flashcard_generator


def get_audio_repository(connection: HTTPConnection) -> AudioRepository:
    return get_services(connection).audio_repository


def get_user_repository(connection: HTTPConnection) -> UserRepository:
    return get_services(connection).user_repository


def get_summary_repository(connection: HTTPConnection) -> SummaryRepository:
    return get_services(connection).summary_repository


def get_notifier(connection: HTTPConnection) -> ObserverRegistry:
    return get_services(connection).notifier


def get_current_user_id(x_user_id: Optional[UUID] = Header(default=None)) -> UUID:
    """Identifies the caller from the X-User-Id header set by the auth gateway."""
    if x_user_id is None:
        raise HTTPException(status_code=401, detail="Authentication required")
    return x_user_id
