"""Shared fixtures and fakes for the edu-echo test suite."""

import io
import wave
from types import SimpleNamespace
from uuid import UUID

import pytest
from sqlalchemy.pool import StaticPool

from edu_echo.config import PipelineConfig
from edu_echo.database import get_engine, init_db, make_session_factory
from edu_echo.domain.duration_prober import DurationProber
from edu_echo.domain.flashcard_generator import FlashcardGenerator
from edu_echo.domain.models import (
    JobStatus,
    RecognitionJob,
    RecognitionSegment,
    StorageLocation,
)
from edu_echo.domain.quiz_generator import QuizGenerator
from edu_echo.domain.summarizer import SummarizationEngine
from edu_echo.domain.transcription_orchestrator import TranscriptionOrchestrator
from edu_echo.exceptions import StorageReadError
from edu_echo.handlers import AudioPipeline
from edu_echo.infrastructure.interfaces import (
    CacheService,
    Notifier,
    StorageClient,
    TextGenerator,
    TranscriptionService,
)
from edu_echo.repositories import AudioRepository, SummaryRepository, UserRepository

BUCKET = "edu-echo-test"

SUMMARY_REPLY = """Topic Title: {topic}

- Key idea: {topic} is explained with an example.
- Second idea: a follow-up detail.

Summary: The lecture covered {topic}."""


def make_wav(seconds: float, sample_rate: int = 48000) -> bytes:
    """Builds a silent 16-bit mono WAV file."""
    buffer = io.BytesIO()
    with wave.open(buffer, "wb") as wav_file:
        wav_file.setnchannels(1)
        wav_file.setsampwidth(2)
        wav_file.setframerate(sample_rate)
        wav_file.writeframes(b"\x00\x00" * int(seconds * sample_rate))
    return buffer.getvalue()


class FakeStorage(StorageClient):
    """In-memory object store."""

    def __init__(self, bucket: str = BUCKET):
        self.bucket = bucket
        self.objects: dict[str, bytes] = {}
        self.exists_calls = 0
        self.downloads = 0

    def location_for(self, object_name: str) -> StorageLocation:
        return StorageLocation(bucket=self.bucket, object_name=object_name)

    async def upload(self, data, object_name, content_type="audio/wav"):
        self.objects[object_name] = data
        return self.location_for(object_name)

    async def exists(self, location, attempts=5, delay_seconds=2.0):
        self.exists_calls += 1
        return location.object_name in self.objects

    async def download(self, location):
        self.downloads += 1
        if location.object_name not in self.objects:
            raise StorageReadError(location.object_name)
        return self.objects[location.object_name]

    async def delete(self, location):
        self.objects.pop(location.object_name, None)

    async def presigned_url(self, location):
        return f"http://storage.test/{location.bucket}/{location.object_name}"


class FakeTranscoder:
    """Stands in for ffmpeg by returning a fixed WAV payload."""

    def __init__(self, wav_data: bytes):
        self.wav_data = wav_data
        self.calls: list[str | None] = []

    async def transcode(self, audio_data, file_name=None):
        self.calls.append(file_name)
        return self.wav_data


class FakeTranscriptionService(TranscriptionService):
    """Completes every job after a configurable number of polls."""

    def __init__(self, segments=None, polls_before_done: int = 0, error=None):
        self.segments = segments or []
        self.polls_before_done = polls_before_done
        self.error = error
        self.submitted: list[StorageLocation] = []
        self.polls = 0

    async def submit(self, location, config):
        self.submitted.append(location)
        return f"job-{len(self.submitted)}"

    async def poll(self, job_id):
        self.polls += 1
        if self.polls <= self.polls_before_done:
            return RecognitionJob(job_id=job_id, status=JobStatus.PROCESSING)
        if self.error:
            return RecognitionJob(
                job_id=job_id, status=JobStatus.ERROR, error=self.error
            )
        return RecognitionJob(
            job_id=job_id, status=JobStatus.COMPLETED, segments=self.segments
        )


def transcript_segments(*texts: str) -> list[RecognitionSegment]:
    return [RecognitionSegment(alternatives=[text]) for text in texts]


class FakeTextGenerator(TextGenerator):
    """Returns queued replies in order and records every prompt."""

    def __init__(self, replies=None):
        self.replies = list(replies or [])
        self.prompts: list[str] = []

    async def generate(self, prompt):
        self.prompts.append(prompt)
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply


class FakeCache(CacheService):
    def __init__(self):
        self.values: dict[str, str] = {}

    async def get(self, key):
        return self.values.get(key)

    async def set(self, key, value):
        self.values[key] = value


class FakeNotifier(Notifier):
    def __init__(self, fail: bool = False):
        self.messages: list[str] = []
        self.fail = fail

    async def broadcast(self, message):
        if self.fail:
            raise RuntimeError("notifier down")
        self.messages.append(message)


class FakeMinioResponse:
    def __init__(self, data: bytes):
        self.data = data
        self.closed = False
        self.released = False

    def close(self):
        self.closed = True

    def release_conn(self):
        self.released = True


class FakeMinio:
    """Mimics the subset of the minio.Minio API the storage client uses."""

    def __init__(self):
        self.objects: dict[tuple[str, str], bytes] = {}
        self.buckets: set[str] = set()
        self.list_calls = 0
        self.get_calls = 0
        self.responses: list[FakeMinioResponse] = []

    def bucket_exists(self, bucket_name):
        return bucket_name in self.buckets

    def make_bucket(self, bucket_name):
        self.buckets.add(bucket_name)

    def put_object(self, bucket_name, object_name, data, length, content_type):
        self.objects[(bucket_name, object_name)] = data.read(length)

    def list_objects(self, bucket_name, prefix=None):
        self.list_calls += 1
        return [
            SimpleNamespace(object_name=name)
            for bucket, name in self.objects
            if bucket == bucket_name and name.startswith(prefix or "")
        ]

    def get_object(self, bucket_name, object_name):
        self.get_calls += 1
        response = FakeMinioResponse(self.objects.get((bucket_name, object_name), b""))
        self.responses.append(response)
        return response

    def remove_object(self, bucket_name, object_name):
        self.objects.pop((bucket_name, object_name), None)

    def presigned_get_object(self, bucket_name, object_name, expires=None):
        return f"http://minio.test/{bucket_name}/{object_name}?expires={expires}"


@pytest.fixture
def session_factory():
    engine = get_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    yield make_session_factory(engine)
    engine.dispose()


@pytest.fixture
def audio_repository(session_factory):
    return AudioRepository(session_factory)


@pytest.fixture
def user_repository(session_factory):
    return UserRepository(session_factory)


@pytest.fixture
def summary_repository(session_factory):
    return SummaryRepository(session_factory)


@pytest.fixture
def user_id(user_repository) -> UUID:
    return user_repository.create("Ada Lovelace", "ada@example.com")


@pytest.fixture
def storage():
    return FakeStorage()


@pytest.fixture
def notifier():
    return FakeNotifier()


@pytest.fixture
def generator():
    return FakeTextGenerator()


@pytest.fixture
def transcription_service():
    return FakeTranscriptionService()


@pytest.fixture
def wav_data():
    return make_wav(3)


@pytest.fixture
def pipeline_config():
    return PipelineConfig(existence_delay_seconds=0)


@pytest.fixture
def pipeline(
    storage,
    wav_data,
    transcription_service,
    generator,
    audio_repository,
    user_repository,
    summary_repository,
    notifier,
    pipeline_config,
):
    return AudioPipeline(
        storage=storage,
        transcoder=FakeTranscoder(wav_data),
        prober=DurationProber(),
        orchestrator=TranscriptionOrchestrator(
            transcription_service, poll_interval_seconds=0
        ),
        summarizer=SummarizationEngine(generator),
        audio_repository=audio_repository,
        user_repository=user_repository,
        summary_repository=summary_repository,
        notifier=notifier,
        config=pipeline_config,
    )


@pytest.fixture
def quiz_generator(generator):
    return QuizGenerator(generator)


@pytest.fixture
def flashcard_generator(generator):
    return FlashcardGenerator(generator)
