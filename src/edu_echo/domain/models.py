"""Domain models for the audio-to-summary pipeline."""

from datetime import datetime
from enum import Enum
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

SUMMARY_SEPARATOR = "\n\n-----------\n\n"
DEFAULT_TOPIC = "Generated Topic"


class PipelineStage(str, Enum):
    """Stages an audio request passes through."""

    UPLOADING = "uploading"
    UPLOADED = "uploaded"
    TRANSCRIBED = "transcribed"
    VALIDATING_DURATION = "validating_duration"
    RECOGNIZING = "recognizing"
    SUMMARIZING = "summarizing"
    PERSISTING = "persisting"
    DONE = "done"
    FAILED = "failed"


class StorageLocation(BaseModel, frozen=True):
    """
    Address of an object in the object store.

    Serialized form: s3://{bucket}/{object_name}
    Example: s3://edu-echo/audio-0f8e2c8d4b7a4e38a1d09b8f3f2e6c11.wav
    """

    bucket: str
    object_name: str

    @property
    def uri(self) -> str:
        return f"s3://{self.bucket}/{self.object_name}"

    @classmethod
    def from_uri(cls, uri: str) -> "StorageLocation":
        """
        Parses a storage URI.

        Raises:
            ValueError: If the URI is not of the form s3://bucket/object.
        """
        if not uri.startswith("s3://"):
            raise ValueError(f"Unsupported storage URI '{uri}'")
        bucket, _, object_name = uri[len("s3://") :].partition("/")
        if not bucket or not object_name:
            raise ValueError(f"Storage URI '{uri}' has no bucket or object name")
        return cls(bucket=bucket, object_name=object_name)


class AudioAsset(BaseModel, frozen=True):
    """A transcoded upload stored in the object store."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    storage_uri: str
    content_type: str = "audio/wav"
    uploaded_at: datetime


class UploadResult(BaseModel, frozen=True):
    """Result of the upload half of the pipeline."""

    audio_id: str
    location: StorageLocation


class RecognitionConfig(BaseModel, frozen=True):
    """Speech recognition settings. Fixed for lecture uploads."""

    encoding: str = "LINEAR16"
    sample_rate_hertz: int = 48000
    language_code: str = "en-US"


class JobStatus(str, Enum):
    QUEUED = "queued"
    PROCESSING = "processing"
    COMPLETED = "completed"
    ERROR = "error"


class RecognitionSegment(BaseModel, frozen=True):
    """One recognized segment with its alternatives, best first."""

    alternatives: list[str] = Field(default_factory=list)


class RecognitionJob(BaseModel, frozen=True):
    """Snapshot of a long-running recognition job."""

    job_id: str
    status: JobStatus
    segments: list[RecognitionSegment] = Field(default_factory=list)
    error: str | None = None

    @property
    def finished(self) -> bool:
        return self.status in (JobStatus.COMPLETED, JobStatus.ERROR)


class ChunkSummary(BaseModel, frozen=True):
    """Structured summary of one transcript chunk."""

    topic: str
    points: list[str] = Field(default_factory=list)
    summary: str = ""

    def render(self) -> str:
        text = f"{self.topic}\n\n" + "\n\n".join(self.points)
        if self.summary:
            text += f"\n\n{self.summary}"
        return text


class SummaryReport(BaseModel, frozen=True):
    """Per-chunk summaries of a whole transcript, in document order."""

    chunks: list[ChunkSummary]

    @property
    def text(self) -> str:
        return SUMMARY_SEPARATOR.join(chunk.render() for chunk in self.chunks)

    @property
    def topic(self) -> str:
        for chunk in self.chunks:
            if chunk.topic:
                return chunk.topic
        return DEFAULT_TOPIC

    @property
    def points(self) -> list[str]:
        return [chunk.render() for chunk in self.chunks]


class SavedSummary(BaseModel, frozen=True):
    """Snapshot of a summary embedded in the user's record."""

    topic: str
    points: list[str]
    date: datetime


class SummaryRecord(BaseModel, frozen=True):
    """A persisted summary owned by one user."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    topic: str
    points: list[str]
    date: datetime


class TranscriptionOutcome(BaseModel, frozen=True):
    """Result of the transcribe half of the pipeline."""

    report: SummaryReport
    record: SummaryRecord
    duration_seconds: float


class QuizQuestion(BaseModel, frozen=True):
    """A multiple-choice question with four options."""

    question: str
    options: list[str]
    correct_answer: str


class Flashcard(BaseModel, frozen=True):
    """A key term paired with its explanation."""

    term: str
    definition: str
