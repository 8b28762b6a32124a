"""Domain layer containing business logic and models."""

from edu_echo.domain.audio_transcoder import AudioTranscoder
from edu_echo.domain.duration_prober import DurationProber
from edu_echo.domain.flashcard_generator import FlashcardGenerator
from edu_echo.domain.models import (
    AudioAsset,
    ChunkSummary,
    Flashcard,
    PipelineStage,
    QuizQuestion,
    RecognitionConfig,
    SavedSummary,
    StorageLocation,
    SummaryRecord,
    SummaryReport,
    TranscriptionOutcome,
    UploadResult,
)
from edu_echo.domain.quiz_generator import QuizGenerator
from edu_echo.domain.summarizer import SummarizationEngine
from edu_echo.domain.transcription_orchestrator import TranscriptionOrchestrator

__all__ = [
    "AudioAsset",
    "AudioTranscoder",
    "ChunkSummary",
    "DurationProber",
    "Flashcard",
    "FlashcardGenerator",
    "PipelineStage",
    "QuizGenerator",
    "QuizQuestion",
    "RecognitionConfig",
    "SavedSummary",
    "StorageLocation",
    "SummarizationEngine",
    "SummaryRecord",
    "SummaryReport",
    "TranscriptionOrchestrator",
    "TranscriptionOutcome",
    "UploadResult",
]
