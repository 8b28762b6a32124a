"""Request and response bodies of the HTTP API."""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class ApiModel(BaseModel):
    """Base for bodies whose wire names are camelCase."""

    model_config = ConfigDict(populate_by_name=True)


class UploadResponse(ApiModel):
    audio_id: str = Field(alias="audioID")


class TranscribeRequest(ApiModel):
    audio_id: str = Field(alias="audioID", min_length=1)
    user_id: UUID = Field(alias="userId")


class TranscribeResponse(ApiModel):
    message: str
    summary: str


class AudioResponse(ApiModel):
    """Stored audio asset."""

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: str
    storage_uri: str = Field(alias="storageUri")
    content_type: str = Field(alias="contentType")
    uploaded_at: datetime = Field(alias="uploadedAt")


class MessageResponse(ApiModel):
    message: str


class GenerateSummaryRequest(ApiModel):
    transcription: str
    audio_duration: Optional[float] = Field(default=None, alias="audioDuration", ge=0)


class GenerateSummaryResponse(ApiModel):
    summary: str


class SummaryRequest(ApiModel):
    topic: str = Field(min_length=1)
    points: List[str]


class SummaryResponse(ApiModel):
    """A persisted summary record."""

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: UUID
    user_id: UUID = Field(alias="userId")
    topic: str
    points: List[str]
    date: datetime


class SavedSummaryResponse(ApiModel):
    message: str
    saved_summary: SummaryResponse = Field(alias="savedSummary")


class UpdatedSummaryResponse(ApiModel):
    message: str
    summary: SummaryResponse


class SummaryListResponse(ApiModel):
    summaries: List[SummaryResponse]


class SavedSummarySnapshot(ApiModel):
    """A summary snapshot embedded in the user's record."""

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    topic: str
    points: List[str]
    date: datetime


class SavedSummaryListResponse(ApiModel):
    saved_summaries: List[SavedSummarySnapshot] = Field(alias="savedSummaries")


class QuizRequest(ApiModel):
    content: str
    difficulty: str = "medium"
    question_count: int = Field(default=10, alias="questionCount", ge=1, le=20)


class QuizQuestionResponse(ApiModel):
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    question: str
    options: List[str]
    correct_answer: str = Field(alias="correctAnswer")


class QuizResponse(ApiModel):
    questions: List[QuizQuestionResponse]


class FlashcardRequest(ApiModel):
    material_text: str = Field(default="", alias="materialText")


class FlashcardResponse(ApiModel):
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    term: str
    definition: str


class FlashcardListResponse(ApiModel):
    flashcards: List[FlashcardResponse]
