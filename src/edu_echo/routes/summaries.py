"""Summary generation and CRUD endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException

from edu_echo.dependencies import (
    get_current_user_id,
    get_pipeline,
    get_summary_repository,
    get_user_repository,
)
from edu_echo.exceptions import EmptyTranscriptError, PipelineError, UserNotFoundError
from edu_echo.handlers import AudioPipeline
from edu_echo.repositories import SummaryRepository, UserRepository
from edu_echo.response_models import (
    GenerateSummaryRequest,
    GenerateSummaryResponse,
    MessageResponse,
    SavedSummaryListResponse,
    SavedSummaryResponse,
    SavedSummarySnapshot,
    SummaryListResponse,
    SummaryRequest,
    SummaryResponse,
    UpdatedSummaryResponse,
)

router = APIRouter(prefix="/summaries", tags=["summaries"])

PipelineDep = Annotated[AudioPipeline, Depends(get_pipeline)]
RepositoryDep = Annotated[SummaryRepository, Depends(get_summary_repository)]
UserRepositoryDep = Annotated[UserRepository, Depends(get_user_repository)]
UserIdDep = Annotated[UUID, Depends(get_current_user_id)]


@router.post("/generate", response_model=GenerateSummaryResponse)
async def generate_summary(body: GenerateSummaryRequest, pipeline: PipelineDep):
    """Summarizes a ready transcript without storing anything."""
    try:
        report = await pipeline.summarize_text(body.transcription, body.audio_duration)
    except EmptyTranscriptError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except PipelineError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return GenerateSummaryResponse(summary=report.text)


@router.post("", response_model=SavedSummaryResponse, status_code=201)
def create_summary(body: SummaryRequest, user_id: UserIdDep, repo: RepositoryDep):
    try:
        record = repo.create(user_id, body.topic, body.points)
    except PipelineError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return SavedSummaryResponse(
        message="Summary saved successfully",
        saved_summary=SummaryResponse.model_validate(record),
    )


@router.get("", response_model=SummaryListResponse)
def list_summaries(user_id: UserIdDep, repo: RepositoryDep):
    """Returns every summary record owned by the caller."""
    return SummaryListResponse(
        summaries=[
            SummaryResponse.model_validate(record)
            for record in repo.list_for_user(user_id)
        ]
    )


@router.get("/saved", response_model=SavedSummaryListResponse)
def list_saved_summaries(user_id: UserIdDep, users: UserRepositoryDep):
    """Returns the snapshots embedded in the caller's user record."""
    try:
        saved = users.saved_summaries(user_id)
    except UserNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return SavedSummaryListResponse(
        saved_summaries=[SavedSummarySnapshot.model_validate(item) for item in saved]
    )


@router.get("/{summary_id}", response_model=SummaryResponse)
def get_summary(summary_id: UUID, repo: RepositoryDep):
    record = repo.get(summary_id)
    if not record:
        raise HTTPException(status_code=404, detail="Summary not found")
    return SummaryResponse.model_validate(record)


@router.put("/{summary_id}", response_model=UpdatedSummaryResponse)
def update_summary(
    summary_id: UUID, body: SummaryRequest, user_id: UserIdDep, repo: RepositoryDep
):
    """Replaces topic and points of a summary the caller owns."""
    record = repo.update(summary_id, user_id, body.topic, body.points)
    if not record:
        raise HTTPException(status_code=404, detail="Summary not found")
    return UpdatedSummaryResponse(
        message="Summary updated successfully",
        summary=SummaryResponse.model_validate(record),
    )


@router.delete("/{summary_id}", response_model=MessageResponse)
def delete_summary(summary_id: UUID, user_id: UserIdDep, repo: RepositoryDep):
    if not repo.delete(summary_id, user_id):
        raise HTTPException(status_code=404, detail="Summary not found")
    return MessageResponse(message="Summary deleted successfully")
