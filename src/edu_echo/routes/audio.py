"""Audio upload and transcription endpoints."""

import asyncio
import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile

from edu_echo.dependencies import get_audio_repository, get_pipeline, get_storage
from edu_echo.domain.models import StorageLocation
from edu_echo.exceptions import (
    PipelineError,
    UploadError,
    UploadTooLargeError,
    UserNotFoundError,
)
from edu_echo.handlers import AudioPipeline
from edu_echo.handlers.audio_pipeline import normalize_audio_id
from edu_echo.infrastructure.interfaces import StorageClient
from edu_echo.repositories import AudioRepository
from edu_echo.response_models import (
    AudioResponse,
    MessageResponse,
    TranscribeRequest,
    TranscribeResponse,
    UploadResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/audio", tags=["audio"])

PipelineDep = Annotated[AudioPipeline, Depends(get_pipeline)]
AudioRepositoryDep = Annotated[AudioRepository, Depends(get_audio_repository)]
StorageDep = Annotated[StorageClient, Depends(get_storage)]


@router.post("/upload", response_model=UploadResponse)
async def upload_audio(
    pipeline: PipelineDep, audio: Optional[UploadFile] = File(default=None)
):
    """Transcodes and stores an uploaded recording."""
    data = await audio.read() if audio else None
    try:
        result = await pipeline.upload(data, audio.filename if audio else None)
    except UploadTooLargeError as e:
        raise HTTPException(status_code=413, detail=str(e))
    except UploadError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except PipelineError as e:
        raise HTTPException(status_code=500, detail=str(e))
    except Exception:
        logger.exception(
            "Error uploading audio",
            extra={"file_name": audio.filename if audio else None},
        )
        raise HTTPException(status_code=500, detail="Error processing audio")
    return UploadResponse(audio_id=result.audio_id)


@router.post("/transcribe", response_model=TranscribeResponse)
async def transcribe_audio(body: TranscribeRequest, pipeline: PipelineDep):
    """Transcribes a stored recording and saves its summary for the user."""
    try:
        outcome = await pipeline.transcribe(body.audio_id, body.user_id)
    except UserNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except PipelineError as e:
        raise HTTPException(status_code=500, detail=str(e))
    except Exception:
        logger.exception(
            "Error transcribing audio", extra={"audio_id": str(body.audio_id)}
        )
        raise HTTPException(status_code=500, detail="Error processing audio")
    return TranscribeResponse(
        message="Transcription and summarization successful",
        summary=outcome.report.text,
    )


@router.get("/{audio_id}", response_model=AudioResponse)
def get_audio(audio_id: str, repo: AudioRepositoryDep):
    """Returns the stored asset record for an audio id."""
    asset = repo.get(normalize_audio_id(audio_id))
    if not asset:
        raise HTTPException(status_code=404, detail="Audio not found")
    return AudioResponse.model_validate(asset)


@router.delete("/{audio_id}", response_model=MessageResponse)
async def delete_audio(audio_id: str, repo: AudioRepositoryDep, storage: StorageDep):
    """Removes the stored object and its asset record."""
    audio_id = normalize_audio_id(audio_id)
    asset = await asyncio.to_thread(repo.get, audio_id)
    if not asset:
        raise HTTPException(status_code=404, detail="Audio not found")
    try:
        await storage.delete(StorageLocation.from_uri(asset.storage_uri))
        await asyncio.to_thread(repo.delete, audio_id)
    except PipelineError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return MessageResponse(message="Audio deleted successfully")
