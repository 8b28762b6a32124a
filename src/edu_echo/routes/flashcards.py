"""Flashcard generation endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException

from edu_echo.dependencies import get_flashcard_generator
from edu_echo.domain.flashcard_generator import FlashcardGenerator
from edu_echo.exceptions import MissingMaterialError, PipelineError
from edu_echo.response_models import (
    FlashcardListResponse,
    FlashcardRequest,
    FlashcardResponse,
)

router = APIRouter(prefix="/flashcards", tags=["flashcards"])

FlashcardGeneratorDep = Annotated[FlashcardGenerator, Depends(get_flashcard_generator)]


@router.post("/generate", response_model=FlashcardListResponse)
async def generate_flashcards(body: FlashcardRequest, generator: FlashcardGeneratorDep):
    """Turns study material into term and definition flashcards."""
    try:
        flashcards = await generator.generate(body.material_text)
    except MissingMaterialError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except PipelineError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return FlashcardListResponse(
        flashcards=[FlashcardResponse.model_validate(card) for card in flashcards]
    )
