"""Quiz generation endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException

from edu_echo.dependencies import get_quiz_generator
from edu_echo.domain.quiz_generator import QuizGenerator
from edu_echo.exceptions import InsufficientContentError, PipelineError
from edu_echo.response_models import QuizQuestionResponse, QuizRequest, QuizResponse

router = APIRouter(prefix="/quizzes", tags=["quizzes"])

QuizGeneratorDep = Annotated[QuizGenerator, Depends(get_quiz_generator)]


@router.post("/generate", response_model=QuizResponse)
async def generate_quiz(body: QuizRequest, generator: QuizGeneratorDep):
    """Generates multiple-choice questions from study material."""
    try:
        questions = await generator.generate(
            body.content, difficulty=body.difficulty, count=body.question_count
        )
    except InsufficientContentError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except PipelineError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return QuizResponse(
        questions=[QuizQuestionResponse.model_validate(q) for q in questions]
    )
