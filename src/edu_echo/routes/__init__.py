from edu_echo.routes.audio import router as audio_router
from edu_echo.routes.flashcards import router as flashcards_router
from edu_echo.routes.notifications import router as notifications_router
from edu_echo.routes.quizzes import router as quizzes_router
from edu_echo.routes.summaries import router as summaries_router

__all__ = [
    "audio_router",
    "flashcards_router",
    "notifications_router",
    "quizzes_router",
    "summaries_router",
]
