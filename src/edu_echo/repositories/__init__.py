"""Repository layer for database access."""

from edu_echo.repositories.audio_repository import AudioRepository
from edu_echo.repositories.summary_repository import SummaryRepository
from edu_echo.repositories.user_repository import UserRepository

__all__ = ["AudioRepository", "SummaryRepository", "UserRepository"]
