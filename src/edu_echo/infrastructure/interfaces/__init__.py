"""Abstract interfaces for infrastructure dependencies."""

from edu_echo.infrastructure.interfaces.cache_service import CacheService
from edu_echo.infrastructure.interfaces.llm_service import TextGenerator
from edu_echo.infrastructure.interfaces.notifier import Notifier
from edu_echo.infrastructure.interfaces.storage import StorageClient
from edu_echo.infrastructure.interfaces.transcription_service import (
    TranscriptionService,
)

__all__ = [
    "CacheService",
    "Notifier",
    "StorageClient",
    "TextGenerator",
    "TranscriptionService",
]
