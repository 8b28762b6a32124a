"""Infrastructure layer exports."""

from edu_echo.infrastructure.assemblyai_transcriber import AssemblyAITranscriber
from edu_echo.infrastructure.gemini_llm import GeminiTextGenerator
from edu_echo.infrastructure.minio_storage import MinioStorageClient
from edu_echo.infrastructure.redis_cache import RedisCacheService
from edu_echo.infrastructure.websocket_notifier import ObserverRegistry

__all__ = [
    "AssemblyAITranscriber",
    "GeminiTextGenerator",
    "MinioStorageClient",
    "ObserverRegistry",
    "RedisCacheService",
]
