"""Application configuration loaded from environment variables."""

import os

from pydantic import BaseModel, computed_field


class MinioConfig(BaseModel, frozen=True):
    """MinIO connection configuration."""

    endpoint: str
    user: str
    password: str
    bucket_name: str = "edu-echo"
    secure: bool = False


class RedisConfig(BaseModel, frozen=True):
    """Redis connection configuration for the transcript cache."""

    host: str
    port: int = 6379
    cache_ttl_seconds: int = 86400  # 24 hours default


class AssemblyAIConfig(BaseModel, frozen=True):
    """AssemblyAI API configuration."""

    api_key: str
    speaker_labels: bool = False
    poll_interval_seconds: float = 5.0
    timeout_seconds: float = 1800.0


class GeminiConfig(BaseModel, frozen=True):
    """Gemini text generation configuration."""

    api_key: str
    model_name: str = "gemini-2.5-flash-lite"
    temperature: float = 0.3
    max_output_tokens: int = 1000
    timeout_seconds: float = 120.0


class DatabaseConfig(BaseModel, frozen=True):
    """Immutable database connection configuration."""

    host: str
    port: str
    user: str
    password: str
    database: str

    @computed_field
    @property
    def url(self) -> str:
        """Returns the full PostgreSQL connection URL."""
        return (
            f"postgresql+psycopg://{self.user}:{self.password}"
            f"@{self.host}:{self.port}/{self.database}"
        )


class PipelineConfig(BaseModel, frozen=True):
    """Limits and retry policy for the audio-to-summary pipeline."""

    max_upload_bytes: int = 5 * 1024 * 1024
    max_duration_seconds: float = 7200.0
    existence_attempts: int = 5
    existence_delay_seconds: float = 2.0
    token_budget: int = 1000


class AppConfig(BaseModel, frozen=True):
    """Root application configuration."""

    minio: MinioConfig
    redis: RedisConfig
    assemblyai: AssemblyAIConfig
    gemini: GeminiConfig
    database: DatabaseConfig
    pipeline: PipelineConfig = PipelineConfig()


def load_config() -> AppConfig:
    """Loads configuration from environment variables."""
    return AppConfig(
        minio=MinioConfig(
            endpoint=os.getenv("MINIO_ENDPOINT", "minio:9000"),
            user=os.getenv("MINIO_USER", ""),
            password=os.getenv("MINIO_PASSWORD", ""),
            bucket_name=os.getenv("MINIO_BUCKET", "edu-echo"),
            secure=os.getenv("MINIO_SECURE", "false").lower() in {"1", "true", "yes"},
        ),
        redis=RedisConfig(
            host=os.getenv("REDIS_HOST", "redis"),
            port=int(os.getenv("REDIS_PORT", "6379")),
            cache_ttl_seconds=int(os.getenv("REDIS_CACHE_TTL_SECONDS", "86400")),
        ),
        assemblyai=AssemblyAIConfig(
            api_key=os.getenv("ASSEMBLYAI_API_KEY", ""),
            speaker_labels=(
                os.getenv("ASSEMBLYAI_SPEAKER_LABELS", "false").lower()
                in {"1", "true", "yes"}
            ),
            poll_interval_seconds=float(
                os.getenv("ASSEMBLYAI_POLL_INTERVAL_SECONDS", "5")
            ),
            timeout_seconds=float(os.getenv("ASSEMBLYAI_TIMEOUT_SECONDS", "1800")),
        ),
        gemini=GeminiConfig(
            api_key=os.getenv("GEMINI_API_KEY", ""),
            model_name=os.getenv("GEMINI_MODEL", "gemini-2.5-flash-lite"),
            temperature=float(os.getenv("GEMINI_TEMPERATURE", "0.3")),
            max_output_tokens=int(os.getenv("GEMINI_MAX_OUTPUT_TOKENS", "1000")),
            timeout_seconds=float(os.getenv("GEMINI_TIMEOUT_SECONDS", "120")),
        ),
        database=DatabaseConfig(
            host=os.getenv("POSTGRES_HOST", "postgres"),
            port=os.getenv("POSTGRES_PORT", "5432"),
            user=os.getenv("POSTGRES_USER", ""),
            password=os.getenv("POSTGRES_PASSWORD", ""),
            database=os.getenv("POSTGRES_DB", "edu_echo"),
        ),
        pipeline=PipelineConfig(
            max_upload_bytes=int(
                os.getenv("PIPELINE_MAX_UPLOAD_BYTES", str(5 * 1024 * 1024))
            ),
            max_duration_seconds=float(
                os.getenv("PIPELINE_MAX_DURATION_SECONDS", "7200")
            ),
            existence_attempts=int(os.getenv("PIPELINE_EXISTENCE_ATTEMPTS", "5")),
            existence_delay_seconds=float(
                os.getenv("PIPELINE_EXISTENCE_DELAY_SECONDS", "2")
            ),
            token_budget=int(os.getenv("PIPELINE_TOKEN_BUDGET", "1000")),
        ),
    )
