"""Request handlers coordinating the pipeline stages."""

from edu_echo.handlers.audio_pipeline import AudioPipeline

__all__ = ["AudioPipeline"]
