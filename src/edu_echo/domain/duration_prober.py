"""Computes the playable duration of decoded audio."""

import asyncio
import io
import logging

import soundfile

from edu_echo.exceptions import DecodeError

logger = logging.getLogger(__name__)


class DurationProber:
    """Reads the container header of a PCM buffer to get its duration."""

    async def compute_duration(self, pcm_data: bytes) -> float:
        """
        Returns the duration of the audio in seconds.

        Raises:
            DecodeError: If the buffer is not decodable audio.
        """
        try:
            info = await asyncio.to_thread(soundfile.info, io.BytesIO(pcm_data))
        except Exception as e:
            logger.exception("Audio decoding failed", extra={"bytes": len(pcm_data)})
            raise DecodeError(e) from e

        logger.info(
            "Audio duration computed",
            extra={"duration_seconds": info.duration, "samplerate": info.samplerate},
        )
        return float(info.duration)
