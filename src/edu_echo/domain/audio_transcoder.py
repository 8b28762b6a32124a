"""Converts uploaded audio into 16-bit PCM WAV."""

import asyncio
import logging
import os
import tempfile
import uuid

from moviepy.video.io.ffmpeg_tools import ffmpeg_extract_audio

from edu_echo.exceptions import TranscodeError

logger = logging.getLogger(__name__)

DEFAULT_INPUT_SUFFIX = ".webm"


class AudioTranscoder:
    """Transcodes arbitrary audio containers to linear PCM WAV via ffmpeg."""

    def __init__(self, sample_rate: int = 48000):
        self._sample_rate = sample_rate

    async def transcode(self, audio_data: bytes, file_name: str | None = None) -> bytes:
        """
        Transcodes audio data to WAV.

        Args:
            audio_data: Raw bytes of the uploaded audio.
            file_name: Original file name, used only for its extension.

        Returns:
            The WAV file bytes.

        Raises:
            TranscodeError: If conversion fails or produces no output.
        """
        label = file_name or "upload"
        try:
            wav_bytes = await asyncio.to_thread(
                self._transcode_bytes, audio_data, file_name
            )
        except Exception as e:
            logger.exception("Audio transcoding failed", extra={"file_name": label})
            raise TranscodeError(label, e) from e

        logger.info(
            "Audio transcoded",
            extra={
                "file_name": label,
                "input_bytes": len(audio_data),
                "wav_bytes": len(wav_bytes),
            },
        )
        return wav_bytes

    def _transcode_bytes(self, audio_data: bytes, file_name: str | None) -> bytes:
        """Runs ffmpeg inside a per-call temporary directory.

        The .wav output makes ffmpeg pick its default pcm_s16le codec.
        """
        suffix = os.path.splitext(file_name or "")[1] or DEFAULT_INPUT_SUFFIX
        unique_id = uuid.uuid4().hex

        with tempfile.TemporaryDirectory() as temp_dir:
            input_path = os.path.join(temp_dir, f"{unique_id}{suffix}")
            output_path = os.path.join(temp_dir, f"{unique_id}.wav")

            with open(input_path, "wb") as f:
                f.write(audio_data)

            # Plain input-to-output conversion; streamed WebM has no duration header.
            ffmpeg_extract_audio(
                input_path, output_path, fps=self._sample_rate, logger=None
            )

            if not os.path.exists(output_path):
                raise FileNotFoundError("ffmpeg produced no output file")

            with open(output_path, "rb") as f:
                return f.read()
