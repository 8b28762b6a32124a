"""Abstract interface for speech-to-text backends."""

from abc import ABC, abstractmethod

from edu_echo.domain.models import RecognitionConfig, RecognitionJob, StorageLocation


class TranscriptionService(ABC):
    """Abstract base class for long-running speech recognition backends."""

    @abstractmethod
    async def submit(self, location: StorageLocation, config: RecognitionConfig) -> str:
        """
        Starts a recognition job for a stored audio object.

        Args:
            location: Where the audio lives in the object store.
            config: Encoding, sample rate and language of the audio.

        Returns:
            The backend job identifier.

        Raises:
            RecognitionError: If the job cannot be submitted.
        """

    @abstractmethod
    async def poll(self, job_id: str) -> RecognitionJob:
        """
        Fetches the current state of a recognition job.

        Raises:
            RecognitionError: If the job state cannot be fetched.
        """
