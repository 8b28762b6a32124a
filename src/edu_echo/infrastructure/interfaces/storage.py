"""Abstract interface for object storage operations."""

from abc import ABC, abstractmethod

from edu_echo.domain.models import StorageLocation


class StorageClient(ABC):
    """Abstract base class for object storage backends."""

    @abstractmethod
    async def upload(
        self, data: bytes, object_name: str, content_type: str = "audio/wav"
    ) -> StorageLocation:
        """
        Uploads bytes to the configured bucket.

        Args:
            data: The object contents.
            object_name: The destination name in the bucket.
            content_type: MIME type of the object.

        Returns:
            The location of the stored object.

        Raises:
            StorageWriteError: If the upload fails.
        """

    @abstractmethod
    async def exists(
        self, location: StorageLocation, attempts: int = 5, delay_seconds: float = 2.0
    ) -> bool:
        """
        Checks whether an object is visible, retrying to absorb eventual consistency.

        Args:
            location: The object to look for.
            attempts: Maximum number of checks.
            delay_seconds: Pause between two checks.

        Returns:
            True as soon as the object is visible, False once attempts run out.

        Raises:
            StorageReadError: If a check fails for a reason other than absence.
        """

    @abstractmethod
    async def download(self, location: StorageLocation) -> bytes:
        """
        Downloads an object fully into memory.

        Raises:
            StorageReadError: If the download fails or yields no bytes.
        """

    @abstractmethod
    async def delete(self, location: StorageLocation) -> None:
        """
        Removes an object.

        Raises:
            StorageWriteError: If the removal fails.
        """

    @abstractmethod
    async def presigned_url(self, location: StorageLocation) -> str:
        """Returns a time-limited URL from which the object can be fetched."""

    @abstractmethod
    def location_for(self, object_name: str) -> StorageLocation:
        """Returns the location an object of this name has in the bucket."""
