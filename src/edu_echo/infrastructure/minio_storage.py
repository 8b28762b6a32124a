"""MinIO implementation of the StorageClient interface."""

import asyncio
import io
import logging
from datetime import timedelta

from minio import Minio

from edu_echo.domain.models import StorageLocation
from edu_echo.exceptions import StorageReadError, StorageWriteError
from edu_echo.infrastructure.interfaces import StorageClient

logger = logging.getLogger(__name__)

PRESIGNED_URL_TTL = timedelta(hours=1)


class MinioStorageClient(StorageClient):
    """Handles audio object storage using MinIO."""

    def __init__(self, client: Minio, bucket_name: str):
        self._client = client
        self._bucket_name = bucket_name

    def location_for(self, object_name: str) -> StorageLocation:
        return StorageLocation(bucket=self._bucket_name, object_name=object_name)

    async def upload(
        self, data: bytes, object_name: str, content_type: str = "audio/wav"
    ) -> StorageLocation:
        location = self.location_for(object_name)
        try:
            await asyncio.to_thread(
                self._client.put_object,
                bucket_name=location.bucket,
                object_name=location.object_name,
                data=io.BytesIO(data),
                length=len(data),
                content_type=content_type,
            )
        except Exception as e:
            logger.exception(
                "MinIO upload failed",
                extra={"bucket_name": location.bucket, "object_name": object_name},
            )
            raise StorageWriteError(object_name, e) from e

        logger.info(
            "File uploaded to MinIO",
            extra={"uri": location.uri, "size": len(data)},
        )
        return location

    async def exists(
        self, location: StorageLocation, attempts: int = 5, delay_seconds: float = 2.0
    ) -> bool:
        for attempt in range(1, attempts + 1):
            try:
                found = await asyncio.to_thread(self._object_listed, location)
            except Exception as e:
                logger.exception(
                    "MinIO existence check failed", extra={"uri": location.uri}
                )
                raise StorageReadError(location.object_name, e) from e

            if found:
                logger.info(
                    "Object visible in MinIO",
                    extra={"uri": location.uri, "attempt": attempt},
                )
                return True

            logger.info(
                "Object not visible yet",
                extra={
                    "uri": location.uri,
                    "attempt": attempt,
                    "max_attempts": attempts,
                },
            )
            if attempt < attempts:
                await asyncio.sleep(delay_seconds)

        return False

    async def download(self, location: StorageLocation) -> bytes:
        try:
            data = await asyncio.to_thread(self._read_object, location)
        except Exception as e:
            logger.exception("MinIO download failed", extra={"uri": location.uri})
            raise StorageReadError(location.object_name, e) from e

        if not data:
            logger.error("Downloaded object is empty", extra={"uri": location.uri})
            raise StorageReadError(
                location.object_name, ValueError("Downloaded buffer is empty")
            )

        logger.info(
            "File downloaded from MinIO",
            extra={"uri": location.uri, "size": len(data)},
        )
        return data

    async def delete(self, location: StorageLocation) -> None:
        try:
            await asyncio.to_thread(
                self._client.remove_object, location.bucket, location.object_name
            )
        except Exception as e:
            logger.exception("MinIO delete failed", extra={"uri": location.uri})
            raise StorageWriteError(location.object_name, e) from e
        logger.info("File deleted from MinIO", extra={"uri": location.uri})

    async def presigned_url(self, location: StorageLocation) -> str:
        return await asyncio.to_thread(
            self._client.presigned_get_object,
            location.bucket,
            location.object_name,
            expires=PRESIGNED_URL_TTL,
        )

    def ensure_bucket_exists(self) -> None:
        if not self._client.bucket_exists(self._bucket_name):
            self._client.make_bucket(self._bucket_name)
            logger.info("Bucket created", extra={"bucket_name": self._bucket_name})
        else:
            logger.info(
                "Bucket already exists", extra={"bucket_name": self._bucket_name}
            )

    def _object_listed(self, location: StorageLocation) -> bool:
        objects = self._client.list_objects(
            location.bucket, prefix=location.object_name
        )
        return any(obj.object_name == location.object_name for obj in objects)

    def _read_object(self, location: StorageLocation) -> bytes:
        response = self._client.get_object(location.bucket, location.object_name)
        try:
            return response.data
        finally:
            response.close()
            response.release_conn()
