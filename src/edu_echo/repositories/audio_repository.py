"""Repository for uploaded audio assets."""

import logging

from edu_echo.database import SessionFactory
from edu_echo.db_models import AudioAsset as AudioAssetEntity
from edu_echo.domain.models import AudioAsset
from edu_echo.exceptions import PersistenceError

logger = logging.getLogger(__name__)


class AudioRepository:
    """Handles database operations for audio assets."""

    def __init__(self, session_factory: SessionFactory):
        self._session_factory = session_factory

    def save(self, audio_id: str, storage_uri: str, content_type: str) -> AudioAsset:
        """
        Records a stored upload.

        Raises:
            PersistenceError: If the insert fails.
        """
        try:
            with self._session_factory() as db_session:
                entity = AudioAssetEntity(
                    id=audio_id, storage_uri=storage_uri, content_type=content_type
                )
                db_session.add(entity)
                db_session.commit()
                db_session.refresh(entity)
                asset = AudioAsset.model_validate(entity)
        except Exception as e:
            logger.exception(
                "Failed to persist audio asset", extra={"audio_id": audio_id}
            )
            raise PersistenceError(f"audio asset '{audio_id}'", cause=e) from e

        logger.info("Audio asset persisted", extra={"audio_id": audio_id})
        return asset

    def get(self, audio_id: str) -> AudioAsset | None:
        with self._session_factory() as db_session:
            entity = db_session.get(AudioAssetEntity, audio_id)
            return AudioAsset.model_validate(entity) if entity else None

    def delete(self, audio_id: str) -> AudioAsset | None:
        """Deletes an asset record, returning it, or None if it did not exist."""
        with self._session_factory() as db_session:
            entity = db_session.get(AudioAssetEntity, audio_id)
            if not entity:
                return None
            asset = AudioAsset.model_validate(entity)
            db_session.delete(entity)
            db_session.commit()

        logger.info("Audio asset deleted", extra={"audio_id": audio_id})
        return asset
