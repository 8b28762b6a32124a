"""Repository for summary records."""

import logging
from datetime import datetime, timezone
from uuid import UUID

from sqlmodel import Session, select

from edu_echo.database import SessionFactory
from edu_echo.db_models import Summary, User
from edu_echo.domain.models import SavedSummary, SummaryRecord
from edu_echo.exceptions import PersistenceError, UserNotFoundError

logger = logging.getLogger(__name__)


class SummaryRepository:
    """
    Handles database operations for summaries.

    Summaries live in their own table and, when produced by the audio
    pipeline, are also copied into the owner's saved_summaries list.
    """

    def __init__(self, session_factory: SessionFactory):
        """
        Initializes the repository.

        Args:
            session_factory: Callable that returns a SQLModel Session context manager.
        """
        self._session_factory = session_factory

    def save_generated(
        self, user_id: UUID, topic: str, points: list[str]
    ) -> SummaryRecord:
        """
        Persists a pipeline summary and appends its snapshot to the user.

        Both writes happen in one transaction.

        Raises:
            UserNotFoundError: If the user does not exist.
            PersistenceError: If persistence fails.
        """
        try:
            with self._session_factory() as db_session:
                user = db_session.get(User, user_id)
                if not user:
                    raise UserNotFoundError(user_id)

                summary = Summary(user_id=user_id, topic=topic, points=points)
                snapshot = SavedSummary(
                    topic=topic, points=points, date=datetime.now(timezone.utc)
                )
                # Reassign so the JSON column is flagged as modified.
                user.saved_summaries = [
                    *user.saved_summaries,
                    snapshot.model_dump(mode="json"),
                ]
                db_session.add(summary)
                db_session.add(user)
                db_session.commit()
                db_session.refresh(summary)
                record = SummaryRecord.model_validate(summary)
        except UserNotFoundError:
            raise
        except Exception as e:
            logger.exception(
                "Failed to persist summary", extra={"user_id": str(user_id)}
            )
            raise PersistenceError("summary", cause=e) from e

        logger.info(
            "Summary persisted",
            extra={"summary_id": str(record.id), "user_id": str(user_id)},
        )
        return record

    def create(self, user_id: UUID, topic: str, points: list[str]) -> SummaryRecord:
        """
        Persists a standalone summary record.

        Raises:
            PersistenceError: If persistence fails.
        """
        try:
            with self._session_factory() as db_session:
                summary = Summary(user_id=user_id, topic=topic, points=points)
                db_session.add(summary)
                db_session.commit()
                db_session.refresh(summary)
                return SummaryRecord.model_validate(summary)
        except Exception as e:
            logger.exception("Failed to save summary", extra={"user_id": str(user_id)})
            raise PersistenceError("summary", cause=e) from e

    def list_for_user(self, user_id: UUID) -> list[SummaryRecord]:
        with self._session_factory() as db_session:
            statement = select(Summary).where(Summary.user_id == user_id)
            return [
                SummaryRecord.model_validate(row)
                for row in db_session.exec(statement).all()
            ]

    def get(self, summary_id: UUID) -> SummaryRecord | None:
        with self._session_factory() as db_session:
            summary = db_session.get(Summary, summary_id)
            return SummaryRecord.model_validate(summary) if summary else None

    def update(
        self, summary_id: UUID, user_id: UUID, topic: str, points: list[str]
    ) -> SummaryRecord | None:
        """Updates a summary owned by user_id. Returns None if none matches."""
        with self._session_factory() as db_session:
            summary = self._owned(db_session, summary_id, user_id)
            if not summary:
                return None
            summary.topic = topic
            summary.points = list(points)
            db_session.add(summary)
            db_session.commit()
            db_session.refresh(summary)
            return SummaryRecord.model_validate(summary)

    def delete(self, summary_id: UUID, user_id: UUID) -> bool:
        """Deletes a summary owned by user_id. Returns False if none matches."""
        with self._session_factory() as db_session:
            summary = self._owned(db_session, summary_id, user_id)
            if not summary:
                return False
            db_session.delete(summary)
            db_session.commit()
            return True

    def _owned(
        self, db_session: Session, summary_id: UUID, user_id: UUID
    ) -> Summary | None:
        statement = select(Summary).where(
            Summary.id == summary_id,
            Summary.user_id == user_id,
        )
        return db_session.exec(statement).first()
