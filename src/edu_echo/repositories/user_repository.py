"""Repository for user records."""

import logging
from uuid import UUID

from edu_echo.database import SessionFactory
from edu_echo.db_models import User
from edu_echo.domain.models import SavedSummary
from edu_echo.exceptions import PersistenceError, UserNotFoundError

logger = logging.getLogger(__name__)


class UserRepository:
    """Reads users and their embedded saved summaries."""

    def __init__(self, session_factory: SessionFactory):
        self._session_factory = session_factory

    def exists(self, user_id: UUID) -> bool:
        with self._session_factory() as db_session:
            return db_session.get(User, user_id) is not None

    def create(self, name: str, email: str) -> UUID:
        """
        Creates a user and returns its id.

        Raises:
            PersistenceError: If the insert fails, e.g. on a duplicate email.
        """
        try:
            with self._session_factory() as db_session:
                user = User(name=name, email=email)
                db_session.add(user)
                db_session.commit()
                db_session.refresh(user)
                user_id = user.id
        except Exception as e:
            logger.exception("Failed to create user")
            raise PersistenceError("user", cause=e) from e
        return user_id

    def saved_summaries(self, user_id: UUID) -> list[SavedSummary]:
        """
        Returns the user's embedded summary snapshots, oldest first.

        Raises:
            UserNotFoundError: If the user does not exist.
        """
        with self._session_factory() as db_session:
            user = db_session.get(User, user_id)
            if not user:
                raise UserNotFoundError(user_id)
            return [SavedSummary.model_validate(item) for item in user.saved_summaries]
