from collections.abc import Callable
from contextlib import AbstractContextManager, contextmanager

from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel, create_engine

SessionFactory = Callable[[], AbstractContextManager[Session]]


def get_engine(url: str, **kwargs) -> Engine:
    return create_engine(url, **kwargs)


def init_db(engine: Engine) -> None:
    SQLModel.metadata.create_all(engine)


def make_session_factory(engine: Engine) -> SessionFactory:
    """Returns a callable producing database session context managers."""

    @contextmanager
    def _session_factory():
        with Session(engine) as session:
            yield session

    return _session_factory
