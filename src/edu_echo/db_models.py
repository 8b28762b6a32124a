from datetime import datetime, timezone
from typing import List, Optional
from uuid import UUID, uuid4

from sqlalchemy import Column
from sqlalchemy.types import JSON
from sqlmodel import Field, Relationship, SQLModel


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(SQLModel, table=True):
    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=255)
    email: str = Field(max_length=255, unique=True)
    # Denormalized {topic, points, date} snapshots for fast per-user listing.
    saved_summaries: List[dict] = Field(
        default_factory=list, sa_column=Column(JSON, nullable=False)
    )

    summaries: List["Summary"] = Relationship(back_populates="user")


class Summary(SQLModel, table=True):
    __tablename__ = "summaries"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    user_id: UUID = Field(foreign_key="users.id", index=True)
    topic: str
    points: List[str] = Field(
        default_factory=list, sa_column=Column(JSON, nullable=False)
    )
    date: datetime = Field(default_factory=_utcnow)

    user: Optional[User] = Relationship(back_populates="summaries")


class AudioAsset(SQLModel, table=True):
    __tablename__ = "audio_assets"

    id: str = Field(primary_key=True, max_length=32)
    storage_uri: str
    content_type: str = "audio/wav"
    uploaded_at: datetime = Field(default_factory=_utcnow)
