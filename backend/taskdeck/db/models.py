from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Optional
from sqlalchemy import Column, Enum as SAEnum
from sqlmodel import SQLModel, Field


class Priority(str, Enum):
    low = "low"
    medium = "medium"
    high = "high"


def utcnow() -> datetime:
    """Current time as naive UTC, the form every timestamp is stored in."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def next_timestamp(previous: datetime) -> datetime:
    # updated_at must move forward on every mutation, even within one clock tick
    now = utcnow()
    if now <= previous:
        return previous + timedelta(microseconds=1)
    return now


class Task(SQLModel, table=True):
    __tablename__ = "tasks"

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str = Field(nullable=False)
    description: Optional[str] = None
    completed: bool = Field(default=False, nullable=False)
    priority: Priority = Field(
        default=Priority.medium,
        sa_column=Column(SAEnum(Priority, name="priority", create_constraint=True), nullable=False),
    )
    category: Optional[str] = Field(default=None, index=True)
    due_date: Optional[datetime] = None
    created_at: datetime = Field(default_factory=utcnow, nullable=False, index=True)
    updated_at: datetime = Field(default_factory=utcnow, nullable=False)
