import logging
from contextlib import contextmanager
from datetime import datetime
from typing import Any, Iterator, List, Mapping, Optional

from sqlalchemy import delete, func, not_, update
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, col, select

from ..core.errors import NotFound, StoreError
from .filters import TaskFilter
from .models import Priority, Task, next_timestamp, to_naive_utc, utcnow

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = {"title", "description", "completed", "priority", "category", "due_date"}


class TaskStore:
    """
    SQL task store on top of SQLModel.

    Each method runs in its own session and commits once, so every mutation
    either fully applies or not at all. Returned Task objects are detached
    snapshots.
    """

    def __init__(self, engine: Engine) -> None:
        self.engine = engine

    @contextmanager
    def _session(self) -> Iterator[Session]:
        try:
            with Session(self.engine, expire_on_commit=False) as session:
                yield session
        except SQLAlchemyError as e:
            raise StoreError(str(e)) from e

    def insert(
        self,
        title: str,
        description: Optional[str] = None,
        priority: Priority = Priority.medium,
        category: Optional[str] = None,
        due_date: Optional[datetime] = None,
    ) -> Task:
        now = utcnow()
        task = Task(
            title=title,
            description=description,
            priority=Priority(priority),
            category=category,
            due_date=to_naive_utc(due_date),
            completed=False,
            created_at=now,
            updated_at=now,
        )
        with self._session() as session:
            session.add(task)
            session.commit()
            session.refresh(task)
        return task

    def find_by_id(self, task_id: int) -> Optional[Task]:
        with self._session() as session:
            return session.get(Task, task_id)

    def update(self, task_id: int, changes: Mapping[str, Any]) -> Task:
        """Apply only the keys present in ``changes``; ``None`` clears a field."""
        unknown = set(changes) - UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Not updatable: {sorted(unknown)}")

        with self._session() as session:
            task = session.get(Task, task_id)
            if task is None:
                raise NotFound(task_id)
            for name, value in changes.items():
                if name == "due_date":
                    value = to_naive_utc(value)
                elif name == "priority" and value is not None:
                    value = Priority(value)
                setattr(task, name, value)
            task.updated_at = next_timestamp(task.updated_at)
            session.add(task)
            session.commit()
            session.refresh(task)
        return task

    def delete(self, task_id: int) -> bool:
        with self._session() as session:
            result = session.execute(delete(Task).where(col(Task.id) == task_id))
            session.commit()
            return result.rowcount > 0

    def toggle_completed(self, task_id: int) -> Task:
        # the negation happens inside the UPDATE so concurrent toggles cannot
        # both flip the same old value
        with self._session() as session:
            previous = session.exec(
                select(Task.updated_at).where(col(Task.id) == task_id)
            ).first()
            if previous is None:
                raise NotFound(task_id)
            result = session.execute(
                update(Task)
                .where(col(Task.id) == task_id)
                .values(completed=not_(col(Task.completed)), updated_at=next_timestamp(previous))
            )
            if result.rowcount == 0:
                session.rollback()
                raise NotFound(task_id)
            session.commit()
            return session.get(Task, task_id)

    def list(self, task_filter: Optional[TaskFilter] = None) -> List[Task]:
        stmt = select(Task)
        if task_filter is not None:
            stmt = task_filter.apply(stmt)
        stmt = stmt.order_by(col(Task.created_at).desc(), col(Task.id).desc())
        with self._session() as session:
            return list(session.exec(stmt).all())

    def distinct_categories(self) -> List[str]:
        stmt = (
            select(Task.category)
            .where(col(Task.category).is_not(None))
            .distinct()
            .order_by(col(Task.category))
        )
        with self._session() as session:
            return list(session.exec(stmt).all())

    def count(self) -> int:
        with self._session() as session:
            return session.exec(select(func.count()).select_from(Task)).one()
