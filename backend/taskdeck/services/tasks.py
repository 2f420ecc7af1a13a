import logging
from typing import List, Optional

from ..core.errors import ValidationError
from ..db.filters import TaskFilter
from ..db.models import Task
from ..db.store import TaskStore
from ..schemas.tasks import DeleteResult, TaskCreate, TaskQuery, TaskUpdate

logger = logging.getLogger(__name__)

NON_NULLABLE = ("title", "completed", "priority")


def _check_title(title: Optional[str]) -> None:
    if title is None or not title.strip():
        raise ValidationError("Title is required")


class TaskService:
    """Application-facing task operations over a TaskStore."""

    def __init__(self, store: TaskStore):
        self.store = store

    def create_task(self, data: TaskCreate) -> Task:
        _check_title(data.title)
        task = self.store.insert(
            title=data.title,
            description=data.description,
            priority=data.priority,
            category=data.category,
            due_date=data.due_date,
        )
        logger.info("Created task id=%s priority=%s", task.id, task.priority.value)
        return task

    def list_tasks(self, query: Optional[TaskQuery] = None) -> List[Task]:
        task_filter = TaskFilter(**query.model_dump()) if query else TaskFilter()
        tasks = self.store.list(task_filter)
        logger.debug("Listed %d tasks filter=%s", len(tasks), task_filter)
        return tasks

    def update_task(self, data: TaskUpdate) -> Task:
        changes = data.changes()
        for name in NON_NULLABLE:
            if name in changes and changes[name] is None:
                raise ValidationError(f"{name} cannot be null")
        if "title" in changes:
            _check_title(changes["title"])
        task = self.store.update(data.id, changes)
        logger.info("Updated task id=%s fields=%s", task.id, sorted(changes))
        return task

    def delete_task(self, task_id: int) -> DeleteResult:
        removed = self.store.delete(task_id)
        if removed:
            logger.info("Deleted task id=%s", task_id)
        else:
            logger.info("Delete requested for missing task id=%s", task_id)
        return DeleteResult(success=removed)

    def toggle_task_completion(self, task_id: int) -> Task:
        task = self.store.toggle_completed(task_id)
        logger.info("Toggled task id=%s completed=%s", task.id, task.completed)
        return task

    def list_categories(self) -> List[str]:
        return self.store.distinct_categories()
