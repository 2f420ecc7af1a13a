"""Browser-side view of the task board.

The cached list is never authoritative: after every successful mutation it
is thrown away and reloaded from the server. A failed call leaves it as it
was and stores the message in ``error``.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Dict, List, Optional

from ..db.filters import TaskFilter
from ..db.models import utcnow, to_naive_utc
from ..schemas.tasks import TaskOut
from .api import ApiError, TaskdeckClient

logger = logging.getLogger(__name__)

ALL = "all"
STATUS_CHOICES = (ALL, "pending", "completed")


@dataclass
class BoardState:
    client: TaskdeckClient
    tasks: List[TaskOut] = field(default_factory=list)
    categories: List[str] = field(default_factory=list)
    status_filter: str = ALL
    priority_filter: str = ALL
    category_filter: str = ALL
    error: Optional[str] = None

    def filters(self) -> Dict[str, object]:
        out: Dict[str, object] = {}
        if self.status_filter != ALL:
            out["completed"] = self.status_filter == "completed"
        if self.priority_filter != ALL:
            out["priority"] = self.priority_filter
        if self.category_filter != ALL:
            out["category"] = self.category_filter
        return out

    def set_filters(self, status: Optional[str] = None, priority: Optional[str] = None,
                    category: Optional[str] = None) -> bool:
        if status is not None:
            if status not in STATUS_CHOICES:
                raise ValueError(f"Unknown status filter: {status}")
            self.status_filter = status
        if priority is not None:
            self.priority_filter = priority
        if category is not None:
            self.category_filter = category
        return self.reload()

    def clear_filters(self) -> bool:
        return self.set_filters(status=ALL, priority=ALL, category=ALL)

    def reload(self) -> bool:
        try:
            tasks = self.client.get_tasks(**self.filters())
            categories = self.client.get_categories()
        except (ApiError, OSError) as e:
            self.error = str(e)
            logger.warning("Reload failed: %s", e)
            return False
        self.tasks = tasks
        self.categories = categories
        self.error = None
        return True

    def _mutate(self, call: Callable[[], object]) -> bool:
        try:
            call()
        except (ApiError, OSError) as e:
            self.error = str(e)
            logger.warning("Mutation failed: %s", e)
            return False
        return self.reload()

    def create(self, title: str, **fields) -> bool:
        return self._mutate(lambda: self.client.create_task(title, **fields))

    def update(self, task_id: int, **changes) -> bool:
        return self._mutate(lambda: self.client.update_task(task_id, **changes))

    def toggle(self, task_id: int) -> bool:
        return self._mutate(lambda: self.client.toggle_task_completion(task_id))

    def delete(self, task_id: int) -> bool:
        return self._mutate(lambda: self.client.delete_task(task_id))

    def pending(self) -> List[TaskOut]:
        return [t for t in self.tasks if not t.completed]

    def completed(self) -> List[TaskOut]:
        return [t for t in self.tasks if t.completed]

    def overdue(self, now: Optional[datetime] = None) -> List[TaskOut]:
        """Pending tasks whose due date has passed."""
        due = TaskFilter(completed=False, due_before=to_naive_utc(now) or utcnow())
        return [t for t in self.tasks if due.matches(t)]

    def stats(self) -> Dict[str, int]:
        done = len(self.completed())
        return {"total": len(self.tasks), "completed": done, "pending": len(self.tasks) - done}
