"""Composition of optional task criteria into a single AND predicate."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, List, Optional

from sqlalchemy import and_

from .models import Priority, Task, to_naive_utc


@dataclass(frozen=True)
class TaskFilter:
    """Independent optional criteria; ``None`` leaves a field unconstrained.

    ``category=""`` is a real criterion (it matches tasks whose category is
    the empty string). A task without a category or due date never matches a
    ``category`` or ``due_before`` criterion.
    """

    completed: Optional[bool] = None
    priority: Optional[Priority] = None
    category: Optional[str] = None
    due_before: Optional[datetime] = None

    def __post_init__(self):
        if self.priority is not None and not isinstance(self.priority, Priority):
            object.__setattr__(self, "priority", Priority(self.priority))
        object.__setattr__(self, "due_before", to_naive_utc(self.due_before))

    @property
    def is_empty(self) -> bool:
        return not self.conditions()

    def conditions(self) -> List[Any]:
        conds = []
        if self.completed is not None:
            conds.append(Task.completed == self.completed)
        if self.priority is not None:
            conds.append(Task.priority == self.priority)
        if self.category is not None:
            conds.append(Task.category == self.category)
        if self.due_before is not None:
            # NULL <= x is never true, so tasks without a due date drop out
            conds.append(Task.due_date <= self.due_before)
        return conds

    def apply(self, stmt):
        conds = self.conditions()
        if not conds:
            return stmt
        return stmt.where(and_(*conds))

    def matches(self, task: Task) -> bool:
        if self.completed is not None and task.completed != self.completed:
            return False
        if self.priority is not None and task.priority != self.priority:
            return False
        if self.category is not None and task.category != self.category:
            return False
        if self.due_before is not None:
            if task.due_date is None or to_naive_utc(task.due_date) > self.due_before:
                return False
        return True
