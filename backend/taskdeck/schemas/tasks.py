from datetime import datetime
from typing import Optional
from pydantic import BaseModel

from ..db.models import Priority

class TaskCreate(BaseModel):
    title: str
    description: Optional[str] = None
    priority: Priority = Priority.medium
    category: Optional[str] = None
    due_date: Optional[datetime] = None

class TaskUpdate(BaseModel):
    """Fields left out of the payload stay unchanged; an explicit null clears."""
    id: int
    title: Optional[str] = None
    description: Optional[str] = None
    completed: Optional[bool] = None
    priority: Optional[Priority] = None
    category: Optional[str] = None
    due_date: Optional[datetime] = None

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True, exclude={"id"})

class TaskQuery(BaseModel):
    completed: Optional[bool] = None
    priority: Optional[Priority] = None
    category: Optional[str] = None
    due_before: Optional[datetime] = None

class TaskId(BaseModel):
    id: int

class TaskOut(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    completed: bool
    priority: Priority
    category: Optional[str] = None
    due_date: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

class DeleteResult(BaseModel):
    success: bool

class Health(BaseModel):
    status: str
    timestamp: datetime
