from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends
from ..deps import get_task_service
from ...db.models import Priority
from ...schemas.tasks import DeleteResult, TaskCreate, TaskId, TaskOut, TaskQuery, TaskUpdate
from ...services.tasks import TaskService

router = APIRouter()

@router.post("/createTask", response_model=TaskOut)
def create_task(body: TaskCreate, service: TaskService = Depends(get_task_service)):
    return service.create_task(body)

@router.get("/getTasks", response_model=List[TaskOut])
def get_tasks(
    completed: Optional[bool] = None,
    priority: Optional[Priority] = None,
    category: Optional[str] = None,
    due_before: Optional[datetime] = None,
    service: TaskService = Depends(get_task_service),
):
    query = TaskQuery(completed=completed, priority=priority, category=category, due_before=due_before)
    return service.list_tasks(query)

@router.post("/updateTask", response_model=TaskOut)
def update_task(body: TaskUpdate, service: TaskService = Depends(get_task_service)):
    return service.update_task(body)

@router.post("/deleteTask", response_model=DeleteResult)
def delete_task(body: TaskId, service: TaskService = Depends(get_task_service)):
    return service.delete_task(body.id)

@router.post("/toggleTaskCompletion", response_model=TaskOut)
def toggle_task_completion(body: TaskId, service: TaskService = Depends(get_task_service)):
    return service.toggle_task_completion(body.id)

@router.get("/getCategories", response_model=List[str])
def get_categories(service: TaskService = Depends(get_task_service)):
    return service.list_categories()
