from fastapi import Request

from ..services.tasks import TaskService


def get_task_service(request: Request) -> TaskService:
    return request.app.state.task_service
