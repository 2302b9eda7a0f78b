"""
Task board routes
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, status
from hms.controller import HotelController, get_controller
from hms.models.enums import TaskStatus
from hms.models.schemas import TaskCreate, TaskRecord, TaskStatusUpdate
from hms.routers.common import not_found, unwrap

router = APIRouter(prefix="/tasks", tags=["Tasks"])


@router.get("", response_model=List[TaskRecord])
def list_tasks(
    status: Optional[TaskStatus] = None,
    assigned_to: Optional[str] = None,
    related_to: Optional[str] = None,
    controller: HotelController = Depends(get_controller)
):
    return controller.tasks.list_tasks(status, assigned_to, related_to)


@router.get("/{task_id}", response_model=TaskRecord)
def get_task(task_id: str, controller: HotelController = Depends(get_controller)):
    task = controller.tasks.get_task(task_id)
    if task is None:
        raise not_found("Task", task_id)
    return task


@router.post("", response_model=TaskRecord, status_code=status.HTTP_201_CREATED)
def create_task(data: TaskCreate, controller: HotelController = Depends(get_controller)):
    return unwrap(controller.tasks.create_task(data))


@router.patch("/{task_id}/status", response_model=TaskRecord)
def update_task_status(task_id: str, data: TaskStatusUpdate, controller: HotelController = Depends(get_controller)):
    return unwrap(controller.tasks.update_status(task_id, data.status))


@router.delete("/{task_id}")
def delete_task(task_id: str, controller: HotelController = Depends(get_controller)):
    result = controller.tasks.delete_task(task_id)
    unwrap(result)
    return {"message": result.message}
