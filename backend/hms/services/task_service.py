"""
Task board service
A task is assigned to an employee and concerns a room.
"""
import logging
from datetime import date, datetime
from typing import List, Optional

from hms.domain.booking_rules import resolve_room
from hms.models.enums import ErrorCode, TaskStatus
from hms.models.schemas import TaskCreate, TaskRecord
from hms.services.base import HotelService, serialized
from hms_core.ai.result import ActionResult, AffectedEntity

logger = logging.getLogger(__name__)


class TaskService(HotelService):
    """Task service"""

    entity_type = "Task"

    def list_tasks(
        self,
        status: Optional[TaskStatus] = None,
        assigned_to: Optional[str] = None,
        related_to: Optional[str] = None,
    ) -> List[TaskRecord]:
        tasks = self.state.tasks
        if status:
            tasks = [t for t in tasks if t.status == status]
        if assigned_to:
            tasks = [t for t in tasks if t.assigned_to == assigned_to]
        if related_to:
            tasks = [t for t in tasks if t.related_to == related_to]
        return sorted(tasks, key=lambda t: t.created_at, reverse=True)

    def get_task(self, task_id: str) -> Optional[TaskRecord]:
        return self.state.find("tasks", task_id)

    @serialized
    def create_task(self, data: TaskCreate) -> ActionResult:
        description = data.description.strip()
        if not description:
            return ActionResult.fail("Task description is required", error_code=ErrorCode.VALIDATION_ERROR)
        if self.state.find("employees", data.assigned_to) is None:
            return self._not_found(data.assigned_to, "Employee")
        if self.state.find("rooms", data.related_to) is None:
            return self._not_found(data.related_to, "Room")

        created = self.gateway.tasks.create({
            "description": description,
            "status": TaskStatus.TODO,
            "assigned_to": data.assigned_to,
            "related_to": data.related_to,
            "created_at": datetime.utcnow(),
            "due_date": data.due_date,
        })
        if not created.success:
            return self._gateway_failure(created)

        self.state.upsert("tasks", created.data)
        logger.info(f"Task {created.data.id} assigned to {data.assigned_to}")
        return self._done(f"Task '{description}' created", created.data, "created")

    def create_task_by_names(
        self,
        description: str,
        employee_name: str,
        room_number: str,
        due_date: Optional[date] = None,
    ) -> ActionResult:
        """Create a task naming the employee and room as people say them"""
        wanted = (employee_name or "").strip().lower()
        employees = [e for e in self.state.employees if e.name.strip().lower() == wanted]
        if len(employees) != 1:
            return ActionResult.fail(
                f"Employee '{employee_name}' not found", error_code=ErrorCode.NOT_FOUND, entity_type="Employee"
            )
        room = resolve_room(self.state.rooms, room_number)
        if room is None:
            return ActionResult.fail(
                f"Room '{room_number}' not found", error_code=ErrorCode.ROOM_NOT_FOUND, entity_type="Room"
            )
        return self.create_task(TaskCreate(
            description=description,
            assigned_to=employees[0].id,
            related_to=room.id,
            due_date=due_date,
        ))

    @serialized
    def update_status(self, task_id: str, status: TaskStatus) -> ActionResult:
        task = self.get_task(task_id)
        if task is None:
            return self._not_found(task_id)

        updated = self.gateway.tasks.update(task_id, {"status": status})
        if not updated.success:
            return self._gateway_failure(updated)
        self.state.upsert("tasks", updated.data)
        logger.info(f"Task {task_id}: {task.status.value} -> {status.value}")
        return self._done(f"Task {task_id} is now {status.value}", updated.data, "updated")

    @serialized
    def delete_task(self, task_id: str) -> ActionResult:
        if self.get_task(task_id) is None:
            return self._not_found(task_id)
        deleted = self.gateway.tasks.delete(task_id)
        if not deleted.success:
            return self._gateway_failure(deleted)
        self.state.remove("tasks", task_id)
        return ActionResult.ok(
            f"Task {task_id} deleted",
            entity_type="Task",
            entity_id=task_id,
            affected_entities=[AffectedEntity("Task", task_id, "deleted")],
        )
