"""
hms/services/actions/task_actions.py

Task tools: addTask.
"""
from typing import Any, Dict

from hms_core.ai.actions import ActionRegistry
from hms.services.actions.base import AddTaskParams


def register_task_actions(registry: ActionRegistry) -> None:
    """Register the task tools."""

    @registry.register(
        name="addTask",
        entity="Task",
        description="Create a task about a room (cleaning, repair, ...) and assign it to an employee by name.",
        category="mutation",
        side_effects=["creates_task"],
    )
    def handle_add_task(params: AddTaskParams, controller) -> Dict[str, Any]:
        result = controller.tasks.create_task_by_names(
            description=params.description,
            employee_name=params.employee_name,
            room_number=params.room_number,
            due_date=params.due_date,
        )
        return result.to_dict()
