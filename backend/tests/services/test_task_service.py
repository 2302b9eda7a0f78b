"""
Task board
"""
from datetime import date

from hms.models.enums import ErrorCode, TaskStatus
from hms.models.schemas import TaskCreate


def test_create_task(controller, sample_employees, sample_rooms):
    employee = sample_employees["วิชัย มีสุข"]
    result = controller.tasks.create_task(TaskCreate(
        description=" Change the towels ", assigned_to=employee.id,
        related_to=sample_rooms["A107"].id, due_date=date(2024, 6, 2),
    ))

    assert result.success
    task = controller.tasks.get_task(result.entity_id)
    assert task.description == "Change the towels"
    assert task.status == TaskStatus.TODO
    assert task.created_at is not None
    assert task.id == "TASK1"


def test_task_needs_known_employee_and_room(controller, sample_employees, sample_rooms):
    employee = sample_employees["วิชัย มีสุข"]
    no_employee = controller.tasks.create_task(TaskCreate(
        description="Clean", assigned_to="EMP404", related_to=sample_rooms["A107"].id
    ))
    no_room = controller.tasks.create_task(TaskCreate(
        description="Clean", assigned_to=employee.id, related_to="R404"
    ))
    assert no_employee.error_code == ErrorCode.NOT_FOUND.value
    assert no_room.error_code == ErrorCode.NOT_FOUND.value


def test_create_by_names(controller, sample_employees, sample_rooms):
    result = controller.tasks.create_task_by_names("Fix the shower", "วิชัย มีสุข", "n1")
    assert result.success
    task = controller.tasks.get_task(result.entity_id)
    assert task.assigned_to == sample_employees["วิชัย มีสุข"].id
    assert task.related_to == sample_rooms["N1"].id


def test_create_by_names_reports_what_is_missing(controller, sample_employees, sample_rooms):
    assert controller.tasks.create_task_by_names("x", "Nobody", "N1").error_code == ErrorCode.NOT_FOUND.value
    assert controller.tasks.create_task_by_names("x", "วิชัย มีสุข", "Z9").error_code == ErrorCode.ROOM_NOT_FOUND.value


def test_status_and_filters(controller, sample_employees, sample_rooms):
    employee = sample_employees["วิชัย มีสุข"]
    first = controller.tasks.create_task_by_names("Clean", employee.name, "A101")
    controller.tasks.create_task_by_names("Inspect", employee.name, "A107")

    assert controller.tasks.update_status(first.entity_id, TaskStatus.IN_PROGRESS).success
    in_progress = controller.tasks.list_tasks(status=TaskStatus.IN_PROGRESS)
    assert [t.id for t in in_progress] == [first.entity_id]
    assert len(controller.tasks.list_tasks(related_to=sample_rooms["A107"].id)) == 1


def test_delete(controller, sample_employees, sample_rooms):
    created = controller.tasks.create_task_by_names("Clean", "วิชัย มีสุข", "A101")
    assert controller.tasks.delete_task(created.entity_id).success
    assert controller.tasks.delete_task(created.entity_id).error_code == ErrorCode.NOT_FOUND.value
