"""
Employee and attendance service
Deactivating an employee stamps the termination date; reactivating clears it.
"""
import logging
from datetime import date
from typing import List, Optional

from hms.models.enums import EmployeeStatus, ErrorCode, TaskStatus
from hms.models.schemas import (
    AttendanceCreate, AttendanceRecord, EmployeeCreate, EmployeeRecord, EmployeeUpdate
)
from hms.services.base import HotelService, serialized
from hms_core.ai.result import ActionResult, AffectedEntity

logger = logging.getLogger(__name__)


class EmployeeService(HotelService):
    """Employee service"""

    entity_type = "Employee"

    def list_employees(self, status: Optional[EmployeeStatus] = None) -> List[EmployeeRecord]:
        employees = self.state.employees
        if status:
            employees = [e for e in employees if e.status == status]
        return sorted(employees, key=lambda e: e.name.lower())

    def get_employee(self, employee_id: str) -> Optional[EmployeeRecord]:
        return self.state.find("employees", employee_id)

    def find_by_name(self, name: str) -> Optional[EmployeeRecord]:
        wanted = (name or "").strip().lower()
        matches = [e for e in self.state.employees if e.name.strip().lower() == wanted]
        return matches[0] if len(matches) == 1 else None

    @serialized
    def create_employee(self, data: EmployeeCreate) -> ActionResult:
        name = data.name.strip()
        if not name:
            return ActionResult.fail("Employee name is required", error_code=ErrorCode.VALIDATION_ERROR)

        created = self.gateway.employees.create({
            **data.model_dump(),
            "name": name,
            "status": EmployeeStatus.ACTIVE,
            "termination_date": None,
        })
        if not created.success:
            return self._gateway_failure(created)

        self.state.upsert("employees", created.data)
        logger.info(f"Employee {created.data.id} hired as {data.position.value}")
        return self._done(f"Employee {name} added", created.data, "created")

    @serialized
    def update_employee(self, employee_id: str, data: EmployeeUpdate, today: Optional[date] = None) -> ActionResult:
        employee = self.get_employee(employee_id)
        if employee is None:
            return self._not_found(employee_id)

        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        if "name" in changes:
            changes["name"] = changes["name"].strip()
        status = changes.get("status")
        if status == EmployeeStatus.INACTIVE and employee.termination_date is None:
            changes["termination_date"] = today or date.today()
        elif status == EmployeeStatus.ACTIVE:
            changes["termination_date"] = None
        if not changes:
            return self._done(f"Employee {employee.name} unchanged", employee, "updated")

        updated = self.gateway.employees.update(employee_id, changes)
        if not updated.success:
            return self._gateway_failure(updated)

        self.state.upsert("employees", updated.data)
        return self._done(f"Employee {updated.data.name} updated", updated.data, "updated")

    @serialized
    def delete_employee(self, employee_id: str) -> ActionResult:
        employee = self.get_employee(employee_id)
        if employee is None:
            return self._not_found(employee_id)

        open_tasks = [t for t in self.state.tasks if t.assigned_to == employee_id and t.status != TaskStatus.DONE]
        if open_tasks:
            return ActionResult.fail(
                f"{employee.name} still has {len(open_tasks)} open task(s)",
                error_code=ErrorCode.CONFLICT,
            )

        deleted = self.gateway.employees.delete(employee_id)
        if not deleted.success:
            return self._gateway_failure(deleted)
        self.state.remove("employees", employee_id)
        logger.info(f"Employee {employee_id} deleted")
        return ActionResult.ok(
            f"Employee {employee.name} deleted",
            entity_type="Employee",
            entity_id=employee_id,
            affected_entities=[AffectedEntity("Employee", employee_id, "deleted")],
        )


class AttendanceService(HotelService):
    """Daily attendance, one entry per employee and day"""

    entity_type = "Attendance"

    def list_attendance(
        self,
        employee_id: Optional[str] = None,
        year: Optional[int] = None,
        month: Optional[int] = None,
    ) -> List[AttendanceRecord]:
        records = self.state.attendance
        if employee_id:
            records = [a for a in records if a.employee_id == employee_id]
        if year:
            records = [a for a in records if a.work_date.year == year]
        if month:
            records = [a for a in records if a.work_date.month == month]
        return sorted(records, key=lambda a: (a.work_date, a.employee_id))

    @serialized
    def record(self, data: AttendanceCreate) -> ActionResult:
        """Insert or overwrite the entry for (employee, day)"""
        if self.state.find("employees", data.employee_id) is None:
            return self._not_found(data.employee_id, "Employee")

        existing = next(
            (a for a in self.state.attendance
             if a.employee_id == data.employee_id and a.work_date == data.work_date),
            None,
        )
        if existing is not None:
            result = self.gateway.attendance.update(existing.id, {"status": data.status})
            change = "updated"
        else:
            result = self.gateway.attendance.create(data.model_dump())
            change = "created"
        if not result.success:
            return self._gateway_failure(result)

        self.state.upsert("attendance", result.data)
        return self._done(
            f"{data.work_date.isoformat()}: {data.employee_id} {data.status.value}", result.data, change
        )
