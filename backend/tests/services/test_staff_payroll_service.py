"""
Employees, attendance, payroll and expenses
"""
from datetime import date
from decimal import Decimal

from hms.models.enums import (
    AttendanceStatus, EmployeePosition, EmployeeStatus, ErrorCode, ExpenseCategory, SalaryType, TaskStatus
)
from hms.models.schemas import (
    AttendanceCreate, EmployeeCreate, EmployeeUpdate, ExpenseCreate, ExpenseUpdate, TaskCreate
)
from hms.services.payroll_service import payroll_description, previous_month


def mark(controller, employee, day, status=AttendanceStatus.PRESENT):
    result = controller.attendance.record(AttendanceCreate(employee_id=employee.id, work_date=day, status=status))
    assert result.success, result.message
    return result


class TestEmployees:

    def test_new_employee_is_active(self, controller):
        result = controller.employees.create_employee(EmployeeCreate(
            name="มานี รักไทย", position=EmployeePosition.RECEPTIONIST, hire_date=date(2023, 3, 1),
            salary_type=SalaryType.MONTHLY, salary_rate=Decimal(22000),
        ))
        assert result.data["status"] == EmployeeStatus.ACTIVE.value
        assert result.data["termination_date"] is None
        assert result.entity_id == "EMP1"

    def test_deactivation_stamps_termination_date(self, controller, sample_employees):
        employee = sample_employees["วิชัย มีสุข"]
        controller.employees.update_employee(
            employee.id, EmployeeUpdate(status=EmployeeStatus.INACTIVE), today=date(2024, 5, 31)
        )
        assert controller.employees.get_employee(employee.id).termination_date == date(2024, 5, 31)

        controller.employees.update_employee(employee.id, EmployeeUpdate(status=EmployeeStatus.ACTIVE))
        assert controller.employees.get_employee(employee.id).termination_date is None

    def test_find_by_name(self, controller, sample_employees):
        assert controller.employees.find_by_name(" วิชัย มีสุข ").id == sample_employees["วิชัย มีสุข"].id
        assert controller.employees.find_by_name("nobody") is None

    def test_open_tasks_block_deletion(self, controller, sample_employees, sample_rooms):
        employee = sample_employees["วิชัย มีสุข"]
        task = controller.tasks.create_task(TaskCreate(
            description="Clean room", assigned_to=employee.id, related_to=sample_rooms["A101"].id
        ))
        assert controller.employees.delete_employee(employee.id).error_code == ErrorCode.CONFLICT.value

        controller.tasks.update_status(task.entity_id, TaskStatus.DONE)
        assert controller.employees.delete_employee(employee.id).success


class TestAttendance:

    def test_one_entry_per_employee_and_day(self, controller, sample_employees):
        employee = sample_employees["วิชัย มีสุข"]
        first = mark(controller, employee, date(2024, 5, 2))
        second = mark(controller, employee, date(2024, 5, 2), AttendanceStatus.LEAVE)

        assert second.entity_id == first.entity_id
        entries = controller.attendance.list_attendance(employee_id=employee.id)
        assert len(entries) == 1
        assert entries[0].status == AttendanceStatus.LEAVE

    def test_unknown_employee(self, controller):
        result = controller.attendance.record(AttendanceCreate(employee_id="EMP404", work_date=date(2024, 5, 2)))
        assert result.error_code == ErrorCode.NOT_FOUND.value

    def test_month_filter(self, controller, sample_employees):
        employee = sample_employees["วิชัย มีสุข"]
        mark(controller, employee, date(2024, 4, 30))
        mark(controller, employee, date(2024, 5, 1))
        assert len(controller.attendance.list_attendance(year=2024, month=5)) == 1


class TestPayroll:

    def test_previous_month_wraps_the_year(self):
        assert previous_month(date(2024, 1, 15)) == (2023, 12)
        assert previous_month(date(2024, 6, 1)) == (2024, 5)

    def test_description(self):
        assert payroll_description(2024, 6) == "Payroll for June 2024"

    def test_monthly_rate_and_daily_rate_times_present_days(self, controller, sample_employees):
        daily = sample_employees["วิชัย มีสุข"]
        for day in (1, 2, 3):
            mark(controller, daily, date(2024, 5, day))
        mark(controller, daily, date(2024, 5, 4), AttendanceStatus.ABSENT)
        mark(controller, daily, date(2024, 6, 1))

        summary = controller.payroll.summarize(2024, 5)

        pay = {line.name: line.calculated_pay for line in summary.lines}
        assert pay == {"วิชัย มีสุข": Decimal(1500), "สมชาย ใจดี": Decimal(45000)}
        assert summary.total == Decimal(46500)
        assert summary.period == "May 2024"
        assert not summary.is_processed

    def test_defaults_to_previous_month(self, controller, sample_employees):
        summary = controller.payroll.summarize(today=date(2024, 6, 10))
        assert (summary.year, summary.month) == (2024, 5)

    def test_inactive_staff_are_not_paid(self, controller, sample_employees):
        controller.employees.update_employee(
            sample_employees["สมชาย ใจดี"].id, EmployeeUpdate(status=EmployeeStatus.INACTIVE)
        )
        names = [line.name for line in controller.payroll.summarize(2024, 5).lines]
        assert names == ["วิชัย มีสุข"]

    def test_processing_books_one_salaries_expense(self, controller, sample_employees):
        result = controller.payroll.process(2024, 5, today=date(2024, 6, 1))

        assert result.success, result.message
        expense = controller.state.find("expenses", result.entity_id)
        assert expense.category == ExpenseCategory.SALARIES
        assert expense.description == "Payroll for May 2024"
        assert expense.amount == Decimal(45000)
        assert controller.payroll.summarize(2024, 5).is_processed

        again = controller.payroll.process(2024, 5, today=date(2024, 6, 2))
        assert again.error_code == ErrorCode.CONFLICT.value
        assert len(controller.expenses.list_expenses(category=ExpenseCategory.SALARIES)) == 1

    def test_nothing_to_pay(self, controller):
        result = controller.payroll.process(2024, 5)
        assert result.error_code == ErrorCode.VALIDATION_ERROR.value


class TestExpenses:

    def test_date_defaults_to_today(self, controller):
        result = controller.expenses.create_expense(
            ExpenseCreate(category=ExpenseCategory.UTILITIES, description="Electricity Bill", amount=Decimal(5500)),
            today=date(2024, 6, 5),
        )
        assert result.data["expense_date"] == "2024-06-05"

    def test_filters_and_order(self, controller):
        for day, category in [(1, ExpenseCategory.SUPPLIES), (3, ExpenseCategory.UTILITIES), (2, ExpenseCategory.SUPPLIES)]:
            controller.expenses.create_expense(ExpenseCreate(
                category=category, description="x", amount=Decimal(100), expense_date=date(2024, 6, day)
            ))
        supplies = controller.expenses.list_expenses(category=ExpenseCategory.SUPPLIES)
        assert [e.expense_date.day for e in supplies] == [2, 1]
        ranged = controller.expenses.list_expenses(start_date=date(2024, 6, 2), end_date=date(2024, 6, 3))
        assert len(ranged) == 2

    def test_update_and_delete(self, controller):
        created = controller.expenses.create_expense(ExpenseCreate(
            category=ExpenseCategory.MAINTENANCE, description="Fix AC", amount=Decimal(800)
        ))
        updated = controller.expenses.update_expense(created.entity_id, ExpenseUpdate(amount=Decimal(950)))
        assert Decimal(updated.data["amount"]) == Decimal(950)

        assert controller.expenses.delete_expense(created.entity_id).success
        assert controller.expenses.list_expenses() == []

    def test_blank_description(self, controller):
        result = controller.expenses.create_expense(ExpenseCreate(
            category=ExpenseCategory.OTHER, description="   ", amount=Decimal(10)
        ))
        assert result.error_code == ErrorCode.VALIDATION_ERROR.value
