"""
Payroll service
Monthly staff are paid their rate; daily staff their rate times the days
marked Present in the month. Processing a month books one Salaries expense,
whose description also marks the month as done.
"""
import calendar
import logging
from datetime import date
from decimal import Decimal
from typing import Optional, Tuple

from hms.models.enums import AttendanceStatus, EmployeeStatus, ErrorCode, ExpenseCategory, SalaryType
from hms.models.schemas import ExpenseCreate, PayrollLine, PayrollSummary
from hms.services.base import HotelService, serialized
from hms.services.finance_service import ExpenseService
from hms_core.ai.result import ActionResult

logger = logging.getLogger(__name__)


def previous_month(today: date) -> Tuple[int, int]:
    if today.month == 1:
        return today.year - 1, 12
    return today.year, today.month - 1


def payroll_description(year: int, month: int) -> str:
    return f"Payroll for {calendar.month_name[month]} {year}"


class PayrollService(HotelService):
    """Payroll service"""

    entity_type = "Expense"

    def __init__(self, state, gateway, lock=None, expenses: Optional[ExpenseService] = None):
        super().__init__(state, gateway, lock)
        self.expenses = expenses or ExpenseService(state, gateway, self.lock)

    def summarize(self, year: Optional[int] = None, month: Optional[int] = None, today: Optional[date] = None) -> PayrollSummary:
        """Pay for every active employee; defaults to the previous calendar month"""
        if year is None or month is None:
            year, month = previous_month(today or date.today())

        lines = []
        for employee in sorted(self.state.employees, key=lambda e: e.name.lower()):
            if employee.status != EmployeeStatus.ACTIVE:
                continue
            present_days = sum(
                1 for a in self.state.attendance
                if a.employee_id == employee.id
                and a.status == AttendanceStatus.PRESENT
                and a.work_date.year == year and a.work_date.month == month
            )
            if employee.salary_type == SalaryType.MONTHLY:
                pay = Decimal(employee.salary_rate)
            else:
                pay = Decimal(employee.salary_rate) * present_days
            lines.append(PayrollLine(
                employee_id=employee.id,
                name=employee.name,
                position=employee.position,
                salary_type=employee.salary_type,
                salary_rate=employee.salary_rate,
                present_days=present_days,
                calculated_pay=pay,
            ))

        description = payroll_description(year, month)
        return PayrollSummary(
            year=year,
            month=month,
            period=f"{calendar.month_name[month]} {year}",
            expense_description=description,
            lines=lines,
            total=sum((line.calculated_pay for line in lines), Decimal("0")),
            is_processed=self.is_processed(year, month),
        )

    def is_processed(self, year: int, month: int) -> bool:
        description = payroll_description(year, month)
        return any(
            e.category == ExpenseCategory.SALARIES and e.description == description
            for e in self.state.expenses
        )

    @serialized
    def process(self, year: Optional[int] = None, month: Optional[int] = None, today: Optional[date] = None) -> ActionResult:
        """Record the month's payroll as a Salaries expense, once"""
        today = today or date.today()
        summary = self.summarize(year, month, today=today)
        if summary.is_processed:
            return ActionResult.fail(
                f"Payroll for {summary.period} has already been processed",
                error_code=ErrorCode.CONFLICT,
            )
        if summary.total <= 0:
            return ActionResult.fail(
                f"Nothing to pay for {summary.period}",
                error_code=ErrorCode.VALIDATION_ERROR,
            )

        result = self.expenses.create_expense(ExpenseCreate(
            category=ExpenseCategory.SALARIES,
            description=summary.expense_description,
            amount=summary.total,
            expense_date=today,
        ))
        if result.success:
            logger.info(f"Payroll processed for {summary.period}: {summary.total}")
            result.message = f"Payroll for {summary.period} processed, total {summary.total}"
        return result
