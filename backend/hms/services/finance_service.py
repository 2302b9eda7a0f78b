"""
Expense service
"""
import logging
from datetime import date
from typing import List, Optional

from hms.models.enums import ErrorCode, ExpenseCategory
from hms.models.schemas import ExpenseCreate, ExpenseRecord, ExpenseUpdate
from hms.services.base import HotelService, serialized
from hms_core.ai.result import ActionResult, AffectedEntity

logger = logging.getLogger(__name__)


class ExpenseService(HotelService):
    """Expense service"""

    entity_type = "Expense"

    def list_expenses(
        self,
        category: Optional[ExpenseCategory] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> List[ExpenseRecord]:
        expenses = self.state.expenses
        if category:
            expenses = [e for e in expenses if e.category == category]
        if start_date:
            expenses = [e for e in expenses if e.expense_date >= start_date]
        if end_date:
            expenses = [e for e in expenses if e.expense_date <= end_date]
        return sorted(expenses, key=lambda e: (e.expense_date, e.id), reverse=True)

    @serialized
    def create_expense(self, data: ExpenseCreate, today: Optional[date] = None) -> ActionResult:
        description = data.description.strip()
        if not description:
            return ActionResult.fail("Description is required", error_code=ErrorCode.VALIDATION_ERROR)
        if data.amount <= 0:
            return ActionResult.fail("Amount must be greater than zero", error_code=ErrorCode.VALIDATION_ERROR)

        created = self.gateway.expenses.create({
            "expense_date": data.expense_date or today or date.today(),
            "category": data.category,
            "description": description,
            "amount": data.amount,
        })
        if not created.success:
            return self._gateway_failure(created)

        self.state.upsert("expenses", created.data)
        logger.info(f"Expense {created.data.id}: {data.category.value} {data.amount}")
        return self._done(f"Expense '{description}' recorded", created.data, "created")

    @serialized
    def update_expense(self, expense_id: str, data: ExpenseUpdate) -> ActionResult:
        expense = self.state.find("expenses", expense_id)
        if expense is None:
            return self._not_found(expense_id)

        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        if "description" in changes:
            changes["description"] = changes["description"].strip()
            if not changes["description"]:
                return ActionResult.fail("Description is required", error_code=ErrorCode.VALIDATION_ERROR)
        if not changes:
            return self._done(f"Expense {expense_id} unchanged", expense, "updated")

        updated = self.gateway.expenses.update(expense_id, changes)
        if not updated.success:
            return self._gateway_failure(updated)
        self.state.upsert("expenses", updated.data)
        return self._done(f"Expense {expense_id} updated", updated.data, "updated")

    @serialized
    def delete_expense(self, expense_id: str) -> ActionResult:
        if self.state.find("expenses", expense_id) is None:
            return self._not_found(expense_id)
        deleted = self.gateway.expenses.delete(expense_id)
        if not deleted.success:
            return self._gateway_failure(deleted)
        self.state.remove("expenses", expense_id)
        return ActionResult.ok(
            f"Expense {expense_id} deleted",
            entity_type="Expense",
            entity_id=expense_id,
            affected_entities=[AffectedEntity("Expense", expense_id, "deleted")],
        )
