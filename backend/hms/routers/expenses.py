"""
Expense routes
"""
from typing import List, Optional
from datetime import date
from fastapi import APIRouter, Depends, status
from hms.controller import HotelController, get_controller
from hms.models.enums import ExpenseCategory
from hms.models.schemas import ExpenseCreate, ExpenseRecord, ExpenseUpdate
from hms.routers.common import unwrap

router = APIRouter(prefix="/expenses", tags=["Expenses"])


@router.get("", response_model=List[ExpenseRecord])
def list_expenses(
    category: Optional[ExpenseCategory] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    controller: HotelController = Depends(get_controller)
):
    return controller.expenses.list_expenses(category, start_date, end_date)


@router.post("", response_model=ExpenseRecord, status_code=status.HTTP_201_CREATED)
def create_expense(data: ExpenseCreate, controller: HotelController = Depends(get_controller)):
    return unwrap(controller.expenses.create_expense(data))


@router.put("/{expense_id}", response_model=ExpenseRecord)
def update_expense(expense_id: str, data: ExpenseUpdate, controller: HotelController = Depends(get_controller)):
    return unwrap(controller.expenses.update_expense(expense_id, data))


@router.delete("/{expense_id}")
def delete_expense(expense_id: str, controller: HotelController = Depends(get_controller)):
    result = controller.expenses.delete_expense(expense_id)
    unwrap(result)
    return {"message": result.message}
