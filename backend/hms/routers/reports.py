"""
Report and payroll routes
"""
from typing import List, Optional
from datetime import date
from fastapi import APIRouter, Depends, Query
from hms.controller import HotelController, get_controller
from hms.models.schemas import CategoryTotal, DashboardStats, MonthlyFinance, PayrollSummary
from hms.routers.common import unwrap

router = APIRouter(prefix="/reports", tags=["Reports"])
payroll_router = APIRouter(prefix="/payroll", tags=["Payroll"])


@router.get("/dashboard", response_model=DashboardStats)
def get_dashboard(controller: HotelController = Depends(get_controller)):
    return controller.reports.get_dashboard_stats()


@router.get("/finance", response_model=List[MonthlyFinance])
def get_monthly_finance(
    year: Optional[int] = None,
    controller: HotelController = Depends(get_controller)
):
    """Revenue and expenses per month of the year"""
    return controller.reports.get_monthly_finance(year or date.today().year)


@router.get("/expenses-by-category", response_model=List[CategoryTotal])
def get_expenses_by_category(
    start_date: date,
    end_date: date,
    controller: HotelController = Depends(get_controller)
):
    return controller.reports.get_expenses_by_category(start_date, end_date)


@router.get("/occupancy")
def get_occupancy(
    start_date: date,
    end_date: date,
    controller: HotelController = Depends(get_controller)
):
    return controller.reports.get_occupancy_report(start_date, end_date)


# ============== Payroll ==============

@payroll_router.get("", response_model=PayrollSummary)
def get_payroll(
    year: Optional[int] = None,
    month: Optional[int] = Query(None, ge=1, le=12),
    controller: HotelController = Depends(get_controller)
):
    """Payroll summary; defaults to the previous month"""
    return controller.payroll.summarize(year, month)


@payroll_router.post("/process")
def process_payroll(
    year: Optional[int] = None,
    month: Optional[int] = Query(None, ge=1, le=12),
    controller: HotelController = Depends(get_controller)
):
    """Record the month's payroll as a Salaries expense"""
    result = controller.payroll.process(year, month)
    return {"message": result.message, "expense": unwrap(result)}
