"""
Employee and attendance routes
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, status
from hms.controller import HotelController, get_controller
from hms.models.enums import EmployeeStatus
from hms.models.schemas import (
    AttendanceCreate, AttendanceRecord, EmployeeCreate, EmployeeRecord, EmployeeUpdate
)
from hms.routers.common import not_found, unwrap

router = APIRouter(prefix="/employees", tags=["Employees"])
attendance_router = APIRouter(prefix="/attendance", tags=["Attendance"])


@router.get("", response_model=List[EmployeeRecord])
def list_employees(status: Optional[EmployeeStatus] = None, controller: HotelController = Depends(get_controller)):
    return controller.employees.list_employees(status)


@router.get("/{employee_id}", response_model=EmployeeRecord)
def get_employee(employee_id: str, controller: HotelController = Depends(get_controller)):
    employee = controller.employees.get_employee(employee_id)
    if employee is None:
        raise not_found("Employee", employee_id)
    return employee


@router.post("", response_model=EmployeeRecord, status_code=status.HTTP_201_CREATED)
def create_employee(data: EmployeeCreate, controller: HotelController = Depends(get_controller)):
    return unwrap(controller.employees.create_employee(data))


@router.put("/{employee_id}", response_model=EmployeeRecord)
def update_employee(employee_id: str, data: EmployeeUpdate, controller: HotelController = Depends(get_controller)):
    """Setting Inactive stamps the termination date, Active clears it"""
    return unwrap(controller.employees.update_employee(employee_id, data))


@router.delete("/{employee_id}")
def delete_employee(employee_id: str, controller: HotelController = Depends(get_controller)):
    result = controller.employees.delete_employee(employee_id)
    unwrap(result)
    return {"message": result.message}


# ============== Attendance ==============

@attendance_router.get("", response_model=List[AttendanceRecord])
def list_attendance(
    employee_id: Optional[str] = None,
    year: Optional[int] = None,
    month: Optional[int] = None,
    controller: HotelController = Depends(get_controller)
):
    return controller.attendance.list_attendance(employee_id, year, month)


@attendance_router.put("", response_model=AttendanceRecord)
def record_attendance(data: AttendanceCreate, controller: HotelController = Depends(get_controller)):
    """One entry per employee and day; a second call overwrites the first"""
    return unwrap(controller.attendance.record(data))
