"""
Pydantic schemas
Records held in the application state, request bodies and report shapes
"""
from datetime import datetime, date
from decimal import Decimal
from typing import Optional, List, Any
from pydantic import BaseModel, Field, ConfigDict
from hms.models.enums import (
    RoomType, RoomStatus, BookingStatus, BookingSource, InvoiceStatus,
    EmployeePosition, EmployeeStatus, SalaryType, AttendanceStatus,
    ExpenseCategory, TaskStatus, DocumentType
)


class Record(BaseModel):
    """A row as it travels through the gateway"""
    id: str
    model_config = ConfigDict(from_attributes=True)


# ============== Room Schemas ==============

class RoomRecord(Record):
    number: str
    type: RoomType
    price: Decimal
    status: RoomStatus = RoomStatus.AVAILABLE


class RoomCreate(BaseModel):
    number: str = Field(..., min_length=1, max_length=20)
    type: RoomType = RoomType.STANDARD
    price: Decimal = Field(..., gt=0)
    status: RoomStatus = RoomStatus.AVAILABLE


class RoomUpdate(BaseModel):
    number: Optional[str] = Field(None, min_length=1, max_length=20)
    type: Optional[RoomType] = None
    price: Optional[Decimal] = Field(None, gt=0)
    status: Optional[RoomStatus] = None


class RoomStatusUpdate(BaseModel):
    status: RoomStatus


# ============== Guest Schemas ==============

class GuestRecord(Record):
    name: str
    phone: str = "N/A"
    history: List[str] = Field(default_factory=list)


class GuestCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    phone: str = Field(default="", max_length=30)


class GuestUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    phone: Optional[str] = Field(None, max_length=30)


# ============== Booking Schemas ==============

class BookingRecord(Record):
    guest_id: str
    room_id: str
    check_in_date: date
    check_out_date: date
    status: BookingStatus = BookingStatus.CONFIRMED
    total_price: Decimal
    source: BookingSource = BookingSource.MANUAL


class BookingCreate(BaseModel):
    guest_name: str = Field(..., min_length=1, max_length=100)
    phone: str = Field(default="", max_length=30)
    room_number: str = Field(..., min_length=1)
    check_in_date: date
    check_out_date: date
    source: BookingSource = BookingSource.MANUAL


class BookingUpdate(BaseModel):
    guest_name: Optional[str] = Field(None, max_length=100)
    phone: Optional[str] = Field(None, max_length=30)
    room_number: Optional[str] = None
    check_in_date: Optional[date] = None
    check_out_date: Optional[date] = None


class BookingStatusUpdate(BaseModel):
    status: BookingStatus


class BookingDetail(BookingRecord):
    """Booking joined with its guest and room"""
    guest_name: Optional[str] = None
    guest_phone: Optional[str] = None
    room_number: Optional[str] = None
    nights: int = 1


class AvailableRoom(BaseModel):
    id: str
    number: str
    type: RoomType
    price: Decimal
    nights: int
    total_price: Decimal


# ============== Tenant / Invoice Schemas ==============

class TenantRecord(Record):
    name: str
    phone: str = ""
    room_id: str
    contract_start_date: date
    contract_end_date: date
    monthly_rent: Decimal


class TenantCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    phone: str = Field(default="", max_length=30)
    room_id: str
    contract_start_date: date
    contract_end_date: date
    monthly_rent: Decimal = Field(..., gt=0)


class TenantUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    phone: Optional[str] = Field(None, max_length=30)
    room_id: Optional[str] = None
    contract_start_date: Optional[date] = None
    contract_end_date: Optional[date] = None
    monthly_rent: Optional[Decimal] = Field(None, gt=0)


class InvoiceRecord(Record):
    tenant_id: str
    period: str
    amount: Decimal
    issue_date: date
    due_date: date
    status: InvoiceStatus = InvoiceStatus.UNPAID


class InvoiceCreate(BaseModel):
    tenant_id: str
    period: str = Field(..., min_length=1, max_length=50)


# ============== Employee / Attendance Schemas ==============

class EmployeeRecord(Record):
    name: str
    position: EmployeePosition
    hire_date: date
    termination_date: Optional[date] = None
    status: EmployeeStatus = EmployeeStatus.ACTIVE
    salary_type: SalaryType
    salary_rate: Decimal


class EmployeeCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    position: EmployeePosition
    hire_date: date
    salary_type: SalaryType
    salary_rate: Decimal = Field(..., gt=0)


class EmployeeUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    position: Optional[EmployeePosition] = None
    status: Optional[EmployeeStatus] = None
    salary_type: Optional[SalaryType] = None
    salary_rate: Optional[Decimal] = Field(None, gt=0)


class AttendanceRecord(Record):
    employee_id: str
    work_date: date
    status: AttendanceStatus


class AttendanceCreate(BaseModel):
    employee_id: str
    work_date: date
    status: AttendanceStatus = AttendanceStatus.PRESENT


# ============== Expense Schemas ==============

class ExpenseRecord(Record):
    expense_date: date
    category: ExpenseCategory
    description: str
    amount: Decimal


class ExpenseCreate(BaseModel):
    category: ExpenseCategory
    description: str = Field(..., min_length=1, max_length=200)
    amount: Decimal = Field(..., gt=0)
    expense_date: Optional[date] = None


class ExpenseUpdate(BaseModel):
    category: Optional[ExpenseCategory] = None
    description: Optional[str] = Field(None, min_length=1, max_length=200)
    amount: Optional[Decimal] = Field(None, gt=0)
    expense_date: Optional[date] = None


# ============== Task Schemas ==============

class TaskRecord(Record):
    description: str
    status: TaskStatus = TaskStatus.TODO
    assigned_to: str
    related_to: str
    created_at: datetime
    due_date: Optional[date] = None


class TaskCreate(BaseModel):
    description: str = Field(..., min_length=1, max_length=500)
    assigned_to: str
    related_to: str
    due_date: Optional[date] = None


class TaskStatusUpdate(BaseModel):
    status: TaskStatus


# ============== Document Schemas ==============

class DocumentRecord(Record):
    type: DocumentType
    title: str
    content: str
    reference_id: Optional[str] = None
    created_at: datetime


class DocumentCreate(BaseModel):
    type: DocumentType
    booking_id: str


# ============== Report Schemas ==============

class PayrollLine(BaseModel):
    employee_id: str
    name: str
    position: EmployeePosition
    salary_type: SalaryType
    salary_rate: Decimal
    present_days: int
    calculated_pay: Decimal


class PayrollSummary(BaseModel):
    year: int
    month: int
    period: str
    expense_description: str
    lines: List[PayrollLine]
    total: Decimal
    is_processed: bool


class DashboardStats(BaseModel):
    total_rooms: int
    available: int
    occupied: int
    cleaning: int
    monthly_rental: int
    today_arrivals: int
    today_departures: int
    occupancy_rate: float
    month_revenue: Decimal
    month_expenses: Decimal


class MonthlyFinance(BaseModel):
    month: int
    revenue: Decimal
    expenses: Decimal
    net: Decimal


class CategoryTotal(BaseModel):
    category: ExpenseCategory
    total: Decimal
    count: int


# ============== Assistant Schemas ==============

class ChatMessage(BaseModel):
    """One turn in OpenAI chat format"""
    role: str
    content: Optional[Any] = None
    tool_calls: Optional[List[dict]] = None
    tool_call_id: Optional[str] = None
    name: Optional[str] = None


class ChatRequest(BaseModel):
    message: str = Field(..., min_length=1)
    history: List[ChatMessage] = Field(default_factory=list)
    image_data_url: Optional[str] = None


class ToolInvocation(BaseModel):
    name: str
    arguments: dict
    result: Any


class ChatReply(BaseModel):
    reply: str
    history: List[ChatMessage]
    tool_calls: List[ToolInvocation] = Field(default_factory=list)
