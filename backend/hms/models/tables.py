"""
Store tables
One table per sheet of the hotel workbook; rows are keyed by prefixed string ids.
Cross-sheet references are plain id columns, checked by the services.
"""
from datetime import datetime
from sqlalchemy import (
    Column, String, DateTime, Date, Text, Numeric, JSON, Enum as SQLEnum
)
from hms.database import Base
from hms.models.enums import (
    RoomType, RoomStatus, BookingStatus, BookingSource, InvoiceStatus,
    EmployeePosition, EmployeeStatus, SalaryType, AttendanceStatus,
    ExpenseCategory, TaskStatus, DocumentType
)


def _label_enum(enum_cls):
    """Persist the enum label ("Check-In"), not the member name"""
    return SQLEnum(
        enum_cls,
        values_callable=lambda members: [m.value for m in members],
        native_enum=False,
        length=32,
    )


class Room(Base):
    __tablename__ = "rooms"

    id = Column(String(20), primary_key=True)
    number = Column(String(20), nullable=False, index=True)
    type = Column(_label_enum(RoomType), nullable=False)
    price = Column(Numeric(12, 2), nullable=False)
    status = Column(_label_enum(RoomStatus), default=RoomStatus.AVAILABLE)


class Guest(Base):
    __tablename__ = "guests"

    id = Column(String(20), primary_key=True)
    name = Column(String(100), nullable=False, index=True)
    phone = Column(String(30), default="N/A")
    history = Column(JSON, default=list)  # booking ids, oldest first


class Booking(Base):
    __tablename__ = "bookings"

    id = Column(String(20), primary_key=True)
    guest_id = Column(String(20), nullable=False, index=True)
    room_id = Column(String(20), nullable=False, index=True)
    check_in_date = Column(Date, nullable=False)
    check_out_date = Column(Date, nullable=False)
    status = Column(_label_enum(BookingStatus), default=BookingStatus.CONFIRMED)
    total_price = Column(Numeric(12, 2), nullable=False)
    source = Column(_label_enum(BookingSource), default=BookingSource.MANUAL)


class Tenant(Base):
    __tablename__ = "tenants"

    id = Column(String(20), primary_key=True)
    name = Column(String(100), nullable=False)
    phone = Column(String(30), default="")
    room_id = Column(String(20), nullable=False, index=True)
    contract_start_date = Column(Date, nullable=False)
    contract_end_date = Column(Date, nullable=False)
    monthly_rent = Column(Numeric(12, 2), nullable=False)


class Invoice(Base):
    __tablename__ = "invoices"

    id = Column(String(20), primary_key=True)
    tenant_id = Column(String(20), nullable=False, index=True)
    period = Column(String(50), nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    issue_date = Column(Date, nullable=False)
    due_date = Column(Date, nullable=False)
    status = Column(_label_enum(InvoiceStatus), default=InvoiceStatus.UNPAID)


class Employee(Base):
    __tablename__ = "employees"

    id = Column(String(20), primary_key=True)
    name = Column(String(100), nullable=False)
    position = Column(_label_enum(EmployeePosition), nullable=False)
    hire_date = Column(Date, nullable=False)
    termination_date = Column(Date, nullable=True)
    status = Column(_label_enum(EmployeeStatus), default=EmployeeStatus.ACTIVE)
    salary_type = Column(_label_enum(SalaryType), nullable=False)
    salary_rate = Column(Numeric(12, 2), nullable=False)


class Attendance(Base):
    __tablename__ = "attendance"

    id = Column(String(20), primary_key=True)
    employee_id = Column(String(20), nullable=False, index=True)
    work_date = Column(Date, nullable=False)
    status = Column(_label_enum(AttendanceStatus), nullable=False)


class Expense(Base):
    __tablename__ = "expenses"

    id = Column(String(20), primary_key=True)
    expense_date = Column(Date, nullable=False)
    category = Column(_label_enum(ExpenseCategory), nullable=False)
    description = Column(String(200), nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)


class Task(Base):
    __tablename__ = "tasks"

    id = Column(String(20), primary_key=True)
    description = Column(Text, nullable=False)
    status = Column(_label_enum(TaskStatus), default=TaskStatus.TODO)
    assigned_to = Column(String(20), nullable=False)  # employee id
    related_to = Column(String(20), nullable=False)   # room id
    created_at = Column(DateTime, default=datetime.utcnow)
    due_date = Column(Date, nullable=True)


class GeneratedDocument(Base):
    __tablename__ = "documents"

    id = Column(String(20), primary_key=True)
    type = Column(_label_enum(DocumentType), nullable=False)
    title = Column(String(200), nullable=False)
    content = Column(Text, nullable=False)
    reference_id = Column(String(20), nullable=True)  # booking id
    created_at = Column(DateTime, default=datetime.utcnow)


class UIState(Base):
    """Persisted UI preferences, one JSON value per key"""
    __tablename__ = "ui_state"

    key = Column(String(100), primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
