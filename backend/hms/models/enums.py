"""
Enumerations shared by the store tables, the API schemas and the services.
Values are the labels the original spreadsheet used.
"""
from enum import Enum


class RoomType(str, Enum):
    """Room type"""
    STANDARD = "Standard"
    STANDARD_TWIN = "Standard Twin"
    DELUXE = "Deluxe"
    SUITE = "Suite"


class RoomStatus(str, Enum):
    """Room status, maintained by hand"""
    AVAILABLE = "Available"
    OCCUPIED = "Occupied"
    CLEANING = "Cleaning"
    MONTHLY_RENTAL = "Monthly Rental"


class BookingStatus(str, Enum):
    """Booking status"""
    CONFIRMED = "Confirmed"
    CHECKED_IN = "Check-In"
    CHECKED_OUT = "Check-Out"
    CANCELLED = "Cancelled"


class BookingSource(str, Enum):
    """Who created the booking"""
    MANUAL = "manual"
    AI = "ai"


class InvoiceStatus(str, Enum):
    UNPAID = "Unpaid"
    PAID = "Paid"
    OVERDUE = "Overdue"


class EmployeePosition(str, Enum):
    MANAGER = "Manager"
    RECEPTIONIST = "Receptionist"
    HOUSEKEEPING = "Housekeeping"


class EmployeeStatus(str, Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"


class SalaryType(str, Enum):
    MONTHLY = "Monthly"
    DAILY = "Daily"


class AttendanceStatus(str, Enum):
    PRESENT = "Present"
    ABSENT = "Absent"
    LEAVE = "Leave"


class ExpenseCategory(str, Enum):
    UTILITIES = "Utilities"
    SUPPLIES = "Supplies"
    MAINTENANCE = "Maintenance"
    SALARIES = "Salaries"
    MARKETING = "Marketing"
    OTHER = "Other"


class TaskStatus(str, Enum):
    TODO = "To Do"
    IN_PROGRESS = "In Progress"
    DONE = "Done"


class DocumentType(str, Enum):
    RECEIPT = "Receipt"
    TAX_INVOICE = "Tax Invoice"
    BOOKING_CONFIRMATION = "Booking Confirmation"


class ErrorCode(str, Enum):
    """Error kinds carried by ActionResult.error_code"""
    ROOM_NOT_FOUND = "room_not_found"
    ROOM_UNAVAILABLE = "room_unavailable"
    INVALID_DATES = "invalid_dates"
    REMOTE_FAILURE = "remote_failure"
    NOT_FOUND = "not_found"
    VALIDATION_ERROR = "validation_error"
    CONFLICT = "conflict"
    INVALID_TRANSITION = "invalid_transition"


# Bookings in these states hold their room
ACTIVE_BOOKING_STATUSES = (BookingStatus.CONFIRMED, BookingStatus.CHECKED_IN)
