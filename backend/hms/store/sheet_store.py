"""
hms/store/sheet_store.py

Action-style store over one table per sheet.

    execute("getRooms", {})                       -> {"success": True, "data": [...]}
    execute("addBooking", {...})                  -> {"success": True, "data": {...}}
    execute("updateGuest", {"id": "G1", ...})     -> merges the given fields
    execute("deleteTask", {"id": "TASK3"})        -> {"success": True}

Failures come back as {"success": False, "message", "error_code"}; nothing is raised.
Writes run under one lock, so the booking overlap test and the insert are atomic.
"""
import logging
import re
import threading
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, Optional, Type

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from hms.domain.booking_rules import intervals_overlap
from hms.models import tables
from hms.models.enums import BookingStatus, ErrorCode
from hms.models.schemas import (
    Record, RoomRecord, GuestRecord, BookingRecord, TenantRecord, InvoiceRecord,
    EmployeeRecord, AttendanceRecord, ExpenseRecord, TaskRecord, DocumentRecord
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Sheet:
    """One entity type: its table, record model, id prefix and list action"""
    entity: str
    table: Type
    record: Type[Record]
    prefix: str
    list_action: str


SHEETS: Dict[str, Sheet] = {
    sheet.entity: sheet for sheet in (
        Sheet("Room", tables.Room, RoomRecord, "R", "getRooms"),
        Sheet("Guest", tables.Guest, GuestRecord, "G", "getGuests"),
        Sheet("Booking", tables.Booking, BookingRecord, "B", "getBookings"),
        Sheet("Tenant", tables.Tenant, TenantRecord, "T", "getTenants"),
        Sheet("Invoice", tables.Invoice, InvoiceRecord, "INV", "getInvoices"),
        Sheet("Employee", tables.Employee, EmployeeRecord, "EMP", "getEmployees"),
        Sheet("Attendance", tables.Attendance, AttendanceRecord, "ATT", "getAttendance"),
        Sheet("Expense", tables.Expense, ExpenseRecord, "E", "getExpenses"),
        Sheet("Task", tables.Task, TaskRecord, "TASK", "getTasks"),
        Sheet("Document", tables.GeneratedDocument, DocumentRecord, "DOC", "getDocuments"),
    )
}


class StoreError(Exception):
    """Rejected write; turned into a failure response by execute()"""

    def __init__(self, message: str, error_code: ErrorCode):
        super().__init__(message)
        self.message = message
        self.error_code = error_code


class SheetStore:
    """
    Sheet store

    Args:
        session_factory: SQLAlchemy sessionmaker bound to the store database
    """

    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory
        self._lock = threading.Lock()
        self._routes = self._build_routes()

    def _build_routes(self) -> Dict[str, tuple]:
        routes = {}
        for sheet in SHEETS.values():
            routes[sheet.list_action] = (self._list, sheet)
            routes[f"add{sheet.entity}"] = (self._add, sheet)
            routes[f"update{sheet.entity}"] = (self._update, sheet)
            routes[f"delete{sheet.entity}"] = (self._delete, sheet)
        return routes

    @property
    def actions(self):
        return sorted(self._routes)

    def execute(self, action: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        route = self._routes.get(action)
        if route is None:
            logger.warning(f"Rejected unknown store action: {action}")
            return {"success": False, "message": "Invalid action"}

        handler, sheet = route
        params = dict(params or {})
        db = self._session_factory()
        try:
            if handler is self._list:
                return handler(db, sheet, params)
            with self._lock:
                return handler(db, sheet, params)
        except StoreError as e:
            db.rollback()
            logger.warning(f"{action} rejected: {e.message}")
            return {"success": False, "message": e.message, "error_code": e.error_code.value}
        except ValidationError as e:
            db.rollback()
            logger.warning(f"{action} rejected, invalid fields: {e.errors()}")
            return {
                "success": False,
                "message": f"Invalid {sheet.entity} fields: {_summarize(e)}",
                "error_code": ErrorCode.VALIDATION_ERROR.value,
            }
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"{action} failed: {e}")
            return {"success": False, "message": f"Store error: {e}"}
        finally:
            db.close()

    # ============== Actions ==============

    def _list(self, db: Session, sheet: Sheet, params: Dict[str, Any]) -> Dict[str, Any]:
        rows = db.query(sheet.table).order_by(sheet.table.id).all()
        data = [self._dump(sheet, row) for row in rows]
        return {"success": True, "data": data}

    def _add(self, db: Session, sheet: Sheet, params: Dict[str, Any]) -> Dict[str, Any]:
        record_id = params.get("id")
        if not record_id or db.get(sheet.table, record_id) is not None:
            record_id = self._next_id(db, sheet)
        params["id"] = record_id
        if "created_at" in sheet.record.model_fields and not params.get("created_at"):
            params["created_at"] = datetime.utcnow()

        record = sheet.record.model_validate(params)
        if sheet.entity == "Booking":
            self._ensure_room_free(db, record)

        db.add(sheet.table(**record.model_dump()))
        db.commit()
        logger.info(f"Added {sheet.entity} {record_id}")
        return {"success": True, "data": record.model_dump(mode="json")}

    def _update(self, db: Session, sheet: Sheet, params: Dict[str, Any]) -> Dict[str, Any]:
        row = db.get(sheet.table, params.pop("id", None))
        if row is None:
            raise StoreError("Record not found", ErrorCode.NOT_FOUND)

        current = sheet.record.model_validate(row).model_dump()
        record = sheet.record.model_validate({**current, **params, "id": row.id})
        if sheet.entity == "Booking":
            self._ensure_room_free(db, record)

        for key, value in record.model_dump().items():
            setattr(row, key, value)
        db.commit()
        logger.info(f"Updated {sheet.entity} {row.id}: {sorted(params)}")
        return {"success": True, "data": record.model_dump(mode="json")}

    def _delete(self, db: Session, sheet: Sheet, params: Dict[str, Any]) -> Dict[str, Any]:
        row = db.get(sheet.table, params.get("id"))
        if row is None:
            raise StoreError("Record not found", ErrorCode.NOT_FOUND)
        db.delete(row)
        db.commit()
        logger.info(f"Deleted {sheet.entity} {params.get('id')}")
        return {"success": True, "message": f"{sheet.entity} deleted"}

    # ============== Helpers ==============

    def _ensure_room_free(self, db: Session, booking: BookingRecord) -> None:
        """Overlap test against the stored bookings, inside the write lock"""
        if booking.status == BookingStatus.CANCELLED:
            return
        candidates = db.query(tables.Booking).filter(
            tables.Booking.room_id == booking.room_id,
            tables.Booking.id != booking.id,
            tables.Booking.status != BookingStatus.CANCELLED,
        ).all()
        for other in candidates:
            if intervals_overlap(other.check_in_date, other.check_out_date,
                                 booking.check_in_date, booking.check_out_date):
                raise StoreError(
                    f"Room is already booked from {other.check_in_date} to {other.check_out_date}",
                    ErrorCode.ROOM_UNAVAILABLE,
                )

    def _next_id(self, db: Session, sheet: Sheet) -> str:
        pattern = re.compile(rf"^{re.escape(sheet.prefix)}(\d+)$")
        highest = 0
        for (existing,) in db.query(sheet.table.id).all():
            match = pattern.match(existing)
            if match:
                highest = max(highest, int(match.group(1)))
        return f"{sheet.prefix}{highest + 1}"

    @staticmethod
    def _dump(sheet: Sheet, row) -> Dict[str, Any]:
        return sheet.record.model_validate(row).model_dump(mode="json")


def _summarize(error: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in item['loc'])}: {item['msg']}"
        for item in error.errors()
    )
