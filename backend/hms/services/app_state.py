"""
Application state - the cached copy of every sheet

Loaded from the gateway at startup and on sync; services update it only
after the gateway has accepted a write.
"""
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from hms.models.schemas import (
    Record, RoomRecord, GuestRecord, BookingRecord, TenantRecord, InvoiceRecord,
    EmployeeRecord, AttendanceRecord, ExpenseRecord, TaskRecord, DocumentRecord
)

COLLECTIONS = (
    "rooms", "guests", "bookings", "tenants", "invoices",
    "employees", "attendance", "expenses", "tasks", "documents",
)


@dataclass
class AppState:
    rooms: List[RoomRecord] = field(default_factory=list)
    guests: List[GuestRecord] = field(default_factory=list)
    bookings: List[BookingRecord] = field(default_factory=list)
    tenants: List[TenantRecord] = field(default_factory=list)
    invoices: List[InvoiceRecord] = field(default_factory=list)
    employees: List[EmployeeRecord] = field(default_factory=list)
    attendance: List[AttendanceRecord] = field(default_factory=list)
    expenses: List[ExpenseRecord] = field(default_factory=list)
    tasks: List[TaskRecord] = field(default_factory=list)
    documents: List[DocumentRecord] = field(default_factory=list)

    def find(self, collection: str, record_id: str) -> Optional[Record]:
        for record in getattr(self, collection):
            if record.id == record_id:
                return record
        return None

    def upsert(self, collection: str, record: Record) -> None:
        """Replace the record with the same id, or append it"""
        items = getattr(self, collection)
        for index, existing in enumerate(items):
            if existing.id == record.id:
                items[index] = record
                return
        items.append(record)

    def remove(self, collection: str, record_id: str) -> None:
        setattr(self, collection, [r for r in getattr(self, collection) if r.id != record_id])

    def replace_all(self, loaded: Dict[str, List[Record]]) -> None:
        for collection in COLLECTIONS:
            setattr(self, collection, list(loaded.get(collection, [])))

    def counts(self) -> Dict[str, int]:
        return {collection: len(getattr(self, collection)) for collection in COLLECTIONS}
