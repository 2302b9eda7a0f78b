"""
hms/services/gateway.py

CRUD gateway

Every read and write of hotel data goes through here. One EntityGateway per
entity speaks the store's action protocol over a transport:

- LocalTransport: the in-process SheetStore
- HttpTransport: a remote store endpoint (POST {"action", "params"})

Nothing raises: failures come back as GatewayResult(success=False, message).
"""
import logging
from dataclasses import dataclass
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

import httpx
from pydantic import ValidationError
from pydantic_core import to_jsonable_python

from hms.models.enums import ErrorCode
from hms.models.schemas import (
    Record, RoomRecord, GuestRecord, BookingRecord, TenantRecord, InvoiceRecord,
    EmployeeRecord, AttendanceRecord, ExpenseRecord, TaskRecord, DocumentRecord
)
from hms.store.sheet_store import SheetStore

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=Record)


@dataclass
class GatewayResult(Generic[R]):
    """{success, data?, message?, error_code?}"""
    success: bool
    data: Any = None
    message: str = ""
    error_code: Optional[str] = None

    @staticmethod
    def failure(message: str, error_code: str = ErrorCode.REMOTE_FAILURE.value) -> "GatewayResult":
        return GatewayResult(success=False, message=message, error_code=error_code)


# ============== Transports ==============

class Transport:
    """Sends one store action and returns the decoded response"""

    def send(self, action: str, params: Dict[str, Any]) -> Dict[str, Any]:
        raise NotImplementedError


class LocalTransport(Transport):
    """Calls the store in-process"""

    def __init__(self, store: SheetStore):
        self.store = store

    def send(self, action: str, params: Dict[str, Any]) -> Dict[str, Any]:
        return self.store.execute(action, params)


class HttpTransport(Transport):
    """
    Posts actions to a remote store endpoint

    Redirects are followed (script hosts answer with one). Network errors,
    non-2xx statuses and undecodable bodies become failure responses here.
    """

    def __init__(self, url: str, timeout: float = 15.0, client: Optional[httpx.Client] = None):
        self.url = url
        self.timeout = timeout
        self._client = client or httpx.Client(timeout=timeout, follow_redirects=True)

    def send(self, action: str, params: Dict[str, Any]) -> Dict[str, Any]:
        try:
            resp = self._client.post(self.url, json={"action": action, "params": params})
            resp.raise_for_status()
            body = resp.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"Store {action} returned HTTP {e.response.status_code}")
            return {"success": False, "message": f"Remote store returned HTTP {e.response.status_code}"}
        except httpx.HTTPError as e:
            logger.error(f"Store {action} failed: {e}")
            return {"success": False, "message": f"Could not reach remote store: {e}"}
        except ValueError as e:
            logger.error(f"Store {action} returned an undecodable body: {e}")
            return {"success": False, "message": "Remote store returned an invalid response"}

        if not isinstance(body, dict):
            return {"success": False, "message": "Remote store returned an invalid response"}
        return body

    def close(self) -> None:
        self._client.close()


# ============== Gateways ==============

class EntityGateway(Generic[R]):
    """list / create / update / delete for one entity type"""

    def __init__(self, transport: Transport, entity: str, record_cls: Type[R], list_action: str):
        self.transport = transport
        self.entity = entity
        self.record_cls = record_cls
        self.list_action = list_action

    def list(self) -> GatewayResult:
        response = self._send(self.list_action, {})
        if not response.get("success"):
            return self._failed(response)
        try:
            records = [self.record_cls.model_validate(row) for row in response.get("data") or []]
        except ValidationError as e:
            logger.error(f"Store returned malformed {self.entity} rows: {e}")
            return GatewayResult.failure(f"Malformed {self.entity} data from store")
        return GatewayResult(success=True, data=records)

    def create(self, fields: Dict[str, Any]) -> GatewayResult:
        return self._write(f"add{self.entity}", fields)

    def update(self, record_id: str, fields: Dict[str, Any]) -> GatewayResult:
        return self._write(f"update{self.entity}", {**fields, "id": record_id})

    def delete(self, record_id: str) -> GatewayResult:
        response = self._send(f"delete{self.entity}", {"id": record_id})
        if not response.get("success"):
            return self._failed(response)
        return GatewayResult(success=True, message=response.get("message", ""))

    def _write(self, action: str, params: Dict[str, Any]) -> GatewayResult:
        response = self._send(action, params)
        if not response.get("success"):
            return self._failed(response)
        try:
            record = self.record_cls.model_validate(response.get("data"))
        except ValidationError as e:
            logger.error(f"Store returned a malformed {self.entity}: {e}")
            return GatewayResult.failure(f"Malformed {self.entity} data from store")
        return GatewayResult(success=True, data=record, message=response.get("message", ""))

    def _send(self, action: str, params: Dict[str, Any]) -> Dict[str, Any]:
        return self.transport.send(action, _jsonable(params))

    def _failed(self, response: Dict[str, Any]) -> GatewayResult:
        message = response.get("message") or response.get("error") or "Unknown store error"
        error_code = response.get("error_code") or ErrorCode.REMOTE_FAILURE.value
        logger.warning(f"{self.entity} gateway call failed: {message}")
        return GatewayResult(success=False, message=message, error_code=error_code)


class CrudGateway:
    """One EntityGateway per entity, sharing a transport"""

    def __init__(self, transport: Transport):
        self.transport = transport
        self.rooms = EntityGateway(transport, "Room", RoomRecord, "getRooms")
        self.guests = EntityGateway(transport, "Guest", GuestRecord, "getGuests")
        self.bookings = EntityGateway(transport, "Booking", BookingRecord, "getBookings")
        self.tenants = EntityGateway(transport, "Tenant", TenantRecord, "getTenants")
        self.invoices = EntityGateway(transport, "Invoice", InvoiceRecord, "getInvoices")
        self.employees = EntityGateway(transport, "Employee", EmployeeRecord, "getEmployees")
        self.attendance = EntityGateway(transport, "Attendance", AttendanceRecord, "getAttendance")
        self.expenses = EntityGateway(transport, "Expense", ExpenseRecord, "getExpenses")
        self.tasks = EntityGateway(transport, "Task", TaskRecord, "getTasks")
        self.documents = EntityGateway(transport, "Document", DocumentRecord, "getDocuments")

    @classmethod
    def local(cls, store: SheetStore) -> "CrudGateway":
        return cls(LocalTransport(store))

    @classmethod
    def remote(cls, url: str, timeout: float = 15.0) -> "CrudGateway":
        return cls(HttpTransport(url, timeout=timeout))


def _jsonable(params: Dict[str, Any]) -> Dict[str, Any]:
    """Dates, decimals and enums in the shape they take on the wire"""
    return to_jsonable_python(params)
