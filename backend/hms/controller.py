"""
Hotel controller
Owns the application state, the gateway and the services built on them.
Every mutating service call runs under the controller's re-entrant lock.
"""
import logging
import threading
from typing import Optional

from fastapi import Request

from hms.models.enums import ErrorCode
from hms.services.app_state import COLLECTIONS, AppState
from hms.services.assistant_service import AssistantService
from hms.services.booking_service import BookingService
from hms.services.document_service import DocumentService
from hms.services.finance_service import ExpenseService
from hms.services.gateway import CrudGateway
from hms.services.guest_service import GuestService
from hms.services.payroll_service import PayrollService
from hms.services.preferences import PreferencesStore
from hms.services.report_service import ReportService
from hms.services.room_service import RoomService
from hms.services.staff_service import AttendanceService, EmployeeService
from hms.services.task_service import TaskService
from hms.services.tenant_service import InvoiceService, TenantService
from hms_core.ai.llm_client import LLMClient, OpenAICompatibleClient
from hms_core.ai.result import ActionResult

logger = logging.getLogger(__name__)


class HotelController:
    """Hotel controller"""

    def __init__(
        self,
        gateway: CrudGateway,
        llm_client: Optional[LLMClient] = None,
        preferences: Optional[PreferencesStore] = None,
    ):
        self.gateway = gateway
        self.state = AppState()
        self.lock = threading.RLock()

        args = (self.state, gateway, self.lock)
        self.rooms = RoomService(*args)
        self.guests = GuestService(*args)
        self.bookings = BookingService(*args)
        self.tenants = TenantService(*args)
        self.invoices = InvoiceService(*args)
        self.employees = EmployeeService(*args)
        self.attendance = AttendanceService(*args)
        self.expenses = ExpenseService(*args)
        self.payroll = PayrollService(*args, expenses=self.expenses)
        self.tasks = TaskService(*args)
        self.documents = DocumentService(*args)
        self.reports = ReportService(self.state)
        self.preferences = preferences
        self.assistant = AssistantService(self, llm_client or OpenAICompatibleClient(api_key=None))

    def load(self) -> ActionResult:
        """Refresh every collection from the gateway; all or nothing"""
        with self.lock:
            loaded = {}
            for collection in COLLECTIONS:
                result = getattr(self.gateway, collection).list()
                if not result.success:
                    logger.error(f"Loading {collection} failed: {result.message}")
                    return ActionResult.fail(
                        f"Could not load {collection}: {result.message}",
                        error_code=result.error_code or ErrorCode.REMOTE_FAILURE,
                    )
                loaded[collection] = result.data

            self.state.replace_all(loaded)
            counts = self.state.counts()
            logger.info(f"State loaded: {counts}")
            return ActionResult.ok("Data synchronised", data=counts)


def get_controller(request: Request) -> HotelController:
    """Dependency injection: the controller created at startup"""
    return request.app.state.controller
