"""
Shared plumbing for the hotel services
"""
import functools
import threading
from typing import Optional

from pydantic import BaseModel

from hms.models.enums import ErrorCode
from hms.services.app_state import AppState
from hms.services.gateway import CrudGateway, GatewayResult
from hms_core.ai.result import ActionResult, AffectedEntity


def serialized(method):
    """Run a mutating service method under the controller lock"""
    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        with self.lock:
            return method(self, *args, **kwargs)
    return wrapper


class HotelService:
    """Base class: the cached state, the gateway and the mutation lock"""

    entity_type: str = ""

    def __init__(self, state: AppState, gateway: CrudGateway, lock: Optional[threading.RLock] = None):
        self.state = state
        self.gateway = gateway
        self.lock = lock or threading.RLock()

    def _done(self, message: str, record: BaseModel, change_type: str) -> ActionResult:
        return ActionResult.ok(
            message,
            entity_type=self.entity_type,
            entity_id=record.id,
            data=record.model_dump(mode="json"),
            affected_entities=[AffectedEntity(self.entity_type, record.id, change_type)],
        )

    def _gateway_failure(self, result: GatewayResult) -> ActionResult:
        return ActionResult.fail(
            result.message,
            error_code=result.error_code or ErrorCode.REMOTE_FAILURE,
            entity_type=self.entity_type,
        )

    def _not_found(self, record_id: str, entity_type: str = None) -> ActionResult:
        entity_type = entity_type or self.entity_type
        return ActionResult.fail(
            f"{entity_type} {record_id} not found",
            error_code=ErrorCode.NOT_FOUND,
            entity_type=entity_type,
        )
