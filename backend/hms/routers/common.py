"""
Shared router helpers: turning failed ActionResults into HTTP errors
"""
from typing import Any, Dict

from fastapi import HTTPException, status

from hms.models.enums import ErrorCode
from hms_core.ai.result import ActionResult

ERROR_STATUS = {
    ErrorCode.NOT_FOUND.value: status.HTTP_404_NOT_FOUND,
    ErrorCode.ROOM_NOT_FOUND.value: status.HTTP_404_NOT_FOUND,
    ErrorCode.ROOM_UNAVAILABLE.value: status.HTTP_409_CONFLICT,
    ErrorCode.CONFLICT.value: status.HTTP_409_CONFLICT,
    ErrorCode.INVALID_TRANSITION.value: status.HTTP_409_CONFLICT,
    ErrorCode.INVALID_DATES.value: status.HTTP_400_BAD_REQUEST,
    ErrorCode.VALIDATION_ERROR.value: status.HTTP_400_BAD_REQUEST,
    ErrorCode.REMOTE_FAILURE.value: status.HTTP_502_BAD_GATEWAY,
}


def unwrap(result: ActionResult) -> Dict[str, Any]:
    """Return the result's data, or raise the HTTP error for its code"""
    if not result.success:
        raise HTTPException(
            status_code=ERROR_STATUS.get(result.error_code, status.HTTP_400_BAD_REQUEST),
            detail={"message": result.message, "error_code": result.error_code},
        )
    return result.data


def not_found(entity: str, record_id: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail={"message": f"{entity} {record_id} not found", "error_code": ErrorCode.NOT_FOUND.value},
    )
