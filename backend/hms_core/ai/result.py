"""
hms_core/ai/result.py

Structured result returned by services and action handlers.
Callers branch on success and error_code, never on message text.
"""
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Any


@dataclass
class AffectedEntity:
    """One entity touched by an operation"""
    entity_type: str
    entity_id: str
    change_type: str  # "created" | "updated" | "deleted"


@dataclass
class ActionResult:
    """
    Result of a service operation

    Carries:
    - success flag and a human-readable message
    - error_code on failure (an ErrorCode value)
    - the created/updated record in data
    - the entities touched, for logging and the assistant's tool replies
    """
    success: bool
    message: str
    entity_type: Optional[str] = None
    entity_id: Optional[str] = None
    data: Dict[str, Any] = field(default_factory=dict)
    affected_entities: List[AffectedEntity] = field(default_factory=list)
    error_code: Optional[str] = None

    def __post_init__(self):
        if isinstance(self.error_code, Enum):
            self.error_code = self.error_code.value

    @staticmethod
    def ok(message: str, **kwargs) -> "ActionResult":
        """Shortcut for a successful result"""
        return ActionResult(success=True, message=message, **kwargs)

    @staticmethod
    def fail(message: str, error_code: str = None, **kwargs) -> "ActionResult":
        """Shortcut for a failed result"""
        return ActionResult(success=False, message=message, error_code=error_code, **kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """Plain dict for JSON responses and tool messages"""
        result = {
            "success": self.success,
            "message": self.message,
        }
        if self.error_code:
            result["error_code"] = self.error_code
        if self.entity_type:
            result["entity_type"] = self.entity_type
        if self.entity_id is not None:
            result["entity_id"] = self.entity_id
        if self.data:
            result["data"] = self.data
        if self.affected_entities:
            result["affected_entities"] = [asdict(entity) for entity in self.affected_entities]
        return result
