"""
hms_core.ai - tool calling support for the assistant
"""
from hms_core.ai.actions import ActionDefinition, ActionRegistry
from hms_core.ai.result import ActionResult, AffectedEntity

__all__ = ["ActionDefinition", "ActionRegistry", "ActionResult", "AffectedEntity"]
