"""
hms_core/ai/actions.py

Action registration and dispatch system.

Tools the assistant may call are registered declaratively with a pydantic
parameter model; the registry exports them as OpenAI tools and dispatches
tool calls to their handlers.

Key components:
- ActionDefinition: Complete definition of an action
- ActionRegistry: Central registry for all actions
"""
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Type, Literal
import inspect
import logging

from pydantic import BaseModel, ValidationError

logger = logging.getLogger(__name__)


# Category types for actions
ActionCategory = Literal["query", "mutation"]


@dataclass
class ActionDefinition:
    """
    Complete definition of an AI-executable action.

    Attributes:
        name: Unique action identifier, also the tool name (e.g., "addBooking")
        entity: The primary entity this action operates on (e.g., "Booking")
        description: Human-readable description for LLM context
        category: Type of action - query or mutation
        parameters_schema: Pydantic model for parameter validation
        handler: The actual function that executes the action
        side_effects: List of side effects this action may cause
    """

    # Identity
    name: str
    entity: str
    description: str

    # Classification
    category: ActionCategory

    # Parameters (Pydantic model)
    parameters_schema: Type[BaseModel]

    # Execution
    handler: Callable

    side_effects: List[str] = field(default_factory=list)

    def to_openai_tool(self) -> Dict[str, Any]:
        """
        Convert to OpenAI function calling format.

        Returns:
            {
                "type": "function",
                "function": {
                    "name": "addBooking",
                    "description": "...",
                    "parameters": {...JSON Schema...}
                }
            }
        """
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.parameters_schema.model_json_schema(by_alias=True)
            }
        }

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "entity": self.entity,
            "description": self.description,
            "category": self.category,
            "side_effects": self.side_effects,
        }


class ActionRegistry:
    """
    Central registry for all AI-executable actions.

    Example:
        registry = ActionRegistry()

        @registry.register(
            name="getAvailableRooms",
            entity="Room",
            description="List rooms free for a date range",
            category="query"
        )
        def handle_available(params: AvailableRoomsParams, controller) -> Dict:
            ...
    """

    def __init__(self):
        self._actions: Dict[str, ActionDefinition] = {}

    def register(
        self,
        name: str,
        entity: str,
        description: str,
        category: ActionCategory = "mutation",
        side_effects: Optional[List[str]] = None,
    ) -> Callable:
        """
        Decorator for registering actions.

        Extracts the parameters schema from the handler function's type hints.
        The first parameter should be a Pydantic BaseModel.

        Raises:
            ValueError: If handler doesn't have a Pydantic model as first parameter
                or the name is already taken
        """
        def decorator(func: Callable) -> Callable:
            params_model = self._extract_params_model(func)

            if params_model is None:
                raise ValueError(
                    f"Handler '{name}' must have a Pydantic BaseModel as first parameter. "
                    f"Got signature: {inspect.signature(func)}"
                )
            if name in self._actions:
                raise ValueError(f"Action '{name}' is already registered")

            definition = ActionDefinition(
                name=name,
                entity=entity,
                description=description,
                category=category,
                parameters_schema=params_model,
                handler=func,
                side_effects=side_effects or [],
            )

            self._actions[name] = definition
            logger.info(f"Registered action: {name} (entity={entity}, category={category})")
            return func

        return decorator

    def _extract_params_model(self, func: Callable) -> Optional[Type[BaseModel]]:
        """
        Extract Pydantic model from handler signature.

        The handler should have signature like:
            def handle(params: MyParams, controller) -> Dict
        """
        sig = inspect.signature(func)
        parameters = list(sig.parameters.values())

        start_idx = 1 if parameters and parameters[0].name == "self" else 0

        if len(parameters) > start_idx:
            annotation = parameters[start_idx].annotation
            if inspect.isclass(annotation) and issubclass(annotation, BaseModel):
                return annotation

        return None

    def get_action(self, name: str) -> Optional[ActionDefinition]:
        return self._actions.get(name)

    def list_actions(self) -> List[ActionDefinition]:
        return list(self._actions.values())

    def list_actions_by_category(self, category: ActionCategory) -> List[ActionDefinition]:
        return [
            action for action in self._actions.values()
            if action.category == category
        ]

    def dispatch(
        self,
        action_name: str,
        params: Dict[str, Any],
        context: Dict[str, Any]
    ) -> Dict[str, Any]:
        """
        Execute an action with parameter validation.

        Args:
            action_name: Name of the action to execute
            params: Raw parameters dictionary (will be validated)
            context: Execution context; only the keys the handler accepts are passed

        Returns:
            Result dictionary from the handler

        Raises:
            ValueError: If action is not found
            ValidationError: If parameters don't match schema
        """
        action_def = self.get_action(action_name)

        if action_def is None:
            available = ", ".join(self._actions.keys())
            raise ValueError(
                f"Unknown action: {action_name}. "
                f"Available actions: {available}"
            )

        try:
            validated_params = action_def.parameters_schema.model_validate(params)
        except ValidationError as e:
            logger.warning(f"Parameter validation failed for {action_name}: {e}")
            raise

        accepted = inspect.signature(action_def.handler).parameters
        kwargs = {key: value for key, value in context.items() if key in accepted}

        logger.info(f"Dispatching action: {action_name} with params: {validated_params.model_dump()}")
        return action_def.handler(validated_params, **kwargs)

    def export_all_tools(self) -> List[Dict[str, Any]]:
        """Export all actions as OpenAI tools."""
        return [
            action.to_openai_tool()
            for action in self._actions.values()
        ]


__all__ = [
    "ActionCategory",
    "ActionDefinition",
    "ActionRegistry",
]
