"""
hms/services/actions

Tools the assistant can call, registered on an ActionRegistry.

Each action is:
1. Defined with a Pydantic parameter model in base.py
2. Implemented as a handler function in a domain-specific module
3. Registered using the @registry.register decorator
4. Executed via ActionRegistry.dispatch()

Usage:
    from hms.services.actions import get_action_registry

    registry = get_action_registry()
    result = registry.dispatch(
        "addBooking",
        {"guestName": "Somchai", "phone": "0812345678", "roomNumber": "A107",
         "checkIn": "2024-06-01", "checkOut": "2024-06-03"},
        {"controller": controller}
    )
"""
import logging

from hms_core.ai.actions import ActionRegistry

logger = logging.getLogger(__name__)

# Global action registry instance
_action_registry: ActionRegistry = None


def _create_action_registry() -> ActionRegistry:
    """Create the registry and register every action module."""
    registry = ActionRegistry()

    from hms.services.actions import booking_actions, task_actions

    booking_actions.register_booking_actions(registry)
    task_actions.register_task_actions(registry)

    logger.info(f"ActionRegistry initialized with {len(registry.list_actions())} actions")
    return registry


def get_action_registry() -> ActionRegistry:
    """The global action registry, created on first use."""
    global _action_registry
    if _action_registry is None:
        _action_registry = _create_action_registry()
    return _action_registry


def reset_action_registry() -> None:
    """Reset the global action registry (tests)."""
    global _action_registry
    _action_registry = None


__all__ = [
    "get_action_registry",
    "reset_action_registry",
]
