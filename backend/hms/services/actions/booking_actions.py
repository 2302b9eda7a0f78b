"""
hms/services/actions/booking_actions.py

Booking tools: addBooking and getAvailableRooms.
"""
from typing import Any, Dict

from hms_core.ai.actions import ActionRegistry
from hms.models.enums import BookingSource
from hms.models.schemas import BookingCreate
from hms.services.actions.base import AddBookingParams, AvailableRoomsParams

import logging

logger = logging.getLogger(__name__)


def register_booking_actions(registry: ActionRegistry) -> None:
    """Register the booking tools."""

    @registry.register(
        name="addBooking",
        entity="Booking",
        description="Book a room for a guest between a check-in and a check-out date. "
                    "Fails if the room does not exist, the dates are invalid or the room is taken.",
        category="mutation",
        side_effects=["creates_booking", "may_create_guest"],
    )
    def handle_add_booking(params: AddBookingParams, controller) -> Dict[str, Any]:
        result = controller.bookings.create_booking(BookingCreate(
            guest_name=params.guest_name,
            phone=params.phone,
            room_number=params.room_number,
            check_in_date=params.check_in,
            check_out_date=params.check_out,
            source=BookingSource.AI,
        ))
        return result.to_dict()

    @registry.register(
        name="getAvailableRooms",
        entity="Room",
        description="List rooms that are free for the given dates, with the total price of the stay.",
        category="query",
    )
    def handle_available_rooms(params: AvailableRoomsParams, controller) -> Dict[str, Any]:
        rooms = controller.bookings.available_rooms(params.check_in, params.check_out, params.room_type)
        return {
            "success": True,
            "message": f"{len(rooms)} room(s) available",
            "data": {"rooms": [room.model_dump(mode="json") for room in rooms]},
        }
