"""
Room service
Room numbers are unique regardless of case and stored upper-case.
Room status is set by hand; bookings never change it.
"""
import logging
from typing import List, Optional

from hms.domain.booking_rules import normalize_label
from hms.models.enums import ACTIVE_BOOKING_STATUSES, ErrorCode, RoomStatus, RoomType
from hms.models.schemas import RoomCreate, RoomRecord, RoomUpdate
from hms.services.base import HotelService, serialized
from hms_core.ai.result import ActionResult, AffectedEntity

logger = logging.getLogger(__name__)


class RoomService(HotelService):
    """Room service"""

    entity_type = "Room"

    def list_rooms(self, status: Optional[RoomStatus] = None, room_type: Optional[RoomType] = None) -> List[RoomRecord]:
        rooms = self.state.rooms
        if status:
            rooms = [r for r in rooms if r.status == status]
        if room_type:
            rooms = [r for r in rooms if r.type == room_type]
        return sorted(rooms, key=lambda r: r.number)

    def get_room(self, room_id: str) -> Optional[RoomRecord]:
        return self.state.find("rooms", room_id)

    def _number_taken(self, number: str, exclude_id: Optional[str] = None) -> bool:
        wanted = normalize_label(number)
        return any(
            normalize_label(room.number) == wanted and room.id != exclude_id
            for room in self.state.rooms
        )

    @serialized
    def create_room(self, data: RoomCreate) -> ActionResult:
        number = normalize_label(data.number)
        if not number:
            return ActionResult.fail("Room number is required", error_code=ErrorCode.VALIDATION_ERROR)
        if self._number_taken(number):
            return ActionResult.fail(f"Room {number} already exists", error_code=ErrorCode.CONFLICT)

        created = self.gateway.rooms.create({**data.model_dump(), "number": number})
        if not created.success:
            return self._gateway_failure(created)

        self.state.upsert("rooms", created.data)
        logger.info(f"Room {number} added as {created.data.id}")
        return self._done(f"Room {number} added", created.data, "created")

    @serialized
    def update_room(self, room_id: str, data: RoomUpdate) -> ActionResult:
        room = self.get_room(room_id)
        if room is None:
            return self._not_found(room_id)

        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        if "number" in changes:
            changes["number"] = normalize_label(changes["number"])
            if not changes["number"]:
                return ActionResult.fail("Room number is required", error_code=ErrorCode.VALIDATION_ERROR)
            if self._number_taken(changes["number"], exclude_id=room_id):
                return ActionResult.fail(f"Room {changes['number']} already exists", error_code=ErrorCode.CONFLICT)
        if not changes:
            return self._done(f"Room {room.number} unchanged", room, "updated")

        updated = self.gateway.rooms.update(room_id, changes)
        if not updated.success:
            return self._gateway_failure(updated)

        self.state.upsert("rooms", updated.data)
        logger.info(f"Room {room_id} updated: {sorted(changes)}")
        return self._done(f"Room {updated.data.number} updated", updated.data, "updated")

    @serialized
    def set_status(self, room_id: str, status: RoomStatus) -> ActionResult:
        room = self.get_room(room_id)
        if room is None:
            return self._not_found(room_id)

        updated = self.gateway.rooms.update(room_id, {"status": status})
        if not updated.success:
            return self._gateway_failure(updated)

        self.state.upsert("rooms", updated.data)
        logger.info(f"Room {room.number}: {room.status.value} -> {status.value}")
        return self._done(f"Room {room.number} is now {status.value}", updated.data, "updated")

    @serialized
    def delete_room(self, room_id: str) -> ActionResult:
        room = self.get_room(room_id)
        if room is None:
            return self._not_found(room_id)

        if any(b.room_id == room_id and b.status in ACTIVE_BOOKING_STATUSES for b in self.state.bookings):
            return ActionResult.fail(
                f"Room {room.number} has active bookings and cannot be deleted",
                error_code=ErrorCode.CONFLICT,
            )
        if any(t.room_id == room_id for t in self.state.tenants):
            return ActionResult.fail(
                f"Room {room.number} is let to a tenant and cannot be deleted",
                error_code=ErrorCode.CONFLICT,
            )

        deleted = self.gateway.rooms.delete(room_id)
        if not deleted.success:
            return self._gateway_failure(deleted)

        self.state.remove("rooms", room_id)
        logger.info(f"Room {room.number} deleted")
        return ActionResult.ok(
            f"Room {room.number} deleted",
            entity_type="Room",
            entity_id=room_id,
            affected_entities=[AffectedEntity("Room", room_id, "deleted")],
        )
