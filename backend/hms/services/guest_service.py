"""
Guest service
Guest names added or renamed here are unique regardless of case; a guest
with a live booking stays. Bookings match a guest on name and phone, so a
booking under a known name with a new phone creates a second guest of that name.
"""
import logging
from typing import List, Optional

from hms.models.enums import ACTIVE_BOOKING_STATUSES, ErrorCode
from hms.models.schemas import BookingRecord, GuestCreate, GuestRecord, GuestUpdate
from hms.services.base import HotelService, serialized
from hms.services.booking_service import normalize_phone
from hms_core.ai.result import ActionResult, AffectedEntity

logger = logging.getLogger(__name__)


class GuestService(HotelService):
    """Guest service"""

    entity_type = "Guest"

    def list_guests(self, search: Optional[str] = None) -> List[GuestRecord]:
        guests = self.state.guests
        if search:
            needle = search.strip().lower()
            guests = [g for g in guests if needle in g.name.lower() or needle in (g.phone or "")]
        return sorted(guests, key=lambda g: g.name.lower())

    def get_guest(self, guest_id: str) -> Optional[GuestRecord]:
        return self.state.find("guests", guest_id)

    def booking_history(self, guest_id: str) -> List[BookingRecord]:
        """The guest's bookings in the order they were made"""
        guest = self.get_guest(guest_id)
        if guest is None:
            return []
        bookings = [self.state.find("bookings", booking_id) for booking_id in guest.history]
        return [b for b in bookings if b is not None]

    def _name_taken(self, name: str, exclude_id: Optional[str] = None) -> bool:
        wanted = name.strip().lower()
        return any(g.name.strip().lower() == wanted and g.id != exclude_id for g in self.state.guests)

    @serialized
    def create_guest(self, data: GuestCreate) -> ActionResult:
        name = data.name.strip()
        if not name:
            return ActionResult.fail("Guest name is required", error_code=ErrorCode.VALIDATION_ERROR)
        if self._name_taken(name):
            return ActionResult.fail(f"Guest '{name}' already exists", error_code=ErrorCode.CONFLICT)

        created = self.gateway.guests.create({"name": name, "phone": normalize_phone(data.phone), "history": []})
        if not created.success:
            return self._gateway_failure(created)

        self.state.upsert("guests", created.data)
        logger.info(f"Guest {created.data.id} added")
        return self._done(f"Guest {name} added", created.data, "created")

    @serialized
    def update_guest(self, guest_id: str, data: GuestUpdate) -> ActionResult:
        guest = self.get_guest(guest_id)
        if guest is None:
            return self._not_found(guest_id)

        changes = {}
        if data.name is not None:
            name = data.name.strip()
            if not name:
                return ActionResult.fail("Guest name is required", error_code=ErrorCode.VALIDATION_ERROR)
            if self._name_taken(name, exclude_id=guest_id):
                return ActionResult.fail(f"Guest '{name}' already exists", error_code=ErrorCode.CONFLICT)
            changes["name"] = name
        if data.phone is not None:
            changes["phone"] = normalize_phone(data.phone)
        if not changes:
            return self._done(f"Guest {guest.name} unchanged", guest, "updated")

        updated = self.gateway.guests.update(guest_id, changes)
        if not updated.success:
            return self._gateway_failure(updated)

        self.state.upsert("guests", updated.data)
        return self._done(f"Guest {updated.data.name} updated", updated.data, "updated")

    @serialized
    def delete_guest(self, guest_id: str) -> ActionResult:
        guest = self.get_guest(guest_id)
        if guest is None:
            return self._not_found(guest_id)

        if any(b.guest_id == guest_id and b.status in ACTIVE_BOOKING_STATUSES for b in self.state.bookings):
            return ActionResult.fail(
                f"Guest {guest.name} has a confirmed or checked-in booking and cannot be deleted",
                error_code=ErrorCode.CONFLICT,
            )

        deleted = self.gateway.guests.delete(guest_id)
        if not deleted.success:
            return self._gateway_failure(deleted)

        self.state.remove("guests", guest_id)
        logger.info(f"Guest {guest_id} deleted")
        return ActionResult.ok(
            f"Guest {guest.name} deleted",
            entity_type="Guest",
            entity_id=guest_id,
            affected_entities=[AffectedEntity("Guest", guest_id, "deleted")],
        )
