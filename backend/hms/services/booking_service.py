"""
Booking service
Creates, edits and cancels bookings through the gateway, applying the
availability and pricing rule first. A booking and the guest it created are
written together or not at all.
"""
import logging
from datetime import date, timedelta
from typing import List, Optional

from hms.domain import booking_rules
from hms.models.enums import BookingStatus, ErrorCode, RoomType
from hms.models.schemas import (
    AvailableRoom, BookingCreate, BookingDetail, BookingRecord, BookingUpdate, GuestRecord
)
from hms.services.base import HotelService, serialized
from hms_core.ai.result import ActionResult, AffectedEntity

logger = logging.getLogger(__name__)


def normalize_phone(phone: Optional[str]) -> str:
    phone = (phone or "").strip()
    return phone or "N/A"


class BookingService(HotelService):
    """Booking service"""

    entity_type = "Booking"

    # ============== Queries ==============

    def list_bookings(
        self,
        status: Optional[BookingStatus] = None,
        room_id: Optional[str] = None,
        guest_id: Optional[str] = None,
    ) -> List[BookingRecord]:
        bookings = self.state.bookings
        if status:
            bookings = [b for b in bookings if b.status == status]
        if room_id:
            bookings = [b for b in bookings if b.room_id == room_id]
        if guest_id:
            bookings = [b for b in bookings if b.guest_id == guest_id]
        return sorted(bookings, key=lambda b: (b.check_in_date, b.id))

    def get_booking(self, booking_id: str) -> Optional[BookingRecord]:
        return self.state.find("bookings", booking_id)

    def to_detail(self, booking: BookingRecord) -> BookingDetail:
        """Booking joined with its guest and room"""
        guest = self.state.find("guests", booking.guest_id)
        room = self.state.find("rooms", booking.room_id)
        return BookingDetail(
            **booking.model_dump(),
            guest_name=guest.name if guest else None,
            guest_phone=guest.phone if guest else None,
            room_number=room.number if room else None,
            nights=booking_rules.count_nights(booking.check_in_date, booking.check_out_date),
        )

    def check_availability(
        self,
        room_number: str,
        check_in: date,
        check_out: date,
        exclude_booking_id: Optional[str] = None,
    ) -> booking_rules.AvailabilityCheck:
        return booking_rules.check_availability(
            self.state.rooms, self.state.bookings,
            room_number, check_in, check_out, exclude_booking_id,
        )

    def available_rooms(
        self,
        check_in: Optional[date] = None,
        check_out: Optional[date] = None,
        room_type: Optional[RoomType] = None,
        today: Optional[date] = None,
    ) -> List[AvailableRoom]:
        """Rooms free for the stay; defaults to tonight"""
        check_in = check_in or today or date.today()
        check_out = check_out or check_in + timedelta(days=1)
        if check_out <= check_in:
            return []

        rooms = booking_rules.find_available_rooms(
            self.state.rooms, self.state.bookings, check_in, check_out, room_type
        )
        nights = booking_rules.count_nights(check_in, check_out)
        return [
            AvailableRoom(
                id=room.id,
                number=room.number,
                type=room.type,
                price=room.price,
                nights=nights,
                total_price=booking_rules.quote_price(room.price, check_in, check_out),
            )
            for room in sorted(rooms, key=lambda r: r.number)
        ]

    def find_guest(self, name: str, phone: Optional[str]) -> Optional[GuestRecord]:
        """Guest with the same name (any case) and phone"""
        wanted_name = (name or "").strip().lower()
        wanted_phone = normalize_phone(phone)
        for guest in self.state.guests:
            if guest.name.strip().lower() == wanted_name and normalize_phone(guest.phone) == wanted_phone:
                return guest
        return None

    # ============== Mutations ==============

    @serialized
    def create_booking(self, data: BookingCreate) -> ActionResult:
        """
        Book a room for a guest

        Order: room resolves, dates are valid, no overlap. Then guest (reused or
        created), booking, guest history. A failing step undoes the earlier ones
        and leaves the cached state untouched.
        """
        if not data.guest_name.strip():
            return ActionResult.fail("Guest name is required", error_code=ErrorCode.VALIDATION_ERROR, entity_type="Booking")

        check = self.check_availability(data.room_number, data.check_in_date, data.check_out_date)
        if not check.available:
            logger.info(f"Booking refused ({check.error_code.value}): {check.message}")
            return ActionResult.fail(check.message, error_code=check.error_code, entity_type="Booking")

        room = check.room
        guest = self.find_guest(data.guest_name, data.phone)
        new_guest = None
        if guest is None:
            created = self.gateway.guests.create({
                "name": data.guest_name.strip(),
                "phone": normalize_phone(data.phone),
                "history": [],
            })
            if not created.success:
                return self._gateway_failure(created)
            guest = new_guest = created.data

        created = self.gateway.bookings.create({
            "guest_id": guest.id,
            "room_id": room.id,
            "check_in_date": data.check_in_date,
            "check_out_date": data.check_out_date,
            "status": BookingStatus.CONFIRMED,
            "total_price": check.total_price,
            "source": data.source,
        })
        if not created.success:
            self._compensate(new_guest=new_guest)
            return self._gateway_failure(created)
        booking = created.data

        updated = self.gateway.guests.update(guest.id, {"history": [*guest.history, booking.id]})
        if not updated.success:
            self._compensate(booking=booking, new_guest=new_guest)
            return self._gateway_failure(updated)

        self.state.upsert("guests", updated.data)
        self.state.upsert("bookings", booking)
        logger.info(
            f"Booking {booking.id} confirmed: room {room.number}, guest {guest.id}, "
            f"{check.nights} night(s), total {check.total_price}"
        )

        affected = [AffectedEntity("Booking", booking.id, "created")]
        affected.append(AffectedEntity("Guest", guest.id, "created" if new_guest else "updated"))
        return ActionResult.ok(
            f"Booking {booking.id} confirmed for {guest.name}, room {room.number}, "
            f"{check.nights} night(s), total {check.total_price}",
            entity_type="Booking",
            entity_id=booking.id,
            data=self.to_detail(booking).model_dump(mode="json"),
            affected_entities=affected,
        )

    @serialized
    def update_booking(self, booking_id: str, data: BookingUpdate) -> ActionResult:
        """Move, re-date or rename a booking; the stay is re-checked and re-priced"""
        booking = self.get_booking(booking_id)
        if booking is None:
            return self._not_found(booking_id)

        current_room = self.state.find("rooms", booking.room_id)
        room_label = data.room_number or (current_room.number if current_room else "")
        check_in = data.check_in_date or booking.check_in_date
        check_out = data.check_out_date or booking.check_out_date

        check = self.check_availability(room_label, check_in, check_out, exclude_booking_id=booking.id)
        if not check.available:
            return ActionResult.fail(check.message, error_code=check.error_code, entity_type="Booking")

        if data.guest_name is not None and not data.guest_name.strip():
            return ActionResult.fail("Guest name is required", error_code=ErrorCode.VALIDATION_ERROR, entity_type="Booking")

        guest = self.state.find("guests", booking.guest_id)
        guest_changes = {}
        if guest is not None:
            new_name = (data.guest_name or "").strip()
            if new_name and new_name.lower() != guest.name.strip().lower():
                clash = next(
                    (g for g in self.state.guests
                     if g.id != guest.id and g.name.strip().lower() == new_name.lower()),
                    None,
                )
                if clash is not None:
                    return ActionResult.fail(
                        f"Another guest is already named '{new_name}'",
                        error_code=ErrorCode.CONFLICT,
                        entity_type="Guest",
                    )
                guest_changes["name"] = new_name
            if data.phone is not None and normalize_phone(data.phone) != guest.phone:
                guest_changes["phone"] = normalize_phone(data.phone)

        previous = {
            "room_id": booking.room_id,
            "check_in_date": booking.check_in_date,
            "check_out_date": booking.check_out_date,
            "total_price": booking.total_price,
        }
        updated = self.gateway.bookings.update(booking.id, {
            "room_id": check.room.id,
            "check_in_date": check_in,
            "check_out_date": check_out,
            "total_price": check.total_price,
        })
        if not updated.success:
            return self._gateway_failure(updated)

        if guest_changes:
            guest_updated = self.gateway.guests.update(guest.id, guest_changes)
            if not guest_updated.success:
                reverted = self.gateway.bookings.update(booking.id, previous)
                if not reverted.success:
                    logger.error(f"Could not restore booking {booking.id} after failed guest update")
                return self._gateway_failure(guest_updated)
            self.state.upsert("guests", guest_updated.data)

        self.state.upsert("bookings", updated.data)
        logger.info(f"Booking {booking.id} updated")
        return ActionResult.ok(
            f"Booking {booking.id} updated",
            entity_type="Booking",
            entity_id=booking.id,
            data=self.to_detail(updated.data).model_dump(mode="json"),
            affected_entities=[AffectedEntity("Booking", booking.id, "updated")],
        )

    @serialized
    def update_status(self, booking_id: str, status: BookingStatus) -> ActionResult:
        """Confirmed -> Check-In | Cancelled, Check-In -> Check-Out"""
        booking = self.get_booking(booking_id)
        if booking is None:
            return self._not_found(booking_id)

        if not booking_rules.can_transition(booking.status, status):
            return ActionResult.fail(
                f"Cannot change booking {booking_id} from {booking.status.value} to {status.value}",
                error_code=ErrorCode.INVALID_TRANSITION,
                entity_type="Booking",
                entity_id=booking_id,
            )

        updated = self.gateway.bookings.update(booking_id, {"status": status})
        if not updated.success:
            return self._gateway_failure(updated)

        self.state.upsert("bookings", updated.data)
        logger.info(f"Booking {booking_id}: {booking.status.value} -> {status.value}")
        return self._done(f"Booking {booking_id} is now {status.value}", updated.data, "updated")

    def cancel_booking(self, booking_id: str) -> ActionResult:
        return self.update_status(booking_id, BookingStatus.CANCELLED)

    @serialized
    def delete_booking(self, booking_id: str) -> ActionResult:
        """Drop the booking from its guest's history, then delete it"""
        booking = self.get_booking(booking_id)
        if booking is None:
            return self._not_found(booking_id)

        guest = self.state.find("guests", booking.guest_id)
        if guest is not None and booking_id in guest.history:
            updated = self.gateway.guests.update(
                guest.id, {"history": [b for b in guest.history if b != booking_id]}
            )
            if not updated.success:
                return self._gateway_failure(updated)

            deleted = self.gateway.bookings.delete(booking_id)
            if not deleted.success:
                restored = self.gateway.guests.update(guest.id, {"history": guest.history})
                if not restored.success:
                    logger.error(f"Could not restore history of guest {guest.id}")
                return self._gateway_failure(deleted)
            self.state.upsert("guests", updated.data)
        else:
            deleted = self.gateway.bookings.delete(booking_id)
            if not deleted.success:
                return self._gateway_failure(deleted)

        self.state.remove("bookings", booking_id)
        logger.info(f"Booking {booking_id} deleted")
        return ActionResult.ok(
            f"Booking {booking_id} deleted",
            entity_type="Booking",
            entity_id=booking_id,
            affected_entities=[AffectedEntity("Booking", booking_id, "deleted")],
        )

    def _compensate(self, booking: Optional[BookingRecord] = None, new_guest: Optional[GuestRecord] = None) -> None:
        """Undo the writes of a failed booking"""
        if booking is not None:
            result = self.gateway.bookings.delete(booking.id)
            if not result.success:
                logger.error(f"Compensation failed, booking {booking.id} left behind: {result.message}")
            else:
                logger.warning(f"Rolled back booking {booking.id}")
        if new_guest is not None:
            result = self.gateway.guests.delete(new_guest.id)
            if not result.success:
                logger.error(f"Compensation failed, guest {new_guest.id} left behind: {result.message}")
            else:
                logger.warning(f"Rolled back guest {new_guest.id}")

