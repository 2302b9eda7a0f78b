"""
hms/domain/booking_rules.py

Booking availability and pricing rule

Checks, in order:
- the room label resolves to exactly one room (trimmed, case-insensitive)
- check-out is after check-in
- no non-cancelled booking on that room overlaps the half-open stay [check_in, check_out)

Pure functions over records; the booking service performs the writes.
"""
import math
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Iterable, List, Optional, Union

from hms.models.enums import BookingStatus, ErrorCode, RoomStatus, RoomType
from hms.models.schemas import BookingRecord, RoomRecord

DateLike = Union[date, datetime]

# Allowed status changes; everything else is rejected
BOOKING_TRANSITIONS = {
    BookingStatus.CONFIRMED: {BookingStatus.CHECKED_IN, BookingStatus.CANCELLED},
    BookingStatus.CHECKED_IN: {BookingStatus.CHECKED_OUT},
    BookingStatus.CHECKED_OUT: set(),
    BookingStatus.CANCELLED: set(),
}


@dataclass
class AvailabilityCheck:
    """Outcome of check_availability"""
    room: Optional[RoomRecord] = None
    nights: int = 0
    total_price: Decimal = Decimal("0")
    error_code: Optional[ErrorCode] = None
    message: str = ""
    conflicts: Optional[List[BookingRecord]] = None

    @property
    def available(self) -> bool:
        return self.error_code is None


def normalize_label(label: str) -> str:
    return (label or "").strip().upper()


def resolve_room(rooms: Iterable[RoomRecord], label: str) -> Optional[RoomRecord]:
    """The single room whose number matches label, or None (no match or ambiguous)"""
    wanted = normalize_label(label)
    if not wanted:
        return None
    matches = [room for room in rooms if normalize_label(room.number) == wanted]
    return matches[0] if len(matches) == 1 else None


def intervals_overlap(a_start: DateLike, a_end: DateLike, b_start: DateLike, b_end: DateLike) -> bool:
    """Half-open intervals: a stay ending on a day does not block one starting that day"""
    return a_start < b_end and a_end > b_start


def find_conflicts(
    bookings: Iterable[BookingRecord],
    room_id: str,
    check_in: date,
    check_out: date,
    exclude_booking_id: Optional[str] = None,
) -> List[BookingRecord]:
    return [
        booking for booking in bookings
        if booking.room_id == room_id
        and booking.status != BookingStatus.CANCELLED
        and booking.id != exclude_booking_id
        and intervals_overlap(booking.check_in_date, booking.check_out_date, check_in, check_out)
    ]


def count_nights(check_in: DateLike, check_out: DateLike) -> int:
    """Whole nights, partial days rounded up, never less than one"""
    days = (check_out - check_in).total_seconds() / 86400
    return max(1, math.ceil(days))


def quote_price(nightly_price: Decimal, check_in: DateLike, check_out: DateLike) -> Decimal:
    return Decimal(nightly_price) * count_nights(check_in, check_out)


def check_availability(
    rooms: Iterable[RoomRecord],
    bookings: Iterable[BookingRecord],
    room_label: str,
    check_in: date,
    check_out: date,
    exclude_booking_id: Optional[str] = None,
) -> AvailabilityCheck:
    """Run the three checks in order and price the stay when they pass"""
    room = resolve_room(rooms, room_label)
    if room is None:
        return AvailabilityCheck(
            error_code=ErrorCode.ROOM_NOT_FOUND,
            message=f"Room '{(room_label or '').strip()}' not found",
        )

    if check_in is None or check_out is None or check_out <= check_in:
        return AvailabilityCheck(
            room=room,
            error_code=ErrorCode.INVALID_DATES,
            message="Check-out date must be after check-in date",
        )

    conflicts = find_conflicts(bookings, room.id, check_in, check_out, exclude_booking_id)
    if conflicts:
        return AvailabilityCheck(
            room=room,
            error_code=ErrorCode.ROOM_UNAVAILABLE,
            message=f"Room {room.number} is not available for the selected dates",
            conflicts=conflicts,
        )

    return AvailabilityCheck(
        room=room,
        nights=count_nights(check_in, check_out),
        total_price=quote_price(room.price, check_in, check_out),
    )


def find_available_rooms(
    rooms: Iterable[RoomRecord],
    bookings: Iterable[BookingRecord],
    check_in: date,
    check_out: date,
    room_type: Optional[RoomType] = None,
) -> List[RoomRecord]:
    """Rooms not let monthly and free for the whole stay"""
    bookings = list(bookings)
    return [
        room for room in rooms
        if room.status != RoomStatus.MONTHLY_RENTAL
        and (room_type is None or room.type == room_type)
        and not find_conflicts(bookings, room.id, check_in, check_out)
    ]


def can_transition(current: BookingStatus, target: BookingStatus) -> bool:
    return target in BOOKING_TRANSITIONS.get(current, set())
