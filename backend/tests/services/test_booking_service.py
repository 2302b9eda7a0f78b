"""
Booking service: availability, pricing, guest reuse and all-or-nothing writes
"""
from datetime import date
from decimal import Decimal

import pytest

from hms.models.enums import BookingSource, BookingStatus, ErrorCode, RoomType
from hms.models.schemas import BookingCreate, BookingUpdate
from hms.services.gateway import GatewayResult


def booking(guest="Somchai", phone="0812345678", room="A107", check_in=date(2024, 6, 1), check_out=date(2024, 6, 3)):
    return BookingCreate(
        guest_name=guest, phone=phone, room_number=room,
        check_in_date=check_in, check_out_date=check_out,
    )


def stored(gateway, collection):
    result = getattr(gateway, collection).list()
    assert result.success
    return result.data


class TestCreateBooking:

    def test_books_a_free_room(self, controller, sample_rooms):
        result = controller.bookings.create_booking(booking())

        assert result.success, result.message
        created = controller.bookings.get_booking(result.entity_id)
        assert created.status == BookingStatus.CONFIRMED
        assert created.room_id == sample_rooms["A107"].id
        assert created.total_price == Decimal(1000)
        assert result.data["nights"] == 2
        assert result.data["room_number"] == "A107"

    @pytest.mark.parametrize("room,check_in,check_out,expected", [
        ("A107", date(2024, 7, 1), date(2024, 7, 2), Decimal(500)),
        ("A101", date(2024, 7, 1), date(2024, 7, 8), Decimal(2800)),
        ("N1", date(2024, 12, 30), date(2025, 1, 2), Decimal(1800)),
    ])
    def test_price_is_rate_times_nights(self, controller, sample_rooms, room, check_in, check_out, expected):
        result = controller.bookings.create_booking(booking(room=room, check_in=check_in, check_out=check_out))
        assert result.success
        assert controller.bookings.get_booking(result.entity_id).total_price == expected

    def test_overlapping_request_is_rejected_without_writes(self, controller, gateway, sample_rooms):
        assert controller.bookings.create_booking(booking()).success
        bookings_before = len(stored(gateway, "bookings"))
        guests_before = len(stored(gateway, "guests"))

        result = controller.bookings.create_booking(
            booking(guest="Malee", phone="0899999999", check_in=date(2024, 6, 2), check_out=date(2024, 6, 4))
        )

        assert not result.success
        assert result.error_code == ErrorCode.ROOM_UNAVAILABLE.value
        assert len(stored(gateway, "bookings")) == bookings_before
        assert len(stored(gateway, "guests")) == guests_before
        assert len(controller.state.bookings) == bookings_before

    def test_back_to_back_stays_are_allowed(self, controller, sample_rooms):
        assert controller.bookings.create_booking(booking()).success
        result = controller.bookings.create_booking(
            booking(guest="Malee", check_in=date(2024, 6, 3), check_out=date(2024, 6, 5))
        )
        assert result.success

    def test_repeating_the_same_booking_fails_the_second_time(self, controller, sample_rooms):
        assert controller.bookings.create_booking(booking()).success
        second = controller.bookings.create_booking(booking())
        assert second.error_code == ErrorCode.ROOM_UNAVAILABLE.value

    def test_unknown_room_is_rejected_before_any_write(self, controller, gateway, sample_rooms):
        result = controller.bookings.create_booking(booking(room="Z999"))

        assert result.error_code == ErrorCode.ROOM_NOT_FOUND.value
        assert stored(gateway, "guests") == []
        assert stored(gateway, "bookings") == []

    def test_room_label_is_case_insensitive(self, controller, sample_rooms):
        result = controller.bookings.create_booking(booking(room=" a107 "))
        assert result.success
        assert result.data["room_id"] == sample_rooms["A107"].id

    def test_invalid_dates(self, controller, sample_rooms):
        result = controller.bookings.create_booking(booking(check_in=date(2024, 6, 3), check_out=date(2024, 6, 1)))
        assert result.error_code == ErrorCode.INVALID_DATES.value

    def test_cancelled_booking_frees_the_room(self, controller, sample_rooms):
        first = controller.bookings.create_booking(booking())
        assert controller.bookings.cancel_booking(first.entity_id).success
        assert controller.bookings.create_booking(booking(guest="Malee")).success

    def test_same_guest_is_reused_and_history_kept_in_order(self, controller, sample_rooms):
        first = controller.bookings.create_booking(booking())
        second = controller.bookings.create_booking(booking(check_in=date(2024, 7, 1), check_out=date(2024, 7, 2)))

        assert first.data["guest_id"] == second.data["guest_id"]
        guest = controller.guests.get_guest(first.data["guest_id"])
        assert guest.history == [first.entity_id, second.entity_id]
        assert len(controller.state.guests) == 1

    def test_guest_match_ignores_name_case_but_not_phone(self, controller, sample_rooms):
        first = controller.bookings.create_booking(booking())
        same = controller.bookings.create_booking(
            booking(guest="SOMCHAI", check_in=date(2024, 7, 1), check_out=date(2024, 7, 2))
        )
        other = controller.bookings.create_booking(
            booking(phone="0800000000", check_in=date(2024, 8, 1), check_out=date(2024, 8, 2))
        )

        assert same.data["guest_id"] == first.data["guest_id"]
        assert other.data["guest_id"] != first.data["guest_id"]

    def test_empty_phone_is_stored_as_na(self, controller, sample_rooms):
        result = controller.bookings.create_booking(booking(phone="  "))
        assert result.data["guest_phone"] == "N/A"

    def test_blank_guest_name_is_rejected_before_any_write(self, controller, gateway, sample_rooms):
        result = controller.bookings.create_booking(booking(guest="   "))

        assert result.success is False
        assert result.error_code == ErrorCode.VALIDATION_ERROR.value
        assert stored(gateway, "guests") == []
        assert stored(gateway, "bookings") == []

    def test_result_lists_affected_entities(self, controller, sample_rooms):
        result = controller.bookings.create_booking(booking())
        kinds = {(a.entity_type, a.change_type) for a in result.affected_entities}
        assert kinds == {("Booking", "created"), ("Guest", "created")}


class TestCreateBookingAtomicity:

    def test_failed_booking_write_removes_new_guest(self, controller, gateway, sample_rooms, monkeypatch):
        monkeypatch.setattr(gateway.bookings, "create", lambda fields: GatewayResult.failure("Store unreachable"))

        result = controller.bookings.create_booking(booking())

        assert not result.success
        assert result.error_code == ErrorCode.REMOTE_FAILURE.value
        assert stored(gateway, "guests") == []
        assert controller.state.guests == []
        assert controller.state.bookings == []

    def test_failed_history_update_removes_booking_and_guest(self, controller, gateway, sample_rooms, monkeypatch):
        monkeypatch.setattr(gateway.guests, "update", lambda record_id, fields: GatewayResult.failure("Timeout"))

        result = controller.bookings.create_booking(booking())

        assert not result.success
        assert stored(gateway, "bookings") == []
        assert stored(gateway, "guests") == []

    def test_existing_guest_survives_a_failed_booking(self, controller, gateway, sample_rooms, monkeypatch):
        assert controller.bookings.create_booking(booking()).success
        monkeypatch.setattr(gateway.bookings, "create", lambda fields: GatewayResult.failure("Store unreachable"))

        result = controller.bookings.create_booking(booking(check_in=date(2024, 7, 1), check_out=date(2024, 7, 2)))

        assert not result.success
        assert len(stored(gateway, "guests")) == 1
        assert len(stored(gateway, "bookings")) == 1

    def test_store_rejects_overlap_missing_from_cache(self, controller, store, gateway, sample_rooms):
        """Another writer booked the room after our last load"""
        room_id = sample_rooms["A107"].id
        response = store.execute("addBooking", {
            "guest_id": "G99", "room_id": room_id,
            "check_in_date": "2024-06-01", "check_out_date": "2024-06-03",
            "total_price": 1000,
        })
        assert response["success"]

        result = controller.bookings.create_booking(booking(guest="Malee"))

        assert result.error_code == ErrorCode.ROOM_UNAVAILABLE.value
        assert stored(gateway, "guests") == []
        assert len(stored(gateway, "bookings")) == 1


class TestAvailableRooms:

    def test_lists_free_rooms_with_quote(self, controller, sample_rooms):
        controller.bookings.create_booking(booking())

        rooms = controller.bookings.available_rooms(date(2024, 6, 2), date(2024, 6, 4))

        assert [r.number for r in rooms] == ["A101", "N1"]
        assert rooms[0].nights == 2
        assert rooms[0].total_price == Decimal(800)

    def test_defaults_to_tonight(self, controller, sample_rooms):
        rooms = controller.bookings.available_rooms(today=date(2024, 6, 1))
        assert all(r.nights == 1 for r in rooms)
        assert "A204" not in [r.number for r in rooms]

    def test_type_filter(self, controller, sample_rooms):
        rooms = controller.bookings.available_rooms(date(2024, 6, 1), date(2024, 6, 2), RoomType.STANDARD_TWIN)
        assert [r.number for r in rooms] == ["A107", "N1"]

    def test_inverted_range_lists_nothing(self, controller, sample_rooms):
        assert controller.bookings.available_rooms(date(2024, 6, 3), date(2024, 6, 1)) == []


class TestUpdateBooking:

    def test_extending_a_stay_reprices_it(self, controller, sample_booking):
        result = controller.bookings.update_booking(
            sample_booking.id, BookingUpdate(check_out_date=date(2024, 6, 5))
        )
        assert result.success, result.message
        assert controller.bookings.get_booking(sample_booking.id).total_price == Decimal(2000)

    def test_moving_to_a_taken_room_is_rejected(self, controller, sample_booking):
        controller.bookings.create_booking(booking(guest="Malee", room="N1"))
        result = controller.bookings.update_booking(sample_booking.id, BookingUpdate(room_number="N1"))
        assert result.error_code == ErrorCode.ROOM_UNAVAILABLE.value

    def test_moving_rooms(self, controller, sample_rooms, sample_booking):
        result = controller.bookings.update_booking(sample_booking.id, BookingUpdate(room_number="n1"))
        assert result.success
        updated = controller.bookings.get_booking(sample_booking.id)
        assert updated.room_id == sample_rooms["N1"].id
        assert updated.total_price == Decimal(1200)

    def test_renaming_to_another_guests_name_is_a_conflict(self, controller, sample_booking):
        controller.bookings.create_booking(booking(guest="Malee", room="N1"))
        result = controller.bookings.update_booking(sample_booking.id, BookingUpdate(guest_name="malee"))
        assert result.error_code == ErrorCode.CONFLICT.value

    def test_renaming_to_a_blank_name_is_rejected(self, controller, sample_booking):
        result = controller.bookings.update_booking(sample_booking.id, BookingUpdate(guest_name="  "))
        assert result.error_code == ErrorCode.VALIDATION_ERROR.value
        assert controller.guests.get_guest(sample_booking.guest_id).name == "Somchai"

    def test_guest_details_follow_the_booking(self, controller, sample_booking):
        result = controller.bookings.update_booking(
            sample_booking.id, BookingUpdate(guest_name="Somchai Jaidee", phone="0811111111")
        )
        assert result.success
        guest = controller.guests.get_guest(sample_booking.guest_id)
        assert guest.name == "Somchai Jaidee"
        assert guest.phone == "0811111111"

    def test_unknown_booking(self, controller):
        result = controller.bookings.update_booking("B404", BookingUpdate(check_out_date=date(2024, 6, 5)))
        assert result.error_code == ErrorCode.NOT_FOUND.value


class TestStatus:

    def test_check_in_then_out(self, controller, sample_booking):
        assert controller.bookings.update_status(sample_booking.id, BookingStatus.CHECKED_IN).success
        assert controller.bookings.update_status(sample_booking.id, BookingStatus.CHECKED_OUT).success
        assert controller.bookings.get_booking(sample_booking.id).status == BookingStatus.CHECKED_OUT

    def test_skipping_check_in_is_rejected(self, controller, sample_booking):
        result = controller.bookings.update_status(sample_booking.id, BookingStatus.CHECKED_OUT)
        assert result.error_code == ErrorCode.INVALID_TRANSITION.value
        assert controller.bookings.get_booking(sample_booking.id).status == BookingStatus.CONFIRMED

    def test_cancelled_is_final(self, controller, sample_booking):
        controller.bookings.cancel_booking(sample_booking.id)
        result = controller.bookings.update_status(sample_booking.id, BookingStatus.CHECKED_IN)
        assert result.error_code == ErrorCode.INVALID_TRANSITION.value


class TestDeleteBooking:

    def test_delete_removes_it_from_guest_history(self, controller, gateway, sample_booking):
        result = controller.bookings.delete_booking(sample_booking.id)

        assert result.success
        assert controller.bookings.get_booking(sample_booking.id) is None
        assert controller.guests.get_guest(sample_booking.guest_id).history == []
        assert stored(gateway, "bookings") == []

    def test_failed_delete_restores_history(self, controller, gateway, sample_booking, monkeypatch):
        monkeypatch.setattr(gateway.bookings, "delete", lambda record_id: GatewayResult.failure("Timeout"))

        result = controller.bookings.delete_booking(sample_booking.id)

        assert not result.success
        guest = next(g for g in stored(gateway, "guests") if g.id == sample_booking.guest_id)
        assert guest.history == [sample_booking.id]


def test_ai_bookings_are_tagged(controller, sample_rooms):
    data = booking().model_copy(update={"source": BookingSource.AI})
    result = controller.bookings.create_booking(data)
    assert controller.bookings.get_booking(result.entity_id).source == BookingSource.AI
