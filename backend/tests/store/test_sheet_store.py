"""
Sheet store action protocol
"""
import pytest

from hms.store.sheet_store import SHEETS


def add_room(store, number="A107", **extra):
    response = store.execute("addRoom", {"number": number, "type": "Standard Twin", "price": 500, **extra})
    assert response["success"], response
    return response["data"]


def add_booking(store, room_id, check_in, check_out, **extra):
    return store.execute("addBooking", {
        "guest_id": "G1", "room_id": room_id,
        "check_in_date": check_in, "check_out_date": check_out,
        "total_price": 1000, **extra,
    })


class TestActions:

    def test_every_sheet_has_four_actions(self, store):
        actions = store.actions
        for sheet in SHEETS.values():
            assert sheet.list_action in actions
            for verb in ("add", "update", "delete"):
                assert f"{verb}{sheet.entity}" in actions

    def test_attendance_list_action_keeps_its_name(self, store):
        assert store.execute("getAttendance")["success"]

    def test_unknown_action(self, store):
        assert store.execute("dropEverything") == {"success": False, "message": "Invalid action"}

    def test_list_is_empty_at_first(self, store):
        assert store.execute("getRooms") == {"success": True, "data": []}


class TestAdd:

    def test_ids_follow_the_prefix(self, store):
        assert add_room(store)["id"] == "R1"
        assert add_room(store, "A101")["id"] == "R2"
        response = store.execute("addInvoice", {
            "tenant_id": "T1", "period": "June 2024", "amount": 15000,
            "issue_date": "2024-06-01", "due_date": "2024-06-06",
        })
        assert response["data"]["id"] == "INV1"

    def test_supplied_id_is_kept_when_free(self, store):
        assert add_room(store, id="R15")["id"] == "R15"
        assert add_room(store, "A101")["id"] == "R16"

    def test_supplied_id_is_replaced_when_taken(self, store):
        add_room(store, id="R1")
        assert add_room(store, "A101", id="R1")["id"] == "R2"

    def test_labels_are_stored(self, store):
        room = add_room(store)
        assert room["type"] == "Standard Twin"
        assert room["status"] == "Available"
        assert store.execute("getRooms")["data"][0]["type"] == "Standard Twin"

    def test_created_at_is_filled_in(self, store):
        response = store.execute("addTask", {
            "description": "Clean", "assigned_to": "EMP1", "related_to": "R1",
        })
        assert response["success"]
        assert response["data"]["created_at"]

    def test_invalid_fields(self, store):
        response = store.execute("addRoom", {"number": "A107", "type": "Penthouse", "price": 500})
        assert response["success"] is False
        assert response["error_code"] == "validation_error"
        assert "type" in response["message"]


class TestBookingOverlap:

    def test_overlap_is_refused_atomically(self, store):
        room = add_room(store)
        assert add_booking(store, room["id"], "2024-06-01", "2024-06-03")["success"]

        response = add_booking(store, room["id"], "2024-06-02", "2024-06-04")

        assert response["success"] is False
        assert response["error_code"] == "room_unavailable"
        assert len(store.execute("getBookings")["data"]) == 1

    def test_back_to_back_is_accepted(self, store):
        room = add_room(store)
        add_booking(store, room["id"], "2024-06-01", "2024-06-03")
        assert add_booking(store, room["id"], "2024-06-03", "2024-06-05")["success"]

    def test_cancelled_bookings_are_ignored(self, store):
        room = add_room(store)
        add_booking(store, room["id"], "2024-06-01", "2024-06-03", status="Cancelled")
        assert add_booking(store, room["id"], "2024-06-01", "2024-06-03")["success"]

    def test_update_checks_against_other_bookings_only(self, store):
        room = add_room(store)
        first = add_booking(store, room["id"], "2024-06-01", "2024-06-03")["data"]
        add_booking(store, room["id"], "2024-06-05", "2024-06-07")

        extend = store.execute("updateBooking", {"id": first["id"], "check_out_date": "2024-06-04"})
        clash = store.execute("updateBooking", {"id": first["id"], "check_out_date": "2024-06-06"})

        assert extend["success"]
        assert clash["error_code"] == "room_unavailable"


class TestUpdateDelete:

    def test_update_merges_fields(self, store):
        room = add_room(store)
        response = store.execute("updateRoom", {"id": room["id"], "status": "Cleaning"})
        assert response["data"]["status"] == "Cleaning"
        assert response["data"]["number"] == "A107"

    @pytest.mark.parametrize("action", ["updateRoom", "deleteRoom"])
    def test_missing_record(self, store, action):
        response = store.execute(action, {"id": "R404"})
        assert response == {"success": False, "message": "Record not found", "error_code": "not_found"}

    def test_delete(self, store):
        room = add_room(store)
        assert store.execute("deleteRoom", {"id": room["id"]})["success"]
        assert store.execute("getRooms")["data"] == []
