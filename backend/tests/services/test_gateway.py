"""
CRUD gateway over the local store and over HTTP
"""
import json
from datetime import date
from decimal import Decimal

import httpx
from fastapi.testclient import TestClient

from hms.controller import HotelController
from hms.main import create_app
from hms.models.enums import BookingStatus
from hms.services.gateway import CrudGateway, HttpTransport


def remote_gateway(handler):
    client = httpx.Client(transport=httpx.MockTransport(handler), follow_redirects=True)
    return CrudGateway(HttpTransport("https://store.example/exec", client=client))


class TestLocalGateway:

    def test_create_returns_a_typed_record(self, gateway):
        result = gateway.rooms.create({"number": "A107", "type": "Standard Twin", "price": Decimal(500)})
        assert result.success
        assert result.data.id == "R1"
        assert result.data.price == Decimal(500)

    def test_dates_and_enums_travel_as_json(self, gateway):
        result = gateway.bookings.create({
            "guest_id": "G1", "room_id": "R1",
            "check_in_date": date(2024, 6, 1), "check_out_date": date(2024, 6, 3),
            "status": BookingStatus.CONFIRMED, "total_price": Decimal(1000),
        })
        assert result.success
        assert result.data.check_in_date == date(2024, 6, 1)
        assert result.data.status == BookingStatus.CONFIRMED

    def test_failures_are_returned_not_raised(self, gateway):
        result = gateway.rooms.update("R404", {"status": "Cleaning"})
        assert result.success is False
        assert result.message == "Record not found"
        assert result.error_code == "not_found"

    def test_list(self, gateway):
        gateway.rooms.create({"number": "A107", "type": "Standard", "price": 400})
        result = gateway.rooms.list()
        assert [room.number for room in result.data] == ["A107"]


class TestRemoteGateway:

    def test_posts_action_and_params(self):
        seen = {}

        def handler(request):
            seen.update(json.loads(request.content))
            return httpx.Response(200, json={"success": True, "data": {
                "id": "G7", "name": "Malee", "phone": "N/A", "history": [],
            }})

        result = remote_gateway(handler).guests.create({"name": "Malee", "phone": "N/A", "history": []})

        assert seen == {"action": "addGuest", "params": {"name": "Malee", "phone": "N/A", "history": []}}
        assert result.data.id == "G7"

    def test_redirect_is_followed(self):
        def handler(request):
            if request.url.path == "/exec":
                return httpx.Response(302, headers={"Location": "https://store.example/echo"})
            return httpx.Response(200, json={"success": True, "data": []})

        result = remote_gateway(handler).tasks.list()
        assert result.success
        assert result.data == []

    def test_http_error_is_a_remote_failure(self):
        result = remote_gateway(lambda request: httpx.Response(500, text="boom")).rooms.list()
        assert result.success is False
        assert result.error_code == "remote_failure"
        assert "500" in result.message

    def test_network_error_is_a_remote_failure(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        result = remote_gateway(handler).rooms.delete("R1")
        assert result.success is False
        assert result.error_code == "remote_failure"

    def test_undecodable_body(self):
        result = remote_gateway(lambda request: httpx.Response(200, text="<html>")).rooms.list()
        assert result.success is False
        assert result.message == "Remote store returned an invalid response"

    def test_store_message_is_passed_through(self):
        def handler(request):
            return httpx.Response(200, json={"success": False, "message": "Sheet locked"})

        result = remote_gateway(handler).bookings.create({"guest_id": "G1"})
        assert result.message == "Sheet locked"
        assert result.error_code == "remote_failure"

    def test_malformed_rows_are_rejected(self):
        def handler(request):
            return httpx.Response(200, json={"success": True, "data": [{"id": "R1"}]})

        result = remote_gateway(handler).rooms.list()
        assert result.success is False
        assert "Malformed Room data" in result.message


def test_remote_store_round_trip(client, sample_rooms):
    """One instance used as the remote store of another"""
    def handler(request):
        response = client.post("/exec", content=request.content, headers={"Content-Type": "application/json"})
        return httpx.Response(response.status_code, content=response.content,
                              headers={"Content-Type": "application/json"})

    result = remote_gateway(handler).rooms.list()

    assert result.success
    assert sorted(room.number for room in result.data) == ["A101", "A107", "A204", "N1"]


def test_app_shutdown_closes_the_remote_client(store):
    http_client = httpx.Client(
        transport=httpx.MockTransport(lambda request: httpx.Response(200, json={"success": True, "data": []})),
    )
    controller = HotelController(CrudGateway(HttpTransport("https://store.example/exec", client=http_client)))

    with TestClient(create_app(sheet_store=store, controller=controller)) as client:
        assert client.get("/health").status_code == 200
        assert http_client.is_closed is False

    assert http_client.is_closed is True
