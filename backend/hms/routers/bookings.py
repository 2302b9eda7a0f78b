"""
Booking routes
"""
from typing import List, Optional
from datetime import date
from fastapi import APIRouter, Depends, status
from hms.controller import HotelController, get_controller
from hms.models.enums import BookingStatus, RoomType
from hms.models.schemas import (
    AvailableRoom, BookingCreate, BookingDetail, BookingStatusUpdate, BookingUpdate
)
from hms.routers.common import not_found, unwrap

router = APIRouter(prefix="/bookings", tags=["Bookings"])


@router.get("", response_model=List[BookingDetail])
def list_bookings(
    status: Optional[BookingStatus] = None,
    room_id: Optional[str] = None,
    guest_id: Optional[str] = None,
    controller: HotelController = Depends(get_controller)
):
    service = controller.bookings
    return [service.to_detail(b) for b in service.list_bookings(status, room_id, guest_id)]


@router.get("/availability", response_model=List[AvailableRoom])
def get_available_rooms(
    check_in: Optional[date] = None,
    check_out: Optional[date] = None,
    room_type: Optional[RoomType] = None,
    controller: HotelController = Depends(get_controller)
):
    """Rooms free for the stay (default: tonight), Monthly Rental rooms excluded"""
    return controller.bookings.available_rooms(check_in, check_out, room_type)


@router.get("/{booking_id}", response_model=BookingDetail)
def get_booking(booking_id: str, controller: HotelController = Depends(get_controller)):
    booking = controller.bookings.get_booking(booking_id)
    if booking is None:
        raise not_found("Booking", booking_id)
    return controller.bookings.to_detail(booking)


@router.post("", response_model=BookingDetail, status_code=status.HTTP_201_CREATED)
def create_booking(data: BookingCreate, controller: HotelController = Depends(get_controller)):
    return unwrap(controller.bookings.create_booking(data))


@router.put("/{booking_id}", response_model=BookingDetail)
def update_booking(booking_id: str, data: BookingUpdate, controller: HotelController = Depends(get_controller)):
    return unwrap(controller.bookings.update_booking(booking_id, data))


@router.patch("/{booking_id}/status", response_model=BookingDetail)
def update_booking_status(
    booking_id: str,
    data: BookingStatusUpdate,
    controller: HotelController = Depends(get_controller)
):
    """Check in, check out or cancel"""
    unwrap(controller.bookings.update_status(booking_id, data.status))
    return controller.bookings.to_detail(controller.bookings.get_booking(booking_id))


@router.delete("/{booking_id}")
def delete_booking(booking_id: str, controller: HotelController = Depends(get_controller)):
    result = controller.bookings.delete_booking(booking_id)
    unwrap(result)
    return {"message": result.message}
