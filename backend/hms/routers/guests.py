"""
Guest routes
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, status
from hms.controller import HotelController, get_controller
from hms.models.schemas import BookingRecord, GuestCreate, GuestRecord, GuestUpdate
from hms.routers.common import not_found, unwrap

router = APIRouter(prefix="/guests", tags=["Guests"])


@router.get("", response_model=List[GuestRecord])
def list_guests(search: Optional[str] = None, controller: HotelController = Depends(get_controller)):
    return controller.guests.list_guests(search)


@router.get("/{guest_id}", response_model=GuestRecord)
def get_guest(guest_id: str, controller: HotelController = Depends(get_controller)):
    guest = controller.guests.get_guest(guest_id)
    if guest is None:
        raise not_found("Guest", guest_id)
    return guest


@router.get("/{guest_id}/bookings", response_model=List[BookingRecord])
def get_guest_bookings(guest_id: str, controller: HotelController = Depends(get_controller)):
    """The guest's bookings, oldest first"""
    if controller.guests.get_guest(guest_id) is None:
        raise not_found("Guest", guest_id)
    return controller.guests.booking_history(guest_id)


@router.post("", response_model=GuestRecord, status_code=status.HTTP_201_CREATED)
def create_guest(data: GuestCreate, controller: HotelController = Depends(get_controller)):
    return unwrap(controller.guests.create_guest(data))


@router.put("/{guest_id}", response_model=GuestRecord)
def update_guest(guest_id: str, data: GuestUpdate, controller: HotelController = Depends(get_controller)):
    return unwrap(controller.guests.update_guest(guest_id, data))


@router.delete("/{guest_id}")
def delete_guest(guest_id: str, controller: HotelController = Depends(get_controller)):
    result = controller.guests.delete_guest(guest_id)
    unwrap(result)
    return {"message": result.message}
