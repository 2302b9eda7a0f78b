"""
Room routes
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, status
from hms.controller import HotelController, get_controller
from hms.models.enums import RoomStatus, RoomType
from hms.models.schemas import RoomCreate, RoomRecord, RoomStatusUpdate, RoomUpdate
from hms.routers.common import not_found, unwrap

router = APIRouter(prefix="/rooms", tags=["Rooms"])


@router.get("", response_model=List[RoomRecord])
def list_rooms(
    status: Optional[RoomStatus] = None,
    room_type: Optional[RoomType] = None,
    controller: HotelController = Depends(get_controller)
):
    return controller.rooms.list_rooms(status, room_type)


@router.get("/{room_id}", response_model=RoomRecord)
def get_room(room_id: str, controller: HotelController = Depends(get_controller)):
    room = controller.rooms.get_room(room_id)
    if room is None:
        raise not_found("Room", room_id)
    return room


@router.post("", response_model=RoomRecord, status_code=status.HTTP_201_CREATED)
def create_room(data: RoomCreate, controller: HotelController = Depends(get_controller)):
    return unwrap(controller.rooms.create_room(data))


@router.put("/{room_id}", response_model=RoomRecord)
def update_room(room_id: str, data: RoomUpdate, controller: HotelController = Depends(get_controller)):
    return unwrap(controller.rooms.update_room(room_id, data))


@router.patch("/{room_id}/status", response_model=RoomRecord)
def update_room_status(room_id: str, data: RoomStatusUpdate, controller: HotelController = Depends(get_controller)):
    """Set the room status by hand"""
    return unwrap(controller.rooms.set_status(room_id, data.status))


@router.delete("/{room_id}")
def delete_room(room_id: str, controller: HotelController = Depends(get_controller)):
    result = controller.rooms.delete_room(room_id)
    unwrap(result)
    return {"message": result.message}
