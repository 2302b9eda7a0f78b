"""
hms/services/actions/base.py

Parameter models for the assistant's tools.

Field names on the wire are camelCase, as the tools are declared to the
model; Python code uses the snake_case attribute names.
"""
from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from hms.models.enums import RoomType


class ToolParams(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class AddBookingParams(ToolParams):
    """Book a room for a guest"""
    guest_name: str = Field(..., alias="guestName", min_length=1, max_length=100,
                            description="Full name of the guest")
    phone: str = Field(default="", max_length=30, description="Guest phone number")
    room_number: str = Field(..., alias="roomNumber", min_length=1, description="Room number, e.g. A107")
    check_in: date = Field(..., alias="checkIn", description="Check-in date, YYYY-MM-DD")
    check_out: date = Field(..., alias="checkOut", description="Check-out date, YYYY-MM-DD")


class AvailableRoomsParams(ToolParams):
    """Find free rooms"""
    check_in: Optional[date] = Field(None, alias="checkIn", description="Check-in date, YYYY-MM-DD; default today")
    check_out: Optional[date] = Field(None, alias="checkOut", description="Check-out date, YYYY-MM-DD; default the day after check-in")
    room_type: Optional[RoomType] = Field(None, alias="roomType", description="Only rooms of this type")

    @field_validator("room_type", mode="before")
    @classmethod
    def match_room_type(cls, v):
        """Accept any capitalisation of the type label"""
        if isinstance(v, str):
            if not v.strip():
                return None
            for room_type in RoomType:
                if room_type.value.lower() == v.strip().lower():
                    return room_type
        return v


class AddTaskParams(ToolParams):
    """Assign a task about a room to an employee"""
    description: str = Field(..., min_length=1, max_length=500, description="What needs doing")
    employee_name: str = Field(..., alias="employeeName", min_length=1, description="Name of the employee")
    room_number: str = Field(..., alias="roomNumber", min_length=1, description="Room number the task concerns")
    due_date: Optional[date] = Field(None, alias="dueDate", description="Due date, YYYY-MM-DD")
