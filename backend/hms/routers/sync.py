"""
Sync route: reload every collection from the store
"""
from fastapi import APIRouter, Depends
from hms.controller import HotelController, get_controller
from hms.routers.common import unwrap

router = APIRouter(prefix="/sync", tags=["Sync"])


@router.post("")
def sync(controller: HotelController = Depends(get_controller)):
    result = controller.load()
    return {"message": result.message, "counts": unwrap(result)}
