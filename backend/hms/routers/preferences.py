"""
UI preference routes
"""
from typing import Any, Dict
from fastapi import APIRouter, Body, Depends, HTTPException, status
from hms.controller import HotelController, get_controller
from hms.services.preferences import PreferencesStore

router = APIRouter(prefix="/preferences", tags=["Preferences"])


def get_preferences(controller: HotelController = Depends(get_controller)) -> PreferencesStore:
    return controller.preferences


@router.get("")
def list_preferences(store: PreferencesStore = Depends(get_preferences)) -> Dict[str, Any]:
    return store.all()


@router.get("/{key}")
def get_preference(key: str, store: PreferencesStore = Depends(get_preferences)):
    sentinel = object()
    value = store.get(key, sentinel)
    if value is sentinel:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Preference '{key}' not set")
    return {"key": key, "value": value}


@router.put("/{key}")
def set_preference(key: str, value: Any = Body(..., embed=True), store: PreferencesStore = Depends(get_preferences)):
    return {"key": key, "value": store.set(key, value)}


@router.delete("/{key}")
def delete_preference(key: str, store: PreferencesStore = Depends(get_preferences)):
    if not store.delete(key):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Preference '{key}' not set")
    return {"message": f"Preference '{key}' deleted"}
