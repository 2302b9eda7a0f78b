"""
Store endpoint: {"action", "params"} -> {"success", "data"?, "message"?, "error_code"?}
Lets another instance use this one as its remote store.
"""
from typing import Any, Dict
from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, Field
from hms.store.sheet_store import SheetStore

router = APIRouter(tags=["Store"])


class StoreRequest(BaseModel):
    action: str
    params: Dict[str, Any] = Field(default_factory=dict)


def get_store(request: Request) -> SheetStore:
    return request.app.state.store


@router.post("/exec")
def execute(data: StoreRequest, store: SheetStore = Depends(get_store)) -> Dict[str, Any]:
    return store.execute(data.action, data.params)


@router.get("/exec")
def list_actions(store: SheetStore = Depends(get_store)):
    return {"success": True, "data": store.actions}
