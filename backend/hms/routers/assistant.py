"""
Assistant routes
"""
from typing import Optional

from fastapi import APIRouter, Depends
from hms.controller import HotelController, get_controller
from hms.models.schemas import ChatReply, ChatRequest
from hms_core.ai.actions import ActionCategory

router = APIRouter(prefix="/assistant", tags=["Assistant"])


@router.post("/chat", response_model=ChatReply)
def chat(request: ChatRequest, controller: HotelController = Depends(get_controller)):
    """One user turn; tool calls run before the reply is returned"""
    return controller.assistant.chat(request)


@router.get("/tools")
def list_tools(
    category: Optional[ActionCategory] = None,
    controller: HotelController = Depends(get_controller),
):
    registry = controller.assistant.registry
    actions = registry.list_actions_by_category(category) if category else registry.list_actions()
    return [action.to_dict() for action in actions]


@router.get("/model")
def model_info(controller: HotelController = Depends(get_controller)):
    return controller.assistant.llm.get_model_info()
