"""
Assistant service
Chats with an OpenAI-compatible model that may call the registered tools.
Each tool result is fed back to the model until it answers in text or the
round limit is reached. Failures come back as an "Error: ..." reply.
"""
import json
import logging
from datetime import date
from typing import Any, Dict, List, Optional

from openai import OpenAIError
from pydantic import ValidationError

from hms.config import settings
from hms.models.schemas import ChatMessage, ChatReply, ChatRequest, ToolInvocation
from hms.services.actions import get_action_registry
from hms_core.ai.actions import ActionRegistry
from hms_core.ai.llm_client import LLMClient

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are the front-desk assistant of {hotel}. Today is {today}. "
    "Use the tools to check availability, book rooms and create tasks. "
    "Dates are YYYY-MM-DD. Reply in the language the user writes in, briefly."
)


class AssistantService:
    """Assistant service"""

    def __init__(
        self,
        controller,
        llm_client: LLMClient,
        registry: Optional[ActionRegistry] = None,
        max_tool_rounds: Optional[int] = None,
    ):
        self.controller = controller
        self.llm = llm_client
        self.registry = registry or get_action_registry()
        self.max_tool_rounds = max_tool_rounds or settings.MAX_TOOL_ROUNDS

    def _user_message(self, request: ChatRequest) -> Dict[str, Any]:
        if not request.image_data_url:
            return {"role": "user", "content": request.message}
        return {
            "role": "user",
            "content": [
                {"type": "text", "text": request.message},
                {"type": "image_url", "image_url": {"url": request.image_data_url}},
            ],
        }

    def _run_tool(self, name: str, arguments: Dict[str, Any]) -> Dict[str, Any]:
        try:
            return self.registry.dispatch(name, arguments, {"controller": self.controller})
        except ValidationError as e:
            return {
                "success": False,
                "error_code": "validation_error",
                "message": f"Invalid arguments for {name}: {e.errors(include_url=False)}",
            }
        except ValueError as e:
            logger.warning(f"Model asked for an unknown tool: {name}")
            return {"success": False, "error_code": "validation_error", "message": str(e)}

    def chat(self, request: ChatRequest, today: Optional[date] = None) -> ChatReply:
        today = today or date.today()
        history = [m.model_dump(exclude_none=True) for m in request.history]
        conversation: List[Dict[str, Any]] = [*history, self._user_message(request)]
        invocations: List[ToolInvocation] = []

        if not self.llm.is_enabled():
            reply = "Error: the AI assistant is not configured"
            conversation.append({"role": "assistant", "content": reply})
            return self._reply(reply, conversation, invocations)

        system = {
            "role": "system",
            "content": SYSTEM_PROMPT.format(hotel=settings.COMPANY_NAME, today=today.isoformat()),
        }
        tools = self.registry.export_all_tools()

        reply = None
        for _ in range(self.max_tool_rounds):
            try:
                response = self.llm.chat(
                    [system, *conversation],
                    tools=tools,
                    temperature=settings.LLM_TEMPERATURE,
                    max_tokens=settings.LLM_MAX_TOKENS,
                )
            except OpenAIError as e:
                logger.error(f"LLM call failed: {e}")
                reply = f"Error: the AI service could not be reached ({e.__class__.__name__})"
                break

            if not response.tool_calls:
                reply = response.content
                break

            conversation.append({
                "role": "assistant",
                "content": response.content or None,
                "tool_calls": [call.to_message_dict() for call in response.tool_calls],
            })
            for call in response.tool_calls:
                arguments = call.parsed_arguments()
                result = self._run_tool(call.name, arguments)
                invocations.append(ToolInvocation(name=call.name, arguments=arguments, result=result))
                conversation.append({
                    "role": "tool",
                    "tool_call_id": call.id,
                    "content": json.dumps(result, ensure_ascii=False, default=str),
                })

        if reply is None:
            logger.warning(f"Assistant stopped after {self.max_tool_rounds} tool rounds")
            reply = "Error: the assistant needed too many steps; please rephrase the request"

        conversation.append({"role": "assistant", "content": reply})
        return self._reply(reply, conversation, invocations)

    @staticmethod
    def _reply(reply: str, conversation: List[Dict[str, Any]], invocations: List[ToolInvocation]) -> ChatReply:
        return ChatReply(
            reply=reply,
            history=[ChatMessage.model_validate(m) for m in conversation],
            tool_calls=invocations,
        )
