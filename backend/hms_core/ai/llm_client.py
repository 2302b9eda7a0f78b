"""
hms_core/ai/llm_client.py

LLM client

One chat-completions interface for OpenAI-compatible providers
(OpenAI, DeepSeek, Gemini's OpenAI endpoint, Ollama, ...), with tool calling.
"""
import json
import logging
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional, Dict, Any, List

from openai import OpenAI

logger = logging.getLogger(__name__)


@dataclass
class ToolCall:
    """A function call requested by the model"""
    id: str
    name: str
    arguments: str

    def parsed_arguments(self) -> Dict[str, Any]:
        return parse_tool_arguments(self.arguments)

    def to_message_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": "function",
            "function": {"name": self.name, "arguments": self.arguments},
        }


@dataclass
class LLMResponse:
    """LLM response wrapper"""
    content: str
    tool_calls: List[ToolCall] = field(default_factory=list)
    raw_response: Optional[Any] = None
    model: str = ""
    usage: Optional[Any] = None


class LLMClient(ABC):
    """
    LLM client base class

    Implementations raise the provider's error on failure; callers decide
    how to report it.
    """

    @abstractmethod
    def chat(
        self,
        messages: List[Dict[str, Any]],
        tools: Optional[List[Dict[str, Any]]] = None,
        temperature: float = 0.7,
        max_tokens: int = 1000,
    ) -> LLMResponse:
        pass

    @abstractmethod
    def is_enabled(self) -> bool:
        pass

    @abstractmethod
    def get_model_info(self) -> Dict[str, Any]:
        pass


class OpenAICompatibleClient(LLMClient):
    """
    OpenAI-compatible client

    Configuration:
        - api_key: API key; without one the client is disabled
        - base_url: API base URL
        - model: model name
        - timeout: request timeout in seconds
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: str = "https://api.openai.com/v1",
        model: str = "gpt-4o-mini",
        timeout: float = 30.0,
        max_retries: int = 2
    ):
        self.api_key = api_key
        self.base_url = base_url
        self.model = model
        self.timeout = timeout
        self.max_retries = max_retries

        if self.api_key:
            self._client = OpenAI(
                api_key=self.api_key,
                base_url=self.base_url,
                timeout=timeout,
                max_retries=max_retries
            )
            self._enabled = True
        else:
            self._client = None
            self._enabled = False

    def is_enabled(self) -> bool:
        return self._enabled and self._client is not None

    def get_model_info(self) -> Dict[str, Any]:
        return {
            "model": self.model,
            "base_url": self.base_url,
            "enabled": self.is_enabled(),
            "timeout": self.timeout
        }

    def chat(
        self,
        messages: List[Dict[str, Any]],
        tools: Optional[List[Dict[str, Any]]] = None,
        temperature: float = 0.7,
        max_tokens: int = 1000,
    ) -> LLMResponse:
        """
        Send a chat request

        Args:
            messages: conversation in OpenAI format
            tools: OpenAI tool declarations; the model may answer with tool calls
            temperature: sampling temperature
            max_tokens: completion token limit
        """
        if not self.is_enabled():
            return LLMResponse(content="", model=self.model)

        kwargs = {
            "model": self.model,
            "messages": messages,
            "temperature": temperature,
            "max_tokens": max_tokens,
        }
        if tools:
            kwargs["tools"] = tools

        response = self._client.chat.completions.create(**kwargs)
        message = response.choices[0].message

        tool_calls = [
            ToolCall(id=call.id, name=call.function.name, arguments=call.function.arguments or "{}")
            for call in (message.tool_calls or [])
        ]
        logger.debug(f"LLM replied with {len(tool_calls)} tool call(s)")

        return LLMResponse(
            content=message.content or "",
            tool_calls=tool_calls,
            raw_response=response,
            model=self.model,
            usage=getattr(response, "usage", None)
        )


# ==================== Argument parsing ====================

def parse_tool_arguments(text: str) -> Dict[str, Any]:
    """
    Parse the JSON arguments of a tool call, tolerating the usual slips:
    a markdown code fence around the object and trailing commas.

    Returns an empty dict when nothing usable is found.
    """
    if not text:
        return {}

    text = text.strip()
    result = _try_parse_json(text)
    if result is not None:
        return result

    fenced = re.search(r"```(?:json)?\s*([\s\S]*?)```", text)
    if fenced:
        text = fenced.group(1).strip()

    text = re.sub(r",\s*([}\]])", r"\1", text)
    result = _try_parse_json(text)
    if result is not None:
        return result

    logger.warning(f"Could not parse tool arguments: {text[:200]}")
    return {}


def _try_parse_json(text: str) -> Optional[Dict[str, Any]]:
    try:
        result = json.loads(text)
    except (json.JSONDecodeError, TypeError):
        return None
    return result if isinstance(result, dict) else None


def create_llm_client(settings) -> LLMClient:
    """Build the client from application settings"""
    if not settings.ENABLE_LLM:
        return OpenAICompatibleClient(api_key=None, model=settings.LLM_MODEL)
    return OpenAICompatibleClient(
        api_key=settings.OPENAI_API_KEY,
        base_url=settings.OPENAI_BASE_URL,
        model=settings.LLM_MODEL,
        timeout=settings.LLM_TIMEOUT,
    )
