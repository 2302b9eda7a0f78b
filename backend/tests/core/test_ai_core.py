"""
ActionResult, ActionRegistry and tool-argument parsing
"""
from typing import Any, Dict

import pytest
from pydantic import BaseModel, Field, ValidationError

from hms.models.enums import ErrorCode
from hms_core.ai.actions import ActionRegistry
from hms_core.ai.llm_client import OpenAICompatibleClient, ToolCall, create_llm_client, parse_tool_arguments
from hms_core.ai.result import ActionResult, AffectedEntity


class EchoParams(BaseModel):
    text: str = Field(..., min_length=1)


class TestActionResult:

    def test_ok(self):
        result = ActionResult.ok("Done", data={"key": "value"})
        assert result.success is True
        assert result.error_code is None
        assert result.affected_entities == []

    def test_fail_accepts_enum_codes(self):
        result = ActionResult.fail("Room A999 not found", error_code=ErrorCode.ROOM_NOT_FOUND)
        assert result.error_code == "room_not_found"

    def test_to_dict_omits_empty_fields(self):
        assert ActionResult.ok("Done").to_dict() == {"success": True, "message": "Done"}

    def test_to_dict(self):
        result = ActionResult.fail("Taken", error_code="room_unavailable", entity_type="Booking")
        assert result.to_dict() == {
            "success": False, "message": "Taken", "error_code": "room_unavailable", "entity_type": "Booking",
        }

    def test_to_dict_lists_affected_entities(self):
        result = ActionResult.ok("Booked", affected_entities=[AffectedEntity("Booking", "B1", "created")])
        assert result.to_dict()["affected_entities"] == [
            {"entity_type": "Booking", "entity_id": "B1", "change_type": "created"},
        ]

    def test_mutable_defaults_are_not_shared(self):
        r1 = ActionResult.ok("a")
        r2 = ActionResult.ok("b")
        r1.affected_entities.append(AffectedEntity("Room", "R1", "updated"))
        assert r2.affected_entities == []


class TestActionRegistry:

    def test_register_and_dispatch(self):
        registry = ActionRegistry()

        @registry.register(name="echo", entity="Test", description="Echo", category="query")
        def echo(params: EchoParams, controller) -> Dict[str, Any]:
            return {"text": params.text, "controller": controller}

        result = registry.dispatch("echo", {"text": "hi"}, {"controller": "c", "unused": 1})
        assert result == {"text": "hi", "controller": "c"}

    def test_handler_without_context(self):
        registry = ActionRegistry()

        @registry.register(name="echo", entity="Test", description="Echo")
        def echo(params: EchoParams):
            return {"text": params.text}

        assert registry.dispatch("echo", {"text": "x"}, {"controller": "c"}) == {"text": "x"}

    def test_handler_needs_a_params_model(self):
        registry = ActionRegistry()
        with pytest.raises(ValueError):
            @registry.register(name="bad", entity="Test", description="Bad")
            def bad(params: dict):
                return {}

    def test_duplicate_name(self):
        registry = ActionRegistry()

        @registry.register(name="echo", entity="Test", description="Echo")
        def echo(params: EchoParams):
            return {}

        with pytest.raises(ValueError):
            @registry.register(name="echo", entity="Test", description="Again")
            def echo_again(params: EchoParams):
                return {}

    def test_unknown_action(self):
        with pytest.raises(ValueError, match="Unknown action"):
            ActionRegistry().dispatch("missing", {}, {})

    def test_invalid_params(self):
        registry = ActionRegistry()

        @registry.register(name="echo", entity="Test", description="Echo")
        def echo(params: EchoParams):
            return {}

        with pytest.raises(ValidationError):
            registry.dispatch("echo", {"text": ""}, {})

    def test_openai_tool_export(self):
        registry = ActionRegistry()

        @registry.register(name="echo", entity="Test", description="Echo back")
        def echo(params: EchoParams):
            return {}

        [tool] = registry.export_all_tools()
        assert tool["type"] == "function"
        assert tool["function"]["name"] == "echo"
        assert tool["function"]["description"] == "Echo back"
        assert tool["function"]["parameters"]["required"] == ["text"]


class TestToolArguments:

    def test_plain_json(self):
        assert parse_tool_arguments('{"roomNumber": "A107"}') == {"roomNumber": "A107"}

    def test_code_fence(self):
        assert parse_tool_arguments('```json\n{"roomNumber": "A107"}\n```') == {"roomNumber": "A107"}

    def test_trailing_comma(self):
        assert parse_tool_arguments('{"a": 1, "b": [1, 2,],}') == {"a": 1, "b": [1, 2]}

    @pytest.mark.parametrize("text", ["", "not json", "[1, 2]"])
    def test_unusable_input(self, text):
        assert parse_tool_arguments(text) == {}

    def test_tool_call_message(self):
        call = ToolCall(id="call_1", name="addTask", arguments='{"description": "x"}')
        assert call.parsed_arguments() == {"description": "x"}
        assert call.to_message_dict()["function"] == {"name": "addTask", "arguments": '{"description": "x"}'}


class TestLLMClient:

    def test_disabled_without_key(self):
        client = OpenAICompatibleClient(api_key=None)
        assert client.is_enabled() is False
        assert client.chat([{"role": "user", "content": "hi"}]).content == ""

    def test_enabled_with_key(self):
        client = OpenAICompatibleClient(api_key="sk-test", model="deepseek-chat")
        assert client.is_enabled() is True
        assert client.get_model_info()["model"] == "deepseek-chat"

    def test_factory_honours_enable_flag(self):
        class Settings:
            ENABLE_LLM = False
            OPENAI_API_KEY = "sk-test"
            OPENAI_BASE_URL = "https://api.openai.com/v1"
            LLM_MODEL = "gpt-4o-mini"
            LLM_TIMEOUT = 30.0

        assert create_llm_client(Settings()).is_enabled() is False
        Settings.ENABLE_LLM = True
        assert create_llm_client(Settings()).is_enabled() is True
