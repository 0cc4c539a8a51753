"""Tests for completion-service clients."""

import json
from types import SimpleNamespace
from unittest.mock import MagicMock

import httpx
import openai
import pytest

from astra_bi.analytics.registry import ToolRegistry
from astra_bi.completion import (
    HeuristicCompletionClient,
    OpenAICompletionClient,
    get_completion_client,
)
from astra_bi.completion.openai_client import turn_to_message
from astra_bi.config import GROQ_BASE_URL, Settings
from astra_bi.errors import CompletionError, ConfigError
from astra_bi.models.conversation import (
    ConversationTurn,
    PlainText,
    ToolInvocation,
    ToolRequests,
)


def _response(content=None, tool_calls=None):
    message = SimpleNamespace(content=content, tool_calls=tool_calls)
    return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def _tool_call(call_id: str, name: str):
    return SimpleNamespace(id=call_id, type="function", function=SimpleNamespace(name=name, arguments="{}"))


class TestOpenAICompletionClient:
    """Tests for the OpenAI-compatible client with a mocked SDK."""

    def test_plain_text(self) -> None:
        sdk = MagicMock()
        sdk.chat.completions.create.return_value = _response(content="Hello.")
        client = OpenAICompletionClient(model="m", client=sdk)

        decision = client.complete([ConversationTurn.user("Hi")])

        assert decision == PlainText(text="Hello.")
        kwargs = sdk.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "m"
        assert "tools" not in kwargs
        assert "tool_choice" not in kwargs

    def test_tool_calls(self) -> None:
        sdk = MagicMock()
        sdk.chat.completions.create.return_value = _response(
            tool_calls=[_tool_call("c1", "fetch_and_analyze_deals"), _tool_call("c2", "other")]
        )
        client = OpenAICompletionClient(model="m", client=sdk)
        tools = ToolRegistry().declarations()

        decision = client.complete([ConversationTurn.user("deals")], tools=tools)

        assert isinstance(decision, ToolRequests)
        assert [(i.id, i.name) for i in decision.invocations] == [
            ("c1", "fetch_and_analyze_deals"),
            ("c2", "other"),
        ]
        kwargs = sdk.chat.completions.create.call_args.kwargs
        assert kwargs["tools"] == tools
        assert kwargs["tool_choice"] == "auto"

    def test_none_content_is_empty_string(self) -> None:
        sdk = MagicMock()
        sdk.chat.completions.create.return_value = _response(content=None)
        decision = OpenAICompletionClient(model="m", client=sdk).complete([])
        assert decision == PlainText(text="")

    def test_sdk_error_becomes_completion_error(self) -> None:
        sdk = MagicMock()
        sdk.chat.completions.create.side_effect = openai.APITimeoutError(
            request=httpx.Request("POST", "https://api.groq.com/openai/v1/chat/completions")
        )
        with pytest.raises(CompletionError):
            OpenAICompletionClient(model="m", client=sdk).complete([])

    def test_no_choices(self) -> None:
        sdk = MagicMock()
        sdk.chat.completions.create.return_value = SimpleNamespace(choices=[])
        with pytest.raises(CompletionError, match="no choices"):
            OpenAICompletionClient(model="m", client=sdk).complete([])


class TestTurnToMessage:
    """Message conversion for each role."""

    def test_assistant_with_tool_calls(self) -> None:
        turn = ConversationTurn.assistant(None, [ToolInvocation(id="c1", name="t")])
        message = turn_to_message(turn)
        assert message["role"] == "assistant"
        assert message["tool_calls"] == [
            {"id": "c1", "type": "function", "function": {"name": "t", "arguments": "{}"}}
        ]

    def test_tool_turn(self) -> None:
        turn = ConversationTurn.tool(ToolInvocation(id="c1", name="t"), '{"a": 1}')
        assert turn_to_message(turn) == {
            "role": "tool",
            "tool_call_id": "c1",
            "name": "t",
            "content": '{"a": 1}',
        }

    def test_user_turn(self) -> None:
        assert turn_to_message(ConversationTurn.user("q")) == {"role": "user", "content": "q"}


class TestHeuristicCompletionClient:
    """Tests for the offline stub."""

    def test_greeting_uses_no_tools(self) -> None:
        client = HeuristicCompletionClient()
        decision = client.complete(
            [ConversationTurn.user("Hi, who are you?")], tools=ToolRegistry().declarations()
        )
        assert isinstance(decision, PlainText)
        assert "AstraBI" in decision.text

    def test_routes_by_vocabulary(self) -> None:
        client = HeuristicCompletionClient()
        decision = client.complete(
            [ConversationTurn.user("Show the deals pipeline and work order backlog")],
            tools=ToolRegistry().declarations(),
        )
        assert [i.name for i in decision.invocations] == [
            "fetch_and_analyze_deals",
            "fetch_and_analyze_work_orders",
        ]

    def test_report_has_five_sections(self) -> None:
        deals = {
            "totalDeals": 3,
            "closedRevenue": 10000,
            "weightedPipeline": 65000,
            "revenueBySector": {"Other": 210000},
            "dataQuality": {"missingRevenue": 1, "missingProbability": 1},
        }
        turns = [
            ConversationTurn.user("deals"),
            ConversationTurn.tool(ToolInvocation(id="c1", name="d"), json.dumps(deals)),
            ConversationTurn.tool(
                ToolInvocation(id="c2", name="w"), json.dumps({"error": "Work Orders board not found"})
            ),
        ]
        text = HeuristicCompletionClient().complete(turns).text
        for heading in (
            "Data Summary",
            "Business Insight",
            "Strategic Recommendation",
            "Data Caveats",
            "Recommended Questions",
        ):
            assert heading in text
        assert "65,000.00" in text
        assert "Work Orders board not found" in text


class TestGetCompletionClient:
    """Provider selection."""

    def test_stub_without_keys(self) -> None:
        client = get_completion_client(Settings())
        assert isinstance(client, HeuristicCompletionClient)

    def test_groq_defaults(self) -> None:
        client = get_completion_client(Settings(groq_api_key="gsk-test"))
        assert isinstance(client, OpenAICompletionClient)
        assert client.model == "llama-3.3-70b-versatile"
        assert str(client._client.base_url).rstrip("/") == GROQ_BASE_URL

    def test_openai_model_override(self) -> None:
        client = get_completion_client(
            Settings(llm_provider="openai", openai_api_key="sk-test", llm_model="gpt-4o")
        )
        assert client.model == "gpt-4o"

    def test_missing_key_raises(self) -> None:
        with pytest.raises(ConfigError, match="GROQ_API_KEY"):
            get_completion_client(Settings(llm_provider="groq"))

    def test_unknown_provider(self) -> None:
        with pytest.raises(ConfigError, match="Unknown LLM provider"):
            get_completion_client(Settings(llm_provider="bard"))
