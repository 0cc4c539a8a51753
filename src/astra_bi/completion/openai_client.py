"""Chat-completions client for OpenAI-compatible endpoints (OpenAI, Groq)."""

import logging
from typing import Any, Optional

from openai import OpenAI, OpenAIError

from astra_bi.completion.base import CompletionClient
from astra_bi.errors import CompletionError
from astra_bi.models.conversation import (
    ConversationTurn,
    Decision,
    PlainText,
    ToolInvocation,
    ToolRequests,
)

logger = logging.getLogger(__name__)


def turn_to_message(turn: ConversationTurn) -> dict[str, Any]:
    """Convert a ConversationTurn to the chat-completions message format."""
    if turn.role == "tool":
        return {
            "role": "tool",
            "tool_call_id": turn.tool_call_id,
            "name": turn.name,
            "content": turn.content or "",
        }
    message: dict[str, Any] = {"role": turn.role, "content": turn.content}
    if turn.role == "assistant" and turn.tool_calls:
        message["tool_calls"] = [
            {
                "id": call.id,
                "type": "function",
                "function": {"name": call.name, "arguments": "{}"},
            }
            for call in turn.tool_calls
        ]
    return message


class OpenAICompletionClient(CompletionClient):
    """
    Uses the openai SDK. Point base_url at another OpenAI-compatible API
    (e.g. Groq) to use a different provider.
    """

    def __init__(
        self,
        *,
        model: str,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: float = 30.0,
        max_retries: int = 2,
        client: Optional[OpenAI] = None,
    ):
        self.model = model
        self._client = client or OpenAI(
            api_key=api_key,
            base_url=base_url,
            timeout=timeout,
            max_retries=max_retries,
        )

    def complete(
        self,
        turns: list[ConversationTurn],
        tools: Optional[list[dict]] = None,
    ) -> Decision:
        kwargs: dict[str, Any] = {
            "model": self.model,
            "messages": [turn_to_message(t) for t in turns],
        }
        if tools:
            kwargs["tools"] = tools
            kwargs["tool_choice"] = "auto"
        try:
            response = self._client.chat.completions.create(**kwargs)
        except OpenAIError as e:
            raise CompletionError(f"Completion service error: {e}") from e

        if not response.choices:
            raise CompletionError("Completion service returned no choices")
        message = response.choices[0].message
        tool_calls = getattr(message, "tool_calls", None) or []
        invocations = [
            ToolInvocation(id=call.id, name=call.function.name)
            for call in tool_calls
            if getattr(call, "function", None) is not None
        ]
        if invocations:
            logger.debug("Completion requested tools: %s", [i.name for i in invocations])
            return ToolRequests(invocations=invocations, content=message.content)
        return PlainText(text=message.content or "")
