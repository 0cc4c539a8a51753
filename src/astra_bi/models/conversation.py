"""Conversation turns, completion decisions and the execution trace."""

from dataclasses import dataclass
from typing import Literal, Optional, Union

from pydantic import BaseModel, Field

Role = Literal["system", "user", "assistant", "tool"]


class ToolInvocation(BaseModel):
    """A function call requested by the completion service."""

    id: str = Field(..., description="Invocation id used to correlate the tool result")
    name: str


class ConversationTurn(BaseModel):
    """One message in the reasoning sequence of a single chat() call."""

    role: Role
    content: Optional[str] = None
    tool_calls: list[ToolInvocation] = Field(default_factory=list)
    tool_call_id: Optional[str] = None
    name: Optional[str] = None

    @classmethod
    def system(cls, content: str) -> "ConversationTurn":
        return cls(role="system", content=content)

    @classmethod
    def user(cls, content: str) -> "ConversationTurn":
        return cls(role="user", content=content)

    @classmethod
    def assistant(
        cls, content: Optional[str] = None, tool_calls: Optional[list[ToolInvocation]] = None
    ) -> "ConversationTurn":
        return cls(role="assistant", content=content, tool_calls=tool_calls or [])

    @classmethod
    def tool(cls, invocation: ToolInvocation, content: str) -> "ConversationTurn":
        return cls(
            role="tool",
            content=content,
            tool_call_id=invocation.id,
            name=invocation.name,
        )


@dataclass
class PlainText:
    """Decision: the completion service answered directly."""

    text: str


@dataclass
class ToolRequests:
    """Decision: the completion service asked for one or more tool calls."""

    invocations: list[ToolInvocation]
    content: Optional[str] = None


Decision = Union[PlainText, ToolRequests]


class ExecutionTrace:
    """
    Ordered, append-only log of the steps taken during one chat() call.
    Passed explicitly to every step; never shared between calls.
    """

    def __init__(self, entries: Optional[list[str]] = None):
        self._entries: list[str] = list(entries or [])

    def add(self, step: str) -> None:
        self._entries.append(step)

    def extend(self, other: "ExecutionTrace") -> None:
        self._entries.extend(other.entries)

    @property
    def entries(self) -> list[str]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self):
        return iter(self._entries)


class ChatResult(BaseModel):
    """What chat() hands back to the presentation layer."""

    response: str
    trace: list[str] = Field(default_factory=list)
