"""Completion-service client interface."""

from abc import ABC, abstractmethod
from typing import Optional

from astra_bi.models.conversation import ConversationTurn, Decision


class CompletionClient(ABC):
    """
    One chat-completion round trip.
    With tools declared the service may answer with PlainText or ToolRequests;
    without tools it must answer with PlainText. Failures raise CompletionError.
    """

    @abstractmethod
    def complete(
        self,
        turns: list[ConversationTurn],
        tools: Optional[list[dict]] = None,
    ) -> Decision:
        pass
