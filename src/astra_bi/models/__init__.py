"""Data models for board records, analytics results and conversations."""

from astra_bi.models.analytics import (
    AnalyticsResult,
    BoardNotFound,
    DataQuality,
    DealsAnalysis,
    WorkOrdersAnalysis,
)
from astra_bi.models.conversation import (
    ChatResult,
    ConversationTurn,
    Decision,
    ExecutionTrace,
    PlainText,
    ToolInvocation,
    ToolRequests,
)
from astra_bi.models.normalized import NormalizedRecord
from astra_bi.models.raw import Board, ColumnValue, RawItem

__all__ = [
    "AnalyticsResult",
    "Board",
    "BoardNotFound",
    "ChatResult",
    "ColumnValue",
    "ConversationTurn",
    "DataQuality",
    "DealsAnalysis",
    "Decision",
    "ExecutionTrace",
    "NormalizedRecord",
    "PlainText",
    "RawItem",
    "ToolInvocation",
    "ToolRequests",
    "WorkOrdersAnalysis",
]
