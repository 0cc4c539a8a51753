"""Registry of analytics functions exposed to the completion service as tools."""

from dataclasses import dataclass
from typing import Callable, Optional

from astra_bi.connectors.base import BaseGateway
from astra_bi.models.analytics import AnalyticsResult
from astra_bi.models.conversation import ExecutionTrace

from .deals import analyze_deals
from .work_orders import analyze_work_orders

AnalyticsFn = Callable[[BaseGateway, ExecutionTrace], AnalyticsResult]


@dataclass(frozen=True)
class AnalyticsTool:
    """A named, parameterless analytics capability."""

    name: str
    description: str
    func: AnalyticsFn

    def declaration(self) -> dict:
        """Function declaration in the chat-completions tool format."""
        return {
            "type": "function",
            "function": {"name": self.name, "description": self.description},
        }


DEFAULT_TOOLS: tuple[AnalyticsTool, ...] = (
    AnalyticsTool(
        name="fetch_and_analyze_deals",
        description=(
            "Fetch and analyze all data from the Deals board for revenue, pipeline, and sectors."
        ),
        func=analyze_deals,
    ),
    AnalyticsTool(
        name="fetch_and_analyze_work_orders",
        description="Fetch and analyze data from the Work Orders board for status and progress.",
        func=analyze_work_orders,
    ),
)


class ToolRegistry:
    """Name -> AnalyticsTool lookup, preserving declaration order."""

    def __init__(self, tools: Optional[list[AnalyticsTool] | tuple[AnalyticsTool, ...]] = None):
        self._tools: dict[str, AnalyticsTool] = {}
        for tool in DEFAULT_TOOLS if tools is None else tools:
            self.register(tool)

    def register(self, tool: AnalyticsTool) -> None:
        self._tools[tool.name] = tool

    def get(self, name: str) -> Optional[AnalyticsTool]:
        """Return the tool, or None for names that were never registered."""
        return self._tools.get(name)

    def names(self) -> list[str]:
        return list(self._tools.keys())

    def declarations(self) -> list[dict]:
        return [t.declaration() for t in self._tools.values()]

    def __len__(self) -> int:
        return len(self._tools)
