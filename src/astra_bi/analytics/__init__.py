"""Analytics functions callable by the orchestration agent."""

from .deals import analyze_deals, summarize_deals
from .registry import DEFAULT_TOOLS, AnalyticsTool, ToolRegistry
from .work_orders import analyze_work_orders, summarize_work_orders

__all__ = [
    "DEFAULT_TOOLS",
    "AnalyticsTool",
    "ToolRegistry",
    "analyze_deals",
    "analyze_work_orders",
    "summarize_deals",
    "summarize_work_orders",
]
