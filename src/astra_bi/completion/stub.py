"""Offline heuristic completion client used when no LLM provider is configured."""

import json
from typing import Any, Optional

from astra_bi.completion.base import CompletionClient
from astra_bi.models.conversation import (
    ConversationTurn,
    Decision,
    PlainText,
    ToolInvocation,
    ToolRequests,
)

# Query vocabulary -> tool name
_TOOL_KEYWORDS: list[tuple[str, tuple[str, ...]]] = [
    (
        "fetch_and_analyze_deals",
        ("deal", "pipeline", "revenue", "sector", "forecast", "sales", "closed"),
    ),
    (
        "fetch_and_analyze_work_orders",
        ("work order", "work-order", "workorder", "order status", "backlog", "progress"),
    ),
]

GREETING = (
    "Good day. I am AstraBI, a business intelligence assistant for your Deals and "
    "Work Orders boards. Ask about pipeline value, closed revenue, sector mix or "
    "work order status to receive a data-driven briefing."
)


def _money(value: float) -> str:
    return f"{value:,.2f}"


class HeuristicCompletionClient(CompletionClient):
    """
    Keyword routing on the first round, a templated five-section report on the
    second. No model is called.
    """

    def complete(
        self,
        turns: list[ConversationTurn],
        tools: Optional[list[dict]] = None,
    ) -> Decision:
        if tools:
            return self._decide(turns, tools)
        results = [
            (t.name or "", _load(t.content)) for t in turns if t.role == "tool"
        ]
        if not results:
            return PlainText(text=GREETING)
        return PlainText(text=self._report(results))

    def _decide(self, turns: list[ConversationTurn], tools: list[dict]) -> Decision:
        query = next(
            (t.content or "" for t in reversed(turns) if t.role == "user"), ""
        ).lower()
        declared = {t.get("function", {}).get("name") for t in tools}
        invocations: list[ToolInvocation] = []
        for name, keywords in _TOOL_KEYWORDS:
            if name in declared and any(k in query for k in keywords):
                invocations.append(ToolInvocation(id=f"stub-call-{len(invocations) + 1}", name=name))
        if not invocations:
            return PlainText(text=GREETING)
        return ToolRequests(invocations=invocations)

    def _report(self, results: list[tuple[str, Any]]) -> str:
        summary: list[str] = []
        insights: list[str] = []
        caveats: list[str] = []

        for _, data in results:
            if not isinstance(data, dict):
                continue
            if "error" in data:
                summary.append(f"- {data['error']}.")
                caveats.append(f"- {data['error']}; related figures are unavailable.")
            elif "totalDeals" in data:
                summary.append(f"- Deals analysed: {data['totalDeals']}")
                summary.append(f"- Closed revenue: {_money(data.get('closedRevenue', 0))}")
                summary.append(f"- Weighted pipeline: {_money(data.get('weightedPipeline', 0))}")
                sectors = data.get("revenueBySector") or {}
                if sectors:
                    top = max(sectors.items(), key=lambda kv: kv[1])
                    insights.append(f"- {top[0]} is the leading sector at {_money(top[1])}.")
                dq = data.get("dataQuality") or {}
                if dq.get("missingRevenue") or dq.get("missingProbability"):
                    caveats.append(
                        f"- {dq.get('missingRevenue', 0)} deals lack revenue and "
                        f"{dq.get('missingProbability', 0)} lack a probability."
                    )
            elif "totalOrders" in data:
                summary.append(f"- Work orders analysed: {data['totalOrders']}")
                dist = data.get("statusDistribution") or {}
                if dist:
                    top = max(dist.items(), key=lambda kv: kv[1])
                    insights.append(f"- Most work orders are in status '{top[0]}' ({top[1]}).")

        if not caveats:
            caveats.append("- Figures reflect at most the first 500 items per board.")
        sections = [
            "1. **Data Summary**",
            "\n".join(summary) or "- No data returned.",
            "2. **Business Insight**",
            "\n".join(insights) or "- Insufficient data for a trend statement.",
            "3. **Strategic Recommendation**",
            "- Prioritise follow-up on the highest-value open items.",
            "4. **Data Caveats**",
            "\n".join(caveats),
            "5. **Recommended Questions**",
            "- Which sector has the largest open pipeline?\n"
            "- Which deals are most likely to close this quarter?\n"
            "- How many work orders are currently blocked?",
        ]
        return "\n\n".join(sections)


def _load(content: Optional[str]) -> Any:
    try:
        return json.loads(content or "null")
    except json.JSONDecodeError:
        return None
