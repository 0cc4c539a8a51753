"""Tool-orchestration agent: decision round, tool execution, final answer.

One chat() call runs a two-round protocol against the completion service:

1. Decision: system instruction + history + query, with tool declarations.
   The service answers directly (PlainText) or requests tools (ToolRequests).
2. Final answer: the same turns plus the decision turn and one tool-result
   turn per requested invocation, without tool declarations.

Tools requested in one round run concurrently; their trace entries and
tool-result turns are merged back in request order.
"""

import json
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

from astra_bi.analytics.registry import AnalyticsTool, ToolRegistry
from astra_bi.completion.base import CompletionClient
from astra_bi.connectors.base import BaseGateway
from astra_bi.errors import AstraBIError
from astra_bi.models.analytics import AnalyticsResult
from astra_bi.models.conversation import (
    ChatResult,
    ConversationTurn,
    ExecutionTrace,
    PlainText,
    ToolInvocation,
)

logger = logging.getLogger(__name__)

SYSTEM_INSTRUCTION = (
    "You are AstraBI, an elite Autonomous Business Intelligence Protocol. "
    "Your persona is strictly professional, executive-level, and precise. "
    "CRITICAL: Do NOT use emojis. Maintain a formal, high-integrity tone at all times. "
    "For analytical queries requiring data tools, you MUST format your response into five sections: "
    "1. **Data Summary**\n2. **Business Insight**\n3. **Strategic Recommendation**\n"
    "4. **Data Caveats**\n5. **Recommended Questions**\n"
    "For non-analytical queries or greetings (e.g., 'Hi', 'Who are you?'), respond professionally "
    "and direct the user toward data-driven analysis without forcing the 5-section structure. "
    "Always offer assistance in a formal, respectful manner. "
    "In section 5 of analytical reports, provide 3 brief, high-value follow-up questions. "
    "Use Markdown Tables for any data lists or tabular requests."
)

PROTOCOL_EXCEPTION = "Protocol Exception: {message}. Awaiting stabilization."


class BIAgent:
    """
    Orchestrates analytics tools on behalf of a completion service.
    Holds no per-call state, so one instance may serve concurrent chat() calls.
    """

    def __init__(
        self,
        gateway: BaseGateway,
        completion: CompletionClient,
        registry: Optional[ToolRegistry] = None,
        *,
        max_workers: int = 4,
        system_instruction: str = SYSTEM_INSTRUCTION,
    ):
        self.gateway = gateway
        self.completion = completion
        self.registry = registry or ToolRegistry()
        self.max_workers = max_workers
        self.system_instruction = system_instruction

    def chat(
        self, query: str, history: Optional[list[ConversationTurn]] = None
    ) -> ChatResult:
        """
        Answer one user query. Never raises: failures are reported in the
        trace and as a degraded response string.
        """
        trace = ExecutionTrace()
        trace.add(f"Intent detected: {query}")
        try:
            response = self._run(query, history or [], trace)
        except AstraBIError as e:
            logger.warning("chat() aborted: %s", e)
            trace.add(f"Error: {e}")
            response = PROTOCOL_EXCEPTION.format(message=e)
        except Exception as e:
            logger.exception("chat() failed unexpectedly")
            trace.add(f"Error: {type(e).__name__}: {e}")
            response = PROTOCOL_EXCEPTION.format(message="System error detected")
        return ChatResult(response=response, trace=trace.entries)

    def _run(
        self, query: str, history: list[ConversationTurn], trace: ExecutionTrace
    ) -> str:
        turns = [ConversationTurn.system(self.system_instruction)]
        turns.extend(t for t in history if t.role in ("user", "assistant") and t.content)
        turns.append(ConversationTurn.user(query))

        decision = self.completion.complete(turns, tools=self.registry.declarations())
        if isinstance(decision, PlainText):
            return decision.text
        if not decision.invocations:
            return decision.content or ""

        turns.append(ConversationTurn.assistant(decision.content, decision.invocations))
        turns.extend(self._execute_tools(decision.invocations, trace))

        final = self.completion.complete(turns)
        if isinstance(final, PlainText):
            return final.text
        # Tool requests are not honoured after the decision round
        logger.warning(
            "Final round requested tools %s; ignoring", [i.name for i in final.invocations]
        )
        return final.content or ""

    def _execute_tools(
        self, invocations: list[ToolInvocation], trace: ExecutionTrace
    ) -> list[ConversationTurn]:
        """
        Run every known tool (concurrently) and return one tool-result turn per
        invocation in request order. Unknown tool names are skipped: no call,
        no trace entry, and a null result turn.
        """
        known: list[tuple[int, AnalyticsTool]] = []
        for position, invocation in enumerate(invocations):
            tool = self.registry.get(invocation.name)
            if tool is None:
                logger.warning("Ignoring unknown tool request: %s", invocation.name)
                continue
            known.append((position, tool))

        sub_traces = [ExecutionTrace() for _ in known]
        futures = []
        if known:
            workers = max(1, min(self.max_workers, len(known)))
            with ThreadPoolExecutor(max_workers=workers) as pool:
                futures = [
                    pool.submit(tool.func, self.gateway, sub_trace)
                    for (_, tool), sub_trace in zip(known, sub_traces)
                ]
            # All tools have finished here; keep their steps even if one failed
            for sub_trace in sub_traces:
                trace.extend(sub_trace)

        results: dict[int, AnalyticsResult] = {}
        for (position, _), future in zip(known, futures):
            results[position] = future.result()

        tool_turns = []
        for position, invocation in enumerate(invocations):
            result = results.get(position)
            if result is None:
                content = json.dumps(None)
            else:
                content = result.model_dump_json(by_alias=True)
            tool_turns.append(ConversationTurn.tool(invocation, content))
        return tool_turns
