"""Pytest fixtures for astra-bi tests."""

from typing import Optional

import pytest

from astra_bi.completion.base import CompletionClient
from astra_bi.connectors.base import BaseGateway
from astra_bi.errors import GatewayError
from astra_bi.models.conversation import ConversationTurn, Decision
from astra_bi.models.raw import Board, ColumnValue, RawItem


def make_item(item_id: str, name: str = "", **columns: Optional[str]) -> RawItem:
    """RawItem with one column per keyword argument, in argument order."""
    return RawItem(
        id=item_id,
        name=name or f"Item {item_id}",
        column_values=[ColumnValue(id=k, text=v) for k, v in columns.items()],
    )


class FakeGateway(BaseGateway):
    """In-memory gateway: board name -> items. Records every fetch."""

    source_id = "fake"

    def __init__(self, boards: Optional[dict[str, list[RawItem]]] = None, fail_on: Optional[str] = None):
        self._boards = boards or {}
        self._ids = {name: str(100 + i) for i, name in enumerate(self._boards)}
        self.fail_on = fail_on
        self.fetched: list[str] = []

    def list_boards(self) -> list[Board]:
        return [Board(id=self._ids[name], name=name) for name in self._boards]

    def fetch_items(self, board_id: str) -> list[RawItem]:
        self.fetched.append(board_id)
        for name, board_id_ in self._ids.items():
            if board_id_ == board_id:
                if self.fail_on == name:
                    raise GatewayError("401 Unauthorized")
                return list(self._boards[name])
        raise GatewayError(f"Board {board_id} does not exist")


class ScriptedCompletion(CompletionClient):
    """Returns queued decisions in order and records every request."""

    def __init__(self, *decisions: Decision):
        self._decisions = list(decisions)
        self.requests: list[tuple[list[ConversationTurn], Optional[list[dict]]]] = []

    def complete(self, turns, tools=None):
        self.requests.append((list(turns), tools))
        decision = self._decisions.pop(0)
        if isinstance(decision, Exception):
            raise decision
        return decision


@pytest.fixture
def scenario_a_deals() -> list[RawItem]:
    """Three deals: $10k closed at 50%, ₹2l open at 0.3, and one with no revenue."""
    return [
        make_item("1", "Acme", deal_value="$10k", close_probability="50%", deal_stage="Closed"),
        make_item("2", "Bharat", revenue="₹2l", probability="0.3", stage="Open"),
        make_item("3", "Orion", stage="Open"),
    ]


@pytest.fixture
def work_order_items() -> list[RawItem]:
    return [
        make_item("21", status="Working on it"),
        make_item("22", status="Done"),
        make_item("23", status="Done"),
        make_item("24"),
    ]


@pytest.fixture
def gateway(scenario_a_deals: list[RawItem], work_order_items: list[RawItem]) -> FakeGateway:
    """Gateway with Deals and Work Orders boards."""
    return FakeGateway({"Deals": scenario_a_deals, "Work Orders": work_order_items})
