"""Tests for the file-backed gateway."""

import json
from pathlib import Path

import pytest

from astra_bi.analytics import analyze_deals, analyze_work_orders
from astra_bi.connectors import LocalGateway
from astra_bi.errors import GatewayError
from astra_bi.models.conversation import ExecutionTrace

SAMPLE_BOARDS = Path(__file__).resolve().parents[1] / "data" / "sample_boards.yaml"


def test_sample_boards_file_drives_analytics() -> None:
    """The shipped sample file reproduces the three-deal pipeline."""
    gateway = LocalGateway(SAMPLE_BOARDS)
    deals = analyze_deals(gateway, ExecutionTrace())
    assert deals.closed_revenue == 10_000
    assert deals.weighted_pipeline == pytest.approx(65_000)
    assert deals.data_quality.missing_revenue == 1

    orders = analyze_work_orders(gateway, ExecutionTrace())
    assert orders.status_distribution == {"Working on it": 1, "Done": 2}


def test_json_file_and_structured_values(tmp_path: Path) -> None:
    """Structured column values are serialized to JSON text like the API."""
    path = tmp_path / "boards.json"
    path.write_text(
        json.dumps(
            {
                "boards": [
                    {
                        "id": 7,
                        "name": "Deals",
                        "items": [
                            {
                                "id": 1,
                                "name": "A",
                                "column_values": [{"id": "revenue", "text": "5k", "value": {"n": 5000}}],
                            }
                        ],
                    }
                ]
            }
        )
    )
    gateway = LocalGateway(path)
    assert gateway.get_board_id_by_name("deals") == "7"
    items = gateway.fetch_items("7")
    assert items[0].id == "1"
    assert json.loads(items[0].column_values[0].value) == {"n": 5000}


def test_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(GatewayError, match="Cannot read"):
        LocalGateway(tmp_path / "nope.yaml")


def test_file_without_boards_raises(tmp_path: Path) -> None:
    path = tmp_path / "bad.yaml"
    path.write_text("name: not a boards file\n")
    with pytest.raises(GatewayError, match="no 'boards' list"):
        LocalGateway(path)


def test_unknown_board_id_raises() -> None:
    gateway = LocalGateway(boards=[{"id": "1", "name": "Deals"}])
    with pytest.raises(GatewayError):
        gateway.fetch_items("2")


def test_board_without_id_raises_gateway_error() -> None:
    gateway = LocalGateway(boards=[{"name": "Deals"}])
    with pytest.raises(GatewayError, match="Malformed board entry"):
        gateway.list_boards()


@pytest.mark.parametrize(
    "items",
    [
        [{"name": "no id"}],
        ["not a mapping"],
        [{"id": "1", "column_values": [{"text": "column without id"}]}],
    ],
)
def test_malformed_items_raise_gateway_error(items) -> None:
    gateway = LocalGateway(boards=[{"id": "1", "name": "Deals", "items": items}])
    with pytest.raises(GatewayError, match="Malformed items on board 1"):
        gateway.fetch_items("1")
