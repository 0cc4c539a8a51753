"""Work Orders board analytics: order count and status distribution."""

from astra_bi.connectors.base import BaseGateway
from astra_bi.models.analytics import BoardNotFound, WorkOrdersAnalysis
from astra_bi.models.conversation import ExecutionTrace
from astra_bi.models.normalized import NormalizedRecord
from astra_bi.normalization import normalize_board_data

WORK_ORDERS_BOARD = "Work Orders"


def summarize_work_orders(records: list[NormalizedRecord]) -> WorkOrdersAnalysis:
    distribution: dict[str, int] = {}
    for r in records:
        distribution[r.status] = distribution.get(r.status, 0) + 1
    return WorkOrdersAnalysis(
        total_orders=len(records),
        status_distribution=distribution,
        item_list=records,
    )


def analyze_work_orders(
    gateway: BaseGateway, trace: ExecutionTrace
) -> WorkOrdersAnalysis | BoardNotFound:
    """Resolve the Work Orders board, fetch, normalize and count by status."""
    trace.add(f"Detecting '{WORK_ORDERS_BOARD}' board ID...")
    board_id = gateway.get_board_id_by_name(WORK_ORDERS_BOARD)
    if not board_id:
        trace.add(f"Error: {WORK_ORDERS_BOARD} board not found.")
        return BoardNotFound.for_board(WORK_ORDERS_BOARD)

    trace.add(f"Fetching live items from {WORK_ORDERS_BOARD} board (ID: {board_id})...")
    items = gateway.fetch_items(board_id)

    trace.add(f"Normalizing {len(items)} records...")
    return summarize_work_orders(normalize_board_data(items))
