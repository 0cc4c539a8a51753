"""Deals board analytics: revenue, weighted pipeline and sector mix."""

from astra_bi.connectors.base import BaseGateway
from astra_bi.models.analytics import BoardNotFound, DataQuality, DealsAnalysis
from astra_bi.models.conversation import ExecutionTrace
from astra_bi.models.normalized import NormalizedRecord
from astra_bi.normalization import normalize_board_data

DEALS_BOARD = "Deals"
CLOSED_STAGE = "closed"


def summarize_deals(records: list[NormalizedRecord]) -> DealsAnalysis:
    """Compute deal aggregates over already-normalized records."""
    closed_revenue = sum(r.revenue for r in records if r.stage.lower() == CLOSED_STAGE)
    weighted_pipeline = sum(r.revenue * r.probability for r in records)

    revenue_by_sector: dict[str, float] = {}
    for r in records:
        revenue_by_sector[r.sector] = revenue_by_sector.get(r.sector, 0) + r.revenue

    return DealsAnalysis(
        total_deals=len(records),
        closed_revenue=closed_revenue,
        weighted_pipeline=weighted_pipeline,
        revenue_by_sector=revenue_by_sector,
        data_quality=DataQuality(
            missing_revenue=sum(1 for r in records if not r.revenue),
            missing_probability=sum(1 for r in records if not r.probability),
        ),
        item_list=records,
    )


def analyze_deals(gateway: BaseGateway, trace: ExecutionTrace) -> DealsAnalysis | BoardNotFound:
    """
    Resolve the Deals board, fetch and normalize its items, then aggregate.
    Returns BoardNotFound (not an exception) when no board matches.
    """
    trace.add(f"Detecting '{DEALS_BOARD}' board ID...")
    board_id = gateway.get_board_id_by_name(DEALS_BOARD)
    if not board_id:
        trace.add(f"Error: {DEALS_BOARD} board not found.")
        return BoardNotFound.for_board(DEALS_BOARD)

    trace.add(f"Fetching live items from {DEALS_BOARD} board (ID: {board_id})...")
    items = gateway.fetch_items(board_id)

    trace.add(f"Normalizing {len(items)} records...")
    records = normalize_board_data(items)

    trace.add("Performing BI analytics on deals...")
    return summarize_deals(records)
