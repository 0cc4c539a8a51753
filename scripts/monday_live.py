#!/usr/bin/env python3
"""Quick live check of the monday.com gateway.

Run:
  MONDAY_API_TOKEN=... poetry run python scripts/monday_live.py          # list boards
  MONDAY_API_TOKEN=... poetry run python scripts/monday_live.py Deals    # fetch + normalize one board
"""

import sys

from astra_bi.connectors import MondayGateway
from astra_bi.normalization import normalize_board_data


def main() -> None:
    gateway = MondayGateway()
    board_name = sys.argv[1] if len(sys.argv) > 1 else None

    boards = gateway.list_boards()
    print(f"Got {len(boards)} boards")
    for b in boards[:20]:
        print(f"  [{b.id}] {b.name}")
    if not board_name:
        return

    board_id = gateway.get_board_id_by_name(board_name)
    if not board_id:
        print(f"\n⚠️ No board matching '{board_name}'.")
        return
    records = normalize_board_data(gateway.fetch_items(board_id))
    print(f"\nBoard {board_id}: {len(records)} normalized records")
    for i, r in enumerate(records[:5], 1):
        print(f"  {i}. {r.name}: revenue={r.revenue} p={r.probability} stage={r.stage} sector={r.sector}")
    print("\n✅ Gateway flow succeeded.")


if __name__ == "__main__":
    main()
