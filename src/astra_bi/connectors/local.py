"""Offline gateway backed by a JSON or YAML boards file."""

import json
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import ValidationError

from astra_bi.connectors.base import BaseGateway
from astra_bi.errors import GatewayError
from astra_bi.models.raw import Board, RawItem


class LocalGateway(BaseGateway):
    """
    Serves boards from a file shaped like the API response:

        boards:
          - id: "1"
            name: Deals
            items:
              - id: "11"
                name: Acme
                column_values: [{id: revenue, text: "$10k"}]
    """

    source_id = "local"

    def __init__(self, path: Optional[str | Path] = None, *, boards: Optional[list[dict]] = None):
        if boards is None:
            if path is None:
                raise GatewayError("LocalGateway needs a boards file or a boards list")
            boards = self._load(Path(path))
        self._boards = boards

    @staticmethod
    def _load(path: Path) -> list[dict]:
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise GatewayError(f"Cannot read boards file {path}: {e}") from e
        try:
            if path.suffix.lower() == ".json":
                data = json.loads(text)
            else:
                data = yaml.safe_load(text)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise GatewayError(f"Cannot parse boards file {path}: {e}") from e
        if isinstance(data, dict):
            data = data.get("boards")
        if not isinstance(data, list):
            raise GatewayError(f"Boards file {path} has no 'boards' list")
        return data

    def list_boards(self) -> list[Board]:
        try:
            return [Board(id=b["id"], name=b.get("name", "")) for b in self._boards]
        except (KeyError, TypeError, AttributeError, ValidationError) as e:
            raise GatewayError(f"Malformed board entry in boards file: {e!r}") from e

    def fetch_items(self, board_id: str) -> list[RawItem]:
        try:
            for b in self._boards:
                if str(b["id"]) == str(board_id):
                    return [RawItem.model_validate(_coerce_item(i)) for i in b.get("items") or []]
        except (KeyError, TypeError, AttributeError, ValidationError) as e:
            raise GatewayError(f"Malformed items on board {board_id}: {e!r}") from e
        raise GatewayError(f"Board {board_id} does not exist")


def _coerce_item(item: dict[str, Any]) -> dict[str, Any]:
    """Serialize structured column values the way the API does (JSON text)."""
    columns = []
    for cv in item.get("column_values") or []:
        cv = dict(cv)
        if cv.get("value") is not None and not isinstance(cv["value"], str):
            cv["value"] = json.dumps(cv["value"])
        columns.append(cv)
    return {**item, "column_values": columns}
