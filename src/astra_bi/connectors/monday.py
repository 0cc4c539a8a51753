"""monday.com GraphQL gateway.

Two queries are used:
1. boards (limit 100) -> id, name for board-name lookup
2. boards(ids: [id]) -> items_page(limit 500) -> items with column_values

There is no cursor pagination: boards with more than ITEMS_PAGE_LIMIT items
are truncated and analytics on them undercount.
"""

import logging
import os
from typing import Any, Optional

import httpx
from pydantic import ValidationError

from astra_bi.connectors.base import BaseGateway
from astra_bi.errors import GatewayError
from astra_bi.models.raw import Board, RawItem

logger = logging.getLogger(__name__)

BOARDS_QUERY = """
query {
  boards (limit: %d) {
    id
    name
  }
}
"""

ITEMS_QUERY = """
query {
  boards (ids: [%s]) {
    items_page (limit: %d) {
      items {
        id
        name
        column_values {
          id
          text
          value
        }
      }
    }
  }
}
"""


class MondayGateway(BaseGateway):
    """
    Gateway for monday.com boards over the v2 GraphQL API.
    The API token is passed through as-is in the Authorization header.
    """

    source_id = "monday"

    API_URL = "https://api.monday.com/v2"
    API_VERSION = "2023-10"
    BOARD_LIMIT = 100
    ITEMS_PAGE_LIMIT = 500

    def __init__(
        self,
        api_token: Optional[str] = None,
        *,
        api_url: Optional[str] = None,
        timeout: float = 30.0,
        client: Optional[httpx.Client] = None,
    ):
        """
        Args:
            api_token: monday.com API token (falls back to MONDAY_API_TOKEN)
            api_url: Override GraphQL endpoint
            timeout: Per-request timeout in seconds
            client: Optional httpx client
        """
        self._api_token = api_token or os.environ.get("MONDAY_API_TOKEN") or ""
        self._api_url = api_url or self.API_URL
        self._client = client or httpx.Client(timeout=timeout)

    def _headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": self._api_token,
            "API-Version": self.API_VERSION,
        }

    def _post_query(self, query: str) -> dict[str, Any]:
        """POST a GraphQL query and return its `data` object."""
        try:
            resp = self._client.post(self._api_url, json={"query": query}, headers=self._headers())
            resp.raise_for_status()
            payload = resp.json()
        except httpx.HTTPStatusError as e:
            raise GatewayError(f"monday.com API returned HTTP {e.response.status_code}") from e
        except httpx.RequestError as e:
            raise GatewayError(f"monday.com API request failed: {e}") from e
        except ValueError as e:
            raise GatewayError("monday.com API returned a non-JSON response") from e

        if not isinstance(payload, dict):
            raise GatewayError("monday.com API returned an unexpected payload")
        errors = payload.get("errors") or payload.get("error_message")
        if errors:
            raise GatewayError(f"monday.com API error: {errors}")
        data = payload.get("data")
        if not isinstance(data, dict):
            raise GatewayError("monday.com API response has no data")
        return data

    def list_boards(self) -> list[Board]:
        data = self._post_query(BOARDS_QUERY % self.BOARD_LIMIT)
        try:
            return [Board.model_validate(b) for b in data.get("boards") or []]
        except ValidationError as e:
            raise GatewayError(f"Unexpected board payload: {e}") from e

    def fetch_items(self, board_id: str) -> list[RawItem]:
        data = self._post_query(ITEMS_QUERY % (board_id, self.ITEMS_PAGE_LIMIT))
        boards = data.get("boards") or []
        if not boards:
            raise GatewayError(f"Board {board_id} returned no data")
        items = ((boards[0] or {}).get("items_page") or {}).get("items") or []
        if len(items) >= self.ITEMS_PAGE_LIMIT:
            logger.warning(
                "Board %s returned a full page of %d items; results may be truncated",
                board_id,
                self.ITEMS_PAGE_LIMIT,
            )
        try:
            return [RawItem.model_validate(i) for i in items]
        except ValidationError as e:
            raise GatewayError(f"Unexpected item payload on board {board_id}: {e}") from e
