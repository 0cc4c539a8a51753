"""Abstract base class for board data gateways."""

from abc import ABC, abstractmethod
from typing import Optional

from astra_bi.models.raw import Board, RawItem


class BaseGateway(ABC):
    """
    Standard interface for work-management data sources.
    Gateways are read-only: list boards, resolve a board by name, fetch items.
    Transport failures raise GatewayError; a missing board is not an error.
    """

    source_id: str = ""

    @abstractmethod
    def list_boards(self) -> list[Board]:
        """
        Return available boards in the order the source returns them.
        """
        pass

    @abstractmethod
    def fetch_items(self, board_id: str) -> list[RawItem]:
        """
        Return the raw items of one board (capped at the source page size).
        """
        pass

    def get_board_id_by_name(self, name: str) -> Optional[str]:
        """
        Case-insensitive substring match against board names.
        Returns the first match in source order, or None.
        """
        needle = name.lower()
        for board in self.list_boards():
            if needle in board.name.lower():
                return board.id
        return None
