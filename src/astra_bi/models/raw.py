"""Raw board records before normalization."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ColumnValue(BaseModel):
    """One (column id, display text, raw value) triple from a board item."""

    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    id: str
    text: Optional[str] = None
    value: Optional[str] = None


class RawItem(BaseModel):
    """
    Loosely-typed item as returned by the work-management API.
    Column ids are free-form; their meaning is inferred during normalization.
    """

    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    id: str
    name: str = ""
    column_values: list[ColumnValue] = Field(default_factory=list)

    def fields(self) -> dict[str, Optional[str]]:
        """Column id -> display text, in source order. A repeated id keeps its last text."""
        return {cv.id: cv.text for cv in self.column_values}


class Board(BaseModel):
    """Board identity returned by board lookups."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    id: str
    name: str
