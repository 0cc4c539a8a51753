"""Analytics results returned by the tool functions."""

from typing import Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from astra_bi.models.normalized import NormalizedRecord

# Field names stay snake_case in Python; JSON for tools and the CLI uses camelCase
_CAMEL = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DataQuality(BaseModel):
    """Counts of records whose numeric fields normalized to zero."""

    model_config = _CAMEL

    missing_revenue: int = 0
    missing_probability: int = 0


class DealsAnalysis(BaseModel):
    """Aggregates over the Deals board."""

    model_config = _CAMEL

    total_deals: int
    closed_revenue: float
    weighted_pipeline: float
    revenue_by_sector: dict[str, float] = Field(default_factory=dict)
    data_quality: DataQuality = Field(default_factory=DataQuality)
    item_list: list[NormalizedRecord] = Field(default_factory=list)


class WorkOrdersAnalysis(BaseModel):
    """Aggregates over the Work Orders board."""

    model_config = _CAMEL

    total_orders: int
    status_distribution: dict[str, int] = Field(default_factory=dict)
    item_list: list[NormalizedRecord] = Field(default_factory=list)


class BoardNotFound(BaseModel):
    """Degenerate but valid result: the named board does not exist."""

    error: str

    @classmethod
    def for_board(cls, board_name: str) -> "BoardNotFound":
        return cls(error=f"{board_name} board not found")


AnalyticsResult = Union[DealsAnalysis, WorkOrdersAnalysis, BoardNotFound]
