"""Normalized analytic record."""

from pydantic import BaseModel

DEFAULT_REVENUE = 0.0
DEFAULT_PROBABILITY = 0.0
DEFAULT_STAGE = "Unknown"
DEFAULT_STATUS = "Unknown"
DEFAULT_SECTOR = "Other"


class NormalizedRecord(BaseModel):
    """Typed view of one RawItem. Every attribute has a default."""

    id: str
    name: str = ""
    revenue: float = DEFAULT_REVENUE
    probability: float = DEFAULT_PROBABILITY
    stage: str = DEFAULT_STAGE
    status: str = DEFAULT_STATUS
    sector: str = DEFAULT_SECTOR
