"""Normalization of free-text board values into typed analytic fields.

Every function here is pure and total: malformed text degrades to the
documented defaults instead of raising.
"""

import re
from typing import Iterable, Optional

from astra_bi.models.normalized import (
    DEFAULT_PROBABILITY,
    DEFAULT_REVENUE,
    DEFAULT_SECTOR,
    DEFAULT_STAGE,
    DEFAULT_STATUS,
    NormalizedRecord,
)
from astra_bi.models.raw import RawItem

# Currency symbols and thousands separators
_CURRENCY_CHARS = re.compile(r"[₹$€£,]")

# Longest leading decimal literal, e.g. "12", "-3.5", ".75", "1e3". ASCII digits only.
_LEADING_NUMBER = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)

# Magnitude suffix -> multiplier ("l" is lakh)
_REVENUE_SUFFIXES: dict[str, float] = {
    "k": 1_000,
    "m": 1_000_000,
    "l": 100_000,
}

# Column id substrings -> attribute group. First matching rule wins per column.
_FIELD_RULES: list[tuple[tuple[str, ...], str]] = [
    (("revenue", "amount", "value"), "revenue"),
    (("prob",), "probability"),
    (("stage", "status"), "stage"),
    (("sector", "industry"), "sector"),
]


def _parse_leading_float(text: str) -> Optional[float]:
    """Parse the numeric prefix of text; None when there is none."""
    match = _LEADING_NUMBER.match(text.strip())
    if not match:
        return None
    try:
        return float(match.group(0))
    except ValueError:
        return None


def normalize_revenue(value: Optional[str]) -> float:
    """
    Convert revenue text to a number.
    "$10k" -> 10000, "₹2l" -> 200000, "1.5M" -> 1500000; invalid -> 0.
    """
    if not value:
        return DEFAULT_REVENUE
    clean = _CURRENCY_CHARS.sub("", value).strip().lower()

    multiplier = 1.0
    if clean and clean[-1] in _REVENUE_SUFFIXES:
        multiplier = _REVENUE_SUFFIXES[clean[-1]]
        clean = clean[:-1]

    num = _parse_leading_float(clean)
    if num is None:
        return DEFAULT_REVENUE
    return num * multiplier


def normalize_probability(value: Optional[str]) -> float:
    """
    Convert probability text to a fraction.
    Numbers above 1 are read as percentages ("45%" -> 0.45, "150" -> 1.5);
    numbers up to and including 1 are already fractional ("1" -> 1.0).
    """
    if not value:
        return DEFAULT_PROBABILITY
    clean = value.replace("%", "", 1).strip()
    num = _parse_leading_float(clean)
    if num is None:
        return DEFAULT_PROBABILITY
    return num / 100 if num > 1 else num


def classify_column(column_id: str) -> Optional[str]:
    """Return the attribute group a column id maps to, or None if unmatched."""
    lowered = column_id.lower()
    for needles, group in _FIELD_RULES:
        if any(n in lowered for n in needles):
            return group
    return None


def normalize_item(item: RawItem) -> NormalizedRecord:
    """
    Normalize one raw item. Columns are scanned in source order; when two
    columns classify to the same attribute the later one wins.
    """
    values: dict[str, object] = {}
    for column_id, text in item.fields().items():
        group = classify_column(column_id)
        if group == "revenue":
            values["revenue"] = normalize_revenue(text)
        elif group == "probability":
            values["probability"] = normalize_probability(text)
        elif group == "stage":
            values["stage"] = text or DEFAULT_STAGE
            values["status"] = text or DEFAULT_STATUS
        elif group == "sector":
            values["sector"] = text or DEFAULT_SECTOR

    return NormalizedRecord(
        id=item.id,
        name=item.name,
        revenue=values.get("revenue") or DEFAULT_REVENUE,
        probability=values.get("probability") or DEFAULT_PROBABILITY,
        stage=values.get("stage") or DEFAULT_STAGE,
        status=values.get("status") or DEFAULT_STATUS,
        sector=values.get("sector") or DEFAULT_SECTOR,
    )


def normalize_board_data(items: Iterable[RawItem]) -> list[NormalizedRecord]:
    """Normalize every raw item; output has one record per input, in order."""
    return [normalize_item(item) for item in items]
