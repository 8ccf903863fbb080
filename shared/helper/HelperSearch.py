"""Helpers for reading search backend responses."""

from typing import Any


def get_total(raw_response: dict) -> int:
    """Reads the total hit count of a raw search response.

    The backend reports ``hits.total`` either as a bare integer or as
    ``{"value": 17, "relation": "eq"}``. The relation flag is ignored.
    Missing, non-numeric or negative totals count as zero.

    Args:
        raw_response (dict): The decoded JSON body of a search or scroll call.

    Returns:
        int: The total number of matching documents.
    """
    hits = raw_response.get("hits") if isinstance(raw_response, dict) else None
    total: Any = hits.get("total") if isinstance(hits, dict) else None
    if isinstance(total, dict):
        total = total.get("value") or 0
    return _to_int(total)


def _to_int(value: Any) -> int:
    # bool is an int subclass, but never a count
    if isinstance(value, bool) or value is None:
        return 0
    if isinstance(value, int):
        return max(value, 0)
    if isinstance(value, str):
        value = value.strip()
    if isinstance(value, (float, str)):
        try:
            return max(int(float(value)), 0)
        except (ValueError, OverflowError):
            return 0
    return 0
