"""Turn raw form values into the numbers the projection engine expects."""

from __future__ import annotations

import re
from typing import List, Sequence, Union

MIN_HORIZON_YEARS = 1
MAX_HORIZON_YEARS = 50

# value the browser form seeds new manual rows with when the list is empty
DEFAULT_MANUAL_CONTRIBUTION = 10000.0

_NON_NUMERIC = re.compile(r"[^0-9.]")
_WHITESPACE = re.compile(r"\s")
_LEADING_DECIMAL = re.compile(r"^(\d+\.?\d*|\.\d+)")
_LEADING_FLOAT = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")

RawNumber = Union[str, int, float, None]


def clean_number(raw: RawNumber) -> float:
    """
    Manual contribution cells: text keeps only digits and dots and is read
    up to the first character that no longer forms a decimal
    ("1.2.3" -> 1.2). Anything empty or unreadable becomes 0.
    """
    if raw is None:
        return 0.0
    if isinstance(raw, (bool, int, float)):
        return float(raw)

    cleaned = _NON_NUMERIC.sub("", str(raw))
    match = _LEADING_DECIMAL.match(cleaned)
    if not match:
        return 0.0
    return float(match.group(1))


def clean_spaced_number(raw: RawNumber) -> float:
    """
    Starting capital and first-year contribution: only whitespace is
    dropped, so a sign survives ("-300" -> -300.0) for the caller to reject.
    Empty or unreadable text becomes 0.
    """
    if raw is None:
        return 0.0
    if isinstance(raw, (bool, int, float)):
        return float(raw)

    match = _LEADING_FLOAT.match(_WHITESPACE.sub("", str(raw)))
    if not match:
        return 0.0
    return float(match.group(0))


def extend_contributions(values: Sequence[float], horizon_years: int) -> List[float]:
    """Pad the manual list up to the horizon with its last value; never trims."""
    out = [float(v) for v in values]
    if len(out) >= horizon_years:
        return out
    fill = out[-1] if out else DEFAULT_MANUAL_CONTRIBUTION
    return out + [fill] * (horizon_years - len(out))
