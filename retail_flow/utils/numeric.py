"""Numeric parsing and rounding helpers."""

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional


def round_half_up(value: float, places: int = 2) -> float:
    """
    Round to ``places`` decimals, ties away from zero, on the exact binary value.

    This matches formatting a float to a fixed number of decimals and parsing
    it back, which is how the ratio and drawdown figures are stored. Python's
    built-in ``round`` sends exact ties to even instead.
    """
    if not math.isfinite(value):
        return value
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def parse_number(raw: Optional[str]) -> Optional[float]:
    """
    Parse numeric text, tolerating surrounding whitespace and thousands separators.

    Returns:
        The finite float, or None if the text is blank or not a finite number
    """
    if raw is None:
        return None
    text = str(raw).strip().replace(",", "")
    if not text:
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value
