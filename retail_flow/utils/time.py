"""
Calendar-day utilities for daily bar data.

Source tables key rows by a textual trading day. These helpers turn that text
into a ``datetime.date`` without any timezone shift, so a row dated
2024/01/02 is always a Tuesday regardless of where the backtest runs.
"""

from datetime import date, datetime
from typing import Sequence

from ..errors import MalformedDataError

DATE_FORMATS = ("%Y/%m/%d", "%Y-%m-%d", "%Y%m%d")

WEEKDAY_LABELS = ("(日)", "(一)", "(二)", "(三)", "(四)", "(五)", "(六)")


def parse_trading_day(raw: str) -> date:
    """
    Parse a trimmed source date string into a calendar day.

    Args:
        raw: Date text such as "2024/01/02", "2024-01-02" or "20240102"

    Returns:
        The calendar day

    Raises:
        MalformedDataError: If no supported format matches
    """
    text = raw.strip()
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue

    raise MalformedDataError(
        f"Unrecognized trading day: {raw!r}",
        raw_data=raw,
        expected_format=" | ".join(DATE_FORMATS)
    )


def weekday_label(day: date, labels: Sequence[str] = WEEKDAY_LABELS) -> str:
    """
    Weekday label for a calendar day.

    Labels are indexed Sunday first, matching the source dashboard.
    """
    # date.weekday() is Monday=0; shift so Sunday=0
    return labels[(day.weekday() + 1) % 7]
