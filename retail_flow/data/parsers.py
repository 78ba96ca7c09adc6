"""
Row parsers converting header-keyed source rows into typed models.

Source rows arrive as dictionaries of text keyed by CSV header. Price fields
must be numeric; a field that fails to parse raises ``MalformedDataError``
here rather than silently poisoning every predicate downstream.
"""

from typing import Any, Iterable, Mapping, Optional

import structlog

from ..config.defaults import IngestionParams
from ..errors import MalformedDataError, MissingDataError
from ..utils.numeric import parse_number
from ..utils.time import parse_trading_day
from .models import OpenInterestRow, PriceBar

logger = structlog.get_logger(__name__)


def _row_date_key(row: Mapping[str, Any], column: str) -> Optional[str]:
    """Trimmed date text, or None when the row carries no date."""
    raw = row.get(column)
    if raw is None:
        return None
    text = str(raw).strip()
    return text or None


def _require_number(row: Mapping[str, Any], column: str, row_number: int) -> float:
    if column not in row:
        raise MissingDataError(
            f"Row {row_number} is missing column {column!r}",
            data_type="price",
            context={"row": row_number, "columns": sorted(row)}
        )
    value = parse_number(row[column])
    if value is None:
        raise MalformedDataError(
            f"Row {row_number} has non-numeric {column!r}: {row[column]!r}",
            raw_data=str(row[column]),
            expected_format="finite number",
            context={"row": row_number, "field": column}
        )
    return value


def _optional_number(row: Mapping[str, Any], column: str, row_number: int) -> float:
    """Open-interest fields default to 0 when blank, like the source export."""
    raw = row.get(column)
    if raw is None or not str(raw).strip():
        return 0.0
    value = parse_number(raw)
    if value is None:
        raise MalformedDataError(
            f"Row {row_number} has non-numeric {column!r}: {raw!r}",
            raw_data=str(raw),
            expected_format="finite number",
            context={"row": row_number, "field": column}
        )
    return value


def parse_price_row(row: Mapping[str, Any], columns: IngestionParams,
                    row_number: int = 0) -> Optional[PriceBar]:
    """
    Parse a single price row.

    Args:
        row: Header-keyed text fields
        columns: Source column names
        row_number: Position in the source table, for error context

    Returns:
        PriceBar, or None if the row has no date
    """
    date_key = _row_date_key(row, columns.price_date_column)
    if date_key is None:
        return None

    return PriceBar(
        date=parse_trading_day(date_key),
        open=_require_number(row, columns.open_column, row_number),
        high=_require_number(row, columns.high_column, row_number),
        low=_require_number(row, columns.low_column, row_number),
        close=_require_number(row, columns.close_column, row_number),
        date_key=date_key,
    )


def parse_oi_row(row: Mapping[str, Any], columns: IngestionParams,
                 row_number: int = 0) -> Optional[OpenInterestRow]:
    """
    Parse a single open-interest row.

    Returns:
        OpenInterestRow, or None if the row has no date
    """
    date_key = _row_date_key(row, columns.oi_date_column)
    if date_key is None:
        return None

    return OpenInterestRow(
        date=parse_trading_day(date_key),
        total_oi=_optional_number(row, columns.total_oi_column, row_number),
        institutional_long_oi=_optional_number(row, columns.institutional_long_column, row_number),
        institutional_short_oi=_optional_number(row, columns.institutional_short_column, row_number),
        date_key=date_key,
    )


def parse_price_rows(rows: Iterable[Mapping[str, Any]],
                     columns: Optional[IngestionParams] = None) -> list[PriceBar]:
    """Parse a price table, skipping undated rows."""
    columns = columns or IngestionParams()
    bars = []
    skipped = 0
    for row_number, row in enumerate(rows, start=1):
        bar = parse_price_row(row, columns, row_number)
        if bar is None:
            skipped += 1
            continue
        bars.append(bar)

    logger.debug("Parsed price table", bars=len(bars), skipped_undated=skipped)
    return bars


def parse_oi_rows(rows: Iterable[Mapping[str, Any]],
                  columns: Optional[IngestionParams] = None) -> list[OpenInterestRow]:
    """Parse an open-interest table, skipping undated rows."""
    columns = columns or IngestionParams()
    parsed = []
    skipped = 0
    for row_number, row in enumerate(rows, start=1):
        oi_row = parse_oi_row(row, columns, row_number)
        if oi_row is None:
            skipped += 1
            continue
        parsed.append(oi_row)

    logger.debug("Parsed open-interest table", rows=len(parsed), skipped_undated=skipped)
    return parsed
