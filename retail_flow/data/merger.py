"""
Join of price bars with open-interest rows into the merged daily sequence.

Retail ratios are inferred as the share of open interest not held by
institutions on each side:

    retail_long  = (total - institutional_long)  / total
    retail_short = (total - institutional_short) / total
    retail_net   = retail_long - retail_short

All three are stored as percentages rounded to two decimals. Downstream
predicates compare these rounded values, so the rounding is part of the
strategy, not just presentation.
"""

from typing import Iterable, Sequence

import structlog

from ..errors import EmptyMergeError
from ..utils.numeric import round_half_up
from ..utils.time import WEEKDAY_LABELS, weekday_label
from .models import MergedRecord, OpenInterestRow, PriceBar

logger = structlog.get_logger(__name__)


def retail_ratios(oi_row: OpenInterestRow) -> tuple[float, float, float]:
    """
    Retail long, short and net percentages for one open-interest row.

    Raises:
        ZeroDivisionError: If total open interest is zero
    """
    total = oi_row.total_oi
    long_ratio = (total - oi_row.institutional_long_oi) / total
    short_ratio = (total - oi_row.institutional_short_oi) / total
    net_ratio = long_ratio - short_ratio

    return (
        round_half_up(long_ratio * 100),
        round_half_up(short_ratio * 100),
        round_half_up(net_ratio * 100),
    )


def merge_series(
    price_bars: Iterable[PriceBar],
    oi_rows: Iterable[OpenInterestRow],
    weekday_labels: Sequence[str] = WEEKDAY_LABELS,
) -> list[MergedRecord]:
    """
    Join price bars and open-interest rows on their trimmed date key.

    Open-interest rows drive the join in their given order. Rows without a
    matching bar or with zero total open interest are dropped; the result is
    sorted ascending by calendar day.

    Args:
        price_bars: Parsed price table (later duplicates overwrite earlier ones)
        oi_rows: Parsed open-interest table
        weekday_labels: Sunday-first weekday labels

    Returns:
        Merged records, strictly ascending by date

    Raises:
        EmptyMergeError: If no row survives the join
    """
    price_by_key: dict[str, PriceBar] = {}
    price_count = 0
    for bar in price_bars:
        price_by_key[bar.join_key] = bar
        price_count += 1

    records: list[MergedRecord] = []
    seen_dates = set()
    oi_count = 0
    unmatched = 0
    zero_oi = 0

    for oi_row in oi_rows:
        oi_count += 1
        bar = price_by_key.get(oi_row.join_key)
        if bar is None:
            unmatched += 1
            continue

        if oi_row.total_oi == 0:
            zero_oi += 1
            continue

        if oi_row.date in seen_dates:
            logger.warning(
                "Duplicate open-interest date skipped",
                date=oi_row.date_key or oi_row.date.isoformat()
            )
            continue
        seen_dates.add(oi_row.date)

        retail_long, retail_short, retail_net = retail_ratios(oi_row)
        records.append(MergedRecord(
            date=oi_row.date,
            date_key=oi_row.join_key,
            weekday=weekday_label(oi_row.date, weekday_labels),
            price=bar,
            retail_long=retail_long,
            retail_short=retail_short,
            retail_net=retail_net,
        ))

    if not records:
        logger.error(
            "Merge produced no records",
            price_rows=price_count,
            oi_rows=oi_count,
            unmatched=unmatched,
            zero_open_interest=zero_oi
        )
        raise EmptyMergeError(
            "No rows survived the price/open-interest join; check both source tables",
            price_rows=price_count,
            oi_rows=oi_count,
            context={"unmatched": unmatched, "zero_open_interest": zero_oi}
        )

    records.sort(key=lambda record: record.date)

    logger.info(
        "Merged price and open-interest tables",
        records=len(records),
        price_rows=price_count,
        oi_rows=oi_count,
        unmatched=unmatched,
        zero_open_interest=zero_oi,
        first_date=records[0].date.isoformat(),
        last_date=records[-1].date.isoformat()
    )

    return records
