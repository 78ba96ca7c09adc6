"""Tests for the price / open-interest merge."""

from datetime import date

import pytest

from retail_flow.data.merger import merge_series, retail_ratios
from retail_flow.data.models import OpenInterestRow, PriceBar
from retail_flow.data.parsers import parse_oi_rows, parse_price_rows
from retail_flow.errors import EmptyMergeError


def _bar(day: date, key: str = "", close: float = 17050.0) -> PriceBar:
    return PriceBar(date=day, open=17000.0, high=17100.0, low=16950.0, close=close, date_key=key)


def _oi(day: date, total: float, inst_long: float, inst_short: float, key: str = "") -> OpenInterestRow:
    return OpenInterestRow(
        date=day,
        total_oi=total,
        institutional_long_oi=inst_long,
        institutional_short_oi=inst_short,
        date_key=key,
    )


class TestRetailRatios:
    """Test retail ratio derivation."""

    def test_reference_example(self):
        """total=1000, inst long 600, inst short 300 gives 40 / 70 / -30."""
        retail_long, retail_short, retail_net = retail_ratios(_oi(date(2024, 1, 2), 1000, 600, 300))

        assert retail_long == 40.00
        assert retail_short == 70.00
        assert retail_net == -30.00

    def test_ratios_are_rounded_to_two_decimals(self):
        retail_long, retail_short, retail_net = retail_ratios(_oi(date(2024, 1, 2), 1200, 600, 500))

        assert retail_long == 50.00
        assert retail_short == 58.33
        # Net comes from the unrounded ratios: 50 - 58.333... = -8.333...
        assert retail_net == -8.33

    def test_zero_total_raises(self):
        with pytest.raises(ZeroDivisionError):
            retail_ratios(_oi(date(2024, 1, 2), 0, 0, 0))


class TestMergeSeries:
    """Test the join itself."""

    def test_merge_sample_tables(self, sample_price_rows, sample_oi_rows):
        records = merge_series(parse_price_rows(sample_price_rows), parse_oi_rows(sample_oi_rows))

        assert [r.date for r in records] == [date(2024, 1, 2), date(2024, 1, 3), date(2024, 1, 4)]
        assert records[0].retail_long == 40.0
        assert records[0].retail_short == 70.0
        assert records[0].retail_net == -30.0
        assert records[2].retail_long == 45.0
        assert records[2].retail_short == 65.0
        assert records[2].retail_net == -20.0

    def test_output_sorted_strictly_ascending(self, sample_price_rows, sample_oi_rows):
        records = merge_series(parse_price_rows(sample_price_rows), parse_oi_rows(sample_oi_rows))

        dates = [r.date for r in records]
        assert all(a < b for a, b in zip(dates, dates[1:]))

    def test_length_bounded_by_inputs(self, sample_price_rows, sample_oi_rows):
        price_bars = parse_price_rows(sample_price_rows)
        oi_rows = parse_oi_rows(sample_oi_rows)
        records = merge_series(price_bars, oi_rows)

        matching = sum(1 for row in oi_rows if row.join_key in {bar.join_key for bar in price_bars})
        assert len(records) <= min(matching, len(price_bars))

    def test_zero_open_interest_dropped(self, sample_price_rows, sample_oi_rows):
        records = merge_series(parse_price_rows(sample_price_rows), parse_oi_rows(sample_oi_rows))

        assert date(2024, 1, 5) not in {r.date for r in records}

    def test_unmatched_dates_skipped(self, sample_price_rows, sample_oi_rows):
        records = merge_series(parse_price_rows(sample_price_rows), parse_oi_rows(sample_oi_rows))

        assert date(2024, 1, 8) not in {r.date for r in records}

    def test_whitespace_in_dates_is_trimmed(self, sample_price_rows, sample_oi_rows):
        records = merge_series(parse_price_rows(sample_price_rows), parse_oi_rows(sample_oi_rows))

        jan3 = next(r for r in records if r.date == date(2024, 1, 3))
        assert jan3.date_key == "2024/01/03"
        assert jan3.close == 16980.0

    def test_weekday_label_attached(self, sample_price_rows, sample_oi_rows):
        records = merge_series(parse_price_rows(sample_price_rows), parse_oi_rows(sample_oi_rows))

        assert records[0].weekday == "(二)"
        assert records[0].label == "2024/01/02 (二)"

    def test_custom_weekday_labels(self):
        labels = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")
        records = merge_series([_bar(date(2024, 1, 2))], [_oi(date(2024, 1, 2), 1000, 600, 300)], labels)

        assert records[0].weekday == "Tue"

    def test_join_uses_source_text_not_calendar_day(self):
        """Differently formatted keys for the same day do not join."""
        bars = [_bar(date(2024, 1, 2), key="2024-01-02")]
        oi_rows = [
            _oi(date(2024, 1, 2), 1000, 600, 300, key="2024/01/02"),
            _oi(date(2024, 1, 2), 1000, 600, 300, key="2024-01-02"),
        ]

        records = merge_series(bars, oi_rows)

        assert len(records) == 1
        assert records[0].date_key == "2024-01-02"

    def test_later_duplicate_price_overwrites(self):
        bars = [_bar(date(2024, 1, 2), close=1.0), _bar(date(2024, 1, 2), close=2.0)]
        records = merge_series(bars, [_oi(date(2024, 1, 2), 1000, 600, 300)])

        assert records[0].close == 2.0

    def test_duplicate_open_interest_date_keeps_first(self):
        bars = [_bar(date(2024, 1, 2))]
        oi_rows = [_oi(date(2024, 1, 2), 1000, 600, 300), _oi(date(2024, 1, 2), 1000, 100, 100)]

        records = merge_series(bars, oi_rows)

        assert len(records) == 1
        assert records[0].retail_long == 40.0

    def test_empty_merge_is_fatal(self):
        with pytest.raises(EmptyMergeError) as exc_info:
            merge_series([_bar(date(2024, 1, 2))], [_oi(date(2024, 1, 3), 1000, 600, 300)])

        assert exc_info.value.recoverable is False
        assert exc_info.value.price_rows == 1
        assert exc_info.value.oi_rows == 1

    def test_all_zero_open_interest_is_empty(self):
        with pytest.raises(EmptyMergeError):
            merge_series([_bar(date(2024, 1, 2))], [_oi(date(2024, 1, 2), 0, 0, 0)])
