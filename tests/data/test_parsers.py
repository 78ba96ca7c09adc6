"""Tests for source row parsing."""

from datetime import date

import pytest

from retail_flow.config.defaults import IngestionParams
from retail_flow.data.parsers import parse_oi_row, parse_oi_rows, parse_price_row, parse_price_rows
from retail_flow.errors import DataQualityError, MalformedDataError, MissingDataError

COLUMNS = IngestionParams()


class TestPriceRows:
    """Test price row parsing."""

    def test_parse_valid_row(self):
        bar = parse_price_row(
            {"Date": " 2024/01/02 ", "Open": "17000", "High": "17100", "Low": "16950", "Close": "17050"},
            COLUMNS,
        )

        assert bar.date == date(2024, 1, 2)
        assert bar.date_key == "2024/01/02"
        assert (bar.open, bar.high, bar.low, bar.close) == (17000.0, 17100.0, 16950.0, 17050.0)

    def test_thousands_separators_tolerated(self):
        bar = parse_price_row(
            {"Date": "2024/01/02", "Open": "17,000", "High": "17,100", "Low": "16,950", "Close": "17,050.5"},
            COLUMNS,
        )

        assert bar.close == 17050.5

    def test_non_numeric_price_fails_fast(self):
        with pytest.raises(MalformedDataError) as exc_info:
            parse_price_row(
                {"Date": "2024/01/02", "Open": "n/a", "High": "17100", "Low": "16950", "Close": "17050"},
                COLUMNS,
                row_number=7,
            )

        assert exc_info.value.raw_data == "n/a"
        assert exc_info.value.context["row"] == 7
        assert exc_info.value.context["field"] == "Open"

    def test_blank_price_fails_fast(self):
        with pytest.raises(MalformedDataError):
            parse_price_row(
                {"Date": "2024/01/02", "Open": "17000", "High": "", "Low": "16950", "Close": "17050"},
                COLUMNS,
            )

    def test_missing_price_column(self):
        with pytest.raises(MissingDataError):
            parse_price_row({"Date": "2024/01/02", "Open": "17000", "High": "17100", "Low": "16950"}, COLUMNS)

    def test_infinite_price_rejected(self):
        with pytest.raises(MalformedDataError):
            parse_price_row(
                {"Date": "2024/01/02", "Open": "inf", "High": "17100", "Low": "16950", "Close": "17050"},
                COLUMNS,
            )

    def test_undated_rows_skipped(self):
        rows = [
            {"Date": "", "Open": "x", "High": "x", "Low": "x", "Close": "x"},
            {"Date": "2024/01/02", "Open": "1", "High": "2", "Low": "0.5", "Close": "1.5"},
        ]

        bars = parse_price_rows(rows)

        assert len(bars) == 1

    def test_bad_date_rejected(self):
        with pytest.raises(MalformedDataError):
            parse_price_row({"Date": "Jan 2nd", "Open": "1", "High": "2", "Low": "0.5", "Close": "1.5"}, COLUMNS)


class TestOpenInterestRows:
    """Test open-interest row parsing."""

    def test_parse_valid_row(self, sample_oi_rows):
        row = parse_oi_row(sample_oi_rows[1], COLUMNS)

        assert row.date == date(2024, 1, 2)
        assert row.total_oi == 1000.0
        assert row.institutional_long_oi == 600.0
        assert row.institutional_short_oi == 300.0

    def test_blank_fields_default_to_zero(self):
        row = parse_oi_row({"Date": "2024/01/02", "TMF_全市場": "1000", "TMF_多方未平倉口數": ""}, COLUMNS)

        assert row.institutional_long_oi == 0.0
        assert row.institutional_short_oi == 0.0

    def test_non_numeric_field_fails_fast(self):
        with pytest.raises(MalformedDataError):
            parse_oi_row(
                {"Date": "2024/01/02", "TMF_全市場": "lots", "TMF_多方未平倉口數": "1", "TMF_空方未平倉口數": "1"},
                COLUMNS,
            )

    def test_custom_columns(self):
        columns = IngestionParams(
            oi_date_column="day",
            total_oi_column="total",
            institutional_long_column="inst_long",
            institutional_short_column="inst_short",
        )

        rows = parse_oi_rows([{"day": "2024-01-02", "total": "10", "inst_long": "4", "inst_short": "6"}], columns)

        assert rows[0].total_oi == 10.0
        assert rows[0].date_key == "2024-01-02"

    def test_errors_are_data_quality_errors(self):
        with pytest.raises(DataQualityError):
            parse_oi_rows([{"Date": "2024/01/02", "TMF_全市場": "?"}])
