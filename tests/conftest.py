"""Pytest configuration and shared fixtures."""

from datetime import date, timedelta
from typing import Any, Callable, Dict, List, Optional

import pytest

from retail_flow.data.models import MergedRecord, PriceBar
from retail_flow.utils.numeric import round_half_up
from retail_flow.utils.time import weekday_label

BASE_DAY = date(2024, 1, 2)


def build_record(
    index: int,
    open: float,
    high: float,
    low: float,
    close: float,
    retail_long: float = 50.0,
    retail_short: float = 50.0,
    retail_net: Optional[float] = None,
) -> MergedRecord:
    """Merged record ``index`` days after BASE_DAY."""
    day = BASE_DAY + timedelta(days=index)
    key = day.strftime("%Y/%m/%d")
    if retail_net is None:
        retail_net = round_half_up(retail_long - retail_short)
    return MergedRecord(
        date=day,
        date_key=key,
        weekday=weekday_label(day),
        price=PriceBar(date=day, open=open, high=high, low=low, close=close, date_key=key),
        retail_long=retail_long,
        retail_short=retail_short,
        retail_net=retail_net,
    )


@pytest.fixture
def make_record() -> Callable[..., MergedRecord]:
    """Factory for merged records on consecutive days."""
    return build_record


@pytest.fixture
def long_round_trip() -> List[MergedRecord]:
    """Long entry on bar 1, signal exit on bar 2, then two quiet short-side bars."""
    return [
        build_record(0, 100, 105, 95, 100, 50, 50),
        build_record(1, 100, 106, 99, 104, 40, 60),     # entry long
        build_record(2, 105, 107, 102, 103, 75, 30),    # exit long / entry short
        build_record(3, 102, 104, 100, 101, 60, 45),
        build_record(4, 99, 101, 97, 98, 62, 44),
    ]


@pytest.fixture
def trending_long() -> List[MergedRecord]:
    """Long entry on bar 1 followed by new highs on every bar."""
    records = [build_record(0, 100, 105, 95, 100, 50, 50)]
    for i in range(1, 6):
        base = 100 + i * 4
        records.append(build_record(i, base, base + 3, base - 1, base + 2, 40, 60))
    return records


@pytest.fixture
def short_with_stop_out() -> List[MergedRecord]:
    """Short entry on bar 1, trailing on bars 2-3, stopped out on bar 4."""
    return [
        build_record(0, 100, 104, 98, 102, 50, 50),
        build_record(1, 105, 106, 100, 101, 75, 30),    # entry short
        build_record(2, 101, 102, 96, 97, 60, 40),
        build_record(3, 97, 98, 92, 93, 60, 40),
        build_record(4, 93, 104, 92, 103, 60, 40),      # close above stop
        build_record(5, 103, 106, 101, 105, 60, 40),
    ]


@pytest.fixture
def sample_price_rows() -> List[Dict[str, Any]]:
    """Header-keyed price rows as delivered by the CSV loader."""
    return [
        {"Date": "2024/01/02", "Open": "17000", "High": "17100", "Low": "16950", "Close": "17050"},
        {"Date": " 2024/01/03 ", "Open": "17050", "High": "17120", "Low": "16900", "Close": "16980"},
        {"Date": "2024/01/04", "Open": "16980", "High": "17060", "Low": "16940", "Close": "17020"},
        {"Date": "2024/01/05", "Open": "17020", "High": "17200", "Low": "17000", "Close": "17180"},
    ]


@pytest.fixture
def sample_oi_rows() -> List[Dict[str, Any]]:
    """Header-keyed open-interest rows as delivered by the CSV loader."""
    return [
        {"Date": "2024/01/04", "TMF_全市場": "1000", "TMF_多方未平倉口數": "550", "TMF_空方未平倉口數": "350"},
        {"Date": "2024/01/02", "TMF_全市場": "1000", "TMF_多方未平倉口數": "600", "TMF_空方未平倉口數": "300"},
        {"Date": "2024/01/03", "TMF_全市場": "1200", "TMF_多方未平倉口數": "600", "TMF_空方未平倉口數": "500"},
        {"Date": "2024/01/05", "TMF_全市場": "0", "TMF_多方未平倉口數": "0", "TMF_空方未平倉口數": "0"},
        {"Date": "2024/01/08", "TMF_全市場": "900", "TMF_多方未平倉口數": "400", "TMF_空方未平倉口數": "400"},
    ]
