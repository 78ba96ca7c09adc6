"""
Canonical data models for daily price and open-interest data.

This module defines immutable data structures for parsed source rows and the
merged per-day record every simulator consumes.
"""

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class PriceBar:
    """Daily OHLC bar in exchange points."""
    date: date
    open: float
    high: float
    low: float
    close: float
    date_key: str = ""      # Trimmed source date text

    @property
    def join_key(self) -> str:
        """Key used to join against open-interest rows."""
        return self.date_key or self.date.isoformat()


@dataclass(frozen=True)
class OpenInterestRow:
    """Daily open-interest breakdown in contracts."""
    date: date
    total_oi: float                 # Whole-market open interest
    institutional_long_oi: float    # Institutional long open interest
    institutional_short_oi: float   # Institutional short open interest
    date_key: str = ""              # Trimmed source date text

    @property
    def join_key(self) -> str:
        """Key used to join against price bars."""
        return self.date_key or self.date.isoformat()


@dataclass(frozen=True)
class MergedRecord:
    """Price bar joined with derived retail positioning ratios."""
    date: date
    date_key: str           # Trimmed source date text
    weekday: str            # Weekday label, e.g. "(二)"
    price: PriceBar
    retail_long: float      # % of open interest not held long by institutions
    retail_short: float     # % of open interest not held short by institutions
    retail_net: float       # retail_long - retail_short, in %

    @property
    def label(self) -> str:
        """Display label, source date followed by weekday."""
        return f"{self.date_key} {self.weekday}"

    @property
    def open(self) -> float:
        return self.price.open

    @property
    def high(self) -> float:
        return self.price.high

    @property
    def low(self) -> float:
        return self.price.low

    @property
    def close(self) -> float:
        return self.price.close
