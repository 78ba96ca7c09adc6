"""Data models for simulation outputs"""

import math
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional

from ..state.models import PositionSide


class MarkerKind(str, Enum):
    """Trade marker kinds."""
    LONG_ENTRY = "long_entry"
    SHORT_ENTRY = "short_entry"
    LONG_EXIT = "long_exit"
    SHORT_EXIT = "short_exit"

    @property
    def action(self) -> str:
        """Short order label shown on the chart."""
        return _MARKER_ACTIONS[self]


_MARKER_ACTIONS = {
    MarkerKind.LONG_ENTRY: "Buy",
    MarkerKind.SHORT_ENTRY: "Sell",
    MarkerKind.LONG_EXIT: "Exit",
    MarkerKind.SHORT_EXIT: "Cover",
}


@dataclass(frozen=True)
class TradeMarker:
    """Entry or exit marker anchored on the bar after its trigger."""
    kind: MarkerKind
    date: date              # Anchor date (bar after the trigger)
    label: str              # Anchor bar display label
    price: float            # Anchor price level
    trigger_date: date      # Bar whose close produced the signal


@dataclass(frozen=True)
class StopPoint:
    """Trailing-stop level shown on a bar while a position is held."""
    date: date
    label: str
    stop_level: float


@dataclass(frozen=True)
class PositionSnapshot:
    """Position and stop visible on a given bar."""
    side: PositionSide
    stop_level: float


@dataclass(frozen=True)
class MarkerResult:
    """Markers, stop points and per-day position lookup."""
    markers: tuple[TradeMarker, ...] = ()
    stop_points: tuple[StopPoint, ...] = ()
    positions: Mapping[date, PositionSnapshot] = field(default_factory=lambda: MappingProxyType({}))

    def position_on(self, day: date) -> Optional[PositionSnapshot]:
        """Position and stop shown on ``day``, None if flat."""
        return self.positions.get(day)

    def count(self, kind: MarkerKind) -> int:
        return sum(1 for marker in self.markers if marker.kind == kind)


def _round_whole(value: float) -> int:
    """Nearest whole number, halves toward positive infinity."""
    return math.floor(value + 0.5)


@dataclass(frozen=True)
class EquitySample:
    """Equity curve point for one merged record."""
    date: date
    label: str
    equity: float
    equity_long: float
    equity_short: float
    daily_pnl: float = 0.0
    drawdown_pct: float = 0.0          # Always <= 0
    rolling_sharpe: float = 0.0
    position: PositionSide = PositionSide.FLAT

    def to_dict(self) -> dict[str, Any]:
        """Display form: whole-currency equity, two-decimal ratios."""
        return {
            "date": self.label,
            "equity": _round_whole(self.equity),
            "equity_long": _round_whole(self.equity_long),
            "equity_short": _round_whole(self.equity_short),
            "daily_pnl": _round_whole(self.daily_pnl),
            "drawdown_pct": self.drawdown_pct,
            "rolling_sharpe": f"{self.rolling_sharpe:.2f}",
            "position": self.position.value,
        }
