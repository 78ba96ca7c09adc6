"""Summary statistics for a completed backtest"""

from dataclasses import asdict, dataclass
from datetime import date
from typing import Any, Optional, Sequence

from ..data.models import MergedRecord
from ..models.results import EquitySample, MarkerKind, MarkerResult


@dataclass(frozen=True)
class PerformanceSummary:
    """Headline figures for one run"""
    bars: int
    first_date: Optional[date]
    last_date: Optional[date]
    long_entries: int
    short_entries: int
    long_exits: int
    short_exits: int
    starting_equity: float
    final_equity: float
    final_equity_long: float
    final_equity_short: float
    net_pnl: float
    return_pct: float
    max_drawdown_pct: float
    final_sharpe: float

    def to_dict(self) -> dict[str, Any]:
        result = asdict(self)
        result["first_date"] = self.first_date.isoformat() if self.first_date else None
        result["last_date"] = self.last_date.isoformat() if self.last_date else None
        return result


def summarize(records: Sequence[MergedRecord], markers: MarkerResult,
              equity: Sequence[EquitySample]) -> PerformanceSummary:
    """Collapse the simulation outputs into a PerformanceSummary."""
    seed = equity[0] if equity else None
    final = equity[-1] if equity else None
    starting = seed.equity if seed else 0.0
    final_equity = final.equity if final else 0.0

    return PerformanceSummary(
        bars=len(records),
        first_date=records[0].date if records else None,
        last_date=records[-1].date if records else None,
        long_entries=markers.count(MarkerKind.LONG_ENTRY),
        short_entries=markers.count(MarkerKind.SHORT_ENTRY),
        long_exits=markers.count(MarkerKind.LONG_EXIT),
        short_exits=markers.count(MarkerKind.SHORT_EXIT),
        starting_equity=starting,
        final_equity=final_equity,
        final_equity_long=final.equity_long if final else 0.0,
        final_equity_short=final.equity_short if final else 0.0,
        net_pnl=final_equity - starting,
        return_pct=(final_equity - starting) / starting * 100 if starting else 0.0,
        max_drawdown_pct=min((sample.drawdown_pct for sample in equity), default=0.0),
        final_sharpe=final.rolling_sharpe if final else 0.0,
    )
