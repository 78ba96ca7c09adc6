"""
Equity curve walk with drawdown and rolling Sharpe.

Each bar's profit and loss is the open-to-next-open move of the side held
coming into the bar, times the contract multiplier. Exits pay the round-trip
fee on the exit bar. The final record has no successor, so its own close
stands in for the next open.
"""

from dataclasses import replace
from typing import Optional, Sequence

import structlog

from ..config.defaults import EquityParams, StrategyParams
from ..data.models import MergedRecord
from ..errors import InsufficientDataError
from ..logging.config import get_state_logger, log_position_transition
from ..metrics.drawdown import DrawdownTracker
from ..metrics.rolling import RollingSharpe
from ..models.results import EquitySample
from ..signals.classifier import classify
from ..state.machine import advance, validate_transition
from ..state.models import PNL_ACCRUAL, PositionSide, PositionState, Transition
from ._sequence import check_ascending

logger = structlog.get_logger(__name__)
state_logger = get_state_logger(__name__)


def bar_pnl(side: PositionSide, current: MergedRecord, next_open: float, multiplier: float) -> float:
    """Open-to-next-open profit of the side held into ``current``."""
    if side == PositionSide.LONG:
        return (next_open - current.open) * multiplier
    if side == PositionSide.SHORT:
        return (current.open - next_open) * multiplier
    return 0.0


def pnl_bucket(transition: Transition, daily_pnl: float,
               attribute_exit_pnl_to_long: bool) -> Optional[PositionSide]:
    """
    Which per-side equity series receives a bar's PnL.

    With ``attribute_exit_pnl_to_long`` the side after the bar decides: long,
    or flat with nonzero PnL, goes to the long series; short goes to the short
    series. A same-bar reversal therefore books the closed long into the short
    series. Without it, exit-bar PnL goes to the side that was closed.
    """
    if not attribute_exit_pnl_to_long and transition.is_exit:
        return transition.exited_side

    side = transition.state.side
    if side == PositionSide.LONG or (side == PositionSide.FLAT and daily_pnl != 0):
        return PositionSide.LONG
    if side == PositionSide.SHORT:
        return PositionSide.SHORT
    return None


def simulate_equity(
    records: Sequence[MergedRecord],
    strategy: Optional[StrategyParams] = None,
    params: Optional[EquityParams] = None,
) -> list[EquitySample]:
    """
    Walk records 1 .. n-1 accruing PnL into equity, drawdown and Sharpe series.

    Args:
        records: Merged records, strictly ascending by date
        strategy: Signal and trailing-stop parameters
        params: Fund, fee, multiplier and statistics parameters

    Returns:
        One EquitySample per record; the first is the seed state

    Raises:
        InsufficientDataError: If ``records`` is empty
    """
    strategy = strategy or StrategyParams()
    params = params or EquityParams()
    if not records:
        raise InsufficientDataError("Equity simulation needs at least one record",
                                    required_count=1, available_count=0)
    check_ascending(records, "equity")

    policy = replace(PNL_ACCRUAL, reverse_on_signal_exit=params.same_bar_reversal)
    round_trip_fee = params.fee * 2

    equity = params.fund
    equity_long = params.fund
    equity_short = params.fund
    drawdown = DrawdownTracker(params.fund)
    sharpe = RollingSharpe(params.sharpe_window, params.annualization_days, params.min_std)
    state = PositionState.flat()
    trades = 0

    samples = [EquitySample(
        date=records[0].date,
        label=records[0].label,
        equity=equity,
        equity_long=equity_long,
        equity_short=equity_short,
    )]

    last = len(records) - 1
    for i in range(1, len(records)):
        current = records[i]
        previous = records[i - 1]
        next_open = records[i + 1].open if i < last else current.close

        daily_pnl = bar_pnl(state.side, current, next_open, params.contract_multiplier)

        signals = classify(current, previous, strategy)
        transition = advance(state, current, previous, signals, policy,
                             monotonic_stops=strategy.monotonic_stops)
        if strategy.monotonic_stops:
            validate_transition(state, transition)

        if transition.is_exit:
            daily_pnl -= round_trip_fee
            trades += 1

        if transition.is_exit or transition.is_entry:
            log_position_transition(
                state_logger,
                simulator="equity",
                from_side=state.side.value,
                to_side=transition.state.side.value,
                trigger=transition.event.value,
                context={
                    "date": current.date.isoformat(),
                    "daily_pnl": daily_pnl,
                    "reversed": transition.reversed,
                }
            )

        equity += daily_pnl
        bucket = pnl_bucket(transition, daily_pnl, params.attribute_exit_pnl_to_long)
        if bucket == PositionSide.LONG:
            equity_long += daily_pnl
        elif bucket == PositionSide.SHORT:
            equity_short += daily_pnl

        equity_before = equity - daily_pnl
        daily_return = daily_pnl / equity_before if equity_before > 0 else 0.0

        samples.append(EquitySample(
            date=current.date,
            label=current.label,
            equity=equity,
            equity_long=equity_long,
            equity_short=equity_short,
            daily_pnl=daily_pnl,
            drawdown_pct=drawdown.update(equity),
            rolling_sharpe=sharpe.update(daily_return),
            position=transition.state.side,
        ))
        state = transition.state

    logger.info(
        "Equity simulation complete",
        records=len(records),
        closed_trades=trades,
        final_equity=equity,
        max_equity=drawdown.max_equity,
        open_side=state.side.value
    )

    return samples
