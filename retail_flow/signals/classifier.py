"""
Entry and exit predicates.

Each predicate looks only at the current merged record and its immediate
predecessor. Long entries fade retail selling on an up day; short entries
fade crowded retail longs on a down day.
"""

from dataclasses import dataclass
from typing import Optional

from ..config.defaults import StrategyParams
from ..data.models import MergedRecord

DEFAULT_LONG_PERCENT = StrategyParams().long_percent


@dataclass(frozen=True)
class SignalSet:
    """Signals evaluated on one bar."""
    entry_long: bool = False
    entry_short: bool = False
    exit_long_by_signal: bool = False


def entry_long(current: MergedRecord, previous: MergedRecord) -> bool:
    """
    Up bar while retail is net short and shifting further short.

    entry_long = close > open and net < 0
                 and long ratio fell and short ratio rose
    """
    return (
        current.close > current.open
        and current.retail_net < 0
        and current.retail_long < previous.retail_long
        and current.retail_short > previous.retail_short
    )


def entry_short(current: MergedRecord, previous: MergedRecord,
                long_percent: float = DEFAULT_LONG_PERCENT) -> bool:
    """
    Down bar while retail is heavily net long and adding longs.

    entry_short = open > close and net > long_percent
                  and long ratio rose and short ratio fell
    """
    return (
        current.open > current.close
        and current.retail_net > long_percent
        and current.retail_long > previous.retail_long
        and current.retail_short < previous.retail_short
    )


def exit_long_by_signal(current: MergedRecord, previous: MergedRecord,
                        long_percent: float = DEFAULT_LONG_PERCENT) -> bool:
    """Strategic long exit; the short-entry condition reused as is."""
    return entry_short(current, previous, long_percent)


def classify(current: MergedRecord, previous: MergedRecord,
             params: Optional[StrategyParams] = None) -> SignalSet:
    """Evaluate all predicates for one bar."""
    long_percent = (params or StrategyParams()).long_percent
    return SignalSet(
        entry_long=entry_long(current, previous),
        entry_short=entry_short(current, previous, long_percent),
        exit_long_by_signal=exit_long_by_signal(current, previous, long_percent),
    )
